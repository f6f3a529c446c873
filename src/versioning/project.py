"""Project descriptor resolution: detect manifests and rewrite their version."""

from __future__ import annotations

import json
import logging
import os
import re
from typing import Any, Dict, List, Optional, Tuple

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants
from errors import (
    AmbiguousProjectVersion,
    ManifestReadError,
    MultipleVersionTags,
    NoVersionTagFound,
    UnsupportedProjectKind,
)

from .models import Ecosystem, ProjectDescriptor
from .semver import parse_tag, require_version

logger = logging.getLogger(__name__)

VERSION_TAG_RE = re.compile(r"<Version>(.*?)</Version>", re.DOTALL)


def _read_text(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestReadError(f"Couldn't read manifest {path}: {e}") from e


def _write_text(path: str, content: str) -> None:
    # newline="" keeps the file's own line endings untouched
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


def _load_json_object(path: str) -> Dict[str, Any]:
    try:
        data = json.loads(_read_text(path))
    except json.JSONDecodeError as e:
        raise ManifestReadError(f"Couldn't parse JSON manifest {path}: {e}") from e
    if not isinstance(data, dict):
        raise ManifestReadError(f"JSON manifest {path} is not an object")
    return data


def _dump_json(data: Dict[str, Any]) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


# ---------- Node ----------


def _detect_node(root: str) -> Optional[ProjectDescriptor]:
    manifest = os.path.join(root, Constants.PACKAGE_JSON_FILE)
    if not os.path.isfile(manifest):
        return None

    pkg = _load_json_object(manifest)
    raw = pkg.get("version")
    raw = raw if isinstance(raw, str) else None
    version = parse_tag(raw)
    if raw is not None and version is None:
        logger.warning("Ignoring invalid version '%s' in %s", raw, manifest)

    paths = [manifest]
    lock = os.path.join(root, Constants.PACKAGE_LOCK_FILE)
    if os.path.isfile(lock):
        paths.append(lock)
    return ProjectDescriptor.create(Ecosystem.NODE, version, paths, raw_version=raw)


def _write_node(path: str, new_version: str) -> None:
    data = _load_json_object(path)
    data["version"] = new_version
    if os.path.basename(path) == Constants.PACKAGE_LOCK_FILE:
        # lockfileVersion >= 2 mirrors the root package under packages[""]
        packages = data.get("packages")
        if isinstance(packages, dict) and isinstance(packages.get(""), dict):
            packages[""]["version"] = new_version
    _write_text(path, _dump_json(data))


# ---------- .NET ----------


def _find_csproj_files(root: str) -> List[str]:
    found: List[str] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(
            d for d in dirnames
            if not d.startswith(".") and d not in Constants.SCAN_SKIP_DIRS
        )
        for name in sorted(filenames):
            if name.endswith(Constants.CSPROJ_SUFFIX):
                found.append(os.path.join(dirpath, name))
    return found


def _detect_dotnet(root: str) -> Optional[ProjectDescriptor]:
    csproj_files = _find_csproj_files(root)
    if not csproj_files:
        return None

    versioned: List[Tuple[str, str]] = []
    for path in csproj_files:
        matches = VERSION_TAG_RE.findall(_read_text(path))
        if len(matches) > 1:
            raise MultipleVersionTags(path)
        if matches:
            versioned.append((path, matches[0].strip()))

    if is_debug_enabled(logger):
        logger.debug("Scanned project files", extra=extra_context(
            event="scan", component="project", action="detect_dotnet",
            count=len(csproj_files), versioned=len(versioned),
        ))

    if len(versioned) > 1:
        raise AmbiguousProjectVersion(p for p, _ in versioned)
    if not versioned:
        raise NoVersionTagFound()

    path, raw = versioned[0]
    version = parse_tag(raw)
    if version is None:
        logger.warning("Ignoring invalid version '%s' in %s", raw, path)
    return ProjectDescriptor.create(Ecosystem.DOTNET, version, [path], raw_version=raw)


def _write_dotnet(path: str, new_version: str) -> None:
    content = _read_text(path)
    new_content = VERSION_TAG_RE.sub(f"<Version>{new_version}</Version>", content, count=1)
    _write_text(path, new_content)


# ---------- Public API ----------


def detect(root: str = ".") -> ProjectDescriptor:
    """Detect the project kind under ``root`` and read its declared version.

    Node manifests take priority over .NET project files.

    Raises:
        UnsupportedProjectKind: no known manifest was found.
        MultipleVersionTags, AmbiguousProjectVersion, NoVersionTagFound:
            the .NET version declaration is not unique.
        ManifestReadError: a manifest could not be read or decoded.
    """
    for detector in (_detect_node, _detect_dotnet):
        descriptor = detector(root)
        if descriptor is not None:
            logger.debug(
                "Detected %s project (version %s)",
                descriptor.ecosystem.value, descriptor.raw_version,
            )
            return descriptor
    raise UnsupportedProjectKind(root)


_WRITERS = {
    Ecosystem.NODE: _write_node,
    Ecosystem.DOTNET: _write_dotnet,
}


def write_version(descriptor: ProjectDescriptor, new_version) -> None:
    """Rewrite the declared version in every manifest of ``descriptor``.

    No backup is taken. Writing the same version twice leaves the files
    unchanged after the first write.

    Raises:
        InvalidVersionInput: ``new_version`` is not a semantic version.
    """
    if new_version is not None:
        new_version = str(new_version)
    version_text = str(require_version(new_version))
    writer = _WRITERS[descriptor.ecosystem]
    for path in descriptor.manifest_paths:
        writer(path, version_text)
        logger.debug("Wrote version %s to %s", version_text, path)
