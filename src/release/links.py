"""Terminal hyperlink rendering."""

from __future__ import annotations

import sys
from typing import Any

_OSC8_OPEN = "\033]8;;{url}\033\\"
_OSC8_CLOSE = "\033]8;;\033\\"


def _is_tty(stream: Any) -> bool:
    try:
        return bool(stream.isatty())
    except Exception:  # pylint: disable=broad-exception-caught
        return False


def clickable_link(url: str, stream: Any = None) -> str:
    """Wrap ``url`` in an OSC 8 hyperlink when ``stream`` is a terminal.

    Non-terminal streams get the bare URL so logs and pipes stay readable.
    """
    stream = stream if stream is not None else sys.stdout
    if not _is_tty(stream):
        return url
    return f"{_OSC8_OPEN.format(url=url)}{url}{_OSC8_CLOSE}"
