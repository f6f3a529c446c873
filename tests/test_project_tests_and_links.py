"""Tests for the test-command runner and terminal link rendering."""

import io
from unittest.mock import MagicMock, patch

import pytest

from errors import TestRunFailed
from release.links import clickable_link
from release.project_tests import command_for, run_tests
from versioning.models import Ecosystem


class _TtyStream(io.StringIO):
    def isatty(self):
        return True


class TestCommandFor:
    """Test command_for function."""

    def test_defaults(self):
        assert command_for(Ecosystem.NODE) == ["npm", "test"]
        assert command_for(Ecosystem.DOTNET) == ["dotnet", "test"]

    def test_override(self):
        assert command_for(Ecosystem.NODE, {"node": ["npm", "run", "ci"]}) == ["npm", "run", "ci"]
        assert command_for(Ecosystem.DOTNET, {"node": ["npm", "run", "ci"]}) == ["dotnet", "test"]


class TestRunTests:
    """Test run_tests function."""

    @patch("release.project_tests.subprocess.run")
    def test_success(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="ok", stderr="")

        run_tests(Ecosystem.DOTNET, cwd="/proj")

        mock_run.assert_called_once_with(
            ["dotnet", "test"], cwd="/proj", capture_output=True, text=True, check=False
        )

    @patch("release.project_tests.subprocess.run")
    def test_failure_raises(self, mock_run):
        mock_run.return_value = MagicMock(returncode=1, stdout="1 failing", stderr="")

        with pytest.raises(TestRunFailed) as exc:
            run_tests(Ecosystem.NODE)
        assert exc.value.returncode == 1
        assert exc.value.command == ["npm", "test"]

    @patch("release.project_tests.subprocess.run", side_effect=FileNotFoundError("npm"))
    def test_missing_binary(self, _mock_run):
        with pytest.raises(TestRunFailed):
            run_tests(Ecosystem.NODE)


class TestClickableLink:
    """Test clickable_link function."""

    def test_plain_when_not_a_tty(self):
        assert clickable_link("https://example.com", stream=io.StringIO()) == "https://example.com"

    def test_osc8_when_tty(self):
        link = clickable_link("https://example.com", stream=_TtyStream())
        assert link == "\033]8;;https://example.com\033\\https://example.com\033]8;;\033\\"

