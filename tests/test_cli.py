"""
Tests for CLI commands — global options, listing, install, group and
the interactive menu.
"""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from conftest import FakeRunner, ToyInstaller

from hostprep.main import cli

COMPONENTS = {
    "editor": {"label": "Text editor", "packages": {"arch": "vim", "debian": "vim"}},
    "mux": {"label": "Multiplexer", "packages": {"arch": "tmux", "debian": "tmux"}},
    "lock": {"label": "Lock screen", "installer": "lock"},
}
GROUPS = {"dev": {"label": "Dev tools", "keys": ["editor", "mux", "lock"]}}


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def invoke(make_orchestrator, settings, runner):
    """Invoke the CLI against a toy catalog with sudo stubbed out."""
    log: list[str] = []
    orch = make_orchestrator(
        COMPONENTS, [ToyInstaller("lock", log=log)], groups=GROUPS, runner=runner,
    )

    def _invoke(args, input=None, sudo_ok=True):
        with patch("hostprep.ui.cli.common.ensure_sudo", return_value=sudo_ok):
            return CliRunner().invoke(
                cli, args, input=input, obj={"orchestrator": orch, "settings": settings},
            )

    _invoke.log = log
    return _invoke


def _pacman_calls(runner):
    return [c for c in runner.calls if c[0] == "pacman"]


class TestCLIGlobal:
    """Tests for the top-level command group."""

    def test_help(self):
        """--help lists the program."""
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "hostprep" in result.output

    def test_version(self):
        """--version prints the package version."""
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_bad_config_file(self, tmp_path):
        """An invalid hostprep.yml exits 1 with the validation error."""
        path = tmp_path / "hostprep.yml"
        path.write_text("on_failure: sometimes\n")
        result = CliRunner().invoke(cli, ["--config", str(path), "versions"])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestInfoCommands:
    """Tests for the read-only commands."""

    def test_platform_json(self, invoke):
        """platform --json reports distro and package manager."""
        result = invoke(["platform", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["distro"] == "arch"
        assert data["package_manager"] == "pacman"

    def test_list_group_json(self, invoke):
        """list --group --json shows each key's resolution."""
        result = invoke(["list", "--group", "dev", "--json"])
        assert result.exit_code == 0
        rows = {r["key"]: r for r in json.loads(result.output)}
        assert rows["editor"]["resolution"] == {"kind": "native", "package": "vim"}
        assert rows["lock"]["resolution"]["kind"] == "special"

    def test_list_unknown_group(self, invoke):
        """Listing an unknown group exits 1."""
        result = invoke(["list", "--group", "nope"])
        assert result.exit_code == 1

    def test_versions_json(self, invoke, markers):
        """versions --json includes the recorded marker."""
        markers.write("lock", "v3")
        result = invoke(["versions", "--json"])
        assert result.exit_code == 0
        (row,) = json.loads(result.output)
        assert row["key"] == "lock"
        assert row["recorded"] == "v3"


class TestInstallCommand:
    """Tests for the install command."""

    def test_install(self, invoke, runner):
        """Native and special keys install after the base packages."""
        result = invoke(["install", "editor", "lock"])
        assert result.exit_code == 0, result.output
        assert "Done" in result.output
        assert invoke.log == ["lock"]
        # base packages first, then the request batch
        assert _pacman_calls(runner)[-1][-1] == "vim"

    def test_install_json(self, invoke):
        """install --json prints the aggregate result."""
        result = invoke(["install", "mux", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["native_installed"] == ["mux"]

    def test_unknown_key_exits_1(self, invoke):
        """An unknown key fails the run with exit 1."""
        result = invoke(["install", "nope"])
        assert result.exit_code == 1
        assert "unknown component" in result.output

    def test_direct_mode(self, invoke, runner):
        """--direct installs a raw package name."""
        result = invoke(["install", "--direct", "htop"])
        assert result.exit_code == 0
        assert _pacman_calls(runner)[-1][-1] == "htop"

    def test_sudo_refused(self, invoke, runner):
        """Without sudo nothing runs and the command exits 1."""
        result = invoke(["install", "editor"], sudo_ok=False)
        assert result.exit_code == 1
        assert "sudo is required" in result.output
        assert runner.calls == []


class TestGroupCommand:
    """Tests for the group command."""

    def test_whole_group(self, invoke):
        """A bare group installs every member."""
        result = invoke(["group", "dev"])
        assert result.exit_code == 0
        assert invoke.log == ["lock"]

    def test_selection(self, invoke, runner):
        """--select narrows the install to the chosen keys."""
        result = invoke(["group", "dev", "--select", "mux"])
        assert result.exit_code == 0
        assert invoke.log == []
        assert _pacman_calls(runner)[-1][-1] == "tmux"

    def test_selection_outside_group(self, invoke):
        """Selecting a key outside the group exits 1."""
        result = invoke(["group", "dev", "--select", "zsh"])
        assert result.exit_code == 1
        assert "Not in group" in result.output

    def test_unknown_group(self, invoke):
        """An unknown group exits 1."""
        assert invoke(["group", "nope"]).exit_code == 1


class TestMenu:
    """Tests for the interactive menu."""

    def test_select_reports_duplicates(self, invoke, runner):
        """Repeated picks are reported once and installed once."""
        keys = "\n".join(["1", "s", "1 1 2", "", "", "b", "q"]) + "\n"
        result = invoke(["menu"], input=keys)

        assert result.exit_code == 0, result.output
        assert "editor is already selected" in result.output
        assert _pacman_calls(runner)[-1][-2:] == ["vim", "tmux"]

    def test_invalid_choice(self, invoke):
        """An out-of-range choice is rejected and the menu continues."""
        result = invoke(["menu"], input="7\nq\n")
        assert result.exit_code == 0
        assert "Invalid choice" in result.output

    def test_install_all(self, invoke):
        """"Install all" runs the whole group."""
        result = invoke(["menu"], input="1\na\n\nb\nq\n")
        assert result.exit_code == 0
        assert invoke.log == ["lock"]
