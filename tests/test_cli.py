"""
Tests for CLI — argparse entry point and command dispatch

main() is called with an explicit argv; output is captured with capsys.
"""

import io
import json

import pytest

from logwash.cli import main
from logwash.commands import get_registered_commands
from logwash.config import ConfigManager


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the host's user config and LOGWASH_* variables out of the tests."""
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_FILE", tmp_path / "home" / "config.yaml")
    for key in ConfigManager.ENV_OVERRIDES:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def project(tmp_path):
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def log_file(project, log_text):
    path = project / "history.txt"
    path.write_text(log_text)
    return path


def run(project, *args):
    return main(["--project", str(project), *args])


class TestWashCommand:
    """logwash wash ..."""

    def test_text_output(self, project, log_file, capsys):
        status = run(project, "wash", str(log_file), "--symbols", "ascii", "--no-margin")
        assert status == 0
        assert capsys.readouterr().out == "abc1234 Fix bug\ndef5678 Initial commit\n"

    def test_json_output(self, project, log_file, capsys):
        status = run(project, "wash", str(log_file), "--format", "json")
        assert status == 0
        data = json.loads(capsys.readouterr().out)
        assert [r["author"] for r in data["records"]] == ["Jane Doe", "John Roe"]
        assert "margin" in data["records"][0]

    def test_limit(self, project, log_file, capsys):
        run(project, "wash", str(log_file), "--symbols", "ascii", "--no-margin", "-n", "1")
        lines = capsys.readouterr().out.splitlines()
        assert lines == ["abc1234 Fix bug", "-> More history beyond 1 commits"]

    def test_style_from_stdin(self, project, cherry_text, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO(cherry_text))
        status = run(project, "wash", "--style", "cherry", "--symbols", "ascii")
        assert status == 0
        assert capsys.readouterr().out.splitlines() == ["+ abc1234 Add feature", "- def5678 Fix typo"]

    def test_config_defaults_apply(self, project, log_file, capsys):
        config_dir = project / ".logwash"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("display:\n  format: json\n")
        run(project, "wash", str(log_file))
        assert json.loads(capsys.readouterr().out)["records_emitted"] == 2

    def test_grammar_mismatch_exits_nonzero(self, project, log_file, capsys):
        status = run(project, "wash", str(log_file), "--style", "cherry")
        assert status == 1
        err = capsys.readouterr().err
        assert err.startswith("Error: cherry grammar does not match line 1")

    def test_missing_file(self, project, capsys):
        status = run(project, "wash", str(project / "absent.txt"))
        assert status == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_margin_width(self, project, log_file, capsys):
        status = run(project, "wash", str(log_file), "--margin-width", "0")
        assert status == 1
        assert "total_width" in capsys.readouterr().err

    def test_documented_log_format(self, project, capsys):
        """Output of git log --format='%h%d %G?[%aN][%at]%s' washes cleanly."""
        path = project / "formatted.txt"
        path.write_text(
            "abc1234 (HEAD -> main) N[Jane Doe][1700000000]Fix bug\n"
            "def5678 N[John Roe][1699000000]Initial commit\n"
        )
        status = run(project, "wash", str(path), "--symbols", "ascii", "--no-margin")
        assert status == 0
        assert capsys.readouterr().out == "abc1234 main Fix bug\ndef5678 Initial commit\n"

    def test_documented_reflog_format(self, project, capsys):
        """Output of git reflog --date=raw --format='%h %gd %gs' carries timestamps."""
        path = project / "reflog.txt"
        path.write_text(
            "abc1234 HEAD@{1700000000 +0000} commit: Fix bug\n"
            "def5678 HEAD@{1699990000 +0000} checkout: moving from main to dev\n"
        )
        status = run(project, "wash", str(path), "--style", "reflog", "--format", "json")
        assert status == 0
        data = json.loads(capsys.readouterr().out)
        assert [r["timestamp"] for r in data["records"]] == [1700000000, 1699990000]

    def test_unknown_format_in_config(self, project, log_file, capsys):
        config_dir = project / ".logwash"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("display:\n  format: xml\n")
        status = run(project, "wash", str(log_file))
        assert status == 1
        assert "Error: Unknown format 'xml'" in capsys.readouterr().err

    def test_wrong_type_in_config(self, project, log_file, capsys):
        config_dir = project / ".logwash"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("margin:\n  width: wide\n")
        status = run(project, "wash", str(log_file))
        assert status == 1
        assert "Error: Invalid configuration value" in capsys.readouterr().err



class TestConfigCommand:
    """logwash config ..."""

    def test_show(self, project, capsys):
        assert run(project, "config") == 0
        assert "Configuration:" in capsys.readouterr().out

    def test_set(self, project, capsys):
        assert run(project, "config", "--set", "margin.width=30") == 0
        assert "Set margin.width = 30" in capsys.readouterr().out
        assert (project / ".logwash" / "config.yaml").exists()

    def test_set_bad_format(self, project, capsys):
        assert run(project, "config", "--set", "margin.width") == 1
        assert "KEY=VALUE" in capsys.readouterr().err

    def test_set_invalid_value(self, project, capsys):
        assert run(project, "config", "--set", "display.symbols=emoji") == 1
        assert "Unknown symbols setting" in capsys.readouterr().err


class TestMain:
    def test_no_command_prints_help(self, project, capsys):
        assert run(project) == 0
        assert "usage:" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert "logwash" in capsys.readouterr().out

    def test_commands_registered(self, project):
        run(project)
        assert get_registered_commands() == ["wash", "config"]
