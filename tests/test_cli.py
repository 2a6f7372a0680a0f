# Tests for ghbackup.cli
# CLI commands using Click testing

from pathlib import Path
from unittest.mock import patch

import yaml
from click.testing import CliRunner

from ghbackup.cli import cli
from ghbackup.remote.client import GitHubError


class TestCliGroup:
    """Tests for main CLI group."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "ghbackup" in result.output
        assert "once" in result.output
        assert "status" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "ghbackup" in result.output
        assert "1.0.0" in result.output


class TestOnceCommand:
    """Tests for a single backup pass."""

    def test_uploads_new_file(self, config_file: Path, base_dir: Path, fake_client):
        (base_dir / "a.txt").write_text("hello", encoding="utf-8")

        with patch("ghbackup.cli.GitHubClient", return_value=fake_client) as mock_cls:
            result = CliRunner().invoke(cli, ["--config", str(config_file), "once"])

        assert result.exit_code == 0, result.output
        mock_cls.assert_called_once_with("octocat", "ghp_test", api_url="https://api.github.com", timeout=None)
        assert fake_client.files[("backup", "a.txt")] == "hello"
        assert fake_client.closed
        # sub/notes.txt is tracked but missing locally
        assert "Skipping" in result.output

    def test_dry_run(self, config_file: Path, base_dir: Path, fake_client):
        (base_dir / "a.txt").write_text("hello", encoding="utf-8")

        with patch("ghbackup.cli.GitHubClient", return_value=fake_client):
            result = CliRunner().invoke(cli, ["--config", str(config_file), "once", "--dry-run"])

        assert result.exit_code == 0, result.output
        assert fake_client.writes() == []
        assert "dry run" in result.output

    def test_missing_config(self, temp_dir: Path):
        result = CliRunner().invoke(cli, ["--config", str(temp_dir / "missing.yaml"), "once"])
        assert result.exit_code == 1
        assert "Configuration file not found" in result.output

    def test_missing_token(self, temp_dir: Path, sample_config: dict, monkeypatch):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        del sample_config["github"]["token"]
        path = temp_dir / "notoken.yaml"
        path.write_text(yaml.dump(sample_config), encoding="utf-8")

        result = CliRunner().invoke(cli, ["--config", str(path), "once"])
        assert result.exit_code == 1
        assert "token are required" in result.output

    def test_token_from_env(self, temp_dir: Path, sample_config: dict, monkeypatch, fake_client):
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_env")
        del sample_config["github"]["token"]
        path = temp_dir / "envtoken.yaml"
        path.write_text(yaml.dump(sample_config), encoding="utf-8")

        with patch("ghbackup.cli.GitHubClient", return_value=fake_client) as mock_cls:
            result = CliRunner().invoke(cli, ["--config", str(path), "once"])

        assert result.exit_code == 0, result.output
        assert mock_cls.call_args.args == ("octocat", "ghp_env")

    def test_repository_failure_exits_1(self, config_file: Path, fake_client):
        def boom():
            raise GitHubError("Bad credentials", status_code=401)

        fake_client.list_owned_repositories = boom
        with patch("ghbackup.cli.GitHubClient", return_value=fake_client):
            result = CliRunner().invoke(cli, ["--config", str(config_file), "once"])

        assert result.exit_code == 1
        assert "Bad credentials" in result.output
        assert fake_client.closed

    def test_file_errors_exit_1(self, config_file: Path, base_dir: Path, fake_client):
        (base_dir / "a.txt").write_text("hello", encoding="utf-8")
        fake_client.errors[("get", "a.txt")] = GitHubError("server error", status_code=500)

        with patch("ghbackup.cli.GitHubClient", return_value=fake_client):
            result = CliRunner().invoke(cli, ["--config", str(config_file), "once"])

        assert result.exit_code == 1


class TestRunCommand:
    def test_runs_configured_cycles(self, temp_dir: Path, sample_config: dict, base_dir: Path, fake_client):
        sample_config["schedule"] = {"interval": 0.01, "max_cycles": 2}
        path = temp_dir / "run.yaml"
        path.write_text(yaml.dump(sample_config), encoding="utf-8")
        (base_dir / "a.txt").write_text("hello", encoding="utf-8")

        with patch("ghbackup.cli.GitHubClient", return_value=fake_client):
            result = CliRunner().invoke(cli, ["--config", str(path), "run"])

        assert result.exit_code == 0, result.output
        assert "Pass 2" in result.output
        assert len(fake_client.writes()) == 1


class TestStatusCommand:
    def test_status(self, config_file: Path, base_dir: Path, fake_client):
        (base_dir / "a.txt").write_text("hi", encoding="utf-8")
        fake_client.put("backup", "a.txt", "hello")

        with patch("ghbackup.cli.GitHubClient", return_value=fake_client):
            result = CliRunner().invoke(cli, ["--config", str(config_file), "status"])

        assert result.exit_code == 0, result.output
        assert "a.txt" in result.output
        assert "pull" in result.output
        assert fake_client.writes() == []
        assert (base_dir / "a.txt").read_text(encoding="utf-8") == "hi"


class TestConfigCommands:
    def test_init(self, temp_dir: Path):
        path = temp_dir / "new" / "config.yaml"
        result = CliRunner().invoke(cli, ["--config", str(path), "config", "init"])
        assert result.exit_code == 0
        assert path.exists()

    def test_validate_valid(self, config_file: Path):
        result = CliRunner().invoke(cli, ["--config", str(config_file), "config", "validate"])
        assert result.exit_code == 0
        assert "valid" in result.output

    def test_validate_invalid(self, temp_dir: Path):
        path = temp_dir / "bad.yaml"
        path.write_text("schedule:\n  interval: -1\n", encoding="utf-8")
        result = CliRunner().invoke(cli, ["--config", str(path), "config", "validate"])
        assert result.exit_code == 1

    def test_show(self, config_file: Path):
        result = CliRunner().invoke(cli, ["--config", str(config_file), "config", "show"])
        assert result.exit_code == 0
        assert "octocat" in result.output
        assert "a.txt" in result.output

    def test_show_prints_brackets_literally(self, temp_dir: Path, sample_config: dict):
        sample_config["files"]["paths"] = ["[draft]/a.txt"]
        path = temp_dir / "brackets.yaml"
        path.write_text(yaml.dump(sample_config), encoding="utf-8")

        result = CliRunner().invoke(cli, ["--config", str(path), "config", "show"])

        assert result.exit_code == 0, result.output
        assert "[draft]" in result.output

    def test_path(self, config_file: Path):
        result = CliRunner().invoke(cli, ["--config", str(config_file), "config", "path"])
        assert result.output.strip() == str(config_file)
