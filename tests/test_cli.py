"""End-to-end tests for the confsync CLI."""

import json
from unittest.mock import Mock, patch

from click.testing import CliRunner

from confsync.cli import cli

# Keep the suite independent of the CI it happens to run in.
CLEAN_ENV = {
    "GITHUB_ACTIONS": None,
    "GITHUB_EVENT_PATH": None,
    "GITHUB_EVENT_BEFORE": None,
    "GITHUB_SHA": None,
    "CONFSYNC_SSH_PASSWORD": "s3cr3t-pw",
}

SYNC_ARGS = [
    "sync",
    "--service-name", "api",
    "--config-dir", "services",
    "--remote-project-dir", "/srv/app",
    "--ssh-host", "deploy.example.com",
    "--ssh-user", "deploy",
    "--ssh-port", "2222",
]


def _event(tmp_path, payload):
    path = tmp_path / "event.json"
    path.write_text(json.dumps(payload))
    return ["--event-path", str(path)]


class TestSync:
    @patch("confsync.dispatcher.copy_directory")
    def test_changed_service_is_copied(self, mock_copy, service_tree, tmp_path):
        args = SYNC_ARGS + _event(tmp_path, {"commits": [{"added": ["services/api/config.yaml"]}]})

        result = CliRunner().invoke(cli, args, env=CLEAN_ENV)

        assert result.exit_code == 0, result.output
        source, dest, remote = mock_copy.call_args[0]
        assert (source, dest) == ("services/api", "/srv/app/services/api")
        assert remote.port == 2222
        assert "Found 1 files in configuration folder" in result.output

    @patch("confsync.dispatcher.copy_directory")
    def test_other_service_changed_exits_zero(self, mock_copy, service_tree, tmp_path):
        args = SYNC_ARGS + _event(tmp_path, {"commits": [{"modified": ["services/web/x.txt"]}]})

        result = CliRunner().invoke(cli, args, env=CLEAN_ENV)

        assert result.exit_code == 0, result.output
        assert "No changes detected in api configuration" in result.output
        mock_copy.assert_not_called()

    @patch("confsync.cli.resolve_changed_files")
    def test_missing_config_dir_fails_before_detection(self, mock_resolve, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = CliRunner().invoke(cli, SYNC_ARGS, env=CLEAN_ENV)

        assert result.exit_code == 1
        assert "Config directory does not exist: services" in result.output
        mock_resolve.assert_not_called()

    @patch("confsync.transport.subprocess.run")
    def test_transfer_failure_exits_nonzero_without_leaking_password(self, mock_run, service_tree, tmp_path):
        mock_run.return_value = Mock(returncode=5, stderr="Permission denied for s3cr3t-pw")
        args = SYNC_ARGS + _event(tmp_path, {"commits": [{"added": ["services/api/config.yaml"]}]})

        result = CliRunner().invoke(cli, args, env=CLEAN_ENV)

        assert result.exit_code == 1
        assert "Executing: sshpass -e scp" in result.output
        assert "Failed to copy configuration folder" in result.output
        assert "s3cr3t-pw" not in result.output

    def test_inputs_from_environment(self, service_tree, tmp_path):
        env = dict(CLEAN_ENV)
        env.update({
            "CONFSYNC_SERVICE_NAME": "api",
            "CONFSYNC_CONFIG_DIR": "services",
            "CONFSYNC_REMOTE_PROJECT_DIR": "/srv/app",
            "CONFSYNC_SSH_HOST": "h",
            "CONFSYNC_SSH_USER": "u",
            "CONFSYNC_SSH_PORT": "22",
        })
        event = _event(tmp_path, {"commits": [{"added": ["docs/readme.md"]}]})

        result = CliRunner().invoke(cli, ["sync", *event], env=env)

        assert result.exit_code == 0, result.output
        assert "SSH: u@h:22" in result.output


class TestChanges:
    def test_prints_resolved_paths(self, tmp_path):
        args = ["changes"] + _event(tmp_path, {"commits": [{"added": ["a.txt"], "removed": ["b.txt"]}]})

        result = CliRunner().invoke(cli, args, env=CLEAN_ENV)

        assert result.exit_code == 0, result.output
        assert "CHANGED FILES (2)" in result.output
        assert "a.txt" in result.output
        assert "b.txt" in result.output
