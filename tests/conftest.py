import json

import pytest

from confsync.model import RemoteTarget, RevisionFacts, ServiceDescriptor
from confsync.ui.console import Console, set_console


@pytest.fixture
def console():
    """Plain-text console, whatever CI the suite itself runs under."""
    c = Console(debug=True, annotations=False)
    set_console(c)
    return c


@pytest.fixture
def remote():
    return RemoteTarget(host="deploy.example.com", user="deploy", port=2222, password="s3cr3t-pw")


@pytest.fixture
def service_tree(tmp_path, monkeypatch):
    """services/api with one file, cwd set to the checkout root."""
    monkeypatch.chdir(tmp_path)
    api = tmp_path / "services" / "api"
    api.mkdir(parents=True)
    (api / "config.yaml").write_text("port: 8080\n")
    return ServiceDescriptor(service_name="api", config_dir="services", remote_project_dir="/srv/app")


@pytest.fixture
def write_event(tmp_path):
    def _write(payload) -> RevisionFacts:
        path = tmp_path / "event.json"
        path.write_text(payload if isinstance(payload, str) else json.dumps(payload))
        return RevisionFacts(event_path=str(path), repo_dir=str(tmp_path))
    return _write
