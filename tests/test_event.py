"""Unit tests for the event payload schema."""

import pytest
from pydantic import ValidationError

from confsync.event import ChangeEvent, load_event


class TestChangeEvent:
    def test_union_across_commits_is_deduplicated(self):
        event = ChangeEvent.model_validate({
            "commits": [
                {"added": ["a.txt"], "modified": ["b.txt"], "removed": []},
                {"added": ["c.txt"], "modified": ["a.txt"], "removed": ["d.txt"]},
            ]
        })
        assert sorted(event.changed_paths()) == ["a.txt", "b.txt", "c.txt", "d.txt"]

    def test_null_and_missing_lists_are_empty(self):
        event = ChangeEvent.model_validate({"commits": [{"added": None}, {}]})
        assert event.changed_paths() == []

    def test_pull_request_shape(self):
        event = ChangeEvent.model_validate({
            "pull_request": {"base": {"sha": "b1", "ref": "main"}, "head": {"sha": "h1"}},
            "action": "synchronize",
        })
        assert event.commits is None
        assert event.pull_request.base.sha == "b1"
        assert event.pull_request.head.sha == "h1"


class TestLoadEvent:
    def test_load_from_file(self, tmp_path):
        path = tmp_path / "event.json"
        path.write_text('{"commits": [{"added": ["services/api/config.yaml"]}], "ref": "refs/heads/main"}')

        assert load_event(path).changed_paths() == ["services/api/config.yaml"]

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "event.json"
        path.write_text("{not json")

        with pytest.raises(ValidationError):
            load_event(path)

    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "event.json"
        path.write_text('{"commits": "oops"}')

        with pytest.raises(ValidationError):
            load_event(path)
