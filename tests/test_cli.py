import json
import logging

import pytest

from eventrank.cli import main
from eventrank.core import logging as logging_module

USER_ID = "9b2e6d4a-5c1f-4e8a-bf0d-2a7c3e9f1b10"


@pytest.fixture(autouse=True)
def _restore_root_logging():
    # Keep handlers built against capsys streams from leaking into later tests.
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _write_inputs(tmp_path):
    events = tmp_path / "events.json"
    prefs = tmp_path / "preferences.json"
    events.write_text(
        json.dumps(
            [
                {"id": "e1", "title": "Board game cafe", "tags": [{"id": "t1", "name": "Board game", "kind": "activity"}]},
                {"id": "e2", "title": "Movie marathon", "tags": [{"id": "t2", "name": "Cinema", "kind": "activity"}]},
            ]
        ),
        encoding="utf-8",
    )
    prefs.write_text(json.dumps([{"user_id": USER_ID, "travel_styles": ["movie"]}]), encoding="utf-8")
    return events, prefs


def test_cli_suggest_json(tmp_path, capsys):
    events, prefs = _write_inputs(tmp_path)
    code = main(["suggest", "--user-id", USER_ID, "--events", str(events), "--preferences", str(prefs), "--json"])
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["total"] == 2
    assert [r["event"]["id"] for r in data["results"]] == ["e2", "e1"]


def test_cli_suggest_text_output(tmp_path, capsys):
    events, prefs = _write_inputs(tmp_path)
    code = main(["suggest", "--user-id", USER_ID, "--events", str(events), "--preferences", str(prefs)])
    assert code == 0
    out = capsys.readouterr().out
    assert "Movie marathon" in out
    assert "matched: Cinema" in out


def test_cli_invalid_user_id_exit_code(tmp_path):
    events, prefs = _write_inputs(tmp_path)
    assert main(["suggest", "--user-id", "nope", "--events", str(events), "--preferences", str(prefs)]) == 2


def test_cli_missing_catalog_exit_code(tmp_path):
    _, prefs = _write_inputs(tmp_path)
    missing = tmp_path / "missing.json"
    assert main(["suggest", "--user-id", USER_ID, "--events", str(missing), "--preferences", str(prefs)]) == 3


def test_cli_weights(capsys):
    assert main(["weights"]) == 0
    out = capsys.readouterr().out
    assert "travel_style" in out
    assert "sum            1.00" in out


def test_repeated_cli_calls_keep_the_first_logging_handlers(monkeypatch, capsys):
    monkeypatch.setattr(logging_module, "_configured", False)
    assert main(["weights"]) == 0
    handlers = logging.getLogger().handlers[:]
    assert handlers

    assert main(["weights"]) == 0
    assert logging.getLogger().handlers == handlers
    assert logging_module.configure_logging() is False


def test_configure_logging_force_reapplies(monkeypatch):
    monkeypatch.setattr(logging_module, "_configured", True)
    assert logging_module.configure_logging(force=True) is True
    assert logging_module._configured is True
