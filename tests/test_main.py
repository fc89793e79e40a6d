"""Tests for the dashboard's input handling and analysis session."""

import io
import json

import pytest

import main
from task_graph_analyzer import InvalidTaskInput, TaskGraphError, TaskSpec
from task_graph_analyzer.config import Config


def specs(*tasks):
    return [TaskSpec(task_id=task_id, name=task_id.upper(), dependencies=list(deps)) for task_id, deps in tasks]


def test_read_task_list_prefers_upload():
    upload = io.BytesIO(b'[{"task_id": "a", "name": "A"}]')
    assert main.read_task_list(upload, "ignored") == '[{"task_id": "a", "name": "A"}]'


def test_read_task_list_without_upload_returns_text():
    assert main.read_task_list(None, "[]") == "[]"


def test_read_task_list_can_be_repeated():
    upload = io.BytesIO(b"[]")
    assert main.read_task_list(upload, "") == main.read_task_list(upload, "") == "[]"


def test_non_utf8_upload_rejected():
    with pytest.raises(InvalidTaskInput):
        main.read_task_list(io.BytesIO(b"\xff\xfe[]"), "")


def test_run_analysis_acyclic():
    session = main.run_analysis(specs(("a", []), ("b", ["a"]), ("c", ["a", "b"])))

    assert session.result.has_cycles is False
    assert session.result.topological_order == ["a", "b", "c"]
    assert session.result.levels == {"a": 0, "b": 1, "c": 2}
    assert session.strongly_connected_components == []
    assert session.graph_stats['total_tasks'] == 3
    assert session.graph_stats['total_dependencies'] == 3
    assert session.task_graph.get_dependents("a") == ["b", "c"]


def test_run_analysis_cyclic():
    session = main.run_analysis(specs(("x", ["z"]), ("y", ["x"]), ("z", ["y"]), ("solo", [])))

    assert session.result.has_cycles is True
    assert session.result.topological_order is None
    assert session.strongly_connected_components == [["x", "y", "z"]]


def test_run_analysis_rejects_too_many_tasks(monkeypatch):
    monkeypatch.setattr(Config, "MAX_TASKS", 2)

    with pytest.raises(TaskGraphError) as exc_info:
        main.run_analysis(specs(("a", []), ("b", []), ("c", [])))
    assert "limit is 2" in str(exc_info.value)


def test_run_analysis_propagates_validation_errors():
    with pytest.raises(TaskGraphError):
        main.run_analysis(specs(("a", ["missing"])))


def test_format_task_list():
    formatted = main.format_task_list('[{"task_id":"a","name":"A"}]')

    assert formatted == json.dumps([{"task_id": "a", "name": "A"}], indent=2)
    assert formatted.startswith("[\n  {")


def test_format_task_list_rejects_invalid_json():
    with pytest.raises(InvalidTaskInput):
        main.format_task_list("[{")
