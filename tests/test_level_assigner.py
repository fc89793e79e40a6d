"""Tests for level assignment."""

from task_graph_analyzer.graph_builder import TaskGraphBuilder
from task_graph_analyzer.level_assigner import LevelAssigner
from task_graph_analyzer.topological_orderer import TopologicalOrderer


def assigner(tasks, edges):
    return LevelAssigner(TaskGraphBuilder().build(tasks, edges))


def test_longest_chain_wins():
    levels = assigner(["a", "b", "c", "d"], [("b", "a"), ("c", "b"), ("d", "a"), ("d", "c")]).assign_levels()
    assert levels == {"a": 0, "b": 1, "c": 2, "d": 3}


def test_isolated_and_root_tasks_are_level_zero():
    levels = assigner(["solo", "root", "child"], [("child", "root")]).assign_levels()
    assert levels == {"solo": 0, "root": 0, "child": 1}


def test_reuses_given_order():
    task_graph = TaskGraphBuilder().build(["A", "B", "C", "D"], [("B", "A"), ("C", "A"), ("D", "B"), ("D", "C")])
    order = TopologicalOrderer(task_graph).get_topological_order()

    assert LevelAssigner(task_graph).assign_levels(order) == {"A": 0, "B": 1, "C": 1, "D": 2}


def test_both_methods_agree():
    tasks = ["f", "e", "d", "c", "b", "a"]
    edges = [("b", "a"), ("c", "a"), ("d", "b"), ("e", "d"), ("e", "c"), ("f", "a"), ("f", "e")]
    level_assigner = assigner(tasks, edges)

    levels = level_assigner.assign_levels()
    assert levels == level_assigner.assign_levels_by_prerequisites()
    assert levels == {"a": 0, "b": 1, "c": 1, "d": 2, "e": 3, "f": 4}


def test_prerequisite_walk_terminates_on_cycle():
    levels = assigner(["A", "B"], [("B", "A"), ("A", "B")]).assign_levels_by_prerequisites()
    assert set(levels) == {"A", "B"}
    assert all(level >= 0 for level in levels.values())


def test_deep_chain():
    n = 5000
    tasks = [f"t{i}" for i in range(n)]
    edges = [(f"t{i + 1}", f"t{i}") for i in range(n - 1)]
    level_assigner = assigner(tasks, edges)

    assert level_assigner.assign_levels()[f"t{n - 1}"] == n - 1
    assert level_assigner.assign_levels_by_prerequisites()[f"t{n - 1}"] == n - 1
