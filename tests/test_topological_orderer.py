"""Tests for Kahn ordering and its tie-breaking."""

from task_graph_analyzer.graph_builder import TaskGraphBuilder
from task_graph_analyzer.topological_orderer import TopologicalOrderer


def order(tasks, edges):
    return TopologicalOrderer(TaskGraphBuilder().build(tasks, edges)).get_topological_order()


def test_linear_chain():
    assert order(["task1", "task2", "task3"], [("task2", "task1"), ("task3", "task2")]) == ["task1", "task2", "task3"]


def test_chain_declared_backwards():
    assert order(["c", "b", "a"], [("b", "a"), ("c", "b")]) == ["a", "b", "c"]


def test_roots_released_in_declared_order():
    assert order(["D", "C", "B", "A"], []) == ["D", "C", "B", "A"]


def test_fifo_between_branches():
    assert order(["A", "B", "C", "D"], [("C", "A"), ("D", "B")]) == ["A", "B", "C", "D"]


def test_dependents_released_in_edge_order():
    assert order(["root", "x", "y"], [("y", "root"), ("x", "root")]) == ["root", "y", "x"]


def test_diamond():
    assert order(["A", "B", "C", "D"], [("B", "A"), ("C", "A"), ("D", "B"), ("D", "C")]) == ["A", "B", "C", "D"]


def test_duplicate_edges_count_twice():
    assert order(["a", "b"], [("b", "a"), ("b", "a")]) == ["a", "b"]


def test_cyclic_graph_gives_partial_order():
    result = order(["A", "B", "C"], [("B", "A"), ("A", "B")])
    assert result == ["C"]
