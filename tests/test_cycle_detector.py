"""Tests for three-color cycle detection."""

from task_graph_analyzer.cycle_detector import CycleDetector, describe_cycle
from task_graph_analyzer.graph_builder import TaskGraphBuilder


def detect(tasks, edges):
    return CycleDetector(TaskGraphBuilder().build(tasks, edges)).detect_cycles()


def test_acyclic_graph_has_no_cycles():
    assert detect(["A", "B", "C", "D"], [("B", "A"), ("C", "A"), ("D", "B"), ("D", "C")]) == (False, [])


def test_empty_graph():
    assert detect([], []) == (False, [])


def test_three_cycle_is_closed_at_entry_node():
    has_cycles, cycles = detect(["X", "Y", "Z"], [("X", "Z"), ("Y", "X"), ("Z", "Y")])

    assert has_cycles is True
    assert cycles == [["X", "Y", "Z", "X"]]


def test_self_dependency():
    assert detect(["A"], [("A", "A")]) == (True, [["A", "A"]])


def test_independent_cycles_reported_in_root_order():
    _, cycles = detect(
        ["A", "B", "C", "D"],
        [("B", "A"), ("A", "B"), ("D", "C"), ("C", "D")]
    )
    assert cycles == [["A", "B", "A"], ["C", "D", "C"]]


def test_several_cycles_through_one_node():
    _, cycles = detect(["A", "B", "C"], [("B", "A"), ("A", "B"), ("C", "A"), ("A", "C")])
    assert cycles == [["A", "B", "A"], ["A", "C", "A"]]


def test_cycle_downstream_of_root_starts_at_back_edge_target():
    _, cycles = detect(["start", "m", "n"], [("m", "start"), ("n", "m"), ("m", "n")])
    assert cycles == [["m", "n", "m"]]


def test_reports_are_reproducible():
    tasks = ["p", "q", "r", "s"]
    edges = [("q", "p"), ("r", "q"), ("p", "r"), ("s", "r"), ("r", "s")]
    assert detect(tasks, edges) == detect(tasks, edges)


def test_long_cycle_does_not_recurse():
    n = 5000
    tasks = [f"t{i}" for i in range(n)]
    edges = [(f"t{i + 1}", f"t{i}") for i in range(n - 1)] + [("t0", f"t{n - 1}")]

    has_cycles, cycles = detect(tasks, edges)

    assert has_cycles is True
    assert len(cycles) == 1
    assert cycles[0][0] == cycles[0][-1] == "t0"
    assert len(cycles[0]) == n + 1


def test_strongly_connected_components():
    graph = TaskGraphBuilder().build(["A", "B", "C", "S"], [("B", "A"), ("A", "B"), ("C", "A"), ("S", "S")])
    assert CycleDetector(graph).find_strongly_connected_components() == [["A", "B"], ["S"]]


def test_describe_cycle():
    assert describe_cycle(["a", "b", "a"]) == "a → b → a"
