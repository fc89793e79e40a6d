"""
Task Graph Analyzer
Runs validation, cycle detection, ordering and level assignment as one call
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence, Tuple
import logging

from .config import Config
from .cycle_detector import CycleDetector
from .graph_builder import Edge, TaskGraph, TaskGraphBuilder, task_specs_to_edges
from .level_assigner import LevelAssigner
from .models import AnalysisResult, TaskSpec
from .topological_orderer import TopologicalOrderer

logger = logging.getLogger(__name__)


def analyze(tasks: Sequence[str], edges: Sequence[Edge]) -> AnalysisResult:
    """
    Analyze a task graph.

    ``tasks`` are task ids in declared order; ``edges`` are
    ``(dependent, prerequisite)`` pairs in declared order. Declared order
    governs root selection, neighbor visits and tie-breaking, so identical
    input always yields an identical result.

    Raises DuplicateTaskID or UnknownTaskReference before any analysis runs.
    When cycles are found the topological order is None and levels are empty.
    """
    return analyze_graph(TaskGraphBuilder().build(tasks, edges))


def analyze_graph(task_graph: TaskGraph) -> AnalysisResult:
    """Run cycle detection, ordering and levels on an already validated graph"""
    has_cycles, cycles = CycleDetector(task_graph).detect_cycles()
    if has_cycles:
        logger.info(f"Task graph with {len(task_graph)} tasks has {len(cycles)} cycles; skipping ordering and levels")
        return AnalysisResult(has_cycles=True, cycles=cycles, topological_order=None, levels={})

    order = TopologicalOrderer(task_graph).get_topological_order()
    levels = LevelAssigner(task_graph).assign_levels(order)

    logger.info(f"Analyzed task graph with {len(task_graph)} tasks and {len(task_graph.edges)} dependencies")
    return AnalysisResult(has_cycles=False, cycles=[], topological_order=order, levels=levels)


def analyze_task_specs(specs: Sequence[TaskSpec]) -> AnalysisResult:
    """Analyze an authored task list; each listed dependency becomes an edge"""
    return analyze([spec.task_id for spec in specs], task_specs_to_edges(specs))


def analyze_many(graphs: Iterable[Tuple[Sequence[str], Sequence[Edge]]],
                 max_workers: Optional[int] = None) -> List[AnalysisResult]:
    """Analyze independent graphs on a thread pool, results in input order"""
    graphs = list(graphs)
    if not graphs:
        return []

    with ThreadPoolExecutor(max_workers=max_workers or Config.MAX_WORKERS) as executor:
        futures = [executor.submit(analyze, tasks, edges) for tasks, edges in graphs]
        return [future.result() for future in futures]
