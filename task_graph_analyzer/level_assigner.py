"""
Level Assigner
Computes each task's level: the length of its longest prerequisite chain
"""

from typing import Dict, List, Optional
import logging

from .graph_builder import TaskGraph
from .topological_orderer import TopologicalOrderer

logger = logging.getLogger(__name__)


class LevelAssigner:
    """Assigns layout tiers to the tasks of an acyclic graph"""

    def __init__(self, task_graph: TaskGraph):
        self.task_graph = task_graph

    def assign_levels(self, topological_order: Optional[List[str]] = None) -> Dict[str, int]:
        """
        Propagate levels forward along a topological order.

        Every task starts at 0; each processed task offers level + 1 to its
        dependents, which keep the largest offer. Pass the order from
        TopologicalOrderer to avoid computing it twice.
        """
        if topological_order is None:
            topological_order = TopologicalOrderer(self.task_graph).get_topological_order()

        levels = {task_id: 0 for task_id in self.task_graph.task_ids}
        for task_id in topological_order:
            candidate = levels[task_id] + 1
            for dependent in self.task_graph.dependents[task_id]:
                if candidate > levels[dependent]:
                    levels[dependent] = candidate

        logger.debug(f"Assigned levels to {len(levels)} tasks, max level {max(levels.values(), default=0)}")
        return levels

    def assign_levels_by_prerequisites(self) -> Dict[str, int]:
        """
        Memoized 1 + max(prerequisite levels), walked with an explicit stack.

        Alternative to assign_levels that needs no topological order; both
        give the same levels on acyclic graphs. analyze uses assign_levels.

        A task met again while its own level is still being computed counts as
        level 0, so cyclic input terminates instead of looping.
        """
        prerequisites = self.task_graph.prerequisites
        levels: Dict[str, int] = {}
        in_progress = set()

        for root in self.task_graph.task_ids:
            if root in levels:
                continue

            in_progress.add(root)
            stack = [(root, iter(prerequisites[root]))]
            while stack:
                task_id, pending = stack[-1]
                descended = False
                for prerequisite in pending:
                    if prerequisite not in levels and prerequisite not in in_progress:
                        in_progress.add(prerequisite)
                        stack.append((prerequisite, iter(prerequisites[prerequisite])))
                        descended = True
                        break

                if not descended:
                    stack.pop()
                    in_progress.discard(task_id)
                    levels[task_id] = max(
                        (levels.get(p, 0) + 1 for p in prerequisites[task_id]),
                        default=0
                    )

        return {task_id: levels[task_id] for task_id in self.task_graph.task_ids}
