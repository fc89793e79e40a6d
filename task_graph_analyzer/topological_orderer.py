"""
Topological Orderer
Kahn's algorithm over forward edges, ties broken by declared order
"""

from collections import deque
from typing import Dict, List
import logging

from .graph_builder import TaskGraph

logger = logging.getLogger(__name__)


class TopologicalOrderer:
    """Produces an execution order in which every task follows its prerequisites"""

    def __init__(self, task_graph: TaskGraph):
        self.task_graph = task_graph

    def get_topological_order(self) -> List[str]:
        """
        Order the tasks with Kahn's algorithm.

        Zero in-degree tasks are queued in declared order and released FIFO;
        dependents are decremented in the order their edges were declared.
        On a cyclic graph the result is partial and must not be used.
        """
        in_degree: Dict[str, int] = {
            task_id: len(self.task_graph.prerequisites[task_id])
            for task_id in self.task_graph.task_ids
        }
        queue = deque(task_id for task_id in self.task_graph.task_ids if in_degree[task_id] == 0)

        order = []
        while queue:
            current = queue.popleft()
            order.append(current)
            for dependent in self.task_graph.dependents[current]:
                in_degree[dependent] -= 1
                if in_degree[dependent] == 0:
                    queue.append(dependent)

        if len(order) < len(self.task_graph):
            logger.warning(f"Topological order stopped after {len(order)} of {len(self.task_graph)} tasks; graph is cyclic")
        return order
