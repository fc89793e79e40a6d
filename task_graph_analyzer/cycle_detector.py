"""
Cycle Detector
Finds dependency cycles with a three-color depth-first search over forward edges
"""

import networkx as nx
from typing import Dict, List, Tuple
import logging

from .graph_builder import TaskGraph

logger = logging.getLogger(__name__)

UNVISITED = 0
IN_PROGRESS = 1
DONE = 2


class CycleDetector:
    """Detects cycles in a task graph"""

    def __init__(self, task_graph: TaskGraph):
        self.task_graph = task_graph
        self.cycles: List[List[str]] = []

    def detect_cycles(self) -> Tuple[bool, List[List[str]]]:
        """
        Run the search from every unvisited task in declared order.

        Whenever a neighbor still in progress is reached, the current path from
        that neighbor onwards is reported, closed by repeating the neighbor.
        Finished tasks are never re-entered. Cycles reachable from several
        roots are not deduplicated.
        """
        dependents = self.task_graph.dependents
        color: Dict[str, int] = {task_id: UNVISITED for task_id in self.task_graph.task_ids}
        cycles: List[List[str]] = []

        for root in self.task_graph.task_ids:
            if color[root] != UNVISITED:
                continue

            color[root] = IN_PROGRESS
            path = [root]
            stack = [(root, iter(dependents[root]))]

            while stack:
                node, neighbors = stack[-1]
                descended = False
                for neighbor in neighbors:
                    state = color[neighbor]
                    if state == IN_PROGRESS:
                        start = path.index(neighbor)
                        cycle = path[start:] + [neighbor]
                        cycles.append(cycle)
                        logger.debug(f"Cycle found: {describe_cycle(cycle)}")
                    elif state == UNVISITED:
                        color[neighbor] = IN_PROGRESS
                        path.append(neighbor)
                        stack.append((neighbor, iter(dependents[neighbor])))
                        descended = True
                        break

                if not descended:
                    stack.pop()
                    path.pop()
                    color[node] = DONE

        self.cycles = cycles
        if cycles:
            logger.info(f"Found {len(cycles)} cycles in task graph")
        return bool(cycles), cycles

    def find_strongly_connected_components(self) -> List[List[str]]:
        """Groups of tasks that are mutually reachable, including self-loops"""
        graph = self.task_graph.to_networkx()
        order = {task_id: i for i, task_id in enumerate(self.task_graph.task_ids)}

        components = []
        for scc in nx.strongly_connected_components(graph):
            if len(scc) > 1:
                components.append(sorted(scc, key=order.get))
            else:
                node = next(iter(scc))
                if graph.has_edge(node, node):
                    components.append([node])

        components.sort(key=lambda component: order[component[0]])
        return components


def describe_cycle(cycle: List[str]) -> str:
    return " → ".join(cycle)
