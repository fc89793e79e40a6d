"""
Task Graph Builder
Validates task and dependency input and builds the adjacency used by every analysis pass
"""

import json
import networkx as nx
from typing import Dict, Iterable, List, Sequence, Tuple
import logging

from .exceptions import DuplicateTaskID, InvalidTaskInput, UnknownTaskReference
from .models import TaskDetails, TaskSpec, TaskStatus

logger = logging.getLogger(__name__)

Edge = Tuple[str, str]


class TaskGraph:
    """
    Validated adjacency for one analysis call.

    ``dependents`` maps a prerequisite to the tasks that directly depend on it
    (forward edges); ``prerequisites`` maps a dependent to the tasks it waits on.
    Both lists keep declared edge order, and every task has an entry in both.
    """

    def __init__(self, task_ids: List[str], edges: List[Edge],
                 dependents: Dict[str, List[str]], prerequisites: Dict[str, List[str]]):
        self.task_ids = task_ids
        self.edges = edges
        self.dependents = dependents
        self.prerequisites = prerequisites

    def __len__(self) -> int:
        return len(self.task_ids)

    def __contains__(self, task_id: str) -> bool:
        return task_id in self.dependents

    def get_prerequisites(self, task_id: str) -> List[str]:
        """Get the tasks this task directly depends on"""
        return list(self.prerequisites.get(task_id, []))

    def get_dependents(self, task_id: str) -> List[str]:
        """Get the tasks that directly depend on this task"""
        return list(self.dependents.get(task_id, []))

    def get_task_details(self, task_id: str) -> TaskDetails:
        if task_id not in self:
            raise KeyError(task_id)
        return TaskDetails(
            task_id=task_id,
            prerequisites=self.get_prerequisites(task_id),
            dependents=self.get_dependents(task_id)
        )

    def to_networkx(self) -> nx.DiGraph:
        """Export as a DiGraph with prerequisite -> dependent edges"""
        graph = nx.DiGraph()
        graph.add_nodes_from(self.task_ids)
        for dependent, prerequisite in self.edges:
            graph.add_edge(prerequisite, dependent)
        return graph

    def get_graph_stats(self) -> Dict:
        """Get statistics about the task graph"""
        graph = self.to_networkx()
        node_count = graph.number_of_nodes()
        return {
            'total_tasks': node_count,
            'total_dependencies': len(self.edges),
            'is_connected': nx.is_weakly_connected(graph) if node_count > 0 else False,
            'density': nx.density(graph) if node_count > 1 else 0.0,
            'average_degree': sum(dict(graph.degree()).values()) / node_count if node_count > 0 else 0
        }


class TaskGraphBuilder:
    """Builds validated task graphs from task ids and dependency edges"""

    def build(self, tasks: Sequence[str], edges: Sequence[Edge]) -> TaskGraph:
        """
        Validate input and build the adjacency.

        Raises DuplicateTaskID when an identifier repeats, and
        UnknownTaskReference when an edge names an undeclared task.
        """
        dependents: Dict[str, List[str]] = {}
        prerequisites: Dict[str, List[str]] = {}
        for task_id in tasks:
            if task_id in dependents:
                logger.warning(f"Rejected task graph: duplicate task_id {task_id}")
                raise DuplicateTaskID(task_id)
            dependents[task_id] = []
            prerequisites[task_id] = []

        edge_list: List[Edge] = []
        for dependent, prerequisite in edges:
            for endpoint in (dependent, prerequisite):
                if endpoint not in dependents:
                    logger.warning(f"Rejected task graph: edge {dependent} -> {prerequisite} references unknown task {endpoint}")
                    raise UnknownTaskReference(dependent, prerequisite, endpoint)
            dependents[prerequisite].append(dependent)
            prerequisites[dependent].append(prerequisite)
            edge_list.append((dependent, prerequisite))

        logger.debug(f"Built task graph with {len(dependents)} tasks and {len(edge_list)} dependencies")
        return TaskGraph(list(dependents), edge_list, dependents, prerequisites)

    def build_from_task_specs(self, specs: Sequence[TaskSpec]) -> TaskGraph:
        """Build from authored tasks, one edge per listed dependency"""
        return self.build([spec.task_id for spec in specs], task_specs_to_edges(specs))


def task_specs_to_edges(specs: Iterable[TaskSpec]) -> List[Edge]:
    return [(spec.task_id, dep) for spec in specs for dep in spec.dependencies]


def parse_task_list(content: str) -> List[TaskSpec]:
    """Parse an authored JSON task list into TaskSpecs"""
    if not content.strip():
        return []

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise InvalidTaskInput(f"Invalid JSON format: {e}") from e
    except RecursionError as e:
        raise InvalidTaskInput("Invalid JSON format: nested too deeply") from e

    if not isinstance(data, list):
        raise InvalidTaskInput("JSON must be an array of tasks")

    return [_parse_task(item, index) for index, item in enumerate(data)]


def _parse_task(item, index: int) -> TaskSpec:
    if not isinstance(item, dict):
        raise InvalidTaskInput("each task must be an object", index)

    task_id = item.get('task_id')
    if not isinstance(task_id, str) or not task_id:
        raise InvalidTaskInput("each task must have a task_id (string)", index)

    name = item.get('name')
    if not isinstance(name, str) or not name:
        raise InvalidTaskInput(f"task {task_id} must have a name (string)", index)

    status = item.get('status', TaskStatus.PENDING.value)
    try:
        status = TaskStatus(status)
    except ValueError:
        allowed = ", ".join(s.value for s in TaskStatus)
        raise InvalidTaskInput(f"task {task_id} has unknown status {status!r} (expected one of {allowed})", index) from None

    description = item.get('description')
    if description is not None and not isinstance(description, str):
        raise InvalidTaskInput(f"task {task_id} description must be a string or null", index)

    dependencies = item.get('dependencies', [])
    if not isinstance(dependencies, list) or not all(isinstance(dep, str) for dep in dependencies):
        raise InvalidTaskInput(f"task {task_id} dependencies must be an array of task_ids", index)

    return TaskSpec(
        task_id=task_id,
        name=name,
        status=status,
        description=description,
        dependencies=list(dependencies)
    )


def validate_task_list(specs: Sequence[TaskSpec]) -> List[str]:
    """Collect every duplicate id and dangling dependency without raising"""
    problems = []
    seen = set()
    for spec in specs:
        if spec.task_id in seen:
            problems.append(f'Duplicate task_id "{spec.task_id}"')
        seen.add(spec.task_id)

    for spec in specs:
        for dep in spec.dependencies:
            if dep not in seen:
                problems.append(f'Task "{spec.task_id}" depends on non-existent task "{dep}"')
    return problems
