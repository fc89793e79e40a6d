"""
Data models for task graphs and their analysis results
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    BLOCKED = "blocked"


@dataclass
class TaskSpec:
    """A task as authored in a task list, with the ids it depends on"""
    task_id: str
    name: str
    status: TaskStatus = TaskStatus.PENDING
    description: Optional[str] = None
    dependencies: List[str] = field(default_factory=list)


@dataclass
class TaskDetails:
    """A task together with its direct prerequisites and direct dependents"""
    task_id: str
    prerequisites: List[str]
    dependents: List[str]


@dataclass
class AnalysisResult:
    """
    Outcome of analyzing one task graph.

    topological_order is None and levels is empty whenever has_cycles is True.
    """
    has_cycles: bool
    cycles: List[List[str]]
    topological_order: Optional[List[str]]
    levels: Dict[str, int]

    def to_dict(self) -> Dict:
        """Serialize using the field names of the stored analysis record"""
        return {
            'has_cycles': self.has_cycles,
            'cycles': [list(cycle) for cycle in self.cycles],
            'topological_order': list(self.topological_order) if self.topological_order is not None else None,
            'task_levels': dict(self.levels)
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())
