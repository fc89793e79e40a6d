"""
Task Graph Exceptions
Errors raised while validating task graph input
"""

from typing import Optional


class TaskGraphError(Exception):
    """Base class for task graph validation errors"""


class DuplicateTaskID(TaskGraphError):
    """Two or more tasks share the same identifier"""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Duplicate task_id found in input: {task_id}")


class UnknownTaskReference(TaskGraphError):
    """A dependency edge names a task that was never declared"""

    def __init__(self, dependent: str, prerequisite: str, missing: str):
        self.dependent = dependent
        self.prerequisite = prerequisite
        self.missing = missing
        if missing == dependent:
            message = f"Dependency on {prerequisite} declared by non-existent task {dependent}"
        else:
            message = f"Task {dependent} depends on non-existent task {prerequisite}"
        super().__init__(message)


class InvalidTaskInput(TaskGraphError):
    """The authored task list does not have the expected structure"""

    def __init__(self, message: str, index: Optional[int] = None):
        self.index = index
        if index is not None:
            message = f"Task #{index}: {message}"
        super().__init__(message)
