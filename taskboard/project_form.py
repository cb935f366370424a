"""The form that edits a project and the list of its tasks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from taskboard.models import (
    Mode,
    Project,
    ProjectDetails,
    ProjectState,
    Task,
    TaskState,
    User,
    ValidationError,
)

MANAGER_TITLE = "Ръководител"

_STATE_LABELS = {
    ProjectState.ACTIVE: "Active",
    ProjectState.FINISHED: "Finished",
    ProjectState.NONE: "None",
}


def _to_short(value: int) -> int:
    """Wrap an integer into the 16-bit signed range."""
    return (value + 0x8000) % 0x10000 - 0x8000


@dataclass(frozen=True)
class TaskSummary:
    """The project state and total effort that follow from a task list."""

    state: ProjectState
    total_effort: int

    @property
    def label(self) -> str:
        """The text shown for the state."""
        return _STATE_LABELS[self.state]


def summarize_tasks(tasks: Iterable[Task]) -> TaskSummary:
    """Work out the project state and total effort from its tasks.

    A project without tasks has no state; it is finished when every task is
    finished and active otherwise.
    """
    tasks = list(tasks)
    if not tasks:
        return TaskSummary(ProjectState.NONE, 0)
    total = _to_short(sum(task.effort for task in tasks))
    if all(task.state == TaskState.FINISHED for task in tasks):
        return TaskSummary(ProjectState.FINISHED, total)
    return TaskSummary(ProjectState.ACTIVE, total)


class ProjectForm:
    """Edits the project and task list of ``details`` in place."""

    def __init__(
        self, details: ProjectDetails, mode: Mode, users: Sequence[Optional[User]]
    ) -> None:
        self.details = details
        self.project = details.project
        self.tasks = details.tasks
        self.mode = mode
        self.users = users

    @property
    def read_only(self) -> bool:
        """Whether the fields and task buttons are disabled."""
        return self.mode is Mode.PREVIEW

    def initial_values(self) -> dict[str, Any]:
        """The values the fields start with; delete mode leaves them blank."""
        if self.mode is Mode.DELETE:
            return {
                "name": "",
                "description": "",
                "manager_id": None,
                "state": "",
                "total_effort": "",
            }
        manager_ids = {manager_id for _, manager_id in self.manager_choices()}
        summary = self.summary()
        manager_id = self.project.project_manager_id
        return {
            "name": self.project.name,
            "description": self.project.description,
            "manager_id": manager_id if manager_id in manager_ids else None,
            "state": summary.label,
            "total_effort": str(summary.total_effort),
        }

    def manager_choices(self) -> list[tuple[str, int]]:
        """The users who may lead the project, as (name, id)."""
        return [
            (user.name, user.id)
            for user in self.users
            if user is not None and user.job_title == MANAGER_TITLE
        ]

    def summary(self) -> TaskSummary:
        """The state and total effort of the current task list."""
        return summarize_tasks(self.tasks)

    def task_names(self) -> list[str]:
        """The names of the tasks in list order."""
        return [task.name for task in self.tasks]

    def insert_task(self, task: Task) -> TaskSummary:
        """Add a task to the project."""
        self.tasks.append(task)
        return self.summary()

    def update_task(self, index: int, task: Task) -> TaskSummary:
        """Replace the task at ``index``."""
        self._check_index(index)
        self.tasks[index] = task
        return self.summary()

    def delete_task(self, index: int) -> TaskSummary:
        """Remove the task at ``index``."""
        self._check_index(index)
        del self.tasks[index]
        return self.summary()

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.tasks):
            raise IndexError(f"No task at index {index}")

    def validate(self, candidate: Project) -> None:
        """Raise ValidationError if a field is empty or nothing changed."""
        if (
            not candidate.name
            or not candidate.description
            or candidate.project_manager_id == -1
        ):
            raise ValidationError("Please fill each field")
        project = self.project
        if (
            project.name == candidate.name
            and project.description == candidate.description
            and project.project_manager_id == candidate.project_manager_id
            and project.state == candidate.state
            and project.total_effort == candidate.total_effort
        ):
            raise ValidationError("No changes were made")

    def accept(
        self, name: str, description: str, manager_id: Optional[int]
    ) -> Project:
        """Validate the values, store them on the project and return it."""
        if self.mode is Mode.PREVIEW:
            return self.project
        summary = self.summary()
        candidate = Project(
            name=name,
            description=description,
            project_manager_id=-1 if manager_id is None else manager_id,
            state=int(summary.state),
            total_effort=summary.total_effort,
        )
        self.validate(candidate)
        self.project.name = candidate.name
        self.project.description = candidate.description
        self.project.project_manager_id = candidate.project_manager_id
        self.project.state = candidate.state
        self.project.total_effort = candidate.total_effort
        return self.project

    def cancel(self) -> None:
        """Drop the task list, as closing the form without saving does."""
        self.tasks.clear()