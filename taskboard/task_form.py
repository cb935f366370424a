"""The form that edits a single task of a project."""

from __future__ import annotations

import re
from typing import Any, Optional, Sequence

from taskboard.models import Mode, Project, Task, TaskState, User, ValidationError

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_short(text: str) -> int:
    """Read a leading integer as a 16-bit signed value; 0 when there is none."""
    match = _LEADING_INT.match(text)
    if match is None:
        return 0
    value = int(match.group(1))
    return (value + 0x8000) % 0x10000 - 0x8000


class TaskForm:
    """Edits ``task`` in place when accepted."""

    def __init__(
        self, task: Task, mode: Mode, users: Sequence[User], project: Project
    ) -> None:
        self.task = task
        self.mode = mode
        self.users = users
        self.project = project
        self._state: Optional[TaskState] = None
        if mode is not Mode.DELETE:
            try:
                self._state = TaskState(task.state)
            except ValueError:
                self._state = None

    @property
    def state(self) -> Optional[TaskState]:
        return self._state

    def initial_values(self) -> dict[str, Any]:
        """The values the fields start with; delete mode leaves them blank."""
        if self.mode is Mode.DELETE:
            return {
                "name": "",
                "description": "",
                "effort": "",
                "user_id": None,
                "state": None,
            }
        known_ids = {user.id for user in self.users}
        return {
            "name": self.task.name,
            "description": self.task.description,
            "effort": str(self.task.effort),
            "user_id": self.task.user_id if self.task.user_id in known_ids else None,
            "state": self._state,
        }

    def user_choices(self) -> list[tuple[str, int]]:
        """The users to pick from as (name, id), sorted by name."""
        return sorted(
            ((user.name, user.id) for user in self.users),
            key=lambda choice: choice[0].casefold(),
        )

    def allowed_states(self) -> tuple[TaskState, ...]:
        """The states that may be picked; a new task cannot start finished."""
        if self.mode is Mode.INSERT:
            return (TaskState.WAITING, TaskState.IN_PROGRESS)
        return tuple(TaskState)

    def select_state(self, state: TaskState) -> TaskState:
        """Pick the task's state."""
        state = TaskState(state)
        if state not in self.allowed_states():
            raise ValidationError(f"State {state.name} cannot be chosen here")
        self._state = state
        return state

    def validate(self, candidate: Task) -> None:
        """Raise ValidationError if a field is empty or nothing changed."""
        if (
            not candidate.name
            or not candidate.description
            or candidate.user_id == -1
            or candidate.effort == 0
            or candidate.state == -1
        ):
            raise ValidationError("Please fill each field")
        task = self.task
        if (
            task.name == candidate.name
            and task.description == candidate.description
            and task.project_id == candidate.project_id
            and task.user_id == candidate.user_id
            and task.state == candidate.state
            and task.effort == candidate.effort
        ):
            raise ValidationError("No changes were made")

    def accept(
        self, name: str, description: str, effort: str, user_id: Optional[int]
    ) -> Task:
        """Validate the values, store them on the task and return it."""
        if self.mode is Mode.PREVIEW:
            return self.task
        candidate = Task(
            name=name,
            description=description,
            project_id=self.project.id,
            user_id=-1 if user_id is None else user_id,
            state=-1 if self._state is None else int(self._state),
            effort=_parse_short(effort),
        )
        self.validate(candidate)
        self.task.name = candidate.name
        self.task.description = candidate.description
        self.task.project_id = candidate.project_id
        self.task.user_id = candidate.user_id
        self.task.state = candidate.state
        self.task.effort = candidate.effort
        return self.task