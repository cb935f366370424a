"""Domain records for users, projects and tasks, and the enums they use."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import ClassVar


class ValidationError(ValueError):
    """Raised when a record or form value breaks a field rule."""


class Mode(Enum):
    """What a form or view is being used for."""

    INSERT = 0
    UPDATE = 1
    PREVIEW = 2
    DELETE = 3


class ProjectState(IntEnum):
    """State of a project, derived from the states of its tasks."""

    ACTIVE = 0
    FINISHED = 1
    NONE = -1


class TaskState(IntEnum):
    """State of a single task."""

    WAITING = 0
    IN_PROGRESS = 1
    FINISHED = 2


def _check_length(record: object, field_name: str, limit: int) -> None:
    value = getattr(record, field_name)
    # Each text column is a fixed buffer that also holds the terminator.
    if len(value) >= limit:
        raise ValidationError(
            f"{type(record).__name__}.{field_name} must be shorter than {limit} characters"
        )


@dataclass
class User:
    """A row of the USERS table."""

    NAME_LENGTH: ClassVar[int] = 64
    EMAIL_LENGTH: ClassVar[int] = 64
    JOB_TITLE_LENGTH: ClassVar[int] = 32

    id: int = 0
    update_counter: int = 0
    name: str = ""
    email: str = ""
    job_title: str = ""

    def __post_init__(self) -> None:
        _check_length(self, "name", self.NAME_LENGTH)
        _check_length(self, "email", self.EMAIL_LENGTH)
        _check_length(self, "job_title", self.JOB_TITLE_LENGTH)

    def copy(self) -> User:
        """Return an independent copy of this user."""
        return dataclasses.replace(self)


@dataclass
class Project:
    """A row of the PROJECTS table."""

    NAME_LENGTH: ClassVar[int] = 64
    DESCRIPTION_LENGTH: ClassVar[int] = 128

    id: int = 0
    update_counter: int = 0
    name: str = ""
    description: str = ""
    project_manager_id: int = 0
    state: int = ProjectState.ACTIVE
    total_effort: int = 0

    def __post_init__(self) -> None:
        _check_length(self, "name", self.NAME_LENGTH)
        _check_length(self, "description", self.DESCRIPTION_LENGTH)

    def copy(self) -> Project:
        """Return an independent copy of this project."""
        return dataclasses.replace(self)


@dataclass
class Task:
    """A row of the TASKS table."""

    NAME_LENGTH: ClassVar[int] = 64
    DESCRIPTION_LENGTH: ClassVar[int] = 128

    id: int = 0
    update_counter: int = 0
    name: str = ""
    description: str = ""
    project_id: int = 0
    user_id: int = 0
    state: int = TaskState.WAITING
    effort: int = 0

    def __post_init__(self) -> None:
        _check_length(self, "name", self.NAME_LENGTH)
        _check_length(self, "description", self.DESCRIPTION_LENGTH)

    def copy(self) -> Task:
        """Return an independent copy of this task."""
        return dataclasses.replace(self)


@dataclass
class ProjectDetails:
    """A project together with the tasks that belong to it.

    The project and task list are held by reference, so edits made through
    the details are seen by whoever handed them in.
    """

    project: Project
    tasks: list[Task] = field(default_factory=list)