"""Documents that hold the loaded records and notify the views that show them."""

from __future__ import annotations

from typing import Any, Protocol

from taskboard.models import Mode, Project, ProjectDetails, Task, User
from taskboard.services import ProjectsService, UsersService


class _View(Protocol):
    def on_update(self, mode: Mode, hint: Any) -> None: ...


class _Document:
    """Keeps the registered views and broadcasts changes to them."""

    def __init__(self) -> None:
        self._views: list[_View] = []

    def add_view(self, view: _View) -> None:
        """Register a view to be told about changes."""
        self._views.append(view)

    def update_all_views(self, mode: Mode, hint: Any = None) -> None:
        """Tell every registered view what changed."""
        for view in self._views:
            view.on_update(mode, hint)


class UsersDocument(_Document):
    """The users shown by a users view, backed by a users service."""

    def __init__(self, service: UsersService) -> None:
        super().__init__()
        self.service = service
        self.users: list[User] = []

    def add_view(self, view: _View) -> None:
        super().add_view(view)

    def update_all_views(self, mode: Mode, hint: Any = None) -> None:
        super().update_all_views(mode, hint)

    def new_document(self) -> None:
        """Load the initial contents of the document."""
        self.load_all_users()

    def load_all_users(self) -> list[User]:
        """Replace the held users with those in the database."""
        self.users[:] = self.service.select_all()
        return self.users

    def add_user(self, user: User) -> None:
        """Insert a user, keep a copy of it and notify the views."""
        self.service.insert(user)
        self.users.append(user.copy())
        self.update_all_views(Mode.INSERT, user)

    def update_user(self, user_id: int, user: User) -> None:
        """Store changes to a user and notify the views."""
        self.service.update_by_id(user_id, user)
        for index, existing in enumerate(self.users):
            if existing.id == user_id:
                if existing is not user:
                    self.users[index] = user.copy()
                break
        self.update_all_views(Mode.UPDATE, user)

    def delete_user(self, user_id: int) -> None:
        """Delete a user, drop it from the held users and notify the views."""
        self.service.delete_by_id(user_id)
        removed = None
        for index, existing in enumerate(self.users):
            if existing.id == user_id:
                removed = self.users.pop(index)
                break
        self.update_all_views(Mode.DELETE, removed)


class ProjectsDocument(_Document):
    """The projects and users shown by a projects view."""

    def __init__(
        self, projects_service: ProjectsService, users_service: UsersService
    ) -> None:
        super().__init__()
        self.projects_service = projects_service
        self.users_service = users_service
        self.projects: list[Project] = []
        self.users: list[User] = []

    def add_view(self, view: _View) -> None:
        super().add_view(view)

    def update_all_views(self, mode: Mode, hint: Any = None) -> None:
        super().update_all_views(mode, hint)

    def new_document(self) -> None:
        """Load the users and then the projects."""
        self.load_all_users()
        self.load_all_projects()

    def load_all_projects(self) -> list[Project]:
        """Replace the held projects with those in the database."""
        self.projects[:] = self.projects_service.select_all_projects()
        return self.projects

    def load_all_users(self) -> list[User]:
        """Replace the held users with those in the database."""
        self.users[:] = self.users_service.select_all()
        return self.users

    def get_project_tasks(self, project_id: int) -> list[Task]:
        """Return copies of the tasks of one project."""
        return self.projects_service.get_project_tasks(project_id)

    def add_project_with_tasks(self, details: ProjectDetails) -> None:
        """Insert a project with its tasks and notify the views."""
        self.projects_service.add_project_with_tasks(details)
        self.update_all_views(Mode.INSERT, details)

    def update_project_with_tasks(
        self, project_id: int, details: ProjectDetails
    ) -> None:
        """Store a project with its tasks and notify the views."""
        self.projects_service.update_project_with_tasks(project_id, details)
        self.update_all_views(Mode.UPDATE, details)

    def delete_project_with_tasks(
        self, project_id: int, details: ProjectDetails
    ) -> None:
        """Delete a project with its tasks and notify the views."""
        self.projects_service.delete_project_with_tasks(project_id, details)
        self.update_all_views(Mode.DELETE, details)