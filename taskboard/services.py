"""Application services that combine table operations into use cases."""

from __future__ import annotations

from taskboard.models import Project, ProjectDetails, Task, User
from taskboard.session import Session
from taskboard.tables import Table, projects_table, tasks_table, users_table


class UsersService:
    """Create, read, update and delete users."""

    def __init__(self, session: Session) -> None:
        self.session = session

    @property
    def _users(self) -> Table[User]:
        return users_table(self.session)

    def select_all(self) -> list[User]:
        """Return every user."""
        return self._users.select_all()

    def select_by_id(self, user_id: int) -> User:
        """Return the user with the given ID."""
        return self._users.select_by_id(user_id)

    def update_by_id(self, user_id: int, user: User) -> User:
        """Store ``user`` over the row with the given ID and return it."""
        return self._users.update_by_id(user_id, user)

    def insert(self, user: User) -> int:
        """Insert ``user`` and return its new ID."""
        return self._users.insert(user)

    def delete_by_id(self, user_id: int) -> None:
        """Delete the user with the given ID."""
        self._users.delete_by_id(user_id)


class ProjectsService:
    """Manage projects and their tasks, keeping multi-step changes atomic."""

    def __init__(self, session: Session) -> None:
        self.session = session

    @property
    def _projects(self) -> Table[Project]:
        return projects_table(self.session)

    @property
    def _tasks(self) -> Table[Task]:
        return tasks_table(self.session)

    def select_all_projects(self) -> list[Project]:
        """Return every project."""
        return self._projects.select_all()

    def select_project_by_id(self, project_id: int) -> Project:
        """Return the project with the given ID."""
        return self._projects.select_by_id(project_id)

    def update_project_by_id(self, project_id: int, project: Project) -> Project:
        """Store ``project`` over the row with the given ID and return it."""
        return self._projects.update_by_id(project_id, project)

    def insert_project(self, project: Project) -> int:
        """Insert ``project`` and return its new ID."""
        return self._projects.insert(project)

    def delete_project_by_id(self, project_id: int) -> None:
        """Delete the project with the given ID."""
        self._projects.delete_by_id(project_id)

    def select_all_tasks(self) -> list[Task]:
        """Return every task."""
        return self._tasks.select_all()

    def select_task_by_id(self, task_id: int) -> Task:
        """Return the task with the given ID."""
        return self._tasks.select_by_id(task_id)

    def update_task_by_id(self, task_id: int, task: Task) -> Task:
        """Store ``task`` over the row with the given ID and return it."""
        return self._tasks.update_by_id(task_id, task)

    def insert_task(self, task: Task) -> int:
        """Insert ``task`` and return its new ID."""
        return self._tasks.insert(task)

    def delete_task_by_id(self, task_id: int) -> None:
        """Delete the task with the given ID."""
        self._tasks.delete_by_id(task_id)

    def get_project_tasks(self, project_id: int) -> list[Task]:
        """Return copies of the tasks that belong to the given project."""
        return [
            task.copy()
            for task in self.select_all_tasks()
            if task.project_id == project_id
        ]

    def add_project_with_tasks(self, details: ProjectDetails) -> None:
        """Insert a project and all its tasks in one transaction.

        Each task is attached to the newly inserted project.
        """
        with self.session.transaction():
            project = details.project
            self.insert_project(project)
            for task in details.tasks:
                task.project_id = project.id
                self.insert_task(task)

    def update_project_with_tasks(
        self, project_id: int, details: ProjectDetails
    ) -> None:
        """Update a project and its tasks in one transaction.

        Tasks without an ID are inserted first; every task is then updated.
        """
        with self.session.transaction():
            self.update_project_by_id(project_id, details.project)
            for task in details.tasks:
                if task.id == 0:
                    self.insert_task(task)
                self.update_task_by_id(task.id, task)

    def delete_project_with_tasks(
        self, project_id: int, details: ProjectDetails
    ) -> None:
        """Delete the given tasks and then the project, in one transaction."""
        with self.session.transaction():
            for task in details.tasks:
                self.delete_task_by_id(task.id)
            self.delete_project_by_id(project_id)