"""A list view of projects with preview, insert, edit and delete actions."""

from __future__ import annotations

from typing import Any, Callable, Optional

from taskboard.documents import ProjectsDocument
from taskboard.models import Mode, Project, ProjectDetails
from taskboard.project_form import ProjectForm

COLUMNS = (
    "ID",
    "UPDATE_COUNTER",
    "NAME",
    "DESCRIPTION",
    "PROJECT_MANAGER_ID",
    "STATE",
    "TOTAL_EFFORT",
)

DELETE_PROMPT = "Whoa! You sure you want to delete this project and its tasks?"

FormHandler = Callable[[ProjectForm], bool]
Confirm = Callable[[str], bool]
Row = tuple[str, str, str, str, str, str, str]

_NO_SELECTION = "No user selected."


def project_row(project: Project) -> Row:
    """The cells of one list row for ``project``."""
    return (
        str(project.id),
        str(project.update_counter),
        project.name,
        project.description,
        str(project.project_manager_id),
        str(int(project.state)),
        str(project.total_effort),
    )


class ProjectsView:
    """Shows the projects of a document as rows and edits them through forms.

    A form handler stands for the modal form: it receives the form, works on
    it (adding tasks, calling ``accept``) and returns True when confirmed.
    """

    def __init__(self, document: ProjectsDocument) -> None:
        self.document = document
        self.rows: list[Row] = []
        self.selected: Optional[int] = None
        document.add_view(self)

    def initial_update(self) -> list[Row]:
        """Load the projects and show them."""
        return self.load()

    def load(self) -> list[Row]:
        """Reload the projects from the database and show them."""
        self.rows = []
        self.selected = None
        self.document.load_all_projects()
        self.rows = [project_row(project) for project in self.document.projects]
        return self.rows

    def select(self, index: Optional[int]) -> None:
        """Select the row at ``index``, or clear the selection with None."""
        if index is not None and not 0 <= index < len(self.rows):
            raise IndexError(f"No row at index {index}")
        self.selected = index

    def menu_state(self) -> dict[str, bool]:
        """Which context menu entries are enabled."""
        has_selection = self.selected is not None
        return {
            "insert": True,
            "load": True,
            "edit": has_selection,
            "delete": has_selection,
        }

    def _details_for_selected(self) -> ProjectDetails:
        assert self.selected is not None
        project = self.document.projects[self.selected].copy()
        tasks = self.document.get_project_tasks(project.id)
        return ProjectDetails(project, tasks)

    def preview(self) -> Optional[ProjectForm]:
        """A read-only form for the selected project, or None without a selection."""
        if self.selected is None:
            return None
        details = self._details_for_selected()
        return ProjectForm(details, Mode.PREVIEW, self.document.users)

    def insert(self, form_handler: FormHandler) -> bool:
        """Open an insert form and add the project with its tasks if confirmed."""
        details = ProjectDetails(Project(), [])
        form = ProjectForm(details, Mode.INSERT, self.document.users)
        if not form_handler(form):
            return False
        self.document.add_project_with_tasks(details)
        return True

    def edit(self, form_handler: FormHandler) -> bool:
        """Open an update form for the selected project and store the changes."""
        if self.selected is None:
            raise LookupError(_NO_SELECTION)
        details = self._details_for_selected()
        project_id = details.project.id
        form = ProjectForm(details, Mode.UPDATE, self.document.users)
        if not form_handler(form):
            return False
        self.document.update_project_with_tasks(project_id, details)
        return True

    def delete(self, confirm: Confirm) -> bool:
        """Delete the selected project and its tasks once ``confirm`` agrees."""
        if self.selected is None:
            raise LookupError(_NO_SELECTION)
        project = self.document.projects[self.selected]
        project_id = project.id
        if not confirm(DELETE_PROMPT):
            return False
        tasks = self.document.get_project_tasks(project_id)
        self.document.delete_project_with_tasks(
            project_id, ProjectDetails(project, tasks)
        )
        return True

    def on_update(self, mode: Mode, hint: Any) -> None:
        """Reflect a change the document reports."""
        if hint is None:
            return
        project = hint.project.copy()
        projects = self.document.projects
        if mode is Mode.INSERT:
            projects.append(project)
            self.rows.append(project_row(project))
        elif mode is Mode.UPDATE:
            if self.selected is None:
                raise LookupError(_NO_SELECTION)
            projects[self.selected] = project
            self.rows[self.selected] = project_row(project)
        elif mode is Mode.DELETE:
            projects[:] = [item for item in projects if item.id != project.id]
            if self.selected is None:
                raise LookupError(_NO_SELECTION)
            del self.rows[self.selected]
            self.selected = None
        else:
            raise ValueError("Wrong mode for the view")