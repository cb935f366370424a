"""A list view of users with insert, edit and delete actions."""

from __future__ import annotations

from typing import Any, Callable, Optional

from taskboard.documents import UsersDocument
from taskboard.models import Mode, User
from taskboard.user_form import UserForm

COLUMNS = ("ID", "UPDATE_COUNTER", "NAME", "EMAIL", "JOB_TITLE")

FormHandler = Callable[[UserForm], bool]

_NO_SELECTION = "No user selected."


def user_row(user: User) -> tuple[str, str, str, str, str]:
    """The cells of one list row for ``user``."""
    return (
        str(user.id),
        str(user.update_counter),
        user.name,
        user.email,
        user.job_title,
    )


class UsersView:
    """Shows the users of a document as rows and edits them through forms.

    A form handler stands for the modal form: it receives the form, fills it
    in through ``accept`` and returns True when the user confirmed it.
    """

    def __init__(self, document: UsersDocument) -> None:
        self.document = document
        self.rows: list[tuple[str, str, str, str, str]] = []
        self.selected: Optional[int] = None
        document.add_view(self)

    def _fill(self) -> None:
        self.rows = [user_row(user) for user in self.document.users]
        self.selected = None

    def initial_update(self) -> list[tuple[str, str, str, str, str]]:
        """Show the users the document already holds."""
        self._fill()
        return self.rows

    def load(self) -> list[tuple[str, str, str, str, str]]:
        """Reload the users from the database and show them."""
        self.document.load_all_users()
        self._fill()
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

    def selected_user(self) -> Optional[User]:
        """The document's user behind the selected row, if any."""
        if self.selected is None:
            return None
        user_id = self.document.users[self.selected].id
        found = None
        for user in self.document.users:
            if user.id == user_id:
                found = user
        return found

    def _require_selected(self) -> User:
        user = self.selected_user()
        if user is None:
            raise LookupError(_NO_SELECTION)
        return user

    def insert(self, form_handler: FormHandler) -> bool:
        """Open an insert form and add the user if it was confirmed."""
        user = User()
        if not form_handler(UserForm(user, Mode.INSERT)):
            return False
        self.document.add_user(user)
        return True

    def edit(self, form_handler: FormHandler) -> bool:
        """Open an update form for the selected user and store the changes."""
        user = self._require_selected()
        if not form_handler(UserForm(user, Mode.UPDATE)):
            return False
        self.document.update_user(user.id, user)
        return True

    def delete(self) -> None:
        """Delete the selected user."""
        user = self._require_selected()
        self.document.delete_user(user.id)

    def on_update(self, mode: Mode, hint: Any) -> None:
        """Reflect a change the document reports."""
        if hint is None:
            return
        row = user_row(hint)
        if mode is Mode.INSERT:
            self.rows.append(row)
        elif mode is Mode.UPDATE:
            if self.selected is None:
                raise LookupError(_NO_SELECTION)
            current = self.rows[self.selected]
            self.rows[self.selected] = (current[0],) + row[1:]
        elif mode is Mode.DELETE:
            if self.selected is None:
                raise LookupError(_NO_SELECTION)
            del self.rows[self.selected]
            self.selected = None
        else:
            raise ValueError("Wrong mode for the view")