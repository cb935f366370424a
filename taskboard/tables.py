"""Generic table access with optimistic locking, and the three concrete tables."""

from __future__ import annotations

from typing import Any, Generic, Mapping, TypeVar

from taskboard.models import Project, Task, User
from taskboard.session import DatabaseError, Session

R = TypeVar("R")

_ID_COLUMN = "ID"
_COUNTER_ATTRIBUTE = "update_counter"

USERS_COLUMNS: Mapping[str, str] = {
    "UPDATE_COUNTER": "update_counter",
    "NAME": "name",
    "EMAIL": "email",
    "JOB_TITLE": "job_title",
}

PROJECTS_COLUMNS: Mapping[str, str] = {
    "UPDATE_COUNTER": "update_counter",
    "NAME": "name",
    "DESCRIPTION": "description",
    "PROJECT_MANAGER_ID": "project_manager_id",
    "STATE": "state",
    "TOTAL_EFFORT": "total_effort",
}

TASKS_COLUMNS: Mapping[str, str] = {
    "UPDATE_COUNTER": "update_counter",
    "NAME": "name",
    "DESCRIPTION": "description",
    "PROJECT_ID": "project_id",
    "USER_ID": "user_id",
    "STATE": "state",
    "EFFORT": "effort",
}


class RecordNotFoundError(DatabaseError, LookupError):
    """Raised when no row has the requested ID."""


class ConcurrencyError(DatabaseError):
    """Raised when a row was changed by someone else since it was read."""


def _adapt(value: Any) -> Any:
    # Enum members and booleans are stored as plain integers.
    if isinstance(value, int):
        return int(value)
    return value


class Table(Generic[R]):
    """Reads and writes records of one type in one table.

    ``columns`` maps each data column to the record attribute it holds; the
    identity column ``ID`` maps to the record's ``id`` and is not listed.
    """

    def __init__(
        self,
        session: Session,
        name: str,
        record_type: type[R],
        columns: Mapping[str, str],
    ) -> None:
        if not name.isidentifier():
            raise ValueError(f"Invalid table name: {name!r}")
        if _COUNTER_ATTRIBUTE not in columns.values():
            raise ValueError("Columns must include the update counter")
        self.session = session
        self.name = name
        self.record_type = record_type
        self._columns = dict(columns)

    def _to_record(self, row: Any) -> R:
        values = {"id": row[_ID_COLUMN]}
        values.update({attr: row[column] for column, attr in self._columns.items()})
        return self.record_type(**values)

    def _fetch_row(self, record_id: int) -> Any:
        row = self.session.execute(
            f"SELECT * FROM {self.name} WHERE {_ID_COLUMN} = ?", (record_id,)
        ).fetchone()
        if row is None:
            raise RecordNotFoundError(
                f"{self.name} record with ID of {record_id} was not found"
            )
        return row

    def select_all(self) -> list[R]:
        """Return every record of the table in ID order."""
        cursor = self.session.execute(
            f"SELECT * FROM {self.name} ORDER BY {_ID_COLUMN}"
        )
        return [self._to_record(row) for row in cursor.fetchall()]

    def select_by_id(self, record_id: int) -> R:
        """Return the record with the given ID."""
        with self.session.transaction():
            return self._to_record(self._fetch_row(record_id))

    def update_by_id(self, record_id: int, record: R) -> R:
        """Write ``record`` over the row with the given ID.

        The record's update counter must match the stored one; on success both
        are incremented. The row's ID is never changed.
        """
        with self.session.transaction():
            row = self._fetch_row(record_id)
            stored_counter = row["UPDATE_COUNTER"]
            if getattr(record, _COUNTER_ATTRIBUTE) != stored_counter:
                raise ConcurrencyError("Update counters do not match in the database")
            new_counter = stored_counter + 1
            assignments = ", ".join(f"{column} = ?" for column in self._columns)
            params = [
                new_counter if attr == _COUNTER_ATTRIBUTE else _adapt(getattr(record, attr))
                for attr in self._columns.values()
            ]
            params.append(record_id)
            self.session.execute(
                f"UPDATE {self.name} SET {assignments} WHERE {_ID_COLUMN} = ?", params
            )
        setattr(record, _COUNTER_ATTRIBUTE, new_counter)
        return record

    def insert(self, record: R) -> int:
        """Insert ``record``, store its new ID on it and return that ID."""
        column_list = ", ".join(self._columns)
        placeholders = ", ".join("?" for _ in self._columns)
        params = [_adapt(getattr(record, attr)) for attr in self._columns.values()]
        cursor = self.session.execute(
            f"INSERT INTO {self.name} ({column_list}) VALUES ({placeholders})", params
        )
        new_id = cursor.lastrowid
        if new_id is None:
            raise DatabaseError(f"Unable to read inserted {self.name} record again")
        record.id = new_id
        return new_id

    def delete_by_id(self, record_id: int) -> None:
        """Delete the row with the given ID."""
        with self.session.transaction():
            self._fetch_row(record_id)
            self.session.execute(
                f"DELETE FROM {self.name} WHERE {_ID_COLUMN} = ?", (record_id,)
            )


def users_table(session: Session) -> Table[User]:
    """The USERS table."""
    return Table(session, "USERS", User, USERS_COLUMNS)


def projects_table(session: Session) -> Table[Project]:
    """The PROJECTS table."""
    return Table(session, "PROJECTS", Project, PROJECTS_COLUMNS)


def tasks_table(session: Session) -> Table[Task]:
    """The TASKS table."""
    return Table(session, "TASKS", Task, TASKS_COLUMNS)