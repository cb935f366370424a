"""A database session with explicit transaction control."""

from __future__ import annotations

import os
import sqlite3
from contextlib import contextmanager
from typing import Any, Iterator, Sequence, Union

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS USERS (
        ID INTEGER PRIMARY KEY AUTOINCREMENT,
        UPDATE_COUNTER INTEGER NOT NULL DEFAULT 0,
        NAME TEXT NOT NULL DEFAULT '',
        EMAIL TEXT NOT NULL DEFAULT '',
        JOB_TITLE TEXT NOT NULL DEFAULT ''
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS PROJECTS (
        ID INTEGER PRIMARY KEY AUTOINCREMENT,
        UPDATE_COUNTER INTEGER NOT NULL DEFAULT 0,
        NAME TEXT NOT NULL DEFAULT '',
        DESCRIPTION TEXT NOT NULL DEFAULT '',
        PROJECT_MANAGER_ID INTEGER NOT NULL DEFAULT 0,
        STATE INTEGER NOT NULL DEFAULT 0,
        TOTAL_EFFORT INTEGER NOT NULL DEFAULT 0
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS TASKS (
        ID INTEGER PRIMARY KEY AUTOINCREMENT,
        UPDATE_COUNTER INTEGER NOT NULL DEFAULT 0,
        NAME TEXT NOT NULL DEFAULT '',
        DESCRIPTION TEXT NOT NULL DEFAULT '',
        PROJECT_ID INTEGER NOT NULL DEFAULT 0,
        USER_ID INTEGER NOT NULL DEFAULT 0,
        STATE INTEGER NOT NULL DEFAULT 0,
        EFFORT INTEGER NOT NULL DEFAULT 0
    )
    """,
)


class DatabaseError(Exception):
    """Raised when the database cannot be reached or a query fails."""


class TransactionError(DatabaseError):
    """Raised when a transaction is started, committed or aborted out of turn."""


class Session:
    """A connection to the database, opened on creation and reopened on demand."""

    def __init__(self, database: Union[str, "os.PathLike[str]"] = ":memory:") -> None:
        self.database = database
        self._connection: sqlite3.Connection | None = None
        self._in_transaction = False
        self.open()

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    @property
    def in_transaction(self) -> bool:
        return self._in_transaction

    def open(self) -> sqlite3.Connection:
        """Open the connection if it is not open yet and return it."""
        if self._connection is None:
            try:
                connection = sqlite3.connect(self.database, isolation_level=None)
            except sqlite3.Error as exc:
                raise DatabaseError(f"Unable to open session: {exc}") from exc
            connection.row_factory = sqlite3.Row
            self._connection = connection
        return self._connection

    def close(self) -> None:
        """Close the connection; uncommitted work is discarded."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
        self._in_transaction = False

    def create_schema(self) -> None:
        """Create the USERS, PROJECTS and TASKS tables if they are missing."""
        for statement in _SCHEMA:
            self.execute(statement)

    def begin(self) -> None:
        if self._in_transaction:
            raise TransactionError("A transaction is already in progress")
        self.execute("BEGIN")
        self._in_transaction = True

    def rollback(self) -> None:
        if not self._in_transaction:
            raise TransactionError("No transaction to roll back")
        try:
            self.execute("ROLLBACK")
        finally:
            self._in_transaction = False

    def commit(self) -> None:
        if not self._in_transaction:
            raise TransactionError("No transaction to commit")
        self.execute("COMMIT")
        self._in_transaction = False

    def execute(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Cursor:
        """Run one statement and return its cursor."""
        connection = self.open()
        try:
            return connection.execute(sql, tuple(params))
        except sqlite3.Error as exc:
            raise DatabaseError(f"Query failed: {exc}") from exc

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Run a block in a transaction.

        If a transaction is already open the block joins it, and the outer
        owner decides whether it is committed.
        """
        if self._in_transaction:
            yield self
            return
        self.begin()
        try:
            yield self
        except BaseException:
            self.rollback()
            raise
        self.commit()

    def __enter__(self) -> Session:
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._in_transaction and self._connection is not None:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        self.close()
        return False