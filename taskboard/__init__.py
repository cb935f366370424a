"""Users, projects and tasks in SQLite, with table, service, document, form and view layers."""

__version__ = "0.1.0"