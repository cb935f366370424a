# taskboard

A small project-tracking library. It keeps three kinds of record in an
SQLite database: users, projects, and the tasks that belong to projects.
On top of that storage it provides the layers an application needs. The
package depends only on the standard library.

| Module | What it holds |
| --- | --- |
| `taskboard.models` | `User`, `Project`, `Task`, `ProjectDetails`, the `Mode`, `ProjectState` and `TaskState` enums, and `ValidationError` |
| `taskboard.session` | `Session`, a database connection with explicit transactions, plus `DatabaseError` and `TransactionError` |
| `taskboard.tables` | `Table`, the factories `users_table`, `projects_table` and `tasks_table`, and the errors `RecordNotFoundError` and `ConcurrencyError` |
| `taskboard.services` | `UsersService` and `ProjectsService` |
| `taskboard.documents` | `UsersDocument` and `ProjectsDocument`, which hold loaded records and notify registered views |
| `taskboard.user_form`, `taskboard.task_form`, `taskboard.project_form` | The form logic for editing one record: initial values, choices, validation and accepting input |
| `taskboard.users_view`, `taskboard.projects_view` | List views: rows, selection, context-menu state, and the insert, edit and delete actions |

## Storage

`Session(database=":memory:")` opens an SQLite connection as soon as it is
created. It reopens the connection when it is needed again after `close()`.

- `create_schema()` creates the `USERS`, `PROJECTS` and `TASKS` tables if they are missing.
- `begin()`, `commit()` and `rollback()` control a transaction. Calling one out of turn raises `TransactionError`.
- `transaction()` is a context manager. It commits when the block ends normally and rolls back when the block raises. If a transaction is already open, the block joins that transaction instead.
- Used with `with`, a session commits any open transaction on a clean exit, rolls it back on an exception, and then closes.

## Records and concurrency

Every record carries an `update_counter`. `Table.update_by_id` succeeds only
when the counter on the record you pass matches the stored counter. On
success the counter goes up by one, both in the row and on your record. If
the counters differ, it raises `ConcurrencyError`. Reading, updating or
deleting an id that does not exist raises `RecordNotFoundError`.
`Table.insert` stores the new id on the record and returns it.

Text fields have fixed limits:

| Record | Field | Must be shorter than |
| --- | --- | --- |
| `User` | `name` | 64 characters |
| `User` | `email` | 64 characters |
| `User` | `job_title` | 32 characters |
| `Project` and `Task` | `name` | 64 characters |
| `Project` and `Task` | `description` | 128 characters |

A longer value raises `ValidationError` when the record is constructed.

## Getting started

```python
from taskboard.models import User
from taskboard.session import Session
from taskboard.services import UsersService, ProjectsService

with Session("board.db") as session:
    session.create_schema()

    users = UsersService(session)
    projects = ProjectsService(session)

    users.insert(User(name="Ann", email="ann@example.com", job_title="Developer"))

    for user in users.select_all():
        print(user)

    for project in projects.select_all_projects():
        print(project, projects.get_project_tasks(project.id))
```

Three `ProjectsService` methods handle a project together with its tasks.
Each one runs inside a single transaction.

- `add_project_with_tasks(details)` inserts the project, then inserts each task linked to the new project's id.
- `update_project_with_tasks(project_id, details)` updates the project. It inserts any task whose id is 0, then updates every task.
- `delete_project_with_tasks(project_id, details)` deletes the given tasks and then the project.

## Forms

The form classes hold the rules for editing a record. They do not display
anything.

- `validate_email` accepts an address only when it has:
  - exactly one `@`, with text before and after it;
  - a `.` after the `@`, not directly following it and not at the end.
- `UserForm.accept` raises `ValidationError` when the e-mail is malformed or nothing changed.
- `TaskForm.accept` raises `ValidationError` when:
  - a field is empty;
  - no user is chosen;
  - the effort is 0;
  - no state is picked;
  - nothing changed.
- `TaskForm` does not let a new task (insert mode) start as finished.
- `ProjectForm.manager_choices()` lists only users whose job title is `"Ръководител"`.
- `ProjectForm.cancel()` clears the task list.

A project's state and total effort follow from its tasks, as worked out by
`taskboard.project_form.summarize_tasks`:

- A project with no tasks has the state `NONE`.
- A project is `FINISHED` when every task is finished.
- Otherwise the project is `ACTIVE`.

The total effort is the sum of the tasks' effort, wrapped to the 16-bit
signed range.

## Views

`UsersView` and `ProjectsView` keep their rows as tuples of strings and
track the selected row. They react through `on_update` to the changes that
their document reports. Actions that would open a form take a
`form_handler`: a callable that receives the form, fills it in (for example
by calling `accept`), and returns `True` to confirm. `ProjectsView.delete`
also takes a `confirm` callable, which is asked the deletion prompt.

## What this package does not do

The package has no graphical interface and no command-line program. The
forms and views hold state and rules only: nothing draws windows, lists or
message boxes. A program that wants a screen must supply one and call
these classes from it. Storage is SQLite only.