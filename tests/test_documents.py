import pytest

from taskboard.documents import ProjectsDocument, UsersDocument
from taskboard.models import Mode, Project, ProjectDetails, Task, User
from taskboard.services import ProjectsService, UsersService
from taskboard.session import Session
from taskboard.tables import ConcurrencyError, RecordNotFoundError


class RecordingView:
    def __init__(self):
        self.calls = []

    def on_update(self, mode, hint):
        self.calls.append((mode, hint))


@pytest.fixture
def session():
    s = Session()
    s.create_schema()
    yield s
    s.close()


@pytest.fixture
def users_doc(session):
    doc = UsersDocument(UsersService(session))
    view = RecordingView()
    doc.add_view(view)
    return doc, view


@pytest.fixture
def projects_doc(session):
    doc = ProjectsDocument(ProjectsService(session), UsersService(session))
    view = RecordingView()
    doc.add_view(view)
    return doc, view


def test_new_document_loads_existing_users(session):
    service = UsersService(session)
    service.insert(User(name="Ann", email="ann@example.com", job_title="Dev"))
    doc = UsersDocument(service)
    held = doc.users
    doc.new_document()
    assert [u.name for u in doc.users] == ["Ann"]
    assert doc.users is held


def test_add_user_stores_copy_and_notifies(users_doc):
    doc, view = users_doc
    user = User(name="Ann", email="ann@example.com", job_title="Dev")
    doc.add_user(user)
    assert user.id > 0
    assert doc.users == [user]
    assert doc.users[0] is not user
    assert view.calls == [(Mode.INSERT, user)]


def test_update_user_bumps_counter_and_notifies(users_doc):
    doc, view = users_doc
    doc.add_user(User(name="Ann", email="ann@example.com"))
    stored = doc.users[0]
    stored.name = "Anna"
    doc.update_user(stored.id, stored)
    assert stored.update_counter == 1
    assert view.calls[-1] == (Mode.UPDATE, stored)
    assert doc.service.select_by_id(stored.id).name == "Anna"


def test_update_user_with_stale_counter_raises(users_doc):
    doc, view = users_doc
    doc.add_user(User(name="Ann", email="ann@example.com"))
    stale = doc.users[0].copy()
    stale.update_counter = 7
    with pytest.raises(ConcurrencyError):
        doc.update_user(stale.id, stale)
    assert len(view.calls) == 1


def test_delete_user_removes_and_notifies(users_doc):
    doc, view = users_doc
    doc.add_user(User(name="Ann", email="ann@example.com"))
    doc.add_user(User(name="Bob", email="bob@example.com"))
    ann_id = doc.users[0].id
    doc.delete_user(ann_id)
    assert [u.name for u in doc.users] == ["Bob"]
    assert view.calls[-1][0] is Mode.DELETE
    assert view.calls[-1][1].id == ann_id
    assert [u.name for u in doc.load_all_users()] == ["Bob"]


def test_delete_missing_user_raises(users_doc):
    doc, view = users_doc
    with pytest.raises(RecordNotFoundError):
        doc.delete_user(99)
    assert view.calls == []


def test_projects_new_document_loads_users_and_projects(session):
    UsersService(session).insert(User(name="Ann", email="ann@example.com"))
    ProjectsService(session).insert_project(Project(name="Alpha", description="d"))
    doc = ProjectsDocument(ProjectsService(session), UsersService(session))
    doc.new_document()
    assert [u.name for u in doc.users] == ["Ann"]
    assert [p.name for p in doc.projects] == ["Alpha"]


def test_add_project_with_tasks_notifies_with_details(projects_doc):
    doc, view = projects_doc
    details = ProjectDetails(
        Project(name="Alpha", description="d"),
        [Task(name="t1", description="x", effort=3)],
    )
    doc.add_project_with_tasks(details)
    assert view.calls == [(Mode.INSERT, details)]
    tasks = doc.get_project_tasks(details.project.id)
    assert [t.name for t in tasks] == ["t1"]
    assert tasks[0].project_id == details.project.id


def test_update_project_with_tasks_inserts_new_tasks(projects_doc):
    doc, view = projects_doc
    details = ProjectDetails(Project(name="Alpha", description="d"), [])
    doc.add_project_with_tasks(details)
    project_id = details.project.id
    details.project.name = "Beta"
    details.tasks.append(Task(name="t2", description="y", project_id=project_id))
    doc.update_project_with_tasks(project_id, details)
    assert view.calls[-1] == (Mode.UPDATE, details)
    assert [t.name for t in doc.get_project_tasks(project_id)] == ["t2"]
    assert [p.name for p in doc.load_all_projects()] == ["Beta"]


def test_delete_project_with_tasks(projects_doc):
    doc, view = projects_doc
    details = ProjectDetails(
        Project(name="Alpha", description="d"),
        [Task(name="t1", description="x")],
    )
    doc.add_project_with_tasks(details)
    project_id = details.project.id
    doc.delete_project_with_tasks(project_id, details)
    assert view.calls[-1] == (Mode.DELETE, details)
    assert doc.load_all_projects() == []
    assert doc.get_project_tasks(project_id) == []