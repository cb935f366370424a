import pytest

from taskboard.models import Project, ProjectDetails, Task, TaskState, User
from taskboard.services import ProjectsService, UsersService
from taskboard.session import Session
from taskboard.tables import ConcurrencyError, RecordNotFoundError


@pytest.fixture
def session():
    s = Session(":memory:")
    s.create_schema()
    yield s
    s.close()


@pytest.fixture
def users(session):
    return UsersService(session)


@pytest.fixture
def projects(session):
    return ProjectsService(session)


def _user(name="Ann"):
    return User(name=name, email="ann@example.com", job_title="Dev")


def _project(name="Alpha"):
    return Project(name=name, description="First", project_manager_id=1)


def _task(name="T1", effort=3):
    return Task(name=name, description="Do it", user_id=1, effort=effort)


def test_user_insert_and_select_round_trip(users):
    user = _user()
    new_id = users.insert(user)
    assert user.id == new_id
    assert users.select_by_id(new_id) == user
    assert users.select_all() == [user]


def test_user_update_increments_counter(users):
    user = _user()
    users.insert(user)
    user.job_title = "Lead"
    users.update_by_id(user.id, user)
    stored = users.select_by_id(user.id)
    assert stored.job_title == "Lead"
    assert stored.update_counter == 1
    assert user.update_counter == 1


def test_user_update_with_stale_counter_fails(users):
    user = _user()
    users.insert(user)
    stale = user.copy()
    users.update_by_id(user.id, user)
    with pytest.raises(ConcurrencyError):
        users.update_by_id(stale.id, stale)


def test_user_delete_and_missing(users):
    user = _user()
    users.insert(user)
    users.delete_by_id(user.id)
    assert users.select_all() == []
    with pytest.raises(RecordNotFoundError):
        users.select_by_id(user.id)
    with pytest.raises(RecordNotFoundError):
        users.delete_by_id(user.id)


def test_project_and_task_crud(projects):
    project = _project()
    projects.insert_project(project)
    assert projects.select_project_by_id(project.id) == project
    task = _task()
    task.project_id = project.id
    projects.insert_task(task)
    assert projects.select_task_by_id(task.id) == task
    task.state = TaskState.IN_PROGRESS
    projects.update_task_by_id(task.id, task)
    assert projects.select_task_by_id(task.id).state == TaskState.IN_PROGRESS
    projects.delete_task_by_id(task.id)
    assert projects.select_all_tasks() == []
    projects.delete_project_by_id(project.id)
    assert projects.select_all_projects() == []


def test_add_project_with_tasks_attaches_tasks(projects):
    project = _project()
    tasks = [_task("T1"), _task("T2")]
    projects.add_project_with_tasks(ProjectDetails(project, tasks))
    assert project.id != 0
    assert all(task.project_id == project.id for task in tasks)
    found = projects.get_project_tasks(project.id)
    assert [task.name for task in found] == ["T1", "T2"]
    assert projects.session.in_transaction is False


def test_get_project_tasks_filters_and_copies(projects):
    first, second = _project("A"), _project("B")
    projects.add_project_with_tasks(ProjectDetails(first, [_task("A1")]))
    projects.add_project_with_tasks(ProjectDetails(second, [_task("B1"), _task("B2")]))
    found = projects.get_project_tasks(second.id)
    assert [task.name for task in found] == ["B1", "B2"]
    found[0].name = "changed"
    assert projects.get_project_tasks(second.id)[0].name == "B1"
    assert projects.get_project_tasks(999) == []


def test_update_project_with_tasks_inserts_new_tasks(projects):
    project = _project()
    existing = _task("Old")
    projects.add_project_with_tasks(ProjectDetails(project, [existing]))
    project.name = "Renamed"
    new_task = _task("New")
    new_task.project_id = project.id
    projects.update_project_with_tasks(
        project.id, ProjectDetails(project, [existing, new_task])
    )
    assert projects.select_project_by_id(project.id).name == "Renamed"
    assert new_task.id != 0
    names = sorted(task.name for task in projects.get_project_tasks(project.id))
    assert names == ["New", "Old"]
    assert projects.select_task_by_id(existing.id).update_counter == 1


def test_update_project_with_tasks_rolls_back_on_conflict(projects):
    project = _project()
    task = _task("Old")
    projects.add_project_with_tasks(ProjectDetails(project, [task]))
    stale = task.copy()
    projects.update_task_by_id(task.id, task)
    project.name = "Renamed"
    with pytest.raises(ConcurrencyError):
        projects.update_project_with_tasks(project.id, ProjectDetails(project, [stale]))
    stored = projects.select_project_by_id(project.id)
    assert stored.name == "Alpha"
    assert stored.update_counter == 0
    assert projects.session.in_transaction is False


def test_delete_project_with_tasks(projects):
    project = _project()
    tasks = [_task("T1"), _task("T2")]
    projects.add_project_with_tasks(ProjectDetails(project, tasks))
    projects.delete_project_with_tasks(project.id, ProjectDetails(project, tasks))
    assert projects.select_all_projects() == []
    assert projects.select_all_tasks() == []


def test_delete_project_with_missing_task_rolls_back(projects):
    project = _project()
    task = _task("T1")
    projects.add_project_with_tasks(ProjectDetails(project, [task]))
    ghost = _task("Ghost")
    ghost.id = 999
    with pytest.raises(RecordNotFoundError):
        projects.delete_project_with_tasks(
            project.id, ProjectDetails(project, [task, ghost])
        )
    assert projects.select_all_projects() == [project]
    assert [t.id for t in projects.select_all_tasks()] == [task.id]