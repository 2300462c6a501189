from uuid import uuid4

import pytest

from hireboard.core.exceptions import UniquenessConflict, UserNotFoundError
from hireboard.schemas.user import EmployerUser, JobSeekerUser, parse_user


def make_user(stored_hash, role="job_seeker", email="bob@example.com", **fields):
    record = {"role": role, "name": "Bob", "email": email, "password": stored_hash, **fields}
    if role == "employer":
        record.setdefault("companyName", "Acme")
    return parse_user(record)


def test_create_and_find_by_email(repository, stored_hash):
    user = make_user(stored_hash, skills=["python", "sql"], resumeUrl="https://cdn.example/cv.pdf")
    repository.create(user)

    found = repository.find_by_email("BOB@example.com")

    assert isinstance(found, JobSeekerUser)
    assert found.id == user.id
    assert found.password == stored_hash
    assert found.skills == ["python", "sql"]
    assert found.resume_url == "https://cdn.example/cv.pdf"
    assert repository.find_by_email("nobody@example.com") is None


def test_role_columns_round_trip(repository, stored_hash):
    employer = make_user(stored_hash, role="employer", email="ann@ex.com", verified=True)
    repository.create(employer)

    found = repository.get(employer.id)

    assert isinstance(found, EmployerUser)
    assert found.company_name == "Acme"
    assert found.verified is True


def test_duplicate_email_is_a_conflict(repository, stored_hash):
    repository.create(make_user(stored_hash))

    with pytest.raises(UniquenessConflict) as exc_info:
        repository.create(make_user(stored_hash))

    assert exc_info.value.field == "email"
    # Session is still usable after the rollback
    assert repository.find_by_email("bob@example.com") is not None


def test_find_by_role(repository, stored_hash):
    for i in range(3):
        repository.create(make_user(stored_hash, email=f"seeker{i}@example.com"))
    repository.create(make_user(stored_hash, role="employer", email="ann@ex.com"))

    seekers = repository.find_by_role("job_seeker")

    assert len(seekers) == 3
    assert all(isinstance(u, JobSeekerUser) for u in seekers)
    assert len(repository.find_by_role("job_seeker", limit=2)) == 2
    assert [u.email for u in repository.find_by_role("employer")] == ["ann@ex.com"]
    assert repository.find_by_role("admin") == []


def test_update(repository, stored_hash):
    user = make_user(stored_hash, avatarUrl="https://img.example/a.png")
    repository.create(user)

    repository.update(user.model_copy(update={"avatar_url": None, "name": "Robert"}))
    found = repository.get(user.id)

    assert found.name == "Robert"
    assert found.avatar_url is None


def test_update_missing_user(repository, stored_hash):
    with pytest.raises(UserNotFoundError):
        repository.update(make_user(stored_hash))


def test_delete(repository, stored_hash):
    user = make_user(stored_hash)
    repository.create(user)

    assert repository.delete(user.id) is True
    assert repository.get(user.id) is None
    assert repository.delete(user.id) is False
    assert repository.delete(uuid4()) is False


def test_init_db_creates_indexes(monkeypatch):
    from sqlalchemy import create_engine, inspect

    from hireboard.db import session as db_session

    engine = create_engine("sqlite://")
    monkeypatch.setattr(db_session, "engine", engine)

    db_session.init_db()
    indexes = {ix["name"]: ix for ix in inspect(engine).get_indexes("users")}

    assert indexes["ix_users_email"]["unique"]
    assert not indexes["ix_users_role"]["unique"]
    assert indexes["idx_users_email_role"]["column_names"] == ["email", "role"]
