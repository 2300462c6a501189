import asyncio

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hireboard.core.security import CredentialStore
from hireboard.db.base import Base
from hireboard.models import UserRecord  # noqa: F401
from hireboard.repositories.users import SqlAlchemyUserRepository
from hireboard.services.users import UserService

PASSWORD = "Abcdef1!"

# bcrypt's minimum cost keeps the suite fast
FAST_ROUNDS = 4


@pytest.fixture
def credentials():
    return CredentialStore(rounds=FAST_ROUNDS)


@pytest.fixture(scope="session")
def stored_hash():
    return asyncio.run(CredentialStore(rounds=FAST_ROUNDS).hash_password(PASSWORD))


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def repository(db):
    return SqlAlchemyUserRepository(db)


@pytest.fixture
def service(repository, credentials):
    return UserService(repository, credentials=credentials)


@pytest.fixture
def employer_input():
    return {
        "name": "Ann",
        "email": "ANN@EX.com",
        "password": PASSWORD,
        "confirmPassword": PASSWORD,
        "role": "employer",
        "companyName": "Acme",
        "agreeToTerms": True,
    }


@pytest.fixture
def job_seeker_input():
    return {
        "name": "Bob Stone",
        "email": "bob@example.com",
        "password": "Sup3r$ecret",
        "confirmPassword": "Sup3r$ecret",
        "role": "job_seeker",
        "agreeToTerms": True,
    }
