import os

# Must be set before the application modules read their configuration
os.environ.setdefault("PYTEST_RUNNING", "1")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.pop("RECORDS_PER_PAGE", None)

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

import record_collection.db.database as db_module
from record_collection.api.main import app
from record_collection.db import models, schemas
from record_collection.db.repositories import records as record_repo
from record_collection.db.repositories import users as user_repo

DEFAULT_PASSWORD = "correct-horse-battery"


@pytest.fixture(autouse=True)
def _schema():
    """Fresh tables for every test on the shared in-memory engine."""
    models.Base.metadata.create_all(bind=db_module.engine)
    yield
    models.Base.metadata.drop_all(bind=db_module.engine)


@pytest.fixture
def db_session(_schema):
    session = db_module.SessionLocal()
    try:
        yield session
    finally:
        session.close()


def _override_get_db():
    session = db_module.SessionLocal()
    try:
        yield session
    finally:
        session.close()


app.dependency_overrides[db_module.get_db] = _override_get_db


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def user_factory(db_session: Session):
    def _create(email: str, *, admin: bool = False, name: str = None, password: str = DEFAULT_PASSWORD, api_token: str = None):
        user = user_repo.create_user(
            db_session,
            schemas.UserCreate(
                email=email,
                name=name or email.split("@")[0],
                password=password,
                type=models.USER_TYPE_ADMIN if admin else models.USER_TYPE_REGULAR,
            ),
        )
        if api_token:
            user_repo.issue_api_token(db_session, user, token=api_token)
        return user
    return _create


@pytest.fixture
def record_factory(db_session: Session):
    def _create(artist: str, title: str, label: str, catalog_no: str = None):
        return record_repo.create_record(
            db_session,
            schemas.RecordCreate(artist=artist, title=title, label=label, catalog_no=catalog_no),
        )
    return _create


@pytest.fixture
def sample_records(db_session: Session):
    """Insert Faker-generated records the way the seeding command does."""
    from record_collection.cli import seed_records

    def _seed(count: int = 10, seed: int = 1234):
        faker = Faker()
        Faker.seed(seed)
        seed_records(db_session, count, faker=faker)
        return db_session.query(models.Record).all()
    return _seed


@pytest.fixture
def login_as(client: TestClient):
    def _login(email: str, password: str = DEFAULT_PASSWORD):
        r = client.post("/login", data={"email": email, "password": password})
        assert r.status_code == 200, r.text
        return r
    return _login


@pytest.fixture
def admin_client(client, user_factory, login_as):
    user_factory("admin@example.com", admin=True)
    login_as("admin@example.com")
    return client


@pytest.fixture
def user_client(client, user_factory, login_as):
    user_factory("member@example.com")
    login_as("member@example.com")
    return client
