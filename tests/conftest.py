"""Shared fixtures for the repository, connection and HTTP tests."""

import pytest

from app import create_app
from repositories.post_repository import PostRepository
from utils.dbconnection import DatabaseConnection
from utils.schema import create_tables


class RecordingExecutor:
    """Stands in for DatabaseConnection, remembering every statement it is given."""

    def __init__(self, rows=None):
        self.rows = rows if rows is not None else []
        self.calls = []

    def exec_params(self, sql, params=()):
        self.calls.append((sql, tuple(params)))
        return self.rows


def seed_accounts(db):
    db.exec_params("INSERT INTO accounts (username, email) VALUES (?, ?);",
                   ("alice", "alice@example.com"))
    db.exec_params("INSERT INTO accounts (username, email) VALUES (?, ?);",
                   ("bob", "bob@example.com"))


@pytest.fixture
def db():
    with DatabaseConnection(":memory:") as connection:
        create_tables(connection)
        seed_accounts(connection)
        yield connection


@pytest.fixture
def repository(db):
    return PostRepository(db)


@pytest.fixture
def recording_executor():
    return RecordingExecutor()


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "postboard_test.db")


@pytest.fixture
def app(db_path):
    app = create_app({'TESTING': True, 'DATABASE': db_path, 'LOG_LEVEL': 'DEBUG'})
    with DatabaseConnection(db_path) as db:
        seed_accounts(db)
    return app


@pytest.fixture
def client(app):
    return app.test_client()
