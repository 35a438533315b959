"""Shared fixtures: an in-memory database with the tables the loaders read."""
import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

SCHEMA = [
    """CREATE TABLE users (
        id INTEGER PRIMARY KEY, user_role TEXT, department TEXT, department_role TEXT
    )""",
    "CREATE TABLE companies (id INTEGER PRIMARY KEY, created_by INTEGER)",
    "CREATE TABLE company_users (company_id INTEGER, user_id INTEGER, role TEXT)",
    """CREATE TABLE contracts (
        id INTEGER PRIMARY KEY, status TEXT, created_by INTEGER, company_id INTEGER
    )""",
    """CREATE TABLE contract_approvals (
        id INTEGER PRIMARY KEY, contract_id INTEGER, approver_id INTEGER,
        status TEXT, created_at TEXT
    )""",
    """CREATE TABLE contract_signatures (
        id INTEGER PRIMARY KEY, contract_id INTEGER, user_id INTEGER,
        status TEXT, signing_order INTEGER
    )""",
]

# User 1 created company 10; user 2 edits in 10 and created 11.
# Contract 100 sits in review at company 10; 101 is a private draft of user 2.
# Contract 102 awaits the signature of user 7, who is outside company 10.
ROWS = [
    "INSERT INTO users VALUES (1, 'ADMIN', 'Genel Müdürlük', 'HEAD')",
    "INSERT INTO users VALUES (2, 'viewer', 'Satın Alma', NULL)",
    "INSERT INTO users VALUES (3, 'ROOT', NULL, NULL)",
    "INSERT INTO companies VALUES (10, 1)",
    "INSERT INTO companies VALUES (11, 2)",
    "INSERT INTO company_users VALUES (10, 2, 'EDITOR')",
    "INSERT INTO company_users VALUES (11, 2, 'VIEWER')",
    "INSERT INTO contracts VALUES (100, 'IN_REVIEW', 1, 10)",
    "INSERT INTO contracts VALUES (101, 'DRAFT', 2, NULL)",
    "INSERT INTO contracts VALUES (102, 'SENT_FOR_SIGNATURE', 1, 10)",
    "INSERT INTO contract_approvals VALUES (1, 100, 2, 'PENDING', '2025-03-02T10:00:00')",
    "INSERT INTO contract_approvals VALUES (2, 100, 2, 'APPROVED', '2025-03-01T10:00:00')",
    "INSERT INTO contract_signatures VALUES (1, 100, 2, 'PENDING', 2)",
    "INSERT INTO contract_signatures VALUES (2, 100, 1, 'SENT', 1)",
    "INSERT INTO contract_signatures VALUES (3, 102, 7, 'PENDING', 1)",
]


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    session = Session(engine)
    for statement in SCHEMA + ROWS:
        session.execute(text(statement))
    yield session
    session.close()
    engine.dispose()
