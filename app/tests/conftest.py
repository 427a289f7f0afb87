"""
Pytest configuration and fixtures
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-attendance-tests")
os.environ.setdefault("ATTENDANCE_TIMEZONE", "UTC")
os.environ.setdefault("APP_ENV", "local")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.main import app  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.core.deps import get_db  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.models import Employee  # noqa: E402,F401  registers all models


# Use in-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


# Enable foreign keys for SQLite
@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Test client fixture with database override"""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(sub, role="EMPLOYEE"):
    """Bearer header for a caller with the given subject and role"""
    token = create_access_token({"sub": str(sub), "role": role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    """Headers for an ADMIN caller"""
    return auth_headers("admin", role="ADMIN")


@pytest.fixture
def make_employee(db):
    """Factory creating persisted employees"""
    counter = {"n": 0}

    def _make(name=None, active=True, code=None, username=None):
        counter["n"] += 1
        n = counter["n"]
        employee = Employee(
            employee_code=code or f"EMP{n:03d}",
            name=name or f"Employee {n}",
            username=username or f"employee{n}",
            active=active,
        )
        db.add(employee)
        db.commit()
        db.refresh(employee)
        return employee

    return _make
