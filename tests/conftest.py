"""
Shared fixtures for the point-of-sale tests.

Every test gets its own file-backed SQLite database so that sessions
opened from different threads see the same committed state.
"""
import os
import tempfile

# Settings are read at import time; configure before importing pos_api
_IMPORT_DIR = tempfile.mkdtemp(prefix="pos-api-")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-pos-tests")
os.environ.setdefault("INTERNAL_ADMIN_SECRET", "test-internal-secret")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ["DATABASE_URL"] = f"sqlite:///{_IMPORT_DIR}/import.db"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from pos_api.core.hashing import hash_password
from pos_api.core.jwt import create_access_token
from pos_api.database import Base, build_engine, get_db
from pos_api.main import app
from pos_api.models.accounts import Account, AccountRole
from pos_api.models.products import Product


# =============================================================================
# DATABASE
# =============================================================================

@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'pos.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def fresh_session(session_factory):
    """A second session, used to check what was actually committed."""
    sessions = []

    def _open():
        session = session_factory()
        sessions.append(session)
        return session

    yield _open

    for session in sessions:
        session.close()


# =============================================================================
# CATALOG
# =============================================================================

@pytest.fixture
def make_product(db):
    def _make(product_id=7, quantity=5, price="10.00", name=None, category="general"):
        product = Product(
            id=product_id,
            name=name or f"Product {product_id}",
            category=category,
            quantity=quantity,
            price=Decimal(price),
        )
        db.add(product)
        db.commit()
        return product

    return _make


# =============================================================================
# ACCOUNTS / HTTP
# =============================================================================

@pytest.fixture
def make_account(db):
    def _make(username, role=AccountRole.CASHIER, password="secret-pass"):
        account = Account(
            username=username,
            password_hash=hash_password(password),
            role=role,
        )
        db.add(account)
        db.commit()
        return account

    return _make


@pytest.fixture
def manager(make_account):
    return make_account("manager", role=AccountRole.MANAGER)


@pytest.fixture
def cashier(make_account):
    return make_account("cashier", role=AccountRole.CASHIER)


def auth_headers(account):
    token = create_access_token(account.id, account.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def manager_headers(manager):
    return auth_headers(manager)


@pytest.fixture
def cashier_headers(cashier):
    return auth_headers(cashier)


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
