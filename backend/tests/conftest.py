import os
import tempfile

_TEST_DIR = tempfile.mkdtemp(prefix="ledgerbook-tests-")
# main.py creates its tables and log file on import, keep both out of the real environment
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_TEST_DIR, 'app.db')}")
os.environ.setdefault("LOG_DIR", os.path.join(_TEST_DIR, "logs"))

import pytest
from sqlalchemy.orm import sessionmaker

from database import Base, get_db, make_engine
import models  # noqa: F401
from models.parties import PartyRole
from schemas.companies import CompanyCreate
from crud import companies as crud_companies
from factories import USER, make_item, make_party, make_token


@pytest.fixture
def engine(tmp_path):
    # File based so that several threads can share it
    engine = make_engine(f"sqlite:///{tmp_path / 'ledger.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    from fastapi.testclient import TestClient
    from main import app

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


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {make_token(USER['sub'])}"}


@pytest.fixture
def company(db):
    return crud_companies.create_company(db, CompanyCreate(name="Sri Lakshmi Traders"), user_id=USER["sub"])


@pytest.fixture
def customer(db, company):
    return make_party(db, company.id, PartyRole.CUSTOMER, "Ravi Stores", "100")


@pytest.fixture
def supplier(db, company):
    return make_party(db, company.id, PartyRole.SUPPLIER, "Kumar Feeds", "200")


@pytest.fixture
def item(db, company):
    return make_item(db, company.id, "Maize", opening_stock="100", reorder_level="20", rate="10")
