"""
Pytest configuration file.
"""
import pytest
from fastapi.testclient import TestClient
from eventdesk.core.database import Database
from eventdesk.core.security import create_access_token
from eventdesk.models.event import Event, EventStatus
from eventdesk.models.ticket_type import TicketType, TicketTypeStatus
from eventdesk.storage.object_store import LocalObjectStore, ObjectStore, StorageError
from main import app
import uuid

SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"

test_database = Database(SQLALCHEMY_TEST_DATABASE_URL)


class FlakyObjectStore(ObjectStore):
    """Local store that refuses uploads for chosen batch slot indices."""

    def __init__(self, inner: ObjectStore, failing_slots=()):
        self.inner = inner
        self.failing_slots = set(failing_slots)
        self.attempts = []

    def url_for(self, key: str) -> str:
        return self.inner.url_for(key)

    def put(self, key: str, data: bytes, content_type: str) -> str:
        self.attempts.append(key)
        for index in self.failing_slots:
            if key.endswith(f"-{index}.png"):
                raise StorageError(key, "storage backend unavailable")
        return self.inner.put(key, data, content_type)


@pytest.fixture(scope="function")
def db():
    """Create test database."""
    test_database.create_all()
    db = test_database.session()
    yield db
    db.close()
    test_database.drop_all()


@pytest.fixture
def session_factory(db):
    """Fresh sessions for code that runs on other threads."""
    return test_database.session


@pytest.fixture
def object_store(tmp_path):
    return LocalObjectStore(str(tmp_path / "storage"), "http://testserver/storage")


@pytest.fixture(scope="function")
def client(db, object_store):
    """Create test client."""
    app.state.database = test_database
    app.state.object_store = object_store
    with TestClient(app) as test_client:
        yield test_client
    del app.state.database
    del app.state.object_store


@pytest.fixture
def owner_id():
    return str(uuid.uuid4())


@pytest.fixture
def other_user_id():
    return str(uuid.uuid4())


@pytest.fixture
def auth_headers(owner_id):
    token = create_access_token({"sub": owner_id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(other_user_id):
    token = create_access_token({"sub": other_user_id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sample_event(db, owner_id):
    """Create a sample published event owned by owner_id."""
    event = Event(
        id=str(uuid.uuid4()),
        owner_id=owner_id,
        title="Summer Rooftop Session",
        description="Open-air DJ night with three resident artists.",
        event_type="concert",
        venue="Pier 9 Rooftop",
        status=EventStatus.PUBLISHED,
        budget_total=5000,
        max_capacity=200
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


@pytest.fixture
def ticket_type_factory(db, sample_event):
    """Build ticket types on sample_event with chosen capacity."""
    def make_ticket_type(quantity_total=10, quantity_sold=0, price=25.0, name="General Admission",
                         status=TicketTypeStatus.ACTIVE, event=None):
        ticket_type = TicketType(
            id=str(uuid.uuid4()),
            event_id=(event or sample_event).id,
            name=name,
            price=price,
            quantity_total=quantity_total,
            quantity_sold=quantity_sold,
            status=status
        )
        db.add(ticket_type)
        db.commit()
        db.refresh(ticket_type)
        return ticket_type

    return make_ticket_type


@pytest.fixture
def sample_ticket_type(ticket_type_factory):
    """Create a ticket type with 10 seats, none sold."""
    return ticket_type_factory()


@pytest.fixture
def flaky_store(object_store):
    """Factory for an object store that fails uploads for given slot indices."""
    def make_store(failing_slots=()):
        return FlakyObjectStore(object_store, failing_slots)

    return make_store
