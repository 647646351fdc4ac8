import os

# Must be set before the application modules read their configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

from datetime import datetime  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from inkstudio.database import Base, get_db  # noqa: E402
from inkstudio.main import app  # noqa: E402
from inkstudio.models import (  # noqa: E402
    Appointment,
    Client,
    InventoryItem,
    InventoryMovement,
    Master,
    MasterWorkingDay,
    Service,
)

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def api(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_client(db_session):
    def _make(full_name="Alice Ink", phone="+100000001", **kwargs):
        client = Client(full_name=full_name, phone=phone, **kwargs)
        db_session.add(client)
        db_session.commit()
        db_session.refresh(client)
        return client

    return _make


@pytest.fixture
def make_master(db_session):
    def _make(full_name="Max Needle", weekly=None, **kwargs):
        """weekly: {weekday: ("HH:MM", "HH:MM")}, weekday 0 = Sunday"""
        master = Master(full_name=full_name, **kwargs)
        for weekday, (start, end) in (weekly or {}).items():
            master.working_days.append(
                MasterWorkingDay(weekday=weekday, start_time=start, end_time=end, is_day_off=False)
            )
        db_session.add(master)
        db_session.commit()
        db_session.refresh(master)
        return master

    return _make


@pytest.fixture
def make_service(db_session):
    def _make(name="Small tattoo", category="TATTOO", **kwargs):
        service = Service(name=name, category=category, **kwargs)
        db_session.add(service)
        db_session.commit()
        db_session.refresh(service)
        return service

    return _make


@pytest.fixture
def make_appointment(db_session):
    def _make(client, master, starts_at, ends_at, status="PENDING", price=0, service=None, service_name=None):
        appointment = Appointment(
            client_id=client.id,
            master_id=master.id,
            service_id=service.id if service else None,
            service_name=service_name or (service.name if service else "Consultation"),
            price=price,
            starts_at=starts_at,
            ends_at=ends_at,
            status=status,
        )
        db_session.add(appointment)
        db_session.commit()
        db_session.refresh(appointment)
        return appointment

    return _make


@pytest.fixture
def make_item(db_session):
    def _make(name="Green soap", unit="ml", category="CONSUMABLE", quantity=0, **kwargs):
        item = InventoryItem(name=name, unit=unit, category=category, quantity=quantity, **kwargs)
        db_session.add(item)
        db_session.commit()
        db_session.refresh(item)
        return item

    return _make


@pytest.fixture
def make_movement(db_session):
    """Ledger row with an explicit timestamp; does not touch the item balance"""

    def _make(item, quantity, created_at: datetime, type="OUT", reason=None):
        movement = InventoryMovement(
            item_id=item.id, type=type, quantity=quantity, reason=reason, created_at=created_at
        )
        db_session.add(movement)
        db_session.commit()
        db_session.refresh(movement)
        return movement

    return _make
