import uuid

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine, StaticPool

from app.main import app
from app.api.deps import get_session
from app.models.models import Subscription
from app.utils.utils import parse_month_year

# Base de datos en memoria para los tests
DATABASE_URL = "sqlite://"

@pytest.fixture(name="session")
def session_fixture():
    # El StaticPool es necesario para usar SQLite en memoria con múltiples hilos/conexiones
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)

@pytest.fixture(name="client")
def client_fixture(session: Session):
    # Sobrescribimos la dependencia get_session para que use la DB de prueba
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()

@pytest.fixture
def user_id():
    return uuid.uuid4()

@pytest.fixture
def add_subscription(session):
    """Inserta una suscripción directo en la DB. Fechas en formato MM-YYYY."""
    def _add(service_name="Netflix", price=100, user_id=None, start="01-2025", end=None):
        sub = Subscription(
            service_name=service_name,
            price=price,
            user_id=user_id or uuid.uuid4(),
            start_date=parse_month_year(start),
            end_date=parse_month_year(end) if end else None,
        )
        session.add(sub)
        session.commit()
        session.refresh(sub)
        return sub
    return _add
