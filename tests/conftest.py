import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from fittrack.config import Settings, get_settings
from fittrack.database import get_session
from fittrack.main import app
from fittrack.models import Exercise, ExerciseStatus, MuscleGroup

ADMIN_EMAIL = "coach@example.com"


@pytest.fixture(name="session")
def session_fixture():
    import fittrack.models as _models  # noqa: F401 - register all tables

    # StaticPool ensures the in-memory DB is shared across all connections,
    # including those spawned by TestClient's anyio thread pool.
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    def override_get_session():
        yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_settings] = lambda: Settings(
        database_url="sqlite:///:memory:",
        admin_emails=frozenset({ADMIN_EMAIL}),
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


def signup(client: TestClient, email: str, password: str = "secret123") -> dict[str, str]:
    response = client.post(
        "/api/auth/signup",
        json={"email": email, "password": password, "display_name": email.split("@")[0]},
    )
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture(name="headers")
def headers_fixture(client: TestClient) -> dict[str, str]:
    return signup(client, "ana@example.com")


@pytest.fixture(name="admin_headers")
def admin_headers_fixture(client: TestClient) -> dict[str, str]:
    return signup(client, ADMIN_EMAIL)


def add_exercise(
    session: Session,
    name: str,
    muscle_group: MuscleGroup = MuscleGroup.chest,
    owner_id: int | None = None,
    status: ExerciseStatus = ExerciseStatus.approved,
) -> Exercise:
    exercise = Exercise(
        name=name,
        muscle_group=muscle_group,
        user_id=owner_id,
        status=status,
        is_public=status == ExerciseStatus.approved,
    )
    session.add(exercise)
    session.commit()
    session.refresh(exercise)
    return exercise
