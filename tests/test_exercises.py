from fastapi.testclient import TestClient
from sqlmodel import Session, select

from conftest import add_exercise, signup
from fittrack.models import Exercise, ExerciseStatus, MuscleGroup


def _suggest(client: TestClient, headers: dict, name: str = "Landmine Press") -> dict:
    response = client.post(
        "/api/exercises",
        json={"name": name, "description": "Angled press", "muscle_group": "shoulders"},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


# ---------------------------------------------------------------------------
# Listing and visibility
# ---------------------------------------------------------------------------


def test_list_requires_auth(client: TestClient):
    assert client.get("/api/exercises").status_code == 401


def test_list_public_exercises(client: TestClient, session: Session, headers: dict):
    add_exercise(session, "Squat", MuscleGroup.legs)
    add_exercise(session, "Bench Press", MuscleGroup.chest)
    response = client.get("/api/exercises", headers=headers)
    assert response.status_code == 200
    assert [e["name"] for e in response.json()] == ["Bench Press", "Squat"]


def test_filter_by_muscle_group(client: TestClient, session: Session, headers: dict):
    add_exercise(session, "Squat", MuscleGroup.legs)
    add_exercise(session, "Bench Press", MuscleGroup.chest)
    response = client.get("/api/exercises?muscle_group=legs", headers=headers)
    assert [e["name"] for e in response.json()] == ["Squat"]


def test_private_suggestion_visible_only_to_owner(client: TestClient, headers: dict):
    created = _suggest(client, headers)
    other = signup(client, "bruno@example.com")

    own_list = client.get("/api/exercises", headers=headers).json()
    assert [e["id"] for e in own_list] == [created["id"]]

    assert client.get("/api/exercises", headers=other).json() == []
    assert client.get(f"/api/exercises/{created['id']}", headers=other).status_code == 404


# ---------------------------------------------------------------------------
# Suggestion
# ---------------------------------------------------------------------------


def test_suggest_creates_pending_private(client: TestClient, headers: dict):
    body = _suggest(client, headers)
    assert body["status"] == "pending"
    assert body["is_public"] is False
    assert body["user_id"] is not None


def test_suggest_invalid_muscle_group(client: TestClient, headers: dict):
    response = client.post(
        "/api/exercises",
        json={"name": "Thing", "muscle_group": "neck"},
        headers=headers,
    )
    assert response.status_code == 400


def test_owner_can_edit_pending(client: TestClient, headers: dict):
    created = _suggest(client, headers)
    response = client.patch(
        f"/api/exercises/{created['id']}", json={"name": "Landmine Press (1 arm)"}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Landmine Press (1 arm)"
    assert response.json()["status"] == "pending"


def test_owner_cannot_edit_public(client: TestClient, session: Session, headers: dict):
    exercise = add_exercise(session, "Squat", MuscleGroup.legs)
    response = client.patch(f"/api/exercises/{exercise.id}", json={"name": "Sq"}, headers=headers)
    assert response.status_code == 403


def test_patch_ignores_status_fields(client: TestClient, headers: dict):
    created = _suggest(client, headers)
    response = client.patch(
        f"/api/exercises/{created['id']}",
        json={"status": "approved", "is_public": True},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["status"] == "pending"
    assert response.json()["is_public"] is False


# ---------------------------------------------------------------------------
# Moderation
# ---------------------------------------------------------------------------


def test_pending_list_requires_admin(client: TestClient, headers: dict):
    _suggest(client, headers)
    response = client.get("/api/exercises/pending", headers=headers)
    assert response.status_code == 403
    assert response.json() == {"error": "Administrator access required"}


def test_admin_lists_pending(client: TestClient, headers: dict, admin_headers: dict):
    first = _suggest(client, headers, "First")
    second = _suggest(client, headers, "Second")
    response = client.get("/api/exercises/pending", headers=admin_headers)
    assert response.status_code == 200
    assert [e["id"] for e in response.json()] == [first["id"], second["id"]]


def test_approve_publishes(client: TestClient, headers: dict, admin_headers: dict):
    created = _suggest(client, headers)
    response = client.post(f"/api/exercises/{created['id']}/approve", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "approved"
    assert response.json()["is_public"] is True

    other = signup(client, "bruno@example.com")
    names = [e["name"] for e in client.get("/api/exercises", headers=other).json()]
    assert names == ["Landmine Press"]


def test_reject_stays_private(client: TestClient, headers: dict, admin_headers: dict):
    created = _suggest(client, headers)
    response = client.post(f"/api/exercises/{created['id']}/reject", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "rejected"
    assert response.json()["is_public"] is False

    # Still visible to its author
    own = client.get(f"/api/exercises/{created['id']}", headers=headers)
    assert own.status_code == 200


def test_non_admin_cannot_approve(client: TestClient, headers: dict):
    created = _suggest(client, headers)
    response = client.post(f"/api/exercises/{created['id']}/approve", headers=headers)
    assert response.status_code == 403


def test_decisions_are_terminal(client: TestClient, headers: dict, admin_headers: dict):
    approved = _suggest(client, headers, "A")
    rejected = _suggest(client, headers, "B")
    client.post(f"/api/exercises/{approved['id']}/approve", headers=admin_headers)
    client.post(f"/api/exercises/{rejected['id']}/reject", headers=admin_headers)

    for exercise_id, action in (
        (approved["id"], "reject"),
        (approved["id"], "approve"),
        (rejected["id"], "approve"),
        (rejected["id"], "reject"),
    ):
        response = client.post(f"/api/exercises/{exercise_id}/{action}", headers=admin_headers)
        assert response.status_code == 409

    # Editing never reopens a decision
    client.patch(f"/api/exercises/{rejected['id']}", json={"name": "B2"}, headers=admin_headers)
    body = client.get(f"/api/exercises/{rejected['id']}", headers=headers).json()
    assert body["status"] == "rejected"


def test_approve_unknown(client: TestClient, admin_headers: dict):
    assert client.post("/api/exercises/9999/approve", headers=admin_headers).status_code == 404


def test_public_implies_approved(
    client: TestClient, session: Session, headers: dict, admin_headers: dict
):
    ids = [_suggest(client, headers, name)["id"] for name in ("A", "B", "C")]
    client.post(f"/api/exercises/{ids[0]}/approve", headers=admin_headers)
    client.post(f"/api/exercises/{ids[1]}/reject", headers=admin_headers)

    session.expire_all()
    for exercise in session.exec(select(Exercise)).all():
        if exercise.is_public:
            assert exercise.status == ExerciseStatus.approved


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------


def test_owner_deletes_pending(client: TestClient, headers: dict):
    created = _suggest(client, headers)
    assert client.delete(f"/api/exercises/{created['id']}", headers=headers).status_code == 204
    assert client.get(f"/api/exercises/{created['id']}", headers=headers).status_code == 404


def test_user_cannot_delete_public(client: TestClient, session: Session, headers: dict):
    exercise = add_exercise(session, "Squat", MuscleGroup.legs)
    assert client.delete(f"/api/exercises/{exercise.id}", headers=headers).status_code == 403


def test_admin_delete_cascades(
    client: TestClient, session: Session, headers: dict, admin_headers: dict
):
    exercise = add_exercise(session, "Squat", MuscleGroup.legs)
    workout = client.post(
        "/api/workouts",
        json={
            "name": "Legs",
            "day_of_week": "monday",
            "exercises": [{"exercise_id": exercise.id, "sets": 3, "reps": 8, "rest_time": 90}],
        },
        headers=headers,
    ).json()
    we_id = workout["exercises"][0]["id"]
    client.post(
        "/api/progress",
        json={"workout_exercise_id": we_id, "weight": 100, "reps": 8, "sets": 3},
        headers=headers,
    )

    assert client.delete(f"/api/exercises/{exercise.id}", headers=admin_headers).status_code == 204
    detail = client.get(f"/api/workouts/{workout['id']}", headers=headers).json()
    assert detail["exercises"] == []
    assert client.get("/api/progress", headers=headers).json() == []
