import json

from conftest import signup_payload, workout_payload
from fittracker.store.errors import StorageError


def _signup(client, **overrides):
    r = client.post("/api/auth/signup", json=signup_payload(**overrides))
    assert r.status_code == 201, r.text
    return r.json()["user"]


def _log_workout(client, user_id, **overrides):
    r = client.post("/api/workouts", json=workout_payload(user_id, **overrides))
    assert r.status_code == 201, r.text
    return r.json()


def test_root_ok(client):
    r = client.get("/")
    assert r.status_code == 200
    data = r.json()
    assert "message" in data


def test_signup_hides_password(client):
    user = _signup(client)
    assert user["email"] == "ana@example.com"
    assert user["weekly_workout_goal"] == 4
    assert "password" not in user
    assert "password_hash" not in user


def test_signup_duplicate_and_validation(client):
    _signup(client)
    r = client.post("/api/auth/signup", json=signup_payload())
    assert r.status_code == 400
    assert r.json()["detail"] == "User already exists with this email"

    r = client.post("/api/auth/signup", json=signup_payload(email="x@example.com", password="123"))
    assert r.status_code == 422
    r = client.post("/api/auth/signup", json=signup_payload(email="not-an-email"))
    assert r.status_code == 422


def test_login(client):
    user = _signup(client)
    r = client.post("/api/auth/login", json={"email": "ana@example.com", "password": "secret123"})
    assert r.status_code == 200
    assert r.json()["user"]["id"] == user["id"]

    r = client.post("/api/auth/login", json={"email": "ana@example.com", "password": "wrong-pass"})
    assert r.status_code == 401
    r = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "secret123"})
    assert r.status_code == 401


def test_profile_read_and_update(client):
    user = _signup(client)
    r = client.put(f"/api/user/{user['id']}", json={"weekly_workout_goal": 5, "weight": 62.5})
    assert r.status_code == 200
    body = r.json()
    assert body["weekly_workout_goal"] == 5
    assert body["weight"] == 62.5
    assert body["first_name"] == "Ana"

    assert client.get(f"/api/user/{user['id']}").json()["weight"] == 62.5
    assert client.get("/api/user/999").status_code == 404
    assert client.put("/api/user/999", json={"age": 30}).status_code == 404


def test_password_change_via_profile(client):
    user = _signup(client)
    client.put(f"/api/user/{user['id']}", json={"password": "another-secret"})
    r = client.post("/api/auth/login", json={"email": "ana@example.com", "password": "another-secret"})
    assert r.status_code == 200


def test_create_and_list_workouts(client):
    user = _signup(client)
    created = _log_workout(client, user["id"])
    assert created["id"] >= 1
    assert created["created_at"]
    _log_workout(client, user["id"], date="2024-06-10", type="yoga", distance=None)

    r = client.get(f"/api/workouts/user/{user['id']}")
    assert r.status_code == 200
    arr = r.json()
    assert [w["date"] for w in arr] == ["2024-06-10", "2024-06-01"]

    r = client.get(f"/api/workouts/user/{user['id']}", params={"type": "yoga"})
    assert [w["type"] for w in r.json()] == ["yoga"]
    r = client.get(
        f"/api/workouts/user/{user['id']}",
        params={"date_from": "2024-06-02", "date_to": "2024-06-30"},
    )
    assert [w["date"] for w in r.json()] == ["2024-06-10"]


def test_create_workout_validation(client):
    user = _signup(client)
    r = client.post("/api/workouts", json=workout_payload(user["id"], date="06/01/2024"))
    assert r.status_code == 422
    r = client.post("/api/workouts", json=workout_payload(user["id"], time="7am"))
    assert r.status_code == 422
    r = client.post("/api/workouts", json=workout_payload(user["id"], duration=0))
    assert r.status_code == 422
    r = client.post("/api/workouts", json=workout_payload(user["id"], type="dance"))
    assert r.status_code == 422
    r = client.post("/api/workouts", json=workout_payload(999))
    assert r.status_code == 404


def test_update_workout(client):
    user = _signup(client)
    created = _log_workout(client, user["id"])

    r = client.put(f"/api/workouts/{created['id']}", json={"duration": 99})
    assert r.status_code == 200
    updated = r.json()
    assert updated["duration"] == 99
    assert {k: v for k, v in updated.items() if k != "duration"} == {
        k: v for k, v in created.items() if k != "duration"
    }

    r = client.put("/api/workouts/999", json={"duration": 99})
    assert r.status_code == 404
    assert r.json()["detail"] == "Workout not found"

    r = client.put(f"/api/workouts/{created['id']}", json={"duration": None})
    assert r.status_code == 422


def test_delete_workout(client):
    user = _signup(client)
    created = _log_workout(client, user["id"])

    r = client.delete(f"/api/workouts/{created['id']}")
    assert r.status_code == 204
    assert client.get(f"/api/workouts/{created['id']}").status_code == 404
    assert client.delete(f"/api/workouts/{created['id']}").status_code == 404


def test_stats_endpoints(client):
    user = _signup(client)
    uid = user["id"]
    _log_workout(client, uid, duration=30, distance=3, calories=200)
    _log_workout(
        client, uid, date="2024-05-30", duration=45, distance=None, type="strength", calories=None
    )

    summary = client.get(f"/api/stats/user/{uid}").json()
    assert summary["total_workouts"] == 2
    assert summary["total_distance"] == 3.0
    assert summary["avg_duration"] == 38

    weekly = client.get(f"/api/stats/user/{uid}/weekly").json()
    assert len(weekly) == 7

    monthly = client.get(f"/api/stats/user/{uid}/monthly", params={"months": 3}).json()
    assert len(monthly) == 3
    assert client.get(f"/api/stats/user/{uid}/monthly").status_code == 200
    assert client.get(f"/api/stats/user/{uid}/monthly", params={"months": 0}).status_code == 422

    dist = client.get(f"/api/stats/user/{uid}/distribution").json()
    assert dist == [
        {"type": "Running", "count": 1, "percentage": 50},
        {"type": "Strength Training", "count": 1, "percentage": 50},
    ]

    totals = client.get(f"/api/stats/user/{uid}/totals").json()
    assert totals == {"total_hours": 1.3, "total_calories": 200, "avg_calories": 100}


def test_stats_for_user_without_workouts(client):
    summary = client.get("/api/stats/user/42").json()
    assert summary == {"total_workouts": 0, "this_week": 0, "total_distance": 0, "avg_duration": 0}
    assert client.get("/api/stats/user/42/distribution").json() == []


def test_export(client):
    user = _signup(client)
    _log_workout(client, user["id"])
    r = client.get(f"/api/user/{user['id']}/export")
    assert r.status_code == 200
    data = r.json()
    assert data["user"]["email"] == "ana@example.com"
    assert "password_hash" not in data["user"]
    assert len(data["workouts"]) == 1
    assert data["export_date"]
    assert client.get("/api/user/999/export").status_code == 404


def test_storage_failure_is_500(client, storage, monkeypatch):
    def broken(user_id):
        raise StorageError("disk gone")

    monkeypatch.setattr(storage.workouts, "list_by_user", broken)
    r = client.get("/api/workouts/user/1")
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}


def test_create_workout_rejects_unpadded_date_and_time(client):
    user = _signup(client)
    for overrides in ({"time": "9:05"}, {"time": "9:5"}, {"date": "20240611"}, {"date": "2024-6-1"}):
        r = client.post("/api/workouts", json=workout_payload(user["id"], **overrides))
        assert r.status_code == 422, overrides

    created = _log_workout(client, user["id"])
    r = client.put(f"/api/workouts/{created['id']}", json={"time": "7:30"})
    assert r.status_code == 422


def test_infinite_distance_rejected(client):
    user = _signup(client)
    body = json.dumps(workout_payload(user["id"], distance=None))
    r = client.post(
        "/api/workouts",
        content=body.replace('"distance": null', '"distance": Infinity'),
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 422
    assert client.get(f"/api/stats/user/{user['id']}").status_code == 200

    r = client.put(
        f"/api/user/{user['id']}",
        content='{"height": NaN}',
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 422
