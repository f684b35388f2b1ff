from workout_engine.schemas.workout import LibraryExercise


LIBRARY = [
    LibraryExercise(id=1, name="Приседания", category="ofp", default_sets=3, default_reps=15),
    LibraryExercise(id=2, name="Многоскоки", category="sbu", default_distance_m=50),
]


def get_client():
    # Serve a fixed library instead of the configured file
    from workout_engine.main import app  # noqa: WPS433
    from workout_engine.library import get_library  # noqa: WPS433
    from fastapi.testclient import TestClient  # noqa: WPS433
    app.dependency_overrides[get_library] = lambda: LIBRARY
    return TestClient(app)


def test_root_ok():
    client = get_client()
    r = client.get("/")
    assert r.status_code == 200
    data = r.json()
    assert "message" in data


def test_recalc_pace_change():
    client = get_client()
    payload = {
        "spec": {"kind": "tempo", "distance_km": 10},
        "changed_field": "pace",
        "new_value": "4:30",
    }
    r = client.post("/workouts/recalc", json=payload)
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["update"] == {"duration_sec": 2700}
    assert data["duration"] == "45:00"
    assert data["pace"] == "4:30"
    assert data["spec"]["distance_km"] == 10


def test_describe_and_parse_interval():
    client = get_client()
    interval = {"warmup_km": 2, "reps": 5, "rep_distance_m": 1000, "rest_distance_m": 400, "cooldown_km": 2}
    r = client.post("/workouts/describe", json={"type": "interval", "interval": interval})
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["description"] == "Разминка: 2 км. 5×1000м, пауза 400м трусцой. Заминка: 2 км"
    assert data["total_distance_km"] == 11.0

    pr = client.post("/workouts/parse", json={"type": "interval", "description": data["description"]})
    assert pr.status_code == 200, pr.text
    parsed = pr.json()["interval"]
    assert parsed["reps"] == 5
    assert parsed["rest_distance_m"] == 400
    assert parsed["total_distance_km"] == 11.0


def test_describe_simple_run_uses_type_label():
    client = get_client()
    r = client.post("/workouts/describe", json={"type": "long", "simple": {"distance_km": 25}})
    assert r.status_code == 200, r.text
    assert r.json()["description"] == "Длительный бег: 25 км"


def test_parse_exercises_against_library():
    client = get_client()
    payload = {"type": "other", "description": "приседания с гантелями — 4×10\nВыпады — 3×12"}
    r = client.post("/workouts/parse", json=payload)
    assert r.status_code == 200, r.text
    selection = r.json()["exercises"]
    assert selection["library_entries"][0]["source_library_id"] == 1
    assert selection["custom_entries"][0]["name"] == "Выпады"


def test_plan_day_endpoint():
    client = get_client()
    r = client.post("/workouts/plan-day", json={"type": "sbu", "exercises": [{"name": "Многоскоки"}]})
    assert r.status_code == 200, r.text
    assert r.json()["description"] == "Многоскоки — 50 м"


def test_bad_workout_type_rejected():
    client = get_client()
    r = client.post("/workouts/parse", json={"type": "yoga", "description": "x"})
    assert r.status_code == 422


def test_exercise_library_endpoints():
    client = get_client()
    r = client.get("/exercises/", params={"category": "sbu"})
    assert r.status_code == 200
    assert [e["id"] for e in r.json()] == [2]

    r = client.get("/exercises/match", params={"name": "Приседания со штангой"})
    assert r.status_code == 200
    assert r.json()["id"] == 1

    assert client.get("/exercises/2").json()["name"] == "Многоскоки"
    assert client.get("/exercises/99").status_code == 404


def test_parse_ignores_negative_record_values():
    client = get_client()
    r = client.post(
        "/workouts/parse",
        json={"type": "other", "exercises": [{"name": "Жим", "sets": -1, "reps": 10}]},
    )
    assert r.status_code == 200, r.text
    entry = r.json()["exercises"]["custom_entries"][0]
    assert (entry["sets"], entry["reps"]) == (None, 10)


def test_recalc_never_stores_negative_distance():
    client = get_client()
    r = client.post(
        "/workouts/recalc",
        json={"spec": {"distance_km": 10, "pace_min_per_km": 5.0}, "changed_field": "distance", "new_value": -5},
    )
    assert r.status_code == 200, r.text
    assert r.json()["spec"]["distance_km"] is None
