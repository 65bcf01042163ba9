from datetime import date
import pytest

from liftboard.services import calendar

SQUAT = {"exercise_name": "Back Squat", "set_configs": [{"sets": 3, "reps": "5", "percentage": 75}]}

@pytest.fixture
def program(client, squad):
    """Published June program for the squad's team with squats on 2024-06-10."""
    r = client.post("/programs", headers=squad["coach_h"], json={
        "program_name": "June Block",
        "start_date": "2024-06-01",
        "end_date": "2024-06-30",
        "assigned_teams": [squad["team_id"]],
        "is_published": True,
        "workouts": [
            {"date": "2024-06-10", "title": "Legs", "exercises": [SQUAT]},
            {"date": "2024-06-12", "title": "Upper", "exercises": [
                {"exercise_name": "Bench Press", "set_configs": [{"sets": 2, "reps": "8", "fixed_weight": 135}]},
            ]},
        ],
    })
    assert r.status_code == 201, r.text
    return r.json()

def set_max(client, H, name, value):
    r = client.put("/athlete/maxes", headers=H, json={"exercise_name": name, "one_rep_max": value})
    assert r.status_code == 200, r.text
    return r.json()

def test_today_resolves_weights(client, squad, program, monkeypatch):
    monkeypatch.setattr(calendar, "today", lambda: date(2024, 6, 10))
    H = squad["athlete_h"]
    set_max(client, H, "Back Squat", 300)
    body = client.get("/athlete/today", headers=H).json()
    assert body["program_id"] == program["id"]
    assert body["title"] == "Legs"
    squat = body["exercises"][0]
    assert squat["calculated_weight"] == 225
    assert squat["display_text"] == "225 lbs (75%)"
    assert squat["has_one_rep_max"] is True

def test_rest_day_is_null(client, squad, program, monkeypatch):
    monkeypatch.setattr(calendar, "today", lambda: date(2024, 6, 11))
    assert client.get("/athlete/today", headers=squad["athlete_h"]).json() is None

def test_without_max_only_percentage_is_shown(client, squad, program):
    squat = client.get("/athlete/workouts/2024-06-10", headers=squad["athlete_h"]).json()["exercises"][0]
    assert squat["calculated_weight"] is None
    assert squat["display_text"] == "75%"
    assert squat["has_one_rep_max"] is False

def test_draft_programs_are_invisible(client, squad, program):
    client.post(f"/programs/{program['id']}/unpublish", headers=squad["coach_h"])
    assert client.get("/athlete/workouts/2024-06-10", headers=squad["athlete_h"]).json() is None

def test_workouts_in_range(client, squad, program, monkeypatch):
    H = squad["athlete_h"]
    r = client.get("/athlete/workouts", headers=H, params={"start_date": "2024-06-01", "end_date": "2024-06-30"})
    assert [d["date"] for d in r.json()] == ["2024-06-10", "2024-06-12"]
    assert r.json()[1]["exercises"][0]["calculated_weight"] == 135

    monkeypatch.setattr(calendar, "today", lambda: date(2024, 6, 20))
    assert len(client.get("/athlete/workouts", headers=H).json()) == 2
    monkeypatch.setattr(calendar, "today", lambda: date(2024, 7, 20))
    assert client.get("/athlete/workouts", headers=H).json() == []

def test_coaches_cannot_use_athlete_routes(client, squad):
    assert client.get("/athlete/today", headers=squad["coach_h"]).status_code == 403

def test_log_reconcile_save_and_reopen(client, squad, program):
    H = squad["athlete_h"]
    set_max(client, H, "Back Squat", 300)

    view = client.get("/athlete/workout-log/2024-06-10", headers=H).json()
    assert view["saved"] is False
    assert view["workout_program_id"] == program["id"]
    rows = view["exercises"][0]["sets"]
    assert len(rows) == 3
    assert all(r["prescribed_weight"] == 225 and r["prescribed_reps"] == "5" for r in rows)

    for r in rows[:2]:
        r["completed_weight"], r["completed_reps"] = 225, 5
    saved = client.put("/athlete/workout-log/2024-06-10", headers=H, json={"exercises": view["exercises"]})
    assert saved.status_code == 200, saved.text
    assert saved.json()["is_completed"] is False
    assert saved.json()["workout_program_id"] == program["id"]
    assert saved.json()["exercises"][0]["total_sets_completed"] == 2

    view = client.get("/athlete/workout-log/2024-06-10", headers=H).json()
    assert view["saved"] is True
    rows = view["exercises"][0]["sets"]
    rows[2]["completed_weight"], rows[2]["completed_reps"] = 225, 5
    done = client.put("/athlete/workout-log/2024-06-10", headers=H, json={"exercises": view["exercises"], "notes": "easy"}).json()
    assert done["is_completed"] is True
    assert done["completed_at"] is not None

    rows[2]["completed_weight"] = rows[2]["completed_reps"] = None
    reopened = client.put("/athlete/workout-log/2024-06-10", headers=H, json={"exercises": view["exercises"]}).json()
    assert reopened["is_completed"] is False
    assert reopened["completed_at"] is None

def test_coach_edit_after_partial_log_keeps_completed_values(client, squad, program):
    H = squad["athlete_h"]
    view = client.get("/athlete/workout-log/2024-06-10", headers=H).json()
    view["exercises"][0]["sets"][0].update(completed_weight=200, completed_reps=5)
    client.put("/athlete/workout-log/2024-06-10", headers=H, json={"exercises": view["exercises"]})

    client.put(f"/programs/{program['id']}/days", headers=squad["coach_h"], json={
        "date": "2024-06-10", "title": "Legs",
        "exercises": [{"exercise_name": "back squat", "set_configs": [{"sets": 5, "reps": "3", "percentage": 80}]}],
    })
    rows = client.get("/athlete/workout-log/2024-06-10", headers=H).json()["exercises"][0]["sets"]
    assert len(rows) == 5
    assert rows[0]["completed_weight"] == 200
    assert rows[0]["prescribed_reps"] == "3"
    assert all(r["completed_weight"] is None for r in rows[1:])

def test_saving_heavy_sets_raises_max(client, squad, program):
    H = squad["athlete_h"]
    set_max(client, H, "Back Squat", 250)
    client.put("/athlete/workout-log/2024-06-10", headers=H, json={"exercises": [
        {"exercise_name": "Back Squat", "sets": [{"set_number": 1, "completed_weight": 275, "completed_reps": 3}]},
    ]})
    maxes = {m["exercise_name"]: m["one_rep_max"] for m in client.get("/athlete/maxes", headers=H).json()}
    # 275 * 36 / 34 = 291.2
    assert maxes["Back Squat"] == 291

def test_log_history_has_estimates(client, squad, program):
    H = squad["athlete_h"]
    for day in ("2024-06-10", "2024-06-12"):
        client.put(f"/athlete/workout-log/{day}", headers=H, json={"exercises": [
            {"exercise_name": "Bench Press", "sets": [{"set_number": 1, "completed_weight": 225, "completed_reps": 5}]},
        ]})
    logs = client.get("/athlete/workout-logs", headers=H).json()
    assert [l["date"] for l in logs] == ["2024-06-12", "2024-06-10"]
    assert logs[0]["exercises"][0]["estimated_one_rep_max"] == 253
    ranged = client.get("/athlete/workout-logs", headers=H, params={"start_date": "2024-06-11"}).json()
    assert [l["date"] for l in ranged] == ["2024-06-12"]

def test_log_without_program_round_trips(client, squad):
    H = squad["athlete_h"]
    client.put("/athlete/workout-log/2024-05-01", headers=H, json={"exercises": [
        {"exercise_name": "Farmer Carry", "sets": [{"set_number": 1, "completed_weight": 70}]},
    ]})
    view = client.get("/athlete/workout-log/2024-05-01", headers=H).json()
    assert view["saved"] is True
    assert view["program_name"] is None
    assert view["exercises"][0]["exercise_name"] == "Farmer Carry"
    assert view["is_completed"] is True

def test_empty_day_view(client, squad):
    view = client.get("/athlete/workout-log/2024-05-02", headers=squad["athlete_h"]).json()
    assert view == {
        "date": "2024-05-02", "saved": False, "workout_program_id": None, "program_name": None,
        "title": None, "exercises": [], "is_completed": False, "completed_at": None, "notes": None,
    }

def test_bad_log_payload_is_422(client, squad):
    r = client.put("/athlete/workout-log/2024-05-01", headers=squad["athlete_h"], json={"exercises": [
        {"exercise_name": "Bench Press", "sets": [{"set_number": 0}]},
    ]})
    assert r.status_code == 422
    assert r.json()["kind"] == "validation"

def test_stat_logging_and_pr(client, squad, monkeypatch):
    monkeypatch.setattr(calendar, "today", lambda: date(2024, 6, 10))
    H = squad["athlete_h"]
    r = client.post("/athlete/stats", headers=H, json={"exercise_name": "Bench Press", "weight": 225, "reps": 5})
    assert r.status_code == 201
    body = r.json()
    assert body["estimated_one_rep_max"] == 253
    assert body["is_pr"] is True
    assert body["message"] == "New personal record!"
    assert body["stat"]["date"] == "2024-06-10"

    r = client.post("/athlete/stats", headers=H, json={"exercise_name": "bench press", "weight": 200, "reps": 5})
    assert r.json()["is_pr"] is False
    assert r.json()["message"] == "Stat logged successfully"

    stats = client.get("/athlete/stats", headers=H).json()
    assert [m["one_rep_max"] for m in stats["maxes"]] == [253]
    assert len(stats["stats"]) == 2

def test_high_rep_stat_is_recorded_without_touching_max(client, squad):
    H = squad["athlete_h"]
    set_max(client, H, "Back Squat", 300)
    r = client.post("/athlete/stats", headers=H, json={"exercise_name": "Back Squat", "weight": 100, "reps": 30})
    assert r.status_code == 201
    body = r.json()
    assert body["estimated_one_rep_max"] == 0
    assert body["is_pr"] is False
    assert body["stat"]["reps"] == 30

    client.post("/athlete/stats", headers=H, json={"exercise_name": "Front Squat", "weight": 135, "reps": 15})
    client.put("/athlete/workout-log/2024-06-10", headers=H, json={"exercises": [
        {"exercise_name": "Back Squat", "sets": [{"set_number": 1, "completed_weight": 250, "completed_reps": 20}]},
    ]})
    maxes = client.get("/athlete/maxes", headers=H).json()
    assert [(m["exercise_name"], m["one_rep_max"]) for m in maxes] == [("Back Squat", 300)]

def test_manual_max_can_lower(client, squad):
    H = squad["athlete_h"]
    set_max(client, H, "Deadlift", 500)
    assert set_max(client, H, "deadlift", 455)["one_rep_max"] == 455
    assert client.put("/athlete/maxes", headers=H, json={"exercise_name": "Deadlift", "one_rep_max": 0}).status_code == 422

def test_stats_summary(client, squad, monkeypatch):
    monkeypatch.setattr(calendar, "today", lambda: date(2024, 6, 11))
    H = squad["athlete_h"]
    for day in ("2024-06-10", "2024-06-11"):
        client.put(f"/athlete/workout-log/{day}", headers=H, json={"exercises": [
            {"exercise_name": "Back Squat", "sets": [{"set_number": 1, "completed_weight": 100, "completed_reps": 10}]},
        ]})
    summary = client.get("/athlete/stats", headers=H).json()["summary"]
    assert summary == {"workouts_completed": 2, "total_sets": 2, "total_volume": 2000, "current_streak": 2}
