def test_athlete_sees_merged_catalog(client, squad):
    r = client.get("/exercises", headers=squad["athlete_h"])
    assert r.status_code == 200
    names = [e["name"] for e in r.json()]
    assert "Back Squat" in names and len(names) == 48

def test_coach_custom_exercise_lifecycle(client, squad):
    H = squad["coach_h"]
    r = client.post("/exercises", headers=H, json={
        "name": "Zercher Squat",
        "category": "lower_body",
        "demo_url": "https://youtu.be/abc123",
        "applicable_sports": ["football", "wrestling"],
    })
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["is_global"] is False
    assert body["owner_id"] == squad["coach"]["id"]
    ex_id = body["id"]

    # the coach's athletes see it too
    names = [e["name"] for e in client.get("/exercises", headers=squad["athlete_h"]).json()]
    assert names[0] == "Zercher Squat"

    r = client.put(f"/exercises/{ex_id}", headers=H, json={"description": "bar in the elbows"})
    assert r.status_code == 200
    assert r.json()["description"] == "bar in the elbows"
    assert r.json()["name"] == "Zercher Squat"

    assert client.delete(f"/exercises/{ex_id}", headers=H).status_code == 204
    assert client.get(f"/exercises/{ex_id}", headers=H).status_code == 404

def test_custom_shadowing_builtin_is_hidden(client, squad):
    H = squad["coach_h"]
    assert client.post("/exercises", headers=H, json={"name": "back squat", "category": "lower_body"}).status_code == 201
    names = [e["name"].lower() for e in client.get("/exercises", headers=H).json()]
    assert names.count("back squat") == 1

def test_filters(client, squad):
    H = squad["coach_h"]
    client.post("/exercises", headers=H, json={"name": "Serve Drill", "category": "cardio", "applicable_sports": ["tennis"]})
    cardio = client.get("/exercises", headers=H, params={"category": "cardio"}).json()
    assert {e["category"] for e in cardio} == {"cardio"}
    found = client.get("/exercises", headers=H, params={"search": "squat"}).json()
    assert all("squat" in e["name"].lower() for e in found) and found
    tennis = [e["name"] for e in client.get("/exercises", headers=H, params={"sport": "tennis"}).json()]
    assert "Serve Drill" in tennis
    football = [e["name"] for e in client.get("/exercises", headers=H, params={"sport": "football"}).json()]
    assert "Serve Drill" not in football

def test_search_too_long_is_400(client, squad):
    r = client.get("/exercises", headers=squad["coach_h"], params={"search": "x" * 101})
    assert r.status_code == 400
    assert r.json()["kind"] == "validation"

def test_bad_demo_url_rejected(client, squad):
    r = client.post("/exercises", headers=squad["coach_h"], json={
        "name": "Sled Drag", "category": "cardio", "demo_url": "https://vimeo.com/1",
    })
    assert r.status_code == 400
    assert r.json() == {"detail": "Invalid YouTube URL format", "kind": "validation"}

def test_athletes_cannot_create(client, squad):
    r = client.post("/exercises", headers=squad["athlete_h"], json={"name": "X", "category": "core"})
    assert r.status_code == 403

def test_global_exercises_are_read_only(client, squad):
    H = squad["coach_h"]
    glob = next(e for e in client.get("/exercises", headers=H).json() if e["name"] == "Deadlift")
    r = client.put(f"/exercises/{glob['id']}", headers=H, json={"name": "Dead lift"})
    assert r.status_code == 403
    assert r.json() == {"detail": "Cannot edit global exercises", "kind": "authorization"}
    r = client.delete(f"/exercises/{glob['id']}", headers=H)
    assert r.json()["detail"] == "Cannot delete global exercises"

def test_only_creator_can_edit(client, squad, signup):
    ex_id = client.post("/exercises", headers=squad["coach_h"], json={"name": "Zercher Squat", "category": "lower_body"}).json()["id"]
    trainer_h, _ = signup("trainer")
    r = client.put(f"/exercises/{ex_id}", headers=trainer_h, json={"name": "Mine now"})
    assert r.status_code == 403
    assert r.json()["detail"] == "Not authorized to edit this exercise"
