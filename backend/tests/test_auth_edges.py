from liftboard.security import create_access_token, decode_token
from conftest import PWD, uniq_email

def test_token_expired(client, signup):
    headers, user = signup("athlete")
    # craft an already-expired token for the same user id
    expired = create_access_token(str(user["id"]), expires_minutes=-1)

    r = client.get("/auth/me", headers={"Authorization": f"Bearer {expired}"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Token expired"

def test_garbage_token_401(client):
    r = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401

def test_token_for_missing_user_401(client):
    r = client.get("/auth/me", headers={"Authorization": f"Bearer {create_access_token('999')}"})
    assert r.status_code == 401

def test_login_token_carries_role(client, signup):
    email = uniq_email()
    signup("coach", email=email)
    tok = client.post("/auth/login", json={"email": email, "password": PWD}).json()["access_token"]
    payload = decode_token(tok)
    assert payload["role"] == "coach"
    assert payload["sub"].isdigit()

def test_requires_auth(client):
    # no token -> 401s
    assert client.get("/athlete/today").status_code == 401
    assert client.get("/exercises").status_code == 401
    assert client.post("/programs", json={}).status_code == 401
