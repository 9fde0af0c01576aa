from datetime import datetime, timedelta, timezone
import base64
import json

import jwt

from familynk.familynk.auth_service.models import User

from .conftest import ACCESS_SECRET, REFRESH_SECRET


def _forge_claims(token: str, **changes) -> str:
    """Swap the payload segment of a signed token while keeping its signature."""
    header, payload, signature = token.split(".")
    padded = payload + "=" * (-len(payload) % 4)
    claims = json.loads(base64.urlsafe_b64decode(padded))
    claims.update(changes)
    forged = base64.urlsafe_b64encode(json.dumps(claims).encode()).rstrip(b"=").decode()
    return f"{header}.{forged}.{signature}"


def test_refresh_rotates_token_pair(client, registered_user):
    data, registration = registered_user
    response = client.post("/refresh", json={"refreshToken": registration["refreshToken"]})
    assert response.status_code == 200
    body = response.json()

    assert body["accessToken"] != registration["accessToken"]
    assert body["refreshToken"] != registration["refreshToken"]
    assert body["user"] == registration["user"]

    old = jwt.decode(registration["refreshToken"], REFRESH_SECRET, algorithms=["HS256"])
    new_refresh = jwt.decode(body["refreshToken"], REFRESH_SECRET, algorithms=["HS256"])
    new_access = jwt.decode(body["accessToken"], ACCESS_SECRET, algorithms=["HS256"])
    for claims in (new_refresh, new_access):
        assert (claims["userId"], claims["email"], claims["role"]) == (
            old["userId"], old["email"], old["role"]
        )
    assert new_refresh["jti"] != old["jti"]
    assert new_refresh["exp"] - new_refresh["iat"] == int(timedelta(days=7).total_seconds())
    assert new_access["exp"] - new_access["iat"] == int(timedelta(minutes=15).total_seconds())


def test_refresh_can_chain(client, registered_user):
    _, registration = registered_user
    first = client.post("/refresh", json={"refreshToken": registration["refreshToken"]}).json()
    second = client.post("/refresh", json={"refreshToken": first["refreshToken"]})
    assert second.status_code == 200


def test_refresh_leaves_old_token_usable(client, registered_user):
    _, registration = registered_user
    assert client.post("/refresh", json={"refreshToken": registration["refreshToken"]}).status_code == 200
    # Rotation does not revoke; the old token works until it expires
    assert client.post("/refresh", json={"refreshToken": registration["refreshToken"]}).status_code == 200


def test_refresh_rejects_expired_token(client, registered_user):
    _, registration = registered_user
    expired = jwt.encode(
        {
            "userId": registration["user"]["id"],
            "email": registration["user"]["email"],
            "role": "user",
            "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
        },
        REFRESH_SECRET,
        algorithm="HS256",
    )
    response = client.post("/refresh", json={"refreshToken": expired})
    assert response.status_code == 401
    assert response.json() == {"error": "Refresh token expired"}


def test_refresh_rejects_tampered_token(client, registered_user):
    _, registration = registered_user
    tampered = _forge_claims(registration["refreshToken"], role="admin")
    response = client.post("/refresh", json={"refreshToken": tampered})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid refresh token"}


def test_refresh_rejects_access_token(client, registered_user):
    _, registration = registered_user
    response = client.post("/refresh", json={"refreshToken": registration["accessToken"]})
    assert response.status_code == 401


def test_refresh_rejects_garbage(client):
    response = client.post("/refresh", json={"refreshToken": "not-a-token"})
    assert response.status_code == 401


def test_refresh_requires_token_field(client):
    assert client.post("/refresh", json={}).status_code == 422


def test_refresh_for_deleted_user(client, db_session, registered_user):
    data, registration = registered_user
    db_session.query(User).filter(User.email == data["email"]).delete()
    db_session.commit()

    response = client.post("/refresh", json={"refreshToken": registration["refreshToken"]})
    assert response.status_code == 404
    assert response.json() == {"error": "Login Failed"}


def test_refresh_uses_stored_role(client, db_session, registered_user):
    data, registration = registered_user
    user = db_session.query(User).filter(User.email == data["email"]).one()
    user.role = "admin"
    db_session.commit()

    body = client.post("/refresh", json={"refreshToken": registration["refreshToken"]}).json()
    assert body["user"]["role"] == "admin"
    assert jwt.decode(body["accessToken"], ACCESS_SECRET, algorithms=["HS256"])["role"] == "admin"
