"""
Tests for users, authentication, status and demo data endpoints
"""
import random

import pytest

from models.assignment import AssignmentModel
from models.submission import SubmissionModel
from models.user import UserModel
from utils.seed import ADMIN_USER_ID, DEFAULT_USER_ID, seed_database
from utils.user_manager import UserManager, hash_password, verify_password
from core.exceptions import UserAlreadyExistsError, UserNotFoundError


def _signup(client, username="alice", password="s3cret", name="Alice"):
    return client.post(
        "/api/users", json={"username": username, "password": password, "name": name}
    )


class TestUsers:
    def test_create_user(self, client):
        response = _signup(client)

        assert response.status_code == 201
        body = response.json()
        assert body["username"] == "alice"
        assert body["name"] == "Alice"
        assert body["isAdmin"] is False
        assert len(body["_id"]) == 24
        assert "password" not in body
        assert "password_hash" not in body

    def test_password_is_hashed(self, client, database):
        _signup(client, password="s3cret")

        with database.session() as db:
            stored = db.query(UserModel).filter(UserModel.username == "alice").one()
        assert stored.password_hash != "s3cret"
        assert verify_password("s3cret", stored.password_hash)

    @pytest.mark.parametrize(
        "body",
        [
            {"password": "s3cret"},
            {"username": "alice"},
            {"username": "", "password": "s3cret"},
        ],
    )
    def test_missing_credentials(self, client, body):
        assert client.post("/api/users", json=body).status_code == 400

    def test_duplicate_username(self, client):
        assert _signup(client).status_code == 201

        response = _signup(client)

        assert response.status_code == 400
        assert "already exists" in response.json()["detail"]

    def test_list_and_get_users(self, client):
        created = _signup(client).json()
        _signup(client, username="bob", name="Bob")

        listed = client.get("/api/users").json()
        assert [u["username"] for u in listed] == ["alice", "bob"]
        assert client.get(f"/api/users/{created['_id']}").json()["username"] == "alice"
        assert client.get("/api/users/unknown").status_code == 404


class TestAuth:
    def test_login_and_me(self, client):
        _signup(client)

        response = client.post("/api/auth/login", json={"username": "alice", "password": "s3cret"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["user"]["username"] == "alice"
        assert "password_hash" not in body["user"]

        me = client.get(
            "/api/auth/me", headers={"Authorization": f"Bearer {body['token']}"}
        )
        assert me.status_code == 200
        assert me.json()["username"] == "alice"

    def test_wrong_password(self, client):
        _signup(client)

        response = client.post("/api/auth/login", json={"username": "alice", "password": "nope"})

        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid credentials"}

    def test_unknown_user(self, client):
        response = client.post("/api/auth/login", json={"username": "ghost", "password": "x"})
        assert response.status_code == 401

    def test_me_rejects_bad_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401


class TestUserManager:
    def test_duplicate_raises(self, db_session):
        manager = UserManager(db_session)
        manager.create_user("alice", "pw")
        with pytest.raises(UserAlreadyExistsError):
            manager.create_user("alice", "other")

    def test_authenticate(self, db_session):
        manager = UserManager(db_session)
        manager.create_user("alice", "pw", name="Alice", is_admin=True)

        user = manager.authenticate("alice", "pw")
        assert user is not None and user.is_admin is True
        assert manager.authenticate("alice", "wrong") is None

    def test_missing_user_by_id(self, db_session):
        with pytest.raises(UserNotFoundError):
            UserManager(db_session).get_user_by_id("missing")

    def test_long_passwords_are_truncated_consistently(self):
        long_password = "x" * 100
        hashed = hash_password(long_password)
        assert verify_password(long_password, hashed)
        assert verify_password("x" * 72, hashed)

    def test_verify_against_malformed_hash(self):
        assert verify_password("pw", "not-a-bcrypt-hash") is False


class TestSystem:
    def test_status(self, client):
        response = client.get("/api/status")
        assert response.status_code == 200
        assert response.json() == {"dbConnected": True}

    def test_health(self, client):
        assert client.get("/api/health").json() == {"status": "ok"}

    def test_db_init(self, client):
        _signup(client, username="stale")

        response = client.post("/api/db/init")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Database initialized"
        assert body["counts"]["users"] == 20
        assert body["counts"]["assignments"] == 50
        assert 0 <= body["counts"]["submissions"] <= 50

        usernames = [u["username"] for u in client.get("/api/users").json()]
        assert "stale" not in usernames
        assert {"admin", "user"} <= set(usernames)
        assert client.get("/api/assignments", params={"limit": 100}).json()["totalDocs"] == 50

        login = client.post("/api/auth/login", json={"username": "admin", "password": "password"})
        assert login.status_code == 200
        assert login.json()["user"]["isAdmin"] is True


class TestSeed:
    def test_reproducible_with_seeded_rng(self, database):
        def snapshot():
            with database.session() as db:
                seed_database(db, rng=random.Random(7), user_count=5, assignment_count=12)
                return (
                    sorted(a.nom for a in db.query(AssignmentModel)),
                    db.query(SubmissionModel).count(),
                )

        assert snapshot() == snapshot()

    def test_fixed_accounts_and_owner_submissions(self, db_session):
        counts = seed_database(db_session, rng=random.Random(1), user_count=4, assignment_count=30)

        assert counts["users"] == 4
        user_ids = {u.user_id for u in db_session.query(UserModel)}
        assert {ADMIN_USER_ID, DEFAULT_USER_ID} <= user_ids

        owners = {a.id: a.user_id for a in db_session.query(AssignmentModel)}
        submissions = db_session.query(SubmissionModel).all()
        assert len(submissions) == counts["submissions"]
        for submission in submissions:
            assert owners[submission.assignment_id] == submission.user_id
