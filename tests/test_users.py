"""
User endpoint tests: signup, login, profile, password change and the
per-user post/comment listings.
"""
import pytest
from httpx import AsyncClient


async def _signup(client: AsyncClient, username: str, nickname: str, password: str = "pw") -> dict:
    resp = await client.post("/api/v1/users/signup", json={
        "username": username, "password": password, "nickname": nickname,
    })
    assert resp.status_code == 201
    return resp.json()


# ---------------------------------------------------------------------------
# Signup
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_signup(async_client: AsyncClient):
    user = await _signup(async_client, "alice", "Alice", "s3cret")
    assert user["username"] == "alice"
    assert user["nickname"] == "Alice"
    assert user["flagged"] is False
    assert "id" in user
    assert "created_at" in user
    assert "password" not in user
    assert "password_hash" not in user


@pytest.mark.asyncio
async def test_signup_duplicate_username(async_client: AsyncClient):
    await _signup(async_client, "alice", "Alice")
    resp = await async_client.post("/api/v1/users/signup", json={
        "username": "alice", "password": "pw", "nickname": "Other",
    })
    assert resp.status_code == 409
    assert resp.json()["code"] == "DUPLICATE_USERNAME"


@pytest.mark.asyncio
async def test_signup_duplicate_nickname(async_client: AsyncClient):
    await _signup(async_client, "alice", "Alice")
    resp = await async_client.post("/api/v1/users/signup", json={
        "username": "alice2", "password": "pw", "nickname": "Alice",
    })
    assert resp.status_code == 409
    assert resp.json()["code"] == "DUPLICATE_NICKNAME"


@pytest.mark.asyncio
async def test_signup_both_taken_reports_username(async_client: AsyncClient):
    await _signup(async_client, "alice", "Alice")
    resp = await async_client.post("/api/v1/users/signup", json={
        "username": "alice", "password": "pw", "nickname": "Alice",
    })
    assert resp.status_code == 409
    assert resp.json()["code"] == "DUPLICATE_USERNAME"


@pytest.mark.asyncio
async def test_signup_validation(async_client: AsyncClient):
    resp = await async_client.post("/api/v1/users/signup", json={
        "username": "u" * 21, "password": "pw", "nickname": "n",
    })
    assert resp.status_code == 422

    resp = await async_client.post("/api/v1/users/signup", json={"username": "u", "password": "pw"})
    assert resp.status_code == 422


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_login(async_client: AsyncClient):
    created = await _signup(async_client, "bob", "Bob", "hunter2")
    resp = await async_client.post("/api/v1/users/login", json={
        "username": "bob", "password": "hunter2",
    })
    assert resp.status_code == 200
    assert resp.json()["id"] == created["id"]


@pytest.mark.asyncio
async def test_login_failures_are_identical(async_client: AsyncClient):
    """Wrong password and unknown user produce byte-identical responses."""
    await _signup(async_client, "bob", "Bob", "hunter2")

    wrong_password = await async_client.post("/api/v1/users/login", json={
        "username": "bob", "password": "nope",
    })
    unknown_user = await async_client.post("/api/v1/users/login", json={
        "username": "ghost", "password": "hunter2",
    })

    assert wrong_password.status_code == 401
    assert unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json()
    assert wrong_password.json()["code"] == "INVALID_CREDENTIALS"


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_get_user_profile(async_client: AsyncClient):
    user = await _signup(async_client, "carol", "Carol")
    board = (await async_client.post("/api/v1/boards", json={"name": "b"})).json()
    post = (await async_client.post("/api/v1/posts", json={
        "board_id": board["id"], "user_id": user["id"], "title": "t", "content": "c",
    })).json()

    resp = await async_client.get(f"/api/v1/users/{user['id']}")
    assert resp.status_code == 200
    assert resp.json()["flagged_post_count"] == 0

    for _ in range(10):
        await async_client.post(f"/api/v1/posts/{post['id']}/hate")

    profile = (await async_client.get(f"/api/v1/users/{user['id']}")).json()
    assert profile["username"] == "carol"
    assert profile["flagged_post_count"] == 1


@pytest.mark.asyncio
async def test_get_user_not_found(async_client: AsyncClient):
    resp = await async_client.get("/api/v1/users/99999")
    assert resp.status_code == 404
    assert resp.json()["detail"] == {"entity": "user", "id": 99999}


# ---------------------------------------------------------------------------
# Password change
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_password(async_client: AsyncClient):
    user = await _signup(async_client, "dave", "Dave", "old-pw")
    resp = await async_client.put(f"/api/v1/users/{user['id']}/password", json={
        "current_password": "old-pw", "new_password": "new-pw",
    })
    assert resp.status_code == 204

    ok = await async_client.post("/api/v1/users/login", json={"username": "dave", "password": "new-pw"})
    assert ok.status_code == 200
    stale = await async_client.post("/api/v1/users/login", json={"username": "dave", "password": "old-pw"})
    assert stale.status_code == 401


@pytest.mark.asyncio
async def test_update_password_wrong_current(async_client: AsyncClient):
    user = await _signup(async_client, "erin", "Erin", "pw")
    resp = await async_client.put(f"/api/v1/users/{user['id']}/password", json={
        "current_password": "guess", "new_password": "new-pw",
    })
    assert resp.status_code == 401


# ---------------------------------------------------------------------------
# Per-user listings
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_user_posts_and_comments(async_client: AsyncClient):
    alice = await _signup(async_client, "alice", "Alice")
    bob = await _signup(async_client, "bob", "Bob")
    board = (await async_client.post("/api/v1/boards", json={"name": "b"})).json()

    post = (await async_client.post("/api/v1/posts", json={
        "board_id": board["id"], "user_id": alice["id"], "title": "alice post", "content": "c",
    })).json()
    await async_client.post("/api/v1/posts", json={
        "board_id": board["id"], "user_id": bob["id"], "title": "bob post", "content": "c",
    })
    await async_client.post(f"/api/v1/posts/{post['id']}/comments", json={
        "user_id": bob["id"], "content": "nice",
    })

    posts = (await async_client.get(f"/api/v1/users/{alice['id']}/posts")).json()
    assert [p["title"] for p in posts["items"]] == ["alice post"]

    comments = (await async_client.get(f"/api/v1/users/{bob['id']}/comments")).json()
    assert [c["content"] for c in comments["items"]] == ["nice"]
    assert comments["total_elements"] == 1
