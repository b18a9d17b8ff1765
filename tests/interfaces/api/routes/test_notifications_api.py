"""Integration tests for the notification endpoints."""

from __future__ import annotations

import anyio
import pytest

pytest.importorskip("fastapi")
from fastapi import Depends
from fastapi.testclient import TestClient

from hostelia.application.use_cases.notifications import create_notification
from hostelia.application.use_cases.users import create_user
from hostelia.infrastructure.notifications import STREAM_HEADERS
from hostelia.infrastructure.security import create_access_token
from hostelia.interfaces.api.dependencies import get_notification_publisher
from hostelia.main import create_app

DATA = {
    "type": "announcement_created",
    "title": "New Announcement",
    "message": "New announcement: Hostel day",
    "related_entity_id": "ann-7",
    "related_entity_type": "announcement",
}


@pytest.fixture()
def app(manager):
    return create_app(manager=manager)


@pytest.fixture()
def client(app):
    return TestClient(app)


def _auth(user) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token({'sub': str(user.id)})}"}


def _notify(session, app, user, **overrides):
    return create_notification(
        session, app.state.notification_publisher, user_id=user.id, **{**DATA, **overrides}
    )


def test_endpoints_require_authentication(client):
    assert client.get("/notifications/").status_code == 401
    assert client.get("/notifications/unread-count").status_code == 401
    assert client.patch("/notifications/read-all").status_code == 401
    assert client.get("/notifications/stream").status_code == 401


def test_invalid_token_is_rejected(client):
    response = client.get(
        "/notifications/", headers={"Authorization": "Bearer not-a-token"}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Unauthorized - Invalid token"


def test_inactive_user_cannot_open_a_stream(client, make_user):
    user = make_user(is_active=False)

    response = client.get("/notifications/stream", headers=_auth(user))

    assert response.status_code == 400


def test_list_returns_camel_case_page(client, app, session, make_user):
    user = make_user()
    saved = _notify(session, app, user)

    response = client.get("/notifications/", headers=_auth(user))

    assert response.status_code == 200
    body = response.json()
    assert body["totalCount"] == 1
    assert body["hasMore"] is False
    item = body["notifications"][0]
    assert item["id"] == saved.id
    assert item["userId"] == user.id
    assert item["relatedEntityId"] == "ann-7"
    assert item["relatedEntityType"] == "announcement"
    assert item["read"] is False
    assert item["readAt"] is None


def test_list_pages_and_clamps_parameters(client, app, session, make_user):
    user = make_user()
    for _ in range(3):
        _notify(session, app, user)

    paged = client.get(
        "/notifications/", params={"limit": "2", "skip": "0"}, headers=_auth(user)
    ).json()
    clamped = client.get(
        "/notifications/", params={"limit": "lots", "skip": "-4"}, headers=_auth(user)
    ).json()

    assert (len(paged["notifications"]), paged["hasMore"]) == (2, True)
    assert (len(clamped["notifications"]), clamped["hasMore"]) == (3, False)


def test_unread_only_filter(client, app, session, make_user):
    user = make_user()
    first = _notify(session, app, user)
    _notify(session, app, user)
    client.patch(f"/notifications/{first.id}/read", headers=_auth(user))

    body = client.get(
        "/notifications/", params={"unreadOnly": "true"}, headers=_auth(user)
    ).json()

    assert body["totalCount"] == 1
    assert body["notifications"][0]["id"] != first.id


def test_mark_read_by_another_user_is_not_found(client, app, session, make_user):
    owner, intruder = make_user(), make_user()
    saved = _notify(session, app, owner)

    response = client.patch(f"/notifications/{saved.id}/read", headers=_auth(intruder))
    missing = client.patch("/notifications/424242/read", headers=_auth(intruder))

    assert response.status_code == 404
    assert response.json() == missing.json() == {"detail": "Notification not found"}
    owner_view = client.get("/notifications/", headers=_auth(owner)).json()
    assert owner_view["notifications"][0]["read"] is False


def test_mark_read_returns_updated_record(client, app, session, make_user):
    user = make_user()
    saved = _notify(session, app, user)

    response = client.patch(f"/notifications/{saved.id}/read", headers=_auth(user))

    assert response.status_code == 200
    assert response.json()["read"] is True
    assert response.json()["readAt"] is not None


def test_read_all_and_unread_count(client, app, session, make_user):
    user = make_user()
    for _ in range(2):
        _notify(session, app, user)

    assert client.get("/notifications/unread-count", headers=_auth(user)).json() == {
        "count": 2
    }
    assert client.patch("/notifications/read-all", headers=_auth(user)).json() == {
        "count": 2
    }
    assert client.patch("/notifications/read-all", headers=_auth(user)).json() == {
        "count": 0
    }
    assert client.get("/notifications/unread-count", headers=_auth(user)).json() == {
        "count": 0
    }


def test_token_is_accepted_from_cookie_and_query(client, make_user):
    user = make_user()
    token = create_access_token({"sub": str(user.id)})

    client.cookies.set("jwt", token)
    assert client.get("/notifications/unread-count").status_code == 200
    client.cookies.clear()

    response = client.get("/notifications/unread-count", params={"token": token})
    assert response.status_code == 200


def test_login_issues_a_token_for_the_notification_api(client, session):
    create_user(
        session,
        name="Warden One",
        email="warden@hostelia.test",
        password="Secret123",
        role="warden",
        hostel="BH-3",
    )

    response = client.post(
        "/auth/token",
        data={"username": "warden@hostelia.test", "password": "Secret123"},
    )
    bad = client.post(
        "/auth/token",
        data={"username": "warden@hostelia.test", "password": "wrong"},
    )

    assert response.status_code == 200
    assert response.json()["role"] == "warden"
    assert bad.status_code == 401
    headers = {"Authorization": f"Bearer {response.json()['access_token']}"}
    assert client.get("/notifications/unread-count", headers=headers).status_code == 200


def test_registry_is_injected_per_application(app, manager):
    assert app.state.notification_manager is manager
    assert app.state.notification_publisher.manager is manager


def test_publisher_dependency_resolves_the_application_publisher(app, client):
    @app.get("/publisher-check")
    def publisher_check(publisher=Depends(get_notification_publisher)):
        return {"same": publisher is app.state.notification_publisher}

    assert client.get("/publisher-check").json() == {"same": True}


@pytest.mark.anyio
async def test_stream_opens_with_event_stream_headers(app, manager, make_user):
    user = make_user()
    token = create_access_token({"sub": str(user.id)})
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "path": "/notifications/stream",
        "raw_path": b"/notifications/stream",
        "root_path": "",
        "query_string": f"token={token}".encode(),
        "headers": [(b"host", b"testserver")],
        "client": ("testclient", 50000),
        "server": ("testserver", 80),
    }
    first_frame = anyio.Event()
    state = {"request_sent": False}
    messages = []

    async def receive():
        if not state["request_sent"]:
            state["request_sent"] = True
            return {"type": "http.request", "body": b"", "more_body": False}
        await first_frame.wait()
        return {"type": "http.disconnect"}

    async def send(message):
        messages.append(message)
        if message["type"] == "http.response.body" and message.get("body"):
            first_frame.set()

    with anyio.fail_after(5):
        await app(scope, receive, send)

    start = messages[0]
    headers = {key.decode().lower(): value.decode() for key, value in start["headers"]}
    assert start["status"] == 200
    assert headers["content-type"].startswith("text/event-stream")
    for name, value in STREAM_HEADERS.items():
        assert headers[name.lower()] == value
    body = next(m["body"] for m in messages if m.get("body"))
    assert body.decode().startswith('data: {"type": "connected"')
    assert manager.connection_count(user.id) == 0
