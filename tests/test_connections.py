import pytest

from connectibles.domains.connections import service


def _wave(client, a, b):
    return client.post("/api/connections/wave", json={"receiver_id": b.id}, headers=a.headers)


def _request(client, a, b):
    return client.post("/api/connections/requests", json={"receiver_id": b.id}, headers=a.headers)


def _connections(client, user):
    return [u["id"] for u in client.get("/api/connections", headers=user.headers).json()]


def test_wave_twice_fails(client, signup):
    a, b = signup("Aarav"), signup("Diya")
    assert _wave(client, a, b).json()["status"] == "waved"
    r = _wave(client, a, b)
    assert r.status_code == 409
    assert r.json()["code"] == "ALREADY_WAVED"


def test_self_wave_and_self_connect(client, signup):
    a = signup("Aarav")
    assert _wave(client, a, a).json()["code"] == "SELF_WAVE"
    assert _request(client, a, a).json()["code"] == "SELF_CONNECT"


def test_wave_notifies_receiver(client, signup):
    a, b = signup("Aarav"), signup("Diya")
    _wave(client, a, b)
    [notification] = client.get("/api/notifications", headers=b.headers).json()
    assert notification["type"] == "wave"
    assert notification["related_user"]["id"] == a.id


def test_wave_then_request_upgrades_to_pending(client, signup):
    a, b = signup("Aarav"), signup("Diya")
    _wave(client, a, b)
    r = _request(client, a, b)
    assert r.json()["status"] == "pending"
    assert _request(client, a, b).json()["code"] == "ALREADY_PENDING"
    assert client.get(f"/api/connections/status/{b.id}", headers=a.headers).json() == {"status": "pending"}
    assert client.get(f"/api/connections/status/{a.id}", headers=b.headers).json() == {"status": "incoming"}


def test_reciprocal_requests_connect_both_once(client, signup):
    a, b = signup("Aarav"), signup("Diya")
    assert _request(client, b, a).json()["status"] == "pending"
    assert _request(client, a, b).json()["status"] == "accepted"

    assert _connections(client, a) == [b.id]
    assert _connections(client, b) == [a.id]
    assert _request(client, a, b).json()["code"] == "ALREADY_CONNECTED"
    assert _wave(client, b, a).json()["code"] == "ALREADY_CONNECTED"


def test_accept_flow(client, signup):
    a, b, c = signup("Aarav"), signup("Diya"), signup("Kabir")
    request_id = _request(client, a, b).json()["request_id"]

    [pending] = client.get("/api/connections/requests", headers=b.headers).json()
    assert pending["sender"]["id"] == a.id

    r = client.post(f"/api/connections/requests/{request_id}/accept", headers=c.headers)
    assert r.json()["code"] == "NOT_RECEIVER"

    r = client.post(f"/api/connections/requests/{request_id}/accept", headers=b.headers)
    assert r.status_code == 200
    assert _connections(client, a) == [b.id]

    r = client.post(f"/api/connections/requests/{request_id}/accept", headers=b.headers)
    assert r.json()["code"] == "NOT_PENDING"

    r = client.post("/api/connections/requests/missing/accept", headers=b.headers)
    assert r.json()["code"] == "REQUEST_NOT_FOUND"


def test_rejected_request_can_be_reopened(client, signup):
    a, b = signup("Aarav"), signup("Diya")
    request_id = _request(client, a, b).json()["request_id"]
    client.post(f"/api/connections/requests/{request_id}/reject", headers=b.headers)
    assert client.get("/api/connections/requests", headers=b.headers).json() == []

    r = _request(client, a, b)
    assert r.json() == {"request_id": request_id, "status": "pending"}


def test_remove_connection(client, signup, connect):
    a, b = signup("Aarav"), signup("Diya")
    connect(a, b)
    assert client.delete(f"/api/connections/{b.id}", headers=a.headers).status_code == 200
    assert _connections(client, a) == []
    assert _connections(client, b) == []
    r = client.delete(f"/api/connections/{b.id}", headers=a.headers)
    assert r.json()["code"] == "NOT_CONNECTED"


def test_blocked_users_cannot_connect(client, signup):
    a, b = signup("Aarav"), signup("Diya")
    client.post(f"/api/messages/blocks/{a.id}", headers=b.headers)
    r = _request(client, a, b)
    assert r.status_code == 403
    assert r.json()["code"] == "BLOCKED_USER"


def test_wave_after_rejection_explains_why(client, signup):
    a, b = signup("Aarav"), signup("Diya")
    request_id = _request(client, a, b).json()["request_id"]
    client.post(f"/api/connections/requests/{request_id}/reject", headers=b.headers)

    r = _wave(client, a, b)
    assert r.status_code == 409
    assert r.json()["code"] == "ALREADY_PENDING"
    assert "declined" in r.json()["detail"]


async def _failing_notify(*args, **kwargs):
    raise RuntimeError("notification store unavailable")


def test_failed_wave_notification_leaves_no_request(client, signup, monkeypatch):
    a, b = signup("Aarav"), signup("Diya")
    with monkeypatch.context() as m:
        m.setattr(service, "notify", _failing_notify)
        with pytest.raises(RuntimeError):
            _wave(client, a, b)

    assert client.get(f"/api/connections/status/{b.id}", headers=a.headers).json() == {"status": "none"}
    assert _wave(client, a, b).json()["status"] == "waved"


def test_failed_request_notification_leaves_no_request(client, signup, monkeypatch):
    a, b = signup("Aarav"), signup("Diya")
    with monkeypatch.context() as m:
        m.setattr(service, "notify", _failing_notify)
        with pytest.raises(RuntimeError):
            _request(client, a, b)

    assert client.get("/api/connections/requests", headers=b.headers).json() == []
    assert _request(client, a, b).json()["status"] == "pending"


def test_failed_reciprocal_accept_keeps_both_unconnected(client, signup, monkeypatch):
    a, b = signup("Aarav"), signup("Diya")
    _request(client, b, a)
    with monkeypatch.context() as m:
        m.setattr(service, "notify", _failing_notify)
        with pytest.raises(RuntimeError):
            _request(client, a, b)

    assert _connections(client, a) == []
    assert _connections(client, b) == []
    assert client.get(f"/api/connections/status/{b.id}", headers=a.headers).json() == {"status": "incoming"}
