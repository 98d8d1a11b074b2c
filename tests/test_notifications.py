def _wave(client, a, b):
    client.post("/api/connections/wave", json={"receiver_id": b.id}, headers=a.headers)


def test_unread_count_and_mark_read(client, signup):
    a, b, c = signup("Aarav"), signup("Diya"), signup("Kabir")
    _wave(client, a, c)
    _wave(client, b, c)

    assert client.get("/api/notifications/unread-count", headers=c.headers).json() == {"count": 2}
    newest, oldest = client.get("/api/notifications", headers=c.headers).json()
    assert newest["related_user"]["id"] == b.id

    assert client.post(f"/api/notifications/{newest['id']}/read", headers=c.headers).status_code == 200
    assert client.get("/api/notifications/unread-count", headers=c.headers).json() == {"count": 1}

    r = client.post("/api/notifications/read-all", headers=c.headers)
    assert r.json() == {"updated": 1}
    assert client.get("/api/notifications/unread-count", headers=c.headers).json() == {"count": 0}


def test_only_owner_can_touch_a_notification(client, signup):
    a, b = signup("Aarav"), signup("Diya")
    _wave(client, a, b)
    [notification] = client.get("/api/notifications", headers=b.headers).json()

    r = client.post(f"/api/notifications/{notification['id']}/read", headers=a.headers)
    assert r.status_code == 404
    assert r.json()["code"] == "NOTIFICATION_NOT_FOUND"
    r = client.delete(f"/api/notifications/{notification['id']}", headers=a.headers)
    assert r.json()["code"] == "NOTIFICATION_NOT_FOUND"


def test_delete_notifications(client, signup):
    a, b, c = signup("Aarav"), signup("Diya"), signup("Kabir")
    _wave(client, a, c)
    _wave(client, b, c)
    first, _ = client.get("/api/notifications", headers=c.headers).json()

    assert client.delete(f"/api/notifications/{first['id']}", headers=c.headers).status_code == 200
    assert client.delete("/api/notifications", headers=c.headers).json() == {"deleted": 1}
    assert client.get("/api/notifications", headers=c.headers).json() == []
