def _send(client, sender, receiver, body):
    return client.post("/api/messages", json={"receiver_id": receiver.id, "body": body}, headers=sender.headers)


def test_conversation_is_chronological(client, signup):
    a, b = signup("Aarav"), signup("Diya")
    _send(client, a, b, "hi")
    _send(client, b, a, "hello!")
    _send(client, a, b, "chess later?")

    bodies = [m["body"] for m in client.get(f"/api/messages/conversation/{b.id}", headers=a.headers).json()]
    assert bodies == ["hi", "hello!", "chess later?"]
    assert client.get("/api/messages/unread-count", headers=b.headers).json() == {"count": 2}


def test_only_receiver_marks_read(client, signup):
    a, b = signup("Aarav"), signup("Diya")
    message = _send(client, a, b, "hi").json()

    r = client.post(f"/api/messages/{message['id']}/read", headers=a.headers)
    assert r.json()["code"] == "MESSAGE_NOT_FOUND"
    assert client.post(f"/api/messages/{message['id']}/read", headers=b.headers).status_code == 200
    assert client.get("/api/messages/unread-count", headers=b.headers).json() == {"count": 0}


def test_blocking(client, signup):
    a, b = signup("Aarav"), signup("Diya")

    assert client.post(f"/api/messages/blocks/{b.id}", headers=b.headers).json()["code"] == "SELF_BLOCK"
    assert client.post(f"/api/messages/blocks/{a.id}", headers=b.headers).status_code == 200
    assert client.post(f"/api/messages/blocks/{a.id}", headers=b.headers).json()["code"] == "ALREADY_BLOCKED"
    assert client.get(f"/api/messages/blocks/{a.id}", headers=b.headers).json() == {"blocked": True}

    r = _send(client, a, b, "hey")
    assert r.status_code == 403
    assert r.json()["code"] == "BLOCKED"

    assert client.delete(f"/api/messages/blocks/{a.id}", headers=b.headers).status_code == 200
    assert client.delete(f"/api/messages/blocks/{a.id}", headers=b.headers).json()["code"] == "NOT_BLOCKED"
    assert _send(client, a, b, "hey").status_code == 200
