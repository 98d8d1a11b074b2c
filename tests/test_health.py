from connectibles.core import celery, redis


def test_health_shape(client, monkeypatch):
    async def up():
        return True

    monkeypatch.setattr(redis, "check_connection", up)
    monkeypatch.setattr(celery, "check_connection", up)
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "healthy"
    assert body["services"] == {"database": True, "redis": True, "broker": True}


def test_health_broker_down(client, monkeypatch):
    async def up():
        return True

    async def down():
        return False

    monkeypatch.setattr(redis, "check_connection", up)
    monkeypatch.setattr(celery, "check_connection", down)
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "degraded"
    assert r.json()["services"]["broker"] is False
