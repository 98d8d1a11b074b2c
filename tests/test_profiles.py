from datetime import timedelta
from types import SimpleNamespace

from connectibles.domains.profiles.entities import is_online, profile_completion
from connectibles.shared.utils.timeutils import utcnow


def test_profile_completion_counts_eleven_fields():
    user = SimpleNamespace(name="Diya", image=None, bio="", interests=["art"], skills=[], location="Hostel A")
    assert profile_completion(user) == 27


def test_online_window():
    now = utcnow()
    assert is_online(now - timedelta(minutes=4), now, 5)
    assert not is_online(now - timedelta(minutes=6), now, 5)
    assert not is_online(None, now, 5)


def test_partial_update_keeps_other_fields(client, signup):
    a = signup("Aarav", interests=["chess"], bio="Hi")
    r = client.patch("/api/profiles/me", json={"location": "Hostel B"}, headers=a.headers)
    assert r.status_code == 200
    me = r.json()
    assert me["interests"] == ["chess"]
    assert me["bio"] == "Hi"
    assert me["location"] == "Hostel B"


def test_public_profile_hides_private_fields(client, signup):
    a = signup("Aarav")
    r = client.get(f"/api/profiles/{a.id}")
    assert r.json()["name"] == "Aarav"
    assert "email" not in r.json()
    assert client.get("/api/profiles/ghost").json()["code"] == "USER_NOT_FOUND"


def test_completion_endpoint(client, signup):
    a = signup("Aarav", interests=["chess"], skills=["python"])
    assert client.get("/api/profiles/me/completion", headers=a.headers).json() == {"completion": 27}
    assert client.get("/api/profiles/me/completion").json() == {"completion": 0}


def test_presence(client, signup):
    a, b = signup("Aarav"), signup("Diya")
    assert client.get(f"/api/profiles/{a.id}/online").json()["is_online"] is False

    client.post("/api/profiles/presence", headers=a.headers)
    assert client.get(f"/api/profiles/{a.id}/online").json()["is_online"] is True

    r = client.post("/api/profiles/online-statuses", json={"user_ids": [a.id, b.id, "ghost"]})
    assert r.json() == [
        {"user_id": a.id, "is_online": True},
        {"user_id": b.id, "is_online": False},
        {"user_id": "ghost", "is_online": False},
    ]
