from datetime import timedelta

from connectibles.domains.feed import repository, service
from connectibles.domains.feed.entities import summarize_reactions, toggle_reaction
from connectibles.domains.feed.models import SpillPost
from connectibles.shared.utils.timeutils import utcnow


def test_toggle_reaction_takes_back_same_emoji():
    reactions, added = toggle_reaction([], "u1", "🔥")
    assert added
    reactions, added = toggle_reaction(reactions + [{"user_id": "u2", "emoji": "🔥"}], "u1", "🔥")
    assert not added
    assert reactions == [{"user_id": "u2", "emoji": "🔥"}]


def test_summarize_reactions_hides_reactors():
    reactions = [
        {"user_id": "u1", "emoji": "😂"},
        {"user_id": "u2", "emoji": "😂"},
        {"user_id": "u2", "emoji": "🔥"},
    ]
    assert summarize_reactions(reactions, "u1") == [
        {"emoji": "😂", "count": 2, "reacted": True},
        {"emoji": "🔥", "count": 1, "reacted": False},
    ]


def test_spills_are_anonymous(client, signup):
    a, b = signup("Aarav"), signup("Diya")
    assert client.post("/api/feed/spills", json={"content": "  "}, headers=a.headers).json()["code"] == "EMPTY_POST"
    post_id = client.post("/api/feed/spills", json={"content": "the canteen samosas are back"}, headers=a.headers).json()["post_id"]

    [mine] = client.get("/api/feed/spills", headers=a.headers).json()
    assert mine["is_mine"] is True
    assert "author_id" not in mine

    [theirs] = client.get("/api/feed/spills", headers=b.headers).json()
    assert theirs["is_mine"] is False

    r = client.post(f"/api/feed/spills/{post_id}/reactions", json={"emoji": "🔥"}, headers=b.headers)
    assert r.json() == {"reacted": True}
    [post] = client.get("/api/feed/spills", headers=b.headers).json()
    assert post["reactions"] == [{"emoji": "🔥", "count": 1, "reacted": True}]

    assert client.delete(f"/api/feed/spills/{post_id}", headers=b.headers).json()["code"] == "NOT_AUTHOR"
    assert client.delete(f"/api/feed/spills/{post_id}", headers=a.headers).status_code == 200
    assert client.get("/api/feed/spills").json() == []


def test_delete_old_spills(client, signup):
    a = signup("Aarav")
    old_id = client.post("/api/feed/spills", json={"content": "old news"}, headers=a.headers).json()["post_id"]
    client.post("/api/feed/spills", json={"content": "fresh"}, headers=a.headers)

    client.portal.call(repository.set_field, SpillPost, old_id, "created_at", utcnow() - timedelta(hours=25))
    assert client.portal.call(service.delete_old_spills, 24) == 1
    assert [p["content"] for p in client.get("/api/feed/spills").json()] == ["fresh"]


def test_volunteering(client, signup):
    a, b = signup("Aarav"), signup("Diya")
    post_id = client.post(
        "/api/feed/posts",
        json={"title": "Hackathon team", "description": "Need a designer", "tags": ["design"]},
        headers=a.headers,
    ).json()["post_id"]

    assert client.post(f"/api/feed/posts/{post_id}/volunteer", headers=a.headers).json()["code"] == "OWN_POST"
    assert client.post(f"/api/feed/posts/{post_id}/volunteer", headers=b.headers).json() == {"volunteering": True}
    assert [u["id"] for u in client.get(f"/api/feed/posts/{post_id}/volunteers").json()] == [b.id]

    [post] = client.get(f"/api/feed/posts/by/{a.id}").json()
    assert post["author"]["name"] == "Aarav"
    assert post["volunteers"] == [b.id]

    assert client.post(f"/api/feed/posts/{post_id}/volunteer", headers=b.headers).json() == {"volunteering": False}
    assert client.get(f"/api/feed/posts/{post_id}/volunteers").json() == []


def test_events_notify_connections_and_creator(client, signup, connect):
    a, b, c = signup("Aarav"), signup("Diya"), signup("Kabir")
    connect(a, b)

    event_id = client.post(
        "/api/feed/events",
        json={"title": "Open mic", "description": "Bring a song", "location": "Amphitheatre"},
        headers=a.headers,
    ).json()["event_id"]

    assert "new_event" in [n["type"] for n in client.get("/api/notifications", headers=b.headers).json()]
    assert "new_event" not in [n["type"] for n in client.get("/api/notifications", headers=c.headers).json()]

    assert client.post(f"/api/feed/events/{event_id}/interest", headers=c.headers).json() == {"interested": True}
    assert "event_interest" in [n["type"] for n in client.get("/api/notifications", headers=a.headers).json()]
    [event] = client.get("/api/feed/events").json()
    assert event["interested_users"] == [c.id]

    assert client.post(f"/api/feed/events/{event_id}/interest", headers=c.headers).json() == {"interested": False}
    assert client.post("/api/feed/events/missing/interest", headers=c.headers).json()["code"] == "EVENT_NOT_FOUND"


def test_gossip(client, signup):
    a, b = signup("Aarav"), signup("Diya")
    first = client.post("/api/feed/gossip", json={"message": "who's up for chai?"}, headers=a.headers).json()["message_id"]
    client.post("/api/feed/gossip", json={"message": "me!"}, headers=b.headers)

    messages = client.get("/api/feed/gossip").json()
    assert [m["message"] for m in messages] == ["who's up for chai?", "me!"]
    assert messages[0]["sender"]["name"] == "Aarav"

    assert client.delete(f"/api/feed/gossip/{first}", headers=b.headers).json()["code"] == "NOT_AUTHOR"
    assert client.delete(f"/api/feed/gossip/{first}", headers=a.headers).status_code == 200
    assert [m["message"] for m in client.get("/api/feed/gossip").json()] == ["me!"]
