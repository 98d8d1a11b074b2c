import random
from types import SimpleNamespace

from connectibles.domains.matching.entities import (
    pick_explore,
    score_matches,
    score_reverse_matches,
)


def student(id, interests=(), skills=(), location=None, connections=()):
    return SimpleNamespace(
        id=id,
        interests=list(interests),
        skills=list(skills),
        location=location,
        connections=list(connections),
    )


def test_disjoint_interests_never_match():
    me = student("a", ["chess"])
    assert score_matches(me, [student("b", ["art"])]) == []


def test_score_is_number_of_shared_interests():
    me = student("a", ["chess", "music", "art"])
    other = student("b", ["art", "chess", "football"])
    [match] = score_matches(me, [other])
    assert match.user is other
    assert match.score == 2
    assert match.shared_interests == ["chess", "art"]


def test_single_chess_player_scenario():
    me = student("a", ["chess"])
    pool = [me, student("b", ["chess", "art"]), student("c", ["music"]), student("d")]
    matches = score_matches(me, pool)
    assert [m.user.id for m in matches] == ["b"]
    assert matches[0].score == 1


def test_duplicate_interests_are_counted():
    me = student("a", ["chess", "chess"])
    [match] = score_matches(me, [student("b", ["chess"])])
    assert match.score == 2


def test_ranking_is_stable_and_limited():
    me = student("a", ["x", "y"])
    pool = [student(f"u{i}", ["x"]) for i in range(12)] + [student("top", ["x", "y"])]
    matches = score_matches(me, pool, limit=10)
    assert len(matches) == 10
    assert matches[0].user.id == "top"
    assert [m.user.id for m in matches[1:]] == [f"u{i}" for i in range(9)]


def test_no_interests_no_matches():
    assert score_matches(student("a"), [student("b", ["chess"])]) == []


def test_reverse_matches_weigh_skills_and_location():
    me = student("a", ["chess"], skills=["python"], location="Hostel A")
    near = student("b", ["chess"], skills=["python"], location="hostel a")
    far = student("c", ["chess"])
    matches = score_reverse_matches(me, [far, near])
    assert [m.user.id for m in matches] == ["b", "c"]
    assert matches[0].score == 3.5
    assert matches[0].same_location is True


def test_explore_counts_mutual_connections():
    me = student("a", connections=["x", "y"])
    other = student("b", connections=["y", "z"])
    [pick] = pick_explore(me, [me, other], rng=random.Random(1))
    assert pick.user is other
    assert pick.mutual_connections_count == 1


def test_matches_endpoint(client, signup):
    me = signup("Aarav", interests=["chess"])
    signup("Diya", interests=["chess", "art"])
    signup("Kabir", interests=["football"])

    r = client.get("/api/matches", headers=me.headers)
    assert r.status_code == 200
    [match] = r.json()
    assert match["user"]["name"] == "Diya"
    assert match["score"] == 1
    assert match["shared_interests"] == ["chess"]
    assert "email" not in match["user"]


def test_banned_students_are_not_matched(client, signup):
    from connectibles.domains.moderation import repository

    me = signup("Aarav", interests=["chess"])
    other = signup("Diya", interests=["chess"])
    client.portal.call(repository.ban_user, other.id)

    assert client.get("/api/matches", headers=me.headers).json() == []
