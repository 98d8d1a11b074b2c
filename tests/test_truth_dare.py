from datetime import datetime

import pytest

from connectibles.domains.truth_dare.entities import (
    DARE_CHALLENGES,
    Choice,
    SessionStatus,
    TurnState,
)
from connectibles.shared.exceptions import ConnectiblesError

NOW = datetime(2026, 1, 1)


def _state():
    return TurnState(player1_id="a", player2_id="b", status=SessionStatus.ACTIVE, current_turn="b")


def _code(call):
    with pytest.raises(ConnectiblesError) as exc:
        call()
    return exc.value.code


def test_turn_stays_with_chooser_until_the_other_player_resolves():
    state = _state()
    state.choose("b", Choice.TRUTH, "Biggest fear?", NOW)
    assert state.current_turn == "b"
    assert _code(lambda: state.answer("b", "spiders")) == "ASKER_CANNOT_RESOLVE"

    state.answer("a", "spiders")
    assert state.current_turn == "a"
    assert state.rounds[-1].completed is True
    assert state.rounds[-1].answer == "spiders"


def test_choice_guards():
    state = _state()
    assert _code(lambda: state.choose("a", Choice.DARE, "Dance", NOW)) == "NOT_YOUR_TURN"
    assert _code(lambda: state.choose("z", Choice.DARE, "Dance", NOW)) == "NOT_A_PLAYER"
    state.choose("b", Choice.DARE, "Dance", NOW)
    assert _code(lambda: state.choose("b", Choice.DARE, "Again", NOW)) == "ROUND_IN_PROGRESS"


def test_resolution_guards():
    state = _state()
    assert _code(lambda: state.skip("a")) == "NO_OPEN_ROUND"
    state.choose("b", Choice.DARE, "Dance", NOW)
    assert _code(lambda: state.answer("a", "ok")) == "WRONG_CHOICE"
    state.complete("a")
    assert state.current_turn == "a"


def test_skip_closes_the_round_and_flips_the_turn():
    state = _state()
    state.choose("b", Choice.TRUTH, "Crush?", NOW)
    state.skip("a")
    assert state.rounds[-1].skipped is True
    assert state.current_turn == "a"


def test_ended_session_is_terminal():
    state = _state()
    assert _code(lambda: state.end("z")) == "NOT_A_PLAYER"
    state.end("a")
    assert _code(lambda: state.choose("b", Choice.TRUTH, "?", NOW)) == "SESSION_ENDED"


def test_sessions_need_a_connection(client, signup):
    a, b = signup("Aarav"), signup("Diya")
    r = client.post("/api/truth-dare/sessions", json={"opponent_id": b.id}, headers=a.headers)
    assert r.status_code == 403
    assert r.json()["code"] == "NOT_CONNECTED"


def test_full_round(client, signup, connect):
    a, b = signup("Aarav"), signup("Diya")
    connect(a, b)

    session = client.post("/api/truth-dare/sessions", json={"opponent_id": b.id}, headers=a.headers).json()
    assert session["current_turn"] == b.id
    again = client.post("/api/truth-dare/sessions", json={"opponent_id": a.id}, headers=b.headers).json()
    assert again["id"] == session["id"]

    url = f"/api/truth-dare/sessions/{session['id']}"
    r = client.post(f"{url}/choice", json={"choice": "dare"}, headers=b.headers).json()
    assert r["rounds"][0]["question"] in DARE_CHALLENGES
    assert r["current_turn"] == b.id

    assert client.post(f"{url}/complete", headers=b.headers).json()["code"] == "ASKER_CANNOT_RESOLVE"
    r = client.post(f"{url}/complete", headers=a.headers).json()
    assert r["current_turn"] == a.id
    assert r["rounds"][0]["completed"] is True

    r = client.post(f"{url}/choice", json={"choice": "truth", "question": "Favourite prof?"}, headers=a.headers)
    assert r.json()["rounds"][1]["question"] == "Favourite prof?"
    r = client.post(f"{url}/answer", json={"answer": "Dr. Rao"}, headers=b.headers).json()
    assert r["rounds"][1]["answer"] == "Dr. Rao"
    assert r["current_turn"] == b.id

    [active] = client.get("/api/truth-dare/sessions/active", headers=a.headers).json()
    assert active["opponent"]["id"] == b.id

    assert client.post(f"{url}/end", headers=a.headers).json()["status"] == "completed"
    assert client.get("/api/truth-dare/sessions/active", headers=a.headers).json() == []
    r = client.post(f"{url}/choice", json={"choice": "truth"}, headers=b.headers)
    assert r.json()["code"] == "SESSION_ENDED"
