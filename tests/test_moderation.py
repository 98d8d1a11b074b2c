import pytest

from connectibles.core.config import settings
from connectibles.domains.moderation import repository, service
from connectibles.domains.moderation.entities import EscalationLevel, escalation_for


def _report(client, reporter, target):
    return client.post(
        "/api/moderation/reports",
        json={"reported_user_id": target.id, "reason": "spam"},
        headers=reporter.headers,
    )


def test_escalation_fires_on_exact_counts():
    assert escalation_for(1).level == EscalationLevel.GENTLE_WARNING
    assert escalation_for(2) is None
    assert escalation_for(5).level == EscalationLevel.STRONG_WARNING
    assert escalation_for(8).level == EscalationLevel.FINAL_WARNING
    assert escalation_for(9) is None
    assert escalation_for(10).bans
    assert escalation_for(12).bans


def test_report_twice_fails(client, signup):
    a, b = signup("Aarav"), signup("Diya")
    assert _report(client, a, b).json() == {"report_count": 1}
    r = _report(client, a, b)
    assert r.status_code == 409
    assert r.json()["code"] == "ALREADY_REPORTED"


def test_self_and_unknown_reports(client, signup):
    a = signup("Aarav")
    assert _report(client, a, a).json()["code"] == "SELF_REPORT"
    r = client.post("/api/moderation/reports", json={"reported_user_id": "ghost"}, headers=a.headers)
    assert r.json()["code"] == "USER_NOT_FOUND"


def test_tenth_report_bans(client, signup):
    target = signup("Target")
    reporters = [signup(f"Reporter{i}") for i in range(10)]

    for reporter in reporters[:9]:
        _report(client, reporter, target)
    me = client.get("/api/profiles/me", headers=target.headers).json()
    assert me["is_banned"] is False
    types = [n["type"] for n in client.get("/api/notifications", headers=target.headers).json()]
    assert types.count("report_warning") == 3

    assert _report(client, reporters[9], target).json() == {"report_count": 10}
    me = client.get("/api/profiles/me", headers=target.headers).json()
    assert me["is_banned"] is True
    types = [n["type"] for n in client.get("/api/notifications", headers=target.headers).json()]
    assert "account_banned" in types


def test_banned_users_cannot_write(client, signup):
    a, b = signup("Aarav"), signup("Diya")
    client.portal.call(repository.ban_user, a.id)
    r = client.post("/api/connections/wave", json={"receiver_id": b.id}, headers=a.headers)
    assert r.status_code == 403
    assert r.json()["code"] == "USER_BANNED"


def test_report_queries(client, signup):
    a, b = signup("Aarav"), signup("Diya")
    _report(client, a, b)
    assert client.get(f"/api/moderation/reports/{b.id}/count").json() == {"count": 1}
    assert client.get(f"/api/moderation/reports/{b.id}/mine", headers=a.headers).json() == {"reported": True}
    assert client.get(f"/api/moderation/reports/{a.id}/mine", headers=b.headers).json() == {"reported": False}


async def _failing_notify(*args, **kwargs):
    raise RuntimeError("notification store unavailable")


def test_failed_escalation_leaves_no_report(client, signup, monkeypatch):
    a, b = signup("Aarav"), signup("Diya")
    monkeypatch.setattr(settings, "REPORT_BAN_THRESHOLD", 1)
    monkeypatch.setattr(service, "notify", _failing_notify)

    with pytest.raises(RuntimeError):
        _report(client, a, b)

    assert client.portal.call(repository.count_reports, b.id) == 0
    assert client.get("/api/profiles/me", headers=b.headers).json()["is_banned"] is False
    assert client.get(f"/api/moderation/reports/{b.id}/mine", headers=a.headers).json() == {"reported": False}


def test_report_can_be_retried_after_failure(client, signup, monkeypatch):
    a, b = signup("Aarav"), signup("Diya")
    with monkeypatch.context() as m:
        m.setattr(service, "notify", _failing_notify)
        with pytest.raises(RuntimeError):
            _report(client, a, b)

    assert _report(client, a, b).json() == {"report_count": 1}
    types = [n["type"] for n in client.get("/api/notifications", headers=b.headers).json()]
    assert types == ["report_warning"]
