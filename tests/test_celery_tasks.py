from connectibles.core.celery import celery_app
from connectibles.domains.feed import service as feed_service
from connectibles.tasks import cleanup


def test_spill_cleanup_scheduled_hourly():
    entry = celery_app.conf.beat_schedule["delete-old-spills"]
    assert entry["task"] == "connectibles.tasks.cleanup.delete_old_spills_task"
    assert entry["schedule"].minute == {0}


def test_cleanup_task_no_event_loop_crash(monkeypatch):
    calls = []

    async def fake_delete(hours):
        calls.append(hours)
        return 3

    monkeypatch.setattr(cleanup, "delete_old_spills", fake_delete)
    assert cleanup.delete_old_spills_task(24) == 3
    assert calls == [24]


def test_cleanup_task_default_window(monkeypatch):
    calls = []

    async def fake_delete(hours):
        calls.append(hours)
        return 0

    monkeypatch.setattr(cleanup, "delete_old_spills", fake_delete)
    cleanup.delete_old_spills_task()
    assert calls == [feed_service.settings.SPILL_TTL_HOURS]
