import pytest

from connectibles.core.database import session_scope
from connectibles.domains.auth import repository as user_repository


async def _nested_sessions():
    async with session_scope() as outer:
        async with session_scope() as inner:
            return outer is inner


async def _create_then_fail(email):
    async with session_scope():
        await user_repository.create_user(email, "Ghost")
        raise RuntimeError("abort")


async def _create_in_one_scope(first, second):
    async with session_scope():
        await user_repository.create_user(first, "First")
        await user_repository.create_user(second, "Second")


def test_nested_scope_joins_outer_session(client):
    assert client.portal.call(_nested_sessions) is True


def test_error_rolls_back_inner_writes(client):
    with pytest.raises(RuntimeError):
        client.portal.call(_create_then_fail, "ghost@spsu.ac.in")
    assert client.portal.call(user_repository.get_user_by_email, "ghost@spsu.ac.in") is None


def test_outer_scope_commits_inner_writes(client):
    client.portal.call(_create_in_one_scope, "one@spsu.ac.in", "two@spsu.ac.in")
    assert client.portal.call(user_repository.get_user_by_email, "one@spsu.ac.in").name == "First"
    assert client.portal.call(user_repository.get_user_by_email, "two@spsu.ac.in").name == "Second"
