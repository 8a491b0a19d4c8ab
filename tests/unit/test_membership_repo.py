"""MembershipRepository tests against a mocked AsyncSession."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from taskdeck.domain.enums import Role
from taskdeck.infrastructure.persistence.repositories.membership_repo import (
    MembershipRepository,
)


def _session_returning(result: MagicMock) -> AsyncMock:
    session = AsyncMock()
    session.execute = AsyncMock(return_value=result)
    return session


async def test_find_role_maps_row_to_role() -> None:
    result = MagicMock()
    result.scalar_one_or_none.return_value = "admin"
    repo = MembershipRepository(_session_returning(result))

    assert await repo.find_role("u1", "w1") is Role.ADMIN


async def test_find_role_returns_none_for_non_member() -> None:
    result = MagicMock()
    result.scalar_one_or_none.return_value = None
    repo = MembershipRepository(_session_returning(result))

    assert await repo.find_role("u1", "w1") is None


async def test_find_role_filters_by_user_and_workspace() -> None:
    result = MagicMock()
    result.scalar_one_or_none.return_value = None
    session = _session_returning(result)

    await MembershipRepository(session).find_role("u1", "w1")

    stmt = session.execute.await_args.args[0]
    sql = str(stmt)
    assert "workspace_member.user_id" in sql
    assert "workspace_member.workspace_id" in sql
    assert {"u1", "w1"} <= set(stmt.compile().params.values())


@pytest.mark.parametrize(("rowcount", "expected"), [(1, True), (0, False)])
async def test_set_role_and_remove_report_match(rowcount: int, expected: bool) -> None:
    result = MagicMock()
    result.rowcount = rowcount
    repo = MembershipRepository(_session_returning(result))

    assert await repo.set_role("u1", "w1", Role.MEMBER) is expected
    assert await repo.remove("u1", "w1") is expected


async def test_commit_commits_the_session() -> None:
    session = AsyncMock()
    await MembershipRepository(session).commit()
    session.commit.assert_awaited_once()
