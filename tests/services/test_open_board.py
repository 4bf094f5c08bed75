"""Tests for the open_board session/board lifecycle."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from taskboard_cli.api.client import APIClient
from taskboard_cli.exceptions import NotAuthenticatedError
from taskboard_cli.services.board_service import open_board


@pytest.fixture
def mock_client():
    client = MagicMock(spec=APIClient)
    client.close = AsyncMock()
    return client


def _patch_session(user=None):
    session_patch = patch("taskboard_cli.services.board_service.SessionService")
    session_cls = session_patch.start()
    session = session_cls.return_value
    session.restore = AsyncMock(return_value=user)
    if user is None:
        session.require_user.side_effect = NotAuthenticatedError("Not logged in.")
    else:
        session.require_user.return_value = user
    return session_patch


@pytest.mark.asyncio
async def test_open_board_without_session_raises_and_closes(mock_client):
    session_patch = _patch_session()
    try:
        with pytest.raises(NotAuthenticatedError):
            async with open_board(client=mock_client):
                pytest.fail("board should not open")
    finally:
        session_patch.stop()

    mock_client.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_open_board_loads_and_tears_down(
    mock_client, store, user, notifier, fake_repositories
):
    store.seed_todo(user.id, "Buy milk")
    store.seed_category(user.id, "Casa")
    session_patch = _patch_session(user)
    repo_patches = [
        patch(f"taskboard_cli.services.board_service.{name}", factory)
        for name, factory in fake_repositories.items()
    ]
    for p in repo_patches:
        p.start()
    try:
        async with open_board(notifier=notifier, client=mock_client) as board:
            assert board.context.user == user
            assert [t.title for t in board.todos] == ["Buy milk"]
            assert [c.name for c in board.categories] == ["Casa"]
            assert board.context.is_loading is False
    finally:
        for p in repo_patches:
            p.stop()
        session_patch.stop()

    assert board.todos == []
    assert board.categories == []
    mock_client.close.assert_awaited_once()
