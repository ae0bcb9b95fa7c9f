"""Tests for the session registry."""

import pytest

from advisor.domain.context.state.session_manager import SessionManager
from advisor.domain.exceptions import SessionExistsError, SessionNotFoundError, SessionError


class TestSessionManager:
    """Tests for SessionManager."""

    @pytest.mark.asyncio
    async def test_create_and_get(self, clock):
        manager = SessionManager(clock=clock)

        memory = await manager.create_session("abc")

        assert memory.session_id == "abc"
        assert await manager.get_session("abc") is memory
        assert memory.get_context().created_at == clock()

    @pytest.mark.asyncio
    async def test_generated_id(self):
        manager = SessionManager()
        memory = await manager.create_session()
        assert memory.session_id.startswith("session_")
        assert await manager.get_session(memory.session_id) is memory

    @pytest.mark.asyncio
    async def test_duplicate_rejected(self):
        manager = SessionManager()
        await manager.create_session("abc")

        with pytest.raises(SessionExistsError) as exc_info:
            await manager.create_session("abc")

        assert exc_info.value.details == {"session_id": "abc"}

    @pytest.mark.asyncio
    async def test_sessions_are_isolated(self):
        manager = SessionManager()
        first = await manager.create_session("a")
        second = await manager.create_session("b")

        first.add_user_concern("pricing")

        assert second.get_user_concerns() == []

    @pytest.mark.asyncio
    async def test_end_session(self):
        manager = SessionManager()
        await manager.create_session("abc")

        assert await manager.end_session("abc") is True
        assert await manager.end_session("abc") is False

        with pytest.raises(SessionNotFoundError):
            await manager.get_session("abc")

        # The id can be reused once ended
        memory = await manager.create_session("abc")
        assert memory.get_user_concerns() == []

    @pytest.mark.asyncio
    async def test_missing_session_is_session_error(self):
        with pytest.raises(SessionError):
            await SessionManager().get_session("nope")

    @pytest.mark.asyncio
    async def test_active_sessions_snapshot(self, clock):
        manager = SessionManager(clock=clock)
        memory = await manager.create_session("abc")
        memory.update_idea({"description": "Idea"})
        memory.add_todo("A", "Doing A")

        sessions = await manager.get_all_active_sessions()

        assert list(sessions) == ["abc"]
        assert sessions["abc"]["has_idea"] is True
        assert sessions["abc"]["todos"]["total"] == 1
        assert sessions["abc"]["created_at"] == clock().isoformat()
