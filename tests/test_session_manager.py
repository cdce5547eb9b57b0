import pytest

from screener.services.session_manager import SessionManager
from screener.services.workflow import WorkflowController
from screener.utils.exceptions import SessionNotFoundError


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def manager(catalog_client, match_client, clock):
    return SessionManager(
        lambda session_id: WorkflowController(catalog_client, match_client, session_id=session_id),
        idle_timeout=60,
        max_sessions=3,
        clock=clock
    )


class TestSessionManager:
    """Test cases for the in-memory session registry"""

    @pytest.mark.asyncio
    async def test_create_loads_catalog(self, manager):
        controller = await manager.create_session()

        assert controller.catalog_loaded is True
        assert manager.get(controller.session_id) is controller
        assert len(manager) == 1

    @pytest.mark.asyncio
    async def test_close(self, manager):
        controller = await manager.create_session()

        manager.close(controller.session_id)

        assert len(manager) == 0
        with pytest.raises(SessionNotFoundError):
            manager.close(controller.session_id)

    @pytest.mark.asyncio
    async def test_idle_session_is_dropped(self, manager, clock):
        controller = await manager.create_session()

        clock.now = 61

        with pytest.raises(SessionNotFoundError):
            manager.get(controller.session_id)
        assert len(manager) == 0

    @pytest.mark.asyncio
    async def test_get_keeps_session_alive(self, manager, clock):
        controller = await manager.create_session()

        clock.now = 50
        manager.get(controller.session_id)
        clock.now = 100

        assert manager.get(controller.session_id) is controller

    @pytest.mark.asyncio
    async def test_dropped_session_releases_resume(self, manager, clock, resume):
        controller = await manager.create_session()
        controller.select_resume(resume)

        clock.now = 61

        assert manager.evict_idle() == 1
        assert manager.session_ids() == []

    @pytest.mark.asyncio
    async def test_limit_drops_least_recently_used(self, manager, clock):
        first = await manager.create_session()
        clock.now = 1
        second = await manager.create_session()
        clock.now = 2
        third = await manager.create_session()

        clock.now = 3
        manager.get(first.session_id)
        clock.now = 4
        fourth = await manager.create_session()

        assert len(manager) == 3
        assert second.session_id not in manager.session_ids()
        assert set(manager.session_ids()) == {first.session_id, third.session_id, fourth.session_id}

    @pytest.mark.asyncio
    async def test_session_ids_skip_idle_sessions(self, manager, clock):
        stale = await manager.create_session()
        clock.now = 30
        fresh = await manager.create_session()

        clock.now = 75

        assert manager.session_ids() == [fresh.session_id]
        with pytest.raises(SessionNotFoundError):
            manager.get(stale.session_id)
