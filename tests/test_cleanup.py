import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from backend.app.core.cleanup import CleanupScheduler
from backend.app.state.store import GameRegistry


def finished_registry():
    registry = GameRegistry()
    registry.abandon_game(registry.create_game().id)
    registry.create_game()
    return registry


def test_run_once_sweeps_finished_games():
    registry = finished_registry()
    scheduler = CleanupScheduler(registry, interval=60)

    scheduler.run_once()

    assert len(registry) == 1


def test_scheduler_sweeps_periodically():
    registry = finished_registry()
    scheduler = CleanupScheduler(registry, interval=0.05)

    async def run():
        await scheduler.start()
        assert scheduler.running
        await asyncio.sleep(0.3)
        await scheduler.stop()

    asyncio.run(run())

    assert not scheduler.running
    assert len(registry) == 1


def test_stop_before_first_sweep_does_nothing():
    registry = finished_registry()
    scheduler = CleanupScheduler(registry, interval=60)

    async def run():
        await scheduler.start()
        await scheduler.stop()

    asyncio.run(run())

    assert len(registry) == 2


def test_failed_sweep_keeps_scheduler_alive():
    calls = []

    class FlakyRegistry:
        def cleanup_old_games(self):
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("boom")

    scheduler = CleanupScheduler(FlakyRegistry(), interval=0.05)

    async def run():
        await scheduler.start()
        await asyncio.sleep(0.3)
        alive = scheduler.running
        await scheduler.stop()
        return alive

    assert asyncio.run(run())
    assert len(calls) >= 2


def test_stop_without_start_is_noop():
    scheduler = CleanupScheduler(GameRegistry(), interval=60)
    asyncio.run(scheduler.stop())
    assert not scheduler.running
