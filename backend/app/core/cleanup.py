import asyncio
import logging

from .config import settings
from ..state.store import GameRegistry, registry

logger = logging.getLogger("game.cleanup")


class CleanupScheduler:
    """
    Periodically sweeps finished games out of the registry on the event loop.
    """

    def __init__(self, registry: GameRegistry, interval: float):
        self.registry = registry
        self.interval = interval
        self.stop_event = None
        self._worker_task = None

    @property
    def running(self) -> bool:
        return self._worker_task is not None and not self._worker_task.done()

    async def start(self):
        # Events bind to the running loop, so a fresh one per start
        self.stop_event = asyncio.Event()
        self._worker_task = asyncio.create_task(self._worker())
        logger.info(f"Cleanup scheduler started (every {self.interval}s)")

    async def stop(self):
        if self._worker_task:
            self.stop_event.set()
            await self._worker_task
            self._worker_task = None
            logger.info("Cleanup scheduler stopped")

    def run_once(self):
        self.registry.cleanup_old_games()

    async def _worker(self):
        while not self.stop_event.is_set():
            try:
                await asyncio.wait_for(self.stop_event.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                try:
                    self.run_once()
                except Exception as e:
                    logger.error(f"Cleanup sweep failed: {e}", exc_info=True)
            except asyncio.CancelledError:
                break


cleanup_scheduler = CleanupScheduler(registry, settings.CLEANUP_INTERVAL_SECONDS)
