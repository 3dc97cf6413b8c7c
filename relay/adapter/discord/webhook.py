"""Discord channel webhook delivery.

Deliveries are fire-and-forget: the caller schedules one and returns
immediately. Outcomes are logged; nothing is retried or persisted.
"""

import asyncio

import httpx
import logfire

from relay.domain.model import Notification


class NotificationDispatcher:
    """Base class for notification dispatchers."""

    async def deliver(self, notification: Notification, url: str) -> bool:
        """Deliver a notification and wait for the outcome.

        Returns:
            True if Discord accepted it
        """
        raise NotImplementedError

    def deliver_async(self, notification: Notification, url: str) -> None:
        """Schedule a delivery without waiting for it."""
        raise NotImplementedError

    async def aclose(self, timeout: float = 5.0) -> None:
        """Wait for in-flight deliveries, up to ``timeout`` seconds."""
        pass


class HttpNotificationDispatcher(NotificationDispatcher):
    """Posts embeds to a Discord webhook URL over HTTP."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Initialize dispatcher.

        Args:
            transport: Optional httpx transport (tests)
        """
        self.transport = transport
        # Strong references until done, so pending tasks are not collected
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of deliveries still in flight."""
        return len(self._tasks)

    async def deliver(self, notification: Notification, url: str) -> bool:
        """POST the embed payload and log the outcome."""
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(url, json=notification.to_payload())
        except httpx.HTTPError as e:
            logfire.error("Notification delivery failed", error=str(e))
            return False

        if not response.is_success:
            logfire.error(
                "Notification rejected",
                status_code=response.status_code,
                error=response.text,
            )
            return False

        logfire.info("Notification delivered", status_code=response.status_code)
        return True

    def deliver_async(self, notification: Notification, url: str) -> None:
        """Schedule delivery as a detached task on the running loop."""
        task = asyncio.create_task(self.deliver(notification, url))
        self._tasks.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logfire.warn("Notification delivery cancelled")
            return
        error = task.exception()
        if error is not None:
            logfire.error("Notification delivery crashed", error=str(error))

    async def aclose(self, timeout: float = 5.0) -> None:
        """Wait briefly for in-flight deliveries, then cancel the rest."""
        if not self._tasks:
            return
        tasks = list(self._tasks)
        _, still_pending = await asyncio.wait(tasks, timeout=timeout)
        for task in still_pending:
            task.cancel()
        if still_pending:
            logfire.warn("Abandoned in-flight notifications", count=len(still_pending))


class RecordingNotificationDispatcher(NotificationDispatcher):
    """Mock dispatcher that records deliveries instead of sending them."""

    def __init__(self) -> None:
        self.sent: list[tuple[Notification, str]] = []

    async def deliver(self, notification: Notification, url: str) -> bool:
        self.sent.append((notification, url))
        return True

    def deliver_async(self, notification: Notification, url: str) -> None:
        self.sent.append((notification, url))
