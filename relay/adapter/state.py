"""In-memory OAuth state (CSRF) token store.

State tokens live for a single authorization round trip. They are held in
process memory, so a multi-instance deployment needs a shared store instead.
"""

import asyncio
import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import logfire

from relay.domain.value import AuthProvider

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PendingState:
    """Issued state token awaiting its callback.

    Attributes:
        token: The state value sent to the provider
        issued_at: When the token was issued
        provider: Provider the token was issued for (None: any)
        subject: Identity bound to the flow, e.g. the Discord ID for linkage
    """

    token: str
    issued_at: datetime
    provider: AuthProvider | None = None
    subject: str | None = None


class OAuthStateStore:
    """Single-use, time-limited OAuth state tokens.

    All methods are synchronous and must be called from the event loop
    thread. The optional sweeper task removes tokens whose callback never
    arrived.
    """

    def __init__(self, ttl_seconds: int = 600, clock: Clock = _utcnow) -> None:
        """Initialize the store.

        Args:
            ttl_seconds: Token lifetime
            clock: Source of the current time
        """
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._states: dict[str, PendingState] = {}
        self._sweeper: asyncio.Task | None = None

    def __len__(self) -> int:
        return len(self._states)

    def issue(
        self, provider: AuthProvider | None = None, subject: str | None = None
    ) -> str:
        """Issue a new 256-bit state token.

        Args:
            provider: Provider the token is for
            subject: Identity to bind to the flow

        Returns:
            Hex-encoded token
        """
        token = secrets.token_hex(32)
        self._states[token] = PendingState(
            token=token,
            issued_at=self._clock(),
            provider=provider,
            subject=subject,
        )
        return token

    def consume(self, token: str) -> bool:
        """Validate and delete a token.

        Returns:
            True if the token existed and had not expired
        """
        return self.redeem(token) is not None

    def redeem(
        self, token: str, provider: AuthProvider | None = None
    ) -> PendingState | None:
        """Validate and delete a token, returning what was bound to it.

        A token issued for a different provider is rejected and still
        deleted.

        Args:
            token: State value from the callback
            provider: Provider handling the callback

        Returns:
            The pending state, or None if the token is invalid
        """
        pending = self._states.pop(token, None)
        if pending is None:
            logfire.warn("OAuth state not found", provider=_provider_name(provider))
            return None

        if self._clock() - pending.issued_at > self._ttl:
            logfire.info(
                "OAuth state expired",
                provider=_provider_name(provider),
                issued_at=pending.issued_at.isoformat(),
            )
            return None

        if pending.provider is not None and provider is not None:
            if pending.provider != provider:
                logfire.warn(
                    "OAuth state provider mismatch",
                    expected=pending.provider.value,
                    provider=provider.value,
                )
                return None

        return pending

    def sweep(self) -> int:
        """Remove expired tokens.

        Returns:
            Number of tokens removed
        """
        cutoff = self._clock() - self._ttl
        expired = [t for t, p in self._states.items() if p.issued_at < cutoff]
        for token in expired:
            self._states.pop(token, None)
        if expired:
            logfire.debug("Swept expired OAuth states", count=len(expired))
        return len(expired)

    def start_sweeper(self, interval_seconds: float) -> None:
        """Start the periodic sweep task on the running loop."""
        if self._sweeper is not None and not self._sweeper.done():
            return
        self._sweeper = asyncio.create_task(self._sweep_forever(interval_seconds))

    async def stop_sweeper(self) -> None:
        """Cancel the sweep task and wait for it to finish."""
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        try:
            await self._sweeper
        except asyncio.CancelledError:
            pass
        self._sweeper = None

    async def _sweep_forever(self, interval_seconds: float) -> None:
        while True:
            await asyncio.sleep(interval_seconds)
            self.sweep()


def _provider_name(provider: AuthProvider | None) -> str | None:
    return provider.value if provider else None
