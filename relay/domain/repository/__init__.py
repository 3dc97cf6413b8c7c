"""Domain repository interfaces."""

from relay.domain.repository.account import AccountRepository

__all__ = ["AccountRepository"]
