"""PostgreSQL repository implementations."""

from .account import PostgresAccountRepository

__all__ = ["PostgresAccountRepository"]
