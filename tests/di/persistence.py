"""Mock persistence providers for testing."""

from dishka import Scope, provide

from relay.domain.repository import AccountRepository
from relay.persistence.repository.inmemory import InMemoryAccountRepository
from relay.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    APP scope: the directory lives as long as the container, so state
    written by one request is visible to the next. Each test builds its own
    container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_account_repository(self) -> AccountRepository:
        """Provide in-memory account repository."""
        return InMemoryAccountRepository()
