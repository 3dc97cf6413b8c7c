"""Dependency injection module."""

from typing import Type

from relay.util.di.application import ProdApplicationProvider
from relay.util.di.base import Component, ProviderBase
from relay.util.di.core import ProdConfigProvider
from relay.util.di.domain import ProdDomainProvider
from relay.util.di.infrastructure import (
    DiscordProvider,
    FoursquareProvider,
    NotificationProvider,
    OAuthAggregatorProvider,
    PersistenceProvider,
    ProdDiscordProvider,
    ProdFoursquareProvider,
    ProdNotificationProvider,
    ProdPersistenceProvider,
)

# Single list - all providers treated uniformly
PROVIDERS: list[Type[ProviderBase]] = [
    # Core providers (not mockable)
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Infrastructure components (mockable)
    DiscordProvider,
    FoursquareProvider,
    NotificationProvider,
    PersistenceProvider,
    # OAuth aggregator (combines OAuth clients and state store)
    OAuthAggregatorProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Get appropriate provider class.

    A provider without subclasses is concrete and used as-is. A provider
    with subclasses is a mockable component; the implementation is picked by
    its ``__is_mock__`` flag.

    Args:
        base: Provider base class
        use_mock: Whether to use mock implementation

    Returns:
        Provider class (not instantiated)

    Raises:
        ValueError: If requested implementation not found
    """
    subclasses = base.__subclasses__()

    if not subclasses:
        return base

    impl = next(
        (c for c in subclasses if getattr(c, "__is_mock__", False) == use_mock),
        None,
    )

    if not impl:
        kind = "mock" if use_mock else "production"
        component_name = getattr(base, "__mock_component__", base.__name__)
        raise ValueError(f"No {kind} implementation for {component_name}")

    return impl


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    # Core providers
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    # Infrastructure base classes
    "DiscordProvider",
    "FoursquareProvider",
    "NotificationProvider",
    "OAuthAggregatorProvider",
    "PersistenceProvider",
    # Infrastructure implementations
    "ProdDiscordProvider",
    "ProdFoursquareProvider",
    "ProdNotificationProvider",
    "ProdPersistenceProvider",
]
