"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services.

    A use case performs at most one account write, and always as its last
    step, so a failure anywhere earlier leaves the directory untouched.
    """

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
