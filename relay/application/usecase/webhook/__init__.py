"""Webhook use cases."""

from .process_checkin import ProcessCheckinUseCase

__all__ = ["ProcessCheckinUseCase"]
