"""Discord embed notification built from a check-in."""

from typing import Any, Optional

from relay.domain.model.common import DomainModel


class EmbedField(DomainModel):
    """Embed field."""

    name: str
    value: str
    inline: Optional[bool] = None


class Notification(DomainModel):
    """Discord embed document."""

    title: Optional[str] = None
    description: Optional[str] = None
    color: Optional[int] = None
    timestamp: Optional[str] = None
    fields: list[EmbedField] = []

    def to_payload(self) -> dict[str, Any]:
        """Discord webhook body; unset optional members are omitted, not null."""
        return {"embeds": [self.model_dump(exclude_none=True)]}
