"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Payload or schema mismatch.

    Always recoverable; callers map it to a safe uniform response.
    """

    pass


class AuthError(DomainError):
    """Authentication failed.

    Covers bad push secrets, unknown accounts, invalid sessions and invalid
    OAuth state. The message is for logs; external callers only ever see a
    uniform rejection.
    """

    pass


class InvalidStateError(AuthError):
    """OAuth state parameter is unknown, expired or already used."""

    def __init__(self) -> None:
        super().__init__("Invalid or expired state parameter")


class MembershipRequiredError(AuthError):
    """Discord user is not a member of the required guild."""

    def __init__(self, discord_user_id: str, guild_id: str) -> None:
        self.discord_user_id = discord_user_id
        self.guild_id = guild_id
        super().__init__(
            f"Discord user {discord_user_id} is not a member of guild {guild_id}"
        )


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class AlreadyLinkedError(BusinessRuleViolationError):
    """Foursquare account is already linked to a different Discord account."""

    def __init__(self, foursquare_user_id: str) -> None:
        self.foursquare_user_id = foursquare_user_id
        super().__init__(
            f"Foursquare user {foursquare_user_id} is linked to another account"
        )


class AccountExistsError(BusinessRuleViolationError):
    """An account with this Discord ID already exists."""

    def __init__(self, discord_user_id: str) -> None:
        self.discord_user_id = discord_user_id
        super().__init__(f"Account already exists: {discord_user_id}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
