"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class UpstreamError(AdapterError):
    """Call to an external provider failed."""

    pass


class DiscordOAuthError(UpstreamError):
    """Discord OAuth or API call failed."""

    pass


class FoursquareOAuthError(UpstreamError):
    """Foursquare OAuth or API call failed."""

    pass
