"""Exception types shared across the incident bot."""


class IncidentBotError(Exception):
    """Base class for incident bot errors."""


class Unauthorized(IncidentBotError):
    """Inbound webhook did not carry the configured shared secret."""

    status_code = 401

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class ChatTransportError(IncidentBotError):
    """The chat API could not be reached or returned an unusable response."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"{operation} transport failure: {reason}")


class ChannelCreationError(IncidentBotError):
    """The chat API refused to create the incident channel (ok: false)."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Channel creation failed: {reason}")
