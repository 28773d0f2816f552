"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class InvalidDurationError(ValidationError):
    """Raised when a duration class is not one of the allowed values."""

    def __init__(self, days: int, allowed: list[int]):
        self.days = days
        self.allowed = allowed
        super().__init__(
            f"Invalid duration {days}; allowed: {', '.join(str(d) for d in allowed)}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class AlreadyUsedError(DomainError):
    """Raised when a code was already redeemed by another user."""

    def __init__(self, code: str, used_by: int | None):
        self.code = code
        self.used_by = used_by
        super().__init__(f"Code {code} already used by {used_by}")


class DuplicateError(DomainError):
    """Raised when a record with the same identity already exists."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} already exists: {identifier}")


class GatewayUnavailableError(DomainError):
    """Raised when the channel gateway call fails (transport or API error)."""

    pass


class RemovalFailedError(GatewayUnavailableError):
    """Raised when removing a member from the channel fails."""

    def __init__(self, user_id: int, reason: str):
        self.user_id = user_id
        self.reason = reason
        super().__init__(f"Failed to remove user {user_id}: {reason}")
