"""Base class for domain services."""


class Service:
    """Marker base for the gate's domain services.

    A service owns the rules around one kind of record (codes,
    subscriptions, audit entries, invite links) and talks to repositories
    or the channel gateway; it never opens DI scopes or sends replies.
    """
