"""
Exceptions raised by the role / permission layer.

Query operations never raise for unknown names: an unknown role or
permission simply does not match.  The errors below are programmer
errors (bad arguments, entities used outside a session).
"""


class WardenError(Exception):
    """Base class for every error raised by warden."""


class UnresolvableIdentifier(WardenError, TypeError):
    """A role / permission argument could not be turned into an integer id."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(
            f"Cannot resolve {type(value).__name__} {value!r} to an id — "
            "pass an entity, a mapping with an 'id' field, or an integer id"
        )


class DetachedOwner(WardenError):
    """An association was requested for an entity with no database session."""


class InvalidAbilityArgument(WardenError, ValueError):
    """`ability()` was called with an unsupported option value."""
