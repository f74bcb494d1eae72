"""
Application-layer exceptions.

Part of LL-101: Workout session lifecycle

These exceptions are used across application and infrastructure layers.
They are translated to HTTP responses by the handlers registered in
backend.main, never inside use cases.
"""

from typing import Optional


class SessionTrackingError(Exception):
    """Base class for errors raised by session tracking operations."""

    def __init__(
        self,
        message: str,
        *,
        entity: Optional[str] = None,
        entity_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.entity = entity
        self.entity_id = entity_id


class NotFoundError(SessionTrackingError):
    """Addressed entity does not exist or is not owned by the caller."""

    def __init__(self, entity: str, entity_id: object):
        super().__init__(
            f"{entity} {entity_id} not found",
            entity=entity,
            entity_id=str(entity_id),
        )


class InvalidStateError(SessionTrackingError):
    """Operation is not allowed in the entity's current state.

    Raised for lifecycle violations such as patching a completed session
    or completing a session twice.
    """

    def __init__(
        self,
        message: str,
        *,
        entity: Optional[str] = None,
        entity_id: Optional[str] = None,
        current_status: Optional[str] = None,
    ):
        super().__init__(message, entity=entity, entity_id=entity_id)
        self.current_status = current_status


class UnauthorizedError(SessionTrackingError):
    """No caller identity was supplied."""

    def __init__(self, message: str = "User identity is required"):
        super().__init__(message)


class RepositoryError(SessionTrackingError):
    """Storage failure while persisting or loading sessions.

    Raised by infrastructure adapters when an RPC or query fails for a
    reason that is not a lifecycle violation.
    """

    pass
