"""Errors raised by collaborator adapters."""


class CollaboratorError(Exception):
    """Base class for failures reported by an external collaborator."""


class ConnectionFailure(CollaboratorError):
    """A collaborator could not be reached; callers may retry.

    Attributes:
        collaborator (str): Name of the unreachable service (e.g. "billing").
    """

    def __init__(self, collaborator: str, message: str | None = None) -> None:
        super().__init__(message or f"Could not connect to {collaborator}.")
        self.collaborator = collaborator
