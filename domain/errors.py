from __future__ import annotations

from dataclasses import dataclass


@dataclass
class FeedError:
    """
    Base for the error values returned by the application handlers.

    Errors are returned inside an `OperationResult`, never raised, so the
    interface layer can render them without exception handling.
    """

    msg: str

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        return f"{self.kind}: {self.msg}"


@dataclass
class NotFound(FeedError):
    """A referenced user/post is missing, or a listing or search came back empty."""


@dataclass
class AlreadyInit(FeedError):
    """Reserved for initialisation conflicts. No handler produces it."""


@dataclass
class InvalidPayload(FeedError):
    """Payload validation failed, or a store insert had an unexpected outcome."""


@dataclass
class Unauthorized(FeedError):
    """The supplied password does not match the stored one."""


class IdAllocationError(RuntimeError):
    """
    The id counter could not be read or advanced.

    Unlike `FeedError` values this is raised and not handled: without a
    working counter no entity can be created safely.
    """
