from __future__ import annotations

from typing import List, Optional, Protocol

from .models import Post, User


class IdCounter(Protocol):
    """
    The single id sequence shared by users, posts and comment keys.

    Implementations must persist the counter so that ids are never reused
    across restarts.
    """

    def next_id(self) -> int:
        """
        Return the current counter value and advance the stored counter by one.

        Raises `IdAllocationError` if the counter cannot be read or written.
        """

        ...


class UserRepository(Protocol):
    """
    Abstraction over user persistence.

    Implementations are responsible for:
    - Serialising `User` records so they round-trip without loss.
    - Hiding any SQL / driver details from the application layer.

    Records are stored as-is; password redaction is the caller's concern.
    """

    def insert(self, user_id: int, user: User) -> Optional[User]:
        """
        Store `user` at `user_id`, overwriting any existing record.

        Returns the record previously stored at that key, or None.
        """

        ...

    def get(self, user_id: int) -> Optional[User]:
        """Return the user with the given id, or None if not found."""

        ...

    def list_all(self) -> List[User]:
        """Return all users in ascending id order."""

        ...


class PostRepository(Protocol):
    """
    Abstraction over post persistence. Comments travel inside their post.
    """

    def insert(self, post_id: int, post: Post) -> Optional[Post]:
        ...

    def get(self, post_id: int) -> Optional[Post]:
        ...

    def list_all(self) -> List[Post]:
        ...
