from __future__ import annotations

from dataclasses import dataclass
from typing import List


def _check_min_length(field_name: str, value: str, minimum: int) -> List[str]:
    if len(value) < minimum:
        return [f"{field_name}: length must be at least {minimum} (got {len(value)})"]
    return []


@dataclass
class UserPayload:
    """Data required to register a new user."""

    name: str
    phone: str
    password: str

    def validate(self) -> List[str]:
        return _check_min_length("name", self.name, 3) + _check_min_length(
            "phone", self.phone, 3
        )


@dataclass
class PostPayload:
    """Data required to publish a new post."""

    title: str
    content: str
    user_id: int

    def validate(self) -> List[str]:
        return _check_min_length("title", self.title, 3) + _check_min_length(
            "content", self.content, 6
        )


@dataclass
class EditPostPayload:
    post_id: int
    user_id: int
    content: str
    user_password: str


@dataclass
class EditUserPayload:
    user_id: int
    name: str
    password: str


@dataclass
class AddComment:
    """
    Data for `comment_on_post`.

    Carries no constraints of its own: comment text is stored as given.
    """

    post_id: int
    user_id: int
    comment: str
    user_password: str


@dataclass
class CommentPayload:
    """
    Constrained comment payload.

    Kept for interface compatibility; the comment handler takes
    `AddComment` and does not run these checks.
    """

    name: str
    user_id: int
    password: str
    user_password: str

    def validate(self) -> List[str]:
        return _check_min_length("name", self.name, 3) + _check_min_length(
            "password", self.password, 4
        )


@dataclass
class AccessPayload:
    # Not consumed by any handler.
    comment_id: int
    post_id: int
    comment_password: str
