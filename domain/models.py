from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List

REDACTED_PASSWORD = "-"


@dataclass
class Comment:
    """
    A comment attached to a post.

    Comments have no identifier of their own: the key under which a comment
    is stored in its parent `Post.comments` mapping is drawn from the same
    global counter as user and post ids.
    """

    creator_id: int
    post_id: int
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "creator_id": self.creator_id,
            "post_id": self.post_id,
            "content": self.content,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Comment:
        return cls(
            creator_id=int(data["creator_id"]),
            post_id=int(data["post_id"]),
            content=data["content"],
        )


@dataclass
class Post:
    """
    A post owned by a user, embedding its comments.

    `user_id` is only checked when the post is created. `likes` is part of
    the stored record but no operation ever changes it.
    """

    id: int
    title: str
    content: str
    user_id: int
    comments: Dict[int, Comment] = field(default_factory=dict)
    likes: int = 0

    def to_dict(self) -> Dict[str, Any]:
        # JSON object keys must be strings; `from_dict` turns them back into ints.
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "user_id": self.user_id,
            "comments": {str(key): c.to_dict() for key, c in self.comments.items()},
            "likes": self.likes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Post:
        return cls(
            id=int(data["id"]),
            title=data["title"],
            content=data["content"],
            user_id=int(data["user_id"]),
            comments={
                int(key): Comment.from_dict(value)
                for key, value in data.get("comments", {}).items()
            },
            likes=int(data.get("likes", 0)),
        )


@dataclass
class User:
    """
    A member of the feed.

    `password` is a plaintext token compared for equality on mutations; it
    is not a security mechanism. `post_ids` is an informational back
    reference that no operation populates or checks against the post store.
    """

    id: int
    name: str
    phone: str
    password: str
    post_ids: List[int] = field(default_factory=list)

    def redacted(self) -> User:
        """Return a copy safe to hand to callers, with the password masked."""

        return replace(self, password=REDACTED_PASSWORD, post_ids=list(self.post_ids))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "password": self.password,
            "post_ids": list(self.post_ids),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> User:
        return cls(
            id=int(data["id"]),
            name=data["name"],
            phone=data["phone"],
            password=data["password"],
            post_ids=[int(post_id) for post_id in data.get("post_ids", [])],
        )
