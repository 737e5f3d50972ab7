from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, List, Optional

from domain.errors import FeedError, InvalidPayload, NotFound, Unauthorized
from domain.models import Comment, Post, User
from domain.payloads import (
    AddComment,
    EditPostPayload,
    EditUserPayload,
    PostPayload,
    UserPayload,
)
from domain.repositories import IdCounter, PostRepository, UserRepository

logger = logging.getLogger(__name__)

PASSWORD_MISMATCH = "Unauthorized, password does not match, try again"


@dataclass
class FeedState:
    """
    Everything the handlers read and mutate.

    Built once at process start (see `config.build_state`) and passed to
    every handler; the handlers themselves keep no state.
    """

    counter: IdCounter
    users: UserRepository
    posts: PostRepository


@dataclass
class OperationResult:
    """Generic result type: `value` on success, `error` otherwise."""

    success: bool
    value: Any = None
    error: Optional[FeedError] = None

    @classmethod
    def ok(cls, value: Any) -> OperationResult:
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: FeedError) -> OperationResult:
        return cls(success=False, error=error)


def _invalid_payload(errors: List[str]) -> OperationResult:
    msg = "; ".join(errors)
    logger.warning("Rejected payload: %s", msg)
    return OperationResult.fail(InvalidPayload(msg))


def _unauthorized(msg: str, user_id: int) -> OperationResult:
    logger.warning("Password mismatch for user %s", user_id)
    return OperationResult.fail(Unauthorized(msg))


# --- Mutations -------------------------------------------------------------


def add_user(payload: UserPayload, state: FeedState) -> OperationResult:
    """Register a new user. The created record is returned as stored."""

    errors = payload.validate()
    if errors:
        return _invalid_payload(errors)

    user_id = state.counter.next_id()
    # Reject a reused id before anything is written.
    if state.users.get(user_id) is not None:
        return OperationResult.fail(
            InvalidPayload(f"Could not add user name: {payload.name}")
        )

    user = User(
        id=user_id,
        name=payload.name,
        phone=payload.phone,
        password=payload.password,
        post_ids=[],
    )

    if state.users.insert(user_id, user) is not None:
        return OperationResult.fail(
            InvalidPayload(f"Could not add user name: {payload.name}")
        )

    logger.info("Added user %s (%s)", user_id, user.name)
    return OperationResult.ok(user)


def add_post(payload: PostPayload, state: FeedState) -> OperationResult:
    """
    Publish a post for an existing user.

    The id is allocated before the owner is looked up, so a missing user
    leaves a gap in the id sequence.
    """

    errors = payload.validate()
    if errors:
        return _invalid_payload(errors)

    post_id = state.counter.next_id()

    if state.users.get(payload.user_id) is None:
        return OperationResult.fail(
            NotFound(f"user of id: {payload.user_id} not found")
        )

    if state.posts.get(post_id) is not None:
        return OperationResult.fail(
            InvalidPayload(f"Could not add post title: {payload.title}")
        )

    post = Post(
        id=post_id,
        title=payload.title,
        content=payload.content,
        user_id=payload.user_id,
        comments={},
        likes=0,
    )

    if state.posts.insert(post_id, post) is not None:
        return OperationResult.fail(
            InvalidPayload(f"Could not add post title: {payload.title}")
        )

    logger.info("Added post %s by user %s", post_id, payload.user_id)
    return OperationResult.ok(post)


def edit_post(payload: EditPostPayload, state: FeedState) -> OperationResult:
    """
    Replace the content of a post, authorised by the user's password.

    The password is checked before the post is looked up, so a wrong
    password is reported even when the post does not exist.
    """

    user = state.users.get(payload.user_id)
    if user is None:
        return OperationResult.fail(
            NotFound(f"user of id: {payload.user_id} not found")
        )
    if user.password != payload.user_password:
        return _unauthorized(PASSWORD_MISMATCH, user.id)

    post = state.posts.get(payload.post_id)
    if post is None:
        return OperationResult.fail(
            NotFound(f"post of id: {payload.post_id} not found")
        )

    new_post = replace(post, content=payload.content)
    if state.posts.insert(post.id, new_post) is None:
        return OperationResult.fail(
            InvalidPayload(f"Could not edit post name: {post.title}")
        )

    logger.info("Edited post %s", post.id)
    return OperationResult.ok(new_post)


def edit_user(payload: EditUserPayload, state: FeedState) -> OperationResult:
    """
    Rename a user, authorised by their password.

    The updated record is returned without redaction.
    """

    user = state.users.get(payload.user_id)
    if user is None:
        return OperationResult.fail(
            NotFound(f"user of id: {payload.user_id} not found")
        )
    if user.password != payload.password:
        return _unauthorized(PASSWORD_MISMATCH, user.id)

    new_user = replace(user, name=payload.name)
    if state.users.insert(user.id, new_user) is None:
        return OperationResult.fail(
            InvalidPayload(f"Could not edit user title: {user.name}")
        )

    logger.info("Edited user %s", user.id)
    return OperationResult.ok(new_user)


def comment_on_post(payload: AddComment, state: FeedState) -> OperationResult:
    """
    Attach a comment to a post and write the post back.

    The comment key is taken from the counter before any check runs; every
    failure below therefore consumes an id.
    """

    comment_id = state.counter.next_id()

    user = state.users.get(payload.user_id)
    if user is None:
        return OperationResult.fail(
            NotFound(f"user of id: {payload.user_id} not found")
        )
    if user.password != payload.user_password:
        return _unauthorized(
            "Comment Access unauthorized, password does not match, try again",
            user.id,
        )

    post = state.posts.get(payload.post_id)
    if post is None:
        return OperationResult.fail(
            NotFound(f"Post of id: {payload.post_id} not found")
        )

    comments = dict(post.comments)
    comments[comment_id] = Comment(
        creator_id=payload.user_id,
        post_id=payload.post_id,
        content=payload.comment,
    )
    new_post = replace(post, comments=comments)

    if state.posts.insert(post.id, new_post) is None:
        return OperationResult.fail(InvalidPayload("Could not update comment"))

    logger.info("Added comment %s to post %s", comment_id, post.id)
    return OperationResult.ok("successfully added comment")


# --- Queries ---------------------------------------------------------------


def get_all_posts(state: FeedState) -> OperationResult:
    posts = state.posts.list_all()
    if not posts:
        return OperationResult.fail(NotFound("no Posts found, please add a post"))
    return OperationResult.ok(posts)


def get_post_by_id(post_id: int, state: FeedState) -> OperationResult:
    post = state.posts.get(post_id)
    if post is None:
        return OperationResult.fail(NotFound(f"post id:{post_id} does not exist"))
    return OperationResult.ok(post)


def search_post_by_title(search: str, state: FeedState) -> OperationResult:
    """Case-insensitive substring match over every post title."""

    query = search.lower()
    posts = [p for p in state.posts.list_all() if query in p.title.lower()]
    if not posts:
        return OperationResult.fail(
            NotFound(f"No posts for search: {query} could be found")
        )
    return OperationResult.ok(posts)


def get_post_comments(post_id: int, state: FeedState) -> OperationResult:
    """Return the comment mapping of a post. An empty mapping counts as missing."""

    post = state.posts.get(post_id)
    if post is None:
        return OperationResult.fail(NotFound(f"post id:{post_id} does not exist"))
    if not post.comments:
        return OperationResult.fail(NotFound("No comments found"))
    return OperationResult.ok(post.comments)


def get_all_users(state: FeedState) -> OperationResult:
    users = [u.redacted() for u in state.users.list_all()]
    if not users:
        return OperationResult.fail(NotFound("no Users found"))
    return OperationResult.ok(users)


def get_user_by_name(search: str, state: FeedState) -> OperationResult:
    query = search.lower()
    users = [
        u.redacted() for u in state.users.list_all() if query in u.name.lower()
    ]
    if not users:
        return OperationResult.fail(
            NotFound(f"No users for name: {query} could be found")
        )
    return OperationResult.ok(users)


def get_user_by_id(user_id: int, state: FeedState) -> OperationResult:
    user = state.users.get(user_id)
    if user is None:
        return OperationResult.fail(NotFound(f"user of id: {user_id} not found"))
    return OperationResult.ok(user.redacted())
