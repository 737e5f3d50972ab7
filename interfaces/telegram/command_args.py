from __future__ import annotations

from domain.payloads import (
    AddComment,
    EditPostPayload,
    EditUserPayload,
    PostPayload,
    UserPayload,
)


def _parse_id(value: str, name: str) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None
    if parsed < 0:
        raise ValueError(f"{name} must not be negative, got {parsed}")
    return parsed


def parse_add_user(args: str) -> UserPayload:
    """
    Parse `/add_user` arguments.

    Format: <name> <phone> <password>
    """

    parts = args.split()
    if len(parts) != 3:
        raise ValueError(f"Invalid add_user arguments: {args!r}")
    name, phone, password = parts
    return UserPayload(name=name, phone=phone, password=password)


def parse_add_post(args: str) -> PostPayload:
    """
    Parse `/add_post` arguments.

    Format: <user_id> <title> | <content>
    The title may contain spaces; everything after the first `|` is content.
    """

    head, sep, content = args.partition("|")
    parts = head.split(maxsplit=1)
    if not sep or len(parts) != 2:
        raise ValueError(f"Invalid add_post arguments: {args!r}")
    user_id = _parse_id(parts[0], "user_id")
    return PostPayload(title=parts[1].strip(), content=content.strip(), user_id=user_id)


def parse_edit_post(args: str) -> EditPostPayload:
    """Format: <post_id> <user_id> <password> <content...>"""

    parts = args.split(maxsplit=3)
    if len(parts) != 4:
        raise ValueError(f"Invalid edit_post arguments: {args!r}")
    return EditPostPayload(
        post_id=_parse_id(parts[0], "post_id"),
        user_id=_parse_id(parts[1], "user_id"),
        user_password=parts[2],
        content=parts[3],
    )


def parse_edit_user(args: str) -> EditUserPayload:
    """Format: <user_id> <password> <name...>"""

    parts = args.split(maxsplit=2)
    if len(parts) != 3:
        raise ValueError(f"Invalid edit_user arguments: {args!r}")
    return EditUserPayload(
        user_id=_parse_id(parts[0], "user_id"),
        password=parts[1],
        name=parts[2],
    )


def parse_comment(args: str) -> AddComment:
    """Format: <post_id> <user_id> <password> <comment...>"""

    parts = args.split(maxsplit=3)
    if len(parts) != 4:
        raise ValueError(f"Invalid comment arguments: {args!r}")
    return AddComment(
        post_id=_parse_id(parts[0], "post_id"),
        user_id=_parse_id(parts[1], "user_id"),
        user_password=parts[2],
        comment=parts[3],
    )


def parse_single_id(args: str, name: str = "id") -> int:
    parts = args.split()
    if len(parts) != 1:
        raise ValueError(f"Expected a single {name}, got {args!r}")
    return _parse_id(parts[0], name)


def parse_query(args: str) -> str:
    query = args.strip()
    if not query:
        raise ValueError("Search query must not be empty")
    return query
