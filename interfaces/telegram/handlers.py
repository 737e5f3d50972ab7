from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, List

import telebot
from telebot.util import extract_arguments

from application.services import (
    FeedState,
    OperationResult,
    add_post,
    add_user,
    comment_on_post,
    edit_post,
    edit_user,
    get_all_posts,
    get_all_users,
    get_post_by_id,
    get_post_comments,
    get_user_by_id,
    get_user_by_name,
    search_post_by_title,
)
from domain.models import Comment, Post, User
from interfaces.telegram.command_args import (
    parse_add_post,
    parse_add_user,
    parse_comment,
    parse_edit_post,
    parse_edit_user,
    parse_query,
    parse_single_id,
)

logger = logging.getLogger(__name__)

USAGE: Dict[str, str] = {
    "add_user": "/add_user <name> <phone> <password>",
    "add_post": "/add_post <user_id> <title> | <content>",
    "edit_post": "/edit_post <post_id> <user_id> <password> <content>",
    "edit_user": "/edit_user <user_id> <password> <new name>",
    "comment": "/comment <post_id> <user_id> <password> <comment>",
    "posts": "/posts",
    "users": "/users",
    "post": "/post <id>",
    "user": "/user <id>",
    "search_posts": "/search_posts <query>",
    "search_users": "/search_users <query>",
    "comments": "/comments <post_id>",
}


def format_user(user: User) -> str:
    # Passwords are never echoed to the chat, redacted or not.
    return f"#{user.id} {user.name} (phone: {user.phone})"


def format_post(post: Post) -> str:
    return (
        f"#{post.id} {post.title}\n"
        f"{post.content}\n"
        f"by user #{post.user_id} | likes: {post.likes} | comments: {len(post.comments)}"
    )


def format_comments(comments: Dict[int, Comment]) -> str:
    return "\n".join(
        f"#{key} user #{c.creator_id}: {c.content}" for key, c in comments.items()
    )


def format_result(result: OperationResult) -> str:
    """Render a handler result as chat text."""

    if not result.success:
        return str(result.error)

    value = result.value
    if isinstance(value, User):
        return format_user(value)
    if isinstance(value, Post):
        return format_post(value)
    if isinstance(value, dict):
        return format_comments(value)
    if isinstance(value, list):
        lines: List[str] = [
            format_user(v) if isinstance(v, User) else format_post(v) for v in value
        ]
        return "\n\n".join(lines)
    return str(value)


def create_telegram_bot(bot_token: str, state: FeedState) -> telebot.TeleBot:
    """
    Configure and return a TeleBot instance wired to the application layer.

    This module contains only Telegram-specific concerns: parsing command
    arguments and rendering handler results as text.
    """

    # Handlers run on the polling thread, one at a time; the lock keeps each
    # operation whole even if messages are processed from several threads.
    bot = telebot.TeleBot(bot_token, threaded=False)
    operation_lock = threading.Lock()

    def register(command: str, action: Callable[[str], OperationResult]) -> None:
        @bot.message_handler(commands=[command])
        def handle(message):
            args = extract_arguments(message.text) or ""
            try:
                with operation_lock:
                    result = action(args)
            except ValueError as exc:
                bot.send_message(
                    message.chat.id, f"{exc}\nUsage: {USAGE[command]}"
                )
                return
            logger.debug("/%s -> success=%s", command, result.success)
            bot.send_message(message.chat.id, format_result(result))

    @bot.message_handler(commands=["start", "help"])
    def handle_help(message):
        bot.send_message(
            message.chat.id,
            "Social feed bot. Available commands:\n" + "\n".join(USAGE.values()),
        )

    register("add_user", lambda args: add_user(parse_add_user(args), state))
    register("add_post", lambda args: add_post(parse_add_post(args), state))
    register("edit_post", lambda args: edit_post(parse_edit_post(args), state))
    register("edit_user", lambda args: edit_user(parse_edit_user(args), state))
    register("comment", lambda args: comment_on_post(parse_comment(args), state))
    register("posts", lambda args: get_all_posts(state))
    register("users", lambda args: get_all_users(state))
    register("post", lambda args: get_post_by_id(parse_single_id(args), state))
    register("user", lambda args: get_user_by_id(parse_single_id(args), state))
    register(
        "search_posts", lambda args: search_post_by_title(parse_query(args), state)
    )
    register("search_users", lambda args: get_user_by_name(parse_query(args), state))
    register(
        "comments",
        lambda args: get_post_comments(parse_single_id(args, "post_id"), state),
    )

    return bot
