"""Conversation history sanitization."""

import json
from collections.abc import Mapping
from typing import Any, List

from shopassist.application.models import ConversationTurn, Role

_ROLES = {role.value for role in Role}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        # circular structures
        return str(value)


def _coerce_role(value: Any) -> Role:
    if isinstance(value, Role):
        return value
    if isinstance(value, str) and value in _ROLES:
        return Role(value)
    return Role.USER


def sanitize_message_history(message_history: Any) -> List[ConversationTurn]:
    """
    Normalize arbitrary prior-turn records into ConversationTurn objects.

    Anything that is not a list or tuple yields an empty history. Missing or
    unknown roles become "user"; non-string content is JSON-serialized so it
    can be loaded back into the original structure. Never raises.

    Args:
        message_history: Raw history as received from the caller

    Returns:
        Ordered list of ConversationTurn, oldest first
    """
    if not isinstance(message_history, (list, tuple)):
        return []

    turns = []
    for entry in message_history:
        if isinstance(entry, ConversationTurn):
            turns.append(entry)
            continue
        if isinstance(entry, Mapping):
            role = _coerce_role(entry.get("role"))
            content = _stringify(entry.get("content"))
        else:
            role = Role.USER
            content = _stringify(entry)
        turns.append(ConversationTurn(role=role, content=content))
    return turns
