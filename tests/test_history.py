import json

import pytest
from pydantic import ValidationError

from shopassist.application.models import ConversationTurn, Role
from shopassist.utils.history import sanitize_message_history


@pytest.mark.parametrize("value", [None, "hello", 42, {"role": "user", "content": "hi"}, b"bytes"])
def test_non_list_history_becomes_empty(value):
    assert sanitize_message_history(value) == []


def test_string_content_passes_through_in_order():
    history = [
        {"role": "user", "content": "I need a gift"},
        {"role": "assistant", "content": "Who is it for?"},
        {"role": "user", "content": "My sister"},
    ]

    turns = sanitize_message_history(history)

    assert [t.content for t in turns] == ["I need a gift", "Who is it for?", "My sister"]
    assert [t.role for t in turns] == [Role.USER, Role.ASSISTANT, Role.USER]


@pytest.mark.parametrize("entry", [{"content": "x"}, {"role": "", "content": "x"}, {"role": None, "content": "x"}])
def test_missing_role_defaults_to_user(entry):
    assert sanitize_message_history([entry])[0].role == Role.USER


def test_unknown_role_becomes_user():
    assert sanitize_message_history([{"role": "bot", "content": "x"}])[0].role == Role.USER


@pytest.mark.parametrize(
    "content",
    [{"products": [1, 2, 3]}, ["a", "b"], 12.5, None, True],
)
def test_structured_content_is_serialized_and_round_trips(content):
    turn = sanitize_message_history([{"role": "assistant", "content": content}])[0]

    assert isinstance(turn.content, str)
    assert json.loads(turn.content) == content


def test_non_mapping_entries_are_kept_as_user_turns():
    turns = sanitize_message_history(["plain text", 7])

    assert turns[0] == ConversationTurn(role=Role.USER, content="plain text")
    assert turns[1].content == "7"


def test_existing_turns_pass_through():
    turn = ConversationTurn(role=Role.SYSTEM, content="be brief")
    assert sanitize_message_history([turn]) == [turn]


def test_turns_are_immutable():
    turn = sanitize_message_history([{"role": "user", "content": "hi"}])[0]
    with pytest.raises(ValidationError):
        turn.content = "changed"
