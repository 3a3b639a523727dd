import random

import pytest

from fakes import CLARIFICATIONS, GREETINGS, FixedRandom
from shopassist.application.models import Intent
from shopassist.application.services.responders import (
    DEFAULT_CLARIFICATION,
    ClarificationResponder,
    GreetingResponder,
    PhrasePicker,
)


def test_greeting_comes_from_bank():
    envelope = GreetingResponder(GREETINGS, FixedRandom(2)).respond()

    assert envelope.intent == Intent.GREETING
    assert envelope.success is True
    assert envelope.message == GREETINGS[2]


def test_greetings_stay_within_bank():
    responder = GreetingResponder(GREETINGS, random.Random(7))
    seen = {responder.respond().message for _ in range(50)}
    assert seen <= set(GREETINGS)


def test_clarification_with_model_question():
    envelope = ClarificationResponder(CLARIFICATIONS, FixedRandom(0)).respond("Which color?")

    assert envelope.intent == Intent.UNCLEAR
    assert envelope.message == CLARIFICATIONS[0]
    assert envelope.requires_clarification is True
    assert envelope.clarification == "Which color?"
    assert envelope.to_payload()["requiresClarification"] is True


def test_clarification_default_question():
    envelope = ClarificationResponder(CLARIFICATIONS, FixedRandom(0)).respond()
    assert envelope.clarification == DEFAULT_CLARIFICATION


def test_empty_bank_is_rejected():
    with pytest.raises(ValueError):
        PhrasePicker([])
