"""Greeting and clarification responses picked from static phrase banks."""

import random
from typing import Optional, Sequence

from shopassist.application.models import Intent, ResponseEnvelope

DEFAULT_GREETING = "Hello! How can I assist you today?"
DEFAULT_CLARIFICATION = "Could you clarify your request?"


class PhrasePicker:
    """Uniform random selection over a non-empty phrase list."""

    def __init__(self, phrases: Sequence[str], rng: Optional[random.Random] = None):
        if not phrases:
            raise ValueError("phrase list must not be empty")
        self.phrases = tuple(phrases)
        self.rng = rng or random.SystemRandom()

    def pick(self) -> str:
        return self.phrases[self.rng.randrange(len(self.phrases))]


class GreetingResponder(PhrasePicker):
    def respond(self) -> ResponseEnvelope:
        return ResponseEnvelope(intent=Intent.GREETING, success=True, message=self.pick())


class ClarificationResponder(PhrasePicker):
    def respond(self, clarification: Optional[str] = None) -> ResponseEnvelope:
        return ResponseEnvelope(
            intent=Intent.UNCLEAR,
            success=True,
            message=self.pick(),
            requires_clarification=True,
            clarification=clarification or DEFAULT_CLARIFICATION,
        )
