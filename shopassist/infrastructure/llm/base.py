"""Completion capability contracts consumed by the services."""

from typing import Protocol, Sequence

from shopassist.application.models import ConversationTurn


class CompletionClient(Protocol):
    """Given a system prompt, history and a user message, return text."""

    def complete(
        self,
        system_prompt: str,
        history: Sequence[ConversationTurn],
        user_message: str,
        *,
        temperature: float = 0.2,
        max_tokens: int = 1024,
        force_json: bool = False,
    ) -> str:
        ...


class ImageCompletionClient(Protocol):
    """Completion over a text prompt plus one base64-encoded image."""

    def complete_with_image(
        self,
        prompt: str,
        image_base64: str,
        *,
        temperature: float = 0.3,
        max_tokens: int = 1024,
        force_json: bool = False,
    ) -> str:
        ...
