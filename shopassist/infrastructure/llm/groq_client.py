"""Groq LLM client wrapper."""

from typing import Any, Dict, List, Optional, Sequence

from groq import Groq
from groq import APIError

from shopassist.application.exceptions import CompletionError
from shopassist.application.models import ConversationTurn
from shopassist.config.settings import Settings
from shopassist.config.logging_config import get_logger

logger = get_logger(__name__)


def to_image_url(image_base64: str) -> str:
    """Wrap raw base64 data in a data URL unless it already is one."""
    if image_base64.startswith("data:"):
        return image_base64
    return f"data:image/jpeg;base64,{image_base64}"


class GroqClient:
    """Wrapper for the Groq chat completion API bound to one model."""

    def __init__(self, settings: Settings, model: str, client: Optional[Groq] = None):
        """
        Initialize Groq client.

        Args:
            settings: Application settings (API key)
            model: Groq model name used for every call of this client
            client: Pre-built SDK client, mainly for tests

        Raises:
            ValueError: If no API key is configured and no client is given
        """
        if client is None:
            if not settings.groq_api_key:
                raise ValueError("GROQ_API_KEY is required")
            client = Groq(api_key=settings.groq_api_key)
        self.client = client
        self.model = model
        logger.info(f"Groq client initialized with model: {self.model}")

    def chat_completion(
        self,
        messages: List[Dict[str, Any]],
        temperature: float = 0,
        max_tokens: int = 1024,
        force_json: bool = False,
    ) -> str:
        """
        Call Groq chat completion API once.

        Args:
            messages: List of message dictionaries with 'role' and 'content'
            temperature: Sampling temperature (0-1)
            max_tokens: Output token budget
            force_json: Request a JSON object response

        Returns:
            Response content as string

        Raises:
            CompletionError: On API failure or empty content
        """
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "stream": False,
        }
        if force_json:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = self.client.chat.completions.create(**kwargs)
        except APIError as e:
            logger.error(f"Groq API error ({self.model}): {e}")
            raise CompletionError(f"Groq API failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise CompletionError("Empty response from Groq API")
        return content.strip()

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
        """Run a system prompt + history + user message completion."""
        messages = [{"role": "system", "content": system_prompt}]
        messages.extend(turn.as_message() for turn in history)
        messages.append({"role": "user", "content": user_message})
        return self.chat_completion(
            messages,
            temperature=temperature,
            max_tokens=max_tokens,
            force_json=force_json,
        )

    def complete_with_image(
        self,
        prompt: str,
        image_base64: str,
        *,
        temperature: float = 0.3,
        max_tokens: int = 1024,
        force_json: bool = False,
    ) -> str:
        """Run a single-turn completion over a text prompt and one image."""
        messages = [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt},
                    {"type": "image_url", "image_url": {"url": to_image_url(image_base64)}},
                ],
            }
        ]
        return self.chat_completion(
            messages,
            temperature=temperature,
            max_tokens=max_tokens,
            force_json=force_json,
        )
