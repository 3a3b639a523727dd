"""Gemini LLM client wrapper."""

import threading
from typing import Any, Dict, List, Optional, Sequence

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from shopassist.application.exceptions import CompletionError
from shopassist.application.models import ConversationTurn, Role
from shopassist.config.settings import Settings
from shopassist.config.logging_config import get_logger

logger = get_logger(__name__)

# Gemini contents only know "user" and "model"; caller system turns are sent as user content
_GEMINI_ROLES = {Role.USER: "user", Role.ASSISTANT: "model", Role.SYSTEM: "user"}


def build_contents(history: Sequence[ConversationTurn], user_message: str) -> List[Dict[str, Any]]:
    """Convert history plus the new message into Gemini chat contents."""
    contents = [
        {"role": _GEMINI_ROLES[turn.role], "parts": [{"text": turn.content}]}
        for turn in history
    ]
    contents.append({"role": "user", "parts": [{"text": user_message}]})
    return contents


class GeminiClient:
    """Thin wrapper around the Gemini SDK bound to one model."""

    def __init__(self, settings: Settings, model: Optional[str] = None):
        """
        Configure the Gemini SDK.

        Args:
            settings: Application settings (API key, default model)
            model: Model name override

        Raises:
            ValueError: If GOOGLE_API_KEY is missing
        """
        if not settings.google_api_key:
            raise ValueError("GOOGLE_API_KEY is required")
        genai.configure(api_key=settings.google_api_key)
        self.model = model or settings.gemini_model
        self._models: Dict[str, genai.GenerativeModel] = {}
        self._lock = threading.Lock()
        logger.info(f"Gemini client initialized with model: {self.model}")

    def _get_model(self, system_prompt: str) -> genai.GenerativeModel:
        # Keyed on the service prompt only, never on caller-supplied text
        with self._lock:
            model = self._models.get(system_prompt)
            if model is None:
                model = genai.GenerativeModel(self.model, system_instruction=system_prompt)
                self._models[system_prompt] = model
            return model

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
        """
        Generate a response from a system prompt, history and user message.

        Raises:
            CompletionError: On API failure, blocked output or empty text
        """
        generation_config: Dict[str, Any] = {
            "temperature": temperature,
            "max_output_tokens": max_tokens,
        }
        if force_json:
            generation_config["response_mime_type"] = "application/json"

        model = self._get_model(system_prompt)
        try:
            response = model.generate_content(
                build_contents(history, user_message),
                generation_config=generation_config,
            )
            # .text raises ValueError when the candidate was blocked
            text = response.text
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Gemini API error ({self.model}): {e}")
            raise CompletionError(f"Gemini API failed: {e}") from e
        except ValueError as e:
            logger.error(f"Gemini returned no usable text: {e}")
            raise CompletionError(f"Gemini returned no text: {e}") from e

        if not text or not text.strip():
            raise CompletionError("Empty response from Gemini API")
        return text.strip()
