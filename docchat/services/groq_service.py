"""Groq chat completion service (OpenAI-compatible API)."""
import logging
from typing import Dict, List, Optional

import openai
from openai import OpenAI

from docchat.core.config import Settings, settings as default_settings
from docchat.core.exceptions import CompletionError

logger = logging.getLogger(__name__)


class GroqService:
    """Service for interacting with the Groq chat completions API."""

    def __init__(self, settings: Optional[Settings] = None, client: Optional[OpenAI] = None):
        """Keep settings; the client is built on first use so a missing key only fails chat calls."""
        self.settings = settings or default_settings
        self.model = self.settings.GROQ_MODEL
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not self.settings.GROQ_API_KEY:
                raise CompletionError("GROQ_API_KEY environment variable is not set")
            self._client = OpenAI(
                api_key=self.settings.GROQ_API_KEY,
                base_url=self.settings.GROQ_BASE_URL,
                timeout=self.settings.GROQ_TIMEOUT,
                max_retries=0,
            )
        return self._client

    def complete(self, messages: List[Dict[str, str]]) -> str:
        """
        Send a conversation and return the assistant's reply.

        Args:
            messages: Ordered role/content dicts, system prompt first

        Returns:
            The reply text

        Raises:
            CompletionError: If the key is missing, the API fails, or the
                reply carries no content
        """
        client = self.client
        logger.info("Requesting completion from %s with %d message(s)", self.model, len(messages))

        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.settings.GROQ_TEMPERATURE,
                max_tokens=self.settings.GROQ_MAX_TOKENS,
            )
        except openai.APIStatusError as e:
            logger.error("GROQ API error details: %s", e.body)
            raise CompletionError(f"GROQ API error: {e.status_code} - {e.body}")
        except openai.APIError as e:
            logger.error("Error calling GROQ API: %s", e)
            raise CompletionError("Failed to get response from GROQ API")

        if not response.choices or response.choices[0].message.content is None:
            raise CompletionError("Invalid response from GROQ API")

        return response.choices[0].message.content
