"""Client utilities for the Gemini language model."""

import logging

from google import genai
from google.genai import types

logger = logging.getLogger(__name__)


class GeminiClient:
    """Generate text from a prompt with a low-temperature Gemini model."""

    def __init__(self, api_key: str, model: str = "gemini-2.5-flash", temperature: float = 0.1, timeout: float = 30.0) -> None:
        self.model = model
        self.temperature = temperature
        self.timeout = timeout
        # HttpOptions.timeout is expressed in milliseconds.
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(timeout * 1000)),
        )

    def generate_text(self, prompt: str) -> str:
        response = self._client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(temperature=self.temperature),
        )
        text = response.text or ""
        logger.debug("Gemini returned %d characters", len(text))
        return str(text).strip()
