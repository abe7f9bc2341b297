"""
Gemini model-bound client.

A fresh GeminiModelClient is bound for every attempt in the fallback chain,
so each attempt carries its own immutable model name and generation config.
The underlying google.genai.Client is built once and shared read-only.

Edge cases handled:
  - Safety filter blocks and empty responses (raised as EmptyResponseError)
  - Text split across several candidate parts
"""

import logging
from typing import Callable, Optional, Protocol

from google import genai
from google.genai import types

from gemini.config import GeminiSettings
from gemini.errors import EmptyResponseError

logger = logging.getLogger(__name__)


# ─── Safety settings (relaxed for code content) ───────────────────────

SAFETY_SETTINGS = [
    types.SafetySetting(category="HARM_CATEGORY_HARASSMENT", threshold="BLOCK_NONE"),
    types.SafetySetting(category="HARM_CATEGORY_HATE_SPEECH", threshold="BLOCK_NONE"),
    types.SafetySetting(category="HARM_CATEGORY_SEXUALLY_EXPLICIT", threshold="BLOCK_NONE"),
    types.SafetySetting(category="HARM_CATEGORY_DANGEROUS_CONTENT", threshold="BLOCK_NONE"),
]


class ModelClient(Protocol):
    model: str

    async def generate(self, prompt: str) -> str: ...


ClientFactory = Callable[[str], ModelClient]


# ─── Response extractor ───────────────────────────────────────────────

def extract_text(response) -> str:
    """
    Pull text from a Gemini response, handling:
      - Normal text responses
      - Safety-blocked prompts (no candidates, block_reason set)
      - Empty / malformed responses

    Raises EmptyResponseError when nothing usable came back.
    """
    # Fast path
    try:
        text = response.text
        if text and text.strip():
            return text.strip()
    except (ValueError, AttributeError):
        pass

    # Try extracting from candidates directly
    try:
        pieces = []
        for candidate in response.candidates or []:
            if candidate.content and candidate.content.parts:
                pieces.extend(
                    part.text for part in candidate.content.parts
                    if getattr(part, "text", None) and part.text.strip()
                )
            if pieces:
                return "".join(pieces).strip()
    except (AttributeError, TypeError):
        pass

    block_reason = getattr(getattr(response, "prompt_feedback", None), "block_reason", None)
    if block_reason:
        raise EmptyResponseError(f"Prompt was blocked by Gemini content filters ({block_reason})")
    raise EmptyResponseError("Gemini returned an empty response")


# ─── Bound client ─────────────────────────────────────────────────────

class GeminiModelClient:
    """One Gemini model with a fixed system instruction and generation config."""

    def __init__(self, client: genai.Client, model: str, config: types.GenerateContentConfig):
        self._client = client
        self.model = model
        self._config = config

    async def generate(self, prompt: str) -> str:
        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=self._config,
        )
        return extract_text(response)


def build_config(settings: GeminiSettings) -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        system_instruction=settings.system_instruction,
        safety_settings=SAFETY_SETTINGS,
        max_output_tokens=settings.max_output_tokens,
        temperature=settings.temperature,
    )


def make_client_factory(
    settings: GeminiSettings,
    client: Optional[genai.Client] = None,
) -> ClientFactory:
    """
    Return a function that binds a new GeminiModelClient per model name.

    The genai.Client is created once here from settings.api_key unless one
    is passed in.
    """
    client = client or genai.Client(api_key=settings.api_key)
    config = build_config(settings)

    def bind_client(model: str) -> GeminiModelClient:
        return GeminiModelClient(client, model, config)

    return bind_client
