"""
Gemini model configuration.

Priority chain: best/newest model first, lighter / more available models last.
On 404 (model not found) or 429 (quota exhausted) the fallback executor
tries each model in order.

Override the primary model via GOOGLE_GEMINI_MODEL env var (e.g. in .env):
  GOOGLE_GEMINI_MODEL=gemini-2.0-flash
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from gemini.errors import ConfigurationError
from gemini.system_prompt import SYSTEM_PROMPT

# Priority chain: highest capability first, most available last
DEFAULT_MODELS = (
    "gemini-2.5-flash",
    "gemini-2.0-flash-lite",
    "gemini-flash-latest",
    "gemini-2.0-flash",
    "gemini-pro-latest",
)

DEFAULT_MAX_OUTPUT_TOKENS = 2048
DEFAULT_TEMPERATURE = 0.4

_KEY_VARS = ("GOOGLE_GEMINI_KEY", "GEMINI_API_KEY")


def resolve_preferences(
    defaults: Sequence[str],
    override: Optional[str] = None,
) -> tuple[str, ...]:
    """
    Build the ordered model preference list.

    The override, when given, always comes first. Duplicates are dropped
    keeping the first occurrence of each identifier.
    """
    chain = [override, *defaults] if override else list(defaults)
    models = tuple(dict.fromkeys(chain))
    if not models:
        raise ConfigurationError("No Gemini models configured: default list is empty and no override set.")
    return models


@dataclass(frozen=True)
class GeminiSettings:
    api_key: str
    models: tuple[str, ...]
    system_instruction: str = SYSTEM_PROMPT
    max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS
    temperature: float = DEFAULT_TEMPERATURE


def _parse(environ: Mapping[str, str], name: str, cast, default):
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        raise ConfigurationError(f"{name} must be a valid {cast.__name__}, got {raw!r}") from None


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    defaults: Sequence[str] = DEFAULT_MODELS,
) -> GeminiSettings:
    """
    Read configuration from the environment. Called once at startup.

    Raises ConfigurationError if no API key is set.
    """
    env = os.environ if environ is None else environ

    api_key = next((env[k].strip() for k in _KEY_VARS if env.get(k, "").strip()), None)
    if not api_key:
        raise ConfigurationError("GOOGLE_GEMINI_KEY is not set in the environment.")

    override = (env.get("GOOGLE_GEMINI_MODEL") or "").strip() or None

    return GeminiSettings(
        api_key=api_key,
        models=resolve_preferences(defaults, override),
        max_output_tokens=_parse(env, "GEMINI_MAX_OUTPUT_TOKENS", int, DEFAULT_MAX_OUTPUT_TOKENS),
        temperature=_parse(env, "GEMINI_TEMPERATURE", float, DEFAULT_TEMPERATURE),
    )
