"""
Gemini fallback executor.

run_with_fallback() tries each model in the preference list in order:
  - success returns immediately, later models are never bound
  - 404 (model not found) or 429 (quota exhausted) moves on to the next model
  - any other error stops the chain at once, since a different model name
    will not fix it
If nothing succeeds, a single AggregateGenerationError is raised.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from gemini.client import ClientFactory, make_client_factory
from gemini.config import GeminiSettings
from gemini.errors import (
    AggregateGenerationError,
    Attempt,
    FailureClassification,
    classify_failure,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FallbackResult:
    text: str
    model: str
    attempts: tuple[Attempt, ...]


async def run_with_fallback(
    prompt: str,
    preferences: Sequence[str],
    bind_client: ClientFactory,
) -> FallbackResult:
    """
    Generate text for prompt with the first model in preferences that works.

    Attempts are strictly sequential. Raises AggregateGenerationError
    carrying the last error, a hint for its classification and the full
    candidate list when the chain ends without a success.
    """
    attempts: list[Attempt] = []
    last_error: Optional[Exception] = None
    last_classification: Optional[FailureClassification] = None

    for model in preferences:
        logger.info("Using Gemini model: %s", model)
        try:
            text = await bind_client(model).generate(prompt)
        except Exception as exc:
            last_error = exc
            last_classification = classify_failure(exc)
            attempts.append(Attempt(model, last_classification, exc))

            if last_classification.retryable:
                logger.warning(
                    "Gemini model %r failed (%s), trying next in chain: %s",
                    model, last_classification.value, exc,
                )
                continue

            logger.exception("Gemini generate_content failed for %s, aborting chain", model)
            break

        attempts.append(Attempt(model))
        return FallbackResult(text=text, model=model, attempts=tuple(attempts))

    logger.error("No Gemini model produced a review. Tried: %s", ", ".join(preferences))
    raise AggregateGenerationError(
        candidates=preferences,
        attempts=attempts,
        cause=last_error,
        classification=last_classification,
    ) from last_error


class ReviewService:
    """
    Review generation context, built once at startup.

    Holds the resolved model preference list and the client factory. Shared
    across requests; nothing here changes after construction.
    """

    def __init__(self, models: Sequence[str], bind_client: ClientFactory):
        self._models = tuple(models)
        self._bind_client = bind_client

    @classmethod
    def from_settings(cls, settings: GeminiSettings) -> "ReviewService":
        return cls(settings.models, make_client_factory(settings))

    @property
    def models(self) -> tuple[str, ...]:
        return self._models

    async def review(self, code: str) -> FallbackResult:
        result = await run_with_fallback(code, self._models, self._bind_client)
        logger.info(
            "Review generated by %s after %d attempt(s)", result.model, len(result.attempts)
        )
        return result

    async def generate_review(self, code: str) -> str:
        """Return the review text, or raise AggregateGenerationError."""
        result = await self.review(code)
        return result.text
