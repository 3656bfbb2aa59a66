from __future__ import annotations

from functools import lru_cache

from openai import AsyncOpenAI

from reply_advisor.config import settings
from reply_advisor.core.errors import ModelConfigurationError
from reply_advisor.utils.logging import get_logger


@lru_cache(maxsize=1)
def get_openai_client() -> AsyncOpenAI:
    """Return a singleton OpenAI client built from `APP_OPENAI_API_KEY`.

    Raises ModelConfigurationError when the key is missing; the failure is not
    cached, so a key added later is picked up by the next request.
    Retries are disabled so every generation is a single call.
    """
    logger = get_logger(__name__)
    if not settings.openai_api_key:
        logger.error("OpenAI API key is not configured")
        raise ModelConfigurationError("APP_OPENAI_API_KEY is not configured")
    logger.debug("Initializing OpenAI client with APP_OPENAI_API_KEY")
    return AsyncOpenAI(api_key=settings.openai_api_key, max_retries=0)
