from __future__ import annotations

from typing import TYPE_CHECKING, Any

from reply_advisor.core.errors import ModelGatewayError
from reply_advisor.utils.logging import get_logger

if TYPE_CHECKING:
    from openai import AsyncOpenAI  # type: ignore[import-not-found]

    from reply_advisor.core.schemas.image import ImageInput

logger = get_logger(__name__)

FAILURE_PREFIX = "Failed to generate replies"


class ModelGateway:
    """Sends one prompt, optionally with a screenshot, to the OpenAI Responses API."""

    def __init__(self, openai_client: AsyncOpenAI, model: str) -> None:
        self._client = openai_client
        self._model = model

    @staticmethod
    def _build_input(prompt: str, image: ImageInput | None) -> list[dict[str, Any]]:
        content: list[dict[str, Any]] = [{"type": "input_text", "text": prompt}]
        if image is not None:
            content.append({"type": "input_image", "image_url": image.as_data_url()})
        return [{"role": "user", "content": content}]

    async def generate(self, prompt: str, image: ImageInput | None = None) -> str:
        """Return the response text.

        Raises:
            ModelGatewayError: On any API or network failure. Not retried.
        """
        logger.info(
            "Requesting reply candidates",
            extra={
                "model": self._model,
                "prompt_chars": len(prompt),
                "has_image": image is not None,
            },
        )
        try:
            response = await self._client.responses.create(
                model=self._model,
                input=self._build_input(prompt, image),
            )
        except Exception as err:
            logger.error("Model request failed: %s", err, extra={"error_type": type(err).__name__})
            raise ModelGatewayError(f"{FAILURE_PREFIX}: {err}") from err

        text = response.output_text or ""
        logger.debug("Model response received", extra={"chars": len(text)})
        return text
