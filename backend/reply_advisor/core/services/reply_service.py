from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from reply_advisor.core.services.corpus_service import (
    CHUNK_BYTES,
    MANUAL_FILENAME,
    MAX_CORPUS_CHARS,
    load_corpus,
)
from reply_advisor.core.services.prompt_service import (
    build_base_prompt,
    build_image_prompt,
    build_text_prompt,
)

if TYPE_CHECKING:
    import random
    from pathlib import Path

    from reply_advisor.core.schemas.image import ImageInput
    from reply_advisor.core.services.model_gateway import ModelGateway


class ReplyService:
    """Builds the reply prompt for one incoming message and asks the model for candidates."""

    def __init__(
        self,
        gateway: ModelGateway,
        *,
        corpus_dir: Path,
        manual_filename: str = MANUAL_FILENAME,
        max_corpus_chars: int = MAX_CORPUS_CHARS,
        chunk_bytes: int = CHUNK_BYTES,
        rng: random.Random | None = None,
    ) -> None:
        self._gateway = gateway
        self._corpus_dir = corpus_dir
        self._manual_filename = manual_filename
        self._max_corpus_chars = max_corpus_chars
        self._chunk_bytes = chunk_bytes
        self._rng = rng

    async def build_prompt(
        self,
        *,
        message: str | None,
        image: ImageInput | None,
        conversation_history: str | None = None,
        client_context: str | None = None,
    ) -> str:
        corpus = await asyncio.to_thread(
            lambda: load_corpus(
                self._corpus_dir,
                manual_filename=self._manual_filename,
                max_chars=self._max_corpus_chars,
                chunk_bytes=self._chunk_bytes,
                rng=self._rng,
            )
        )
        base = build_base_prompt(corpus, conversation_history, client_context)
        if image is not None:
            return build_image_prompt(base)
        return build_text_prompt(base, message or "")

    async def generate(
        self,
        *,
        message: str | None = None,
        image: ImageInput | None = None,
        conversation_history: str | None = None,
        client_context: str | None = None,
    ) -> str:
        """Return the raw model output for a text message or a screenshot."""
        prompt = await self.build_prompt(
            message=message,
            image=image,
            conversation_history=conversation_history,
            client_context=client_context,
        )
        return await self._gateway.generate(prompt, image=image)
