from __future__ import annotations

import base64
import binascii

from pydantic import Field

from reply_advisor.core.models.base import AppBaseModel

DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"


class ImageInput(AppBaseModel):
    """Base64 encoded screenshot forwarded to the model."""

    mime_type: str = Field(default=DEFAULT_IMAGE_MIME_TYPE)
    data: str = Field(..., min_length=1, description="Base64 payload without data URL prefix")

    def as_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"

    @classmethod
    def from_payload(cls, payload: str, *, max_bytes: int) -> ImageInput:
        """Build from raw base64 or a `data:<mime>;base64,<data>` URL.

        Raises:
            ValueError: If the payload is not base64 or decodes to more than max_bytes.
        """
        mime_type = DEFAULT_IMAGE_MIME_TYPE
        data = payload.strip()
        if data.startswith("data:"):
            header, _, data = data.partition(",")
            declared = header[len("data:"):].split(";", 1)[0]
            if declared:
                mime_type = declared

        try:
            decoded = base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as err:
            raise ValueError("Image must be base64 encoded") from err
        if not decoded:
            raise ValueError("Image must not be empty")
        if len(decoded) > max_bytes:
            raise ValueError(f"Image must be at most {max_bytes // (1024 * 1024)} MB")

        return cls(mime_type=mime_type, data=data)
