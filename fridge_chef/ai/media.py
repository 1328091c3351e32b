"""
Video payload handling
Converts between raw uploads and self-describing base64 data URIs
"""
import base64
import binascii
import re
from typing import Tuple

from pydantic import BaseModel, Field

from fridge_chef.errors import MediaReadError

# Gemini accepts both moving and still pictures of the fridge
ACCEPTED_MEDIA_PREFIXES: Tuple[str, ...] = ("video/", "image/")

_DATA_URI_RE = re.compile(
    r"^data:(?P<media_type>[\w.+-]+/[\w.+-]+)(?P<params>(;[\w.+-]+=[^;,]*)*);base64,(?P<payload>.*)$",
    re.DOTALL,
)


class VideoBlob(BaseModel):
    """An uploaded video: declared media type plus raw bytes."""
    media_type: str = Field(..., description="MIME type of the payload, e.g. video/mp4")
    data: bytes = Field(..., description="Raw media bytes")

    @classmethod
    def from_bytes(cls, data: bytes, media_type: str, max_bytes: int) -> "VideoBlob":
        """
        Validate a raw upload.

        Args:
            data: Raw file contents
            media_type: Declared MIME type
            max_bytes: Largest accepted payload

        Returns:
            VideoBlob ready to be sent to the model

        Raises:
            MediaReadError: empty payload, unrecognized media type or oversized payload
        """
        media_type = (media_type or "").split(";")[0].strip().lower()
        if not media_type.startswith(ACCEPTED_MEDIA_PREFIXES):
            raise MediaReadError(f"Unsupported media type: {media_type or 'unknown'}")
        if not data:
            raise MediaReadError("Video payload is empty")
        if len(data) > max_bytes:
            raise MediaReadError(f"Video payload is {len(data)} bytes, the limit is {max_bytes}")
        return cls(media_type=media_type, data=data)

    @classmethod
    def from_data_uri(cls, data_uri: str, max_bytes: int) -> "VideoBlob":
        """Decode a 'data:<mimetype>;base64,<encoded_data>' URI."""
        match = _DATA_URI_RE.match((data_uri or "").strip())
        if not match:
            raise MediaReadError("Expected a base64 data URI of the form 'data:<mimetype>;base64,<data>'")

        try:
            data = base64.b64decode(match.group("payload"), validate=True)
        except (binascii.Error, ValueError) as e:
            raise MediaReadError(f"Video payload is not valid base64: {e}") from e

        return cls.from_bytes(data, match.group("media_type"), max_bytes)

    def to_data_uri(self) -> str:
        encoded = base64.b64encode(self.data).decode("utf-8")
        return f"data:{self.media_type};base64,{encoded}"
