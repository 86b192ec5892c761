"""Reading user-chosen media files into content-ready data URIs.

Gallery images, voice messages and drawings store their media inline as
``data:`` URIs so that an exported document is self-contained.
"""

import base64
import logging
import mimetypes
from pathlib import Path
from typing import Optional

from gift_builder.errors import MediaAccessError

logger = logging.getLogger(__name__)


def to_data_uri(data: bytes, mime: str) -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def read_data_uri(path: Path, mime: Optional[str] = None) -> str:
    """Read the file at ``path`` and return it as a base64 data URI.

    Raises
    ------
    MediaAccessError
        If the file is missing or access is denied.
    """
    path = Path(path)
    mime = mime or mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    try:
        data = path.read_bytes()
    except OSError as e:
        logger.warning("Media access failed for %s: %s", path, e)
        raise MediaAccessError(
            f"Could not read media file: {e.strerror or e}",
            context={"path": str(path)},
        ) from e
    return to_data_uri(data, mime)


def decode_data_uri(data_uri: str) -> Optional[bytes]:
    """Payload of a base64 ``data:`` URI, or None for anything else."""
    if not data_uri.startswith("data:"):
        return None
    header, _, payload = data_uri.partition(",")
    if ";base64" not in header:
        return None
    try:
        return base64.b64decode(payload)
    except ValueError:
        return None
