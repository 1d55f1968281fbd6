"""Source file loading and data URI encoding."""

import asyncio
import base64
from pathlib import Path
from typing import Union

from svgraster.core.constants import SVG_DATA_URI_PREFIX
from svgraster.core.exceptions import ContentReadError

PathLike = Union[str, Path]


def read_source(path: PathLike) -> bytes:
    """Read a source file in full.

    Raises:
        ContentReadError: If the file is missing or unreadable
    """
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise ContentReadError(
            f"Cannot read {path}: {e.strerror or e}",
            details={
                "source_path": str(path),
                "errno": e.errno or 0,
                "strerror": e.strerror or "",
            },
        ) from e


def encode_data_uri(data: bytes, prefix: str = SVG_DATA_URI_PREFIX) -> str:
    """Encode raw content as a base64 data URI."""
    return prefix + base64.b64encode(data).decode("ascii")


async def load_content_uri(path: PathLike) -> str:
    """Read ``path`` off the event loop and return it as a data URI."""
    loop = asyncio.get_running_loop()
    data = await loop.run_in_executor(None, read_source, path)
    return encode_data_uri(data)
