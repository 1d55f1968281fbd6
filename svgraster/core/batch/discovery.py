"""Building source/destination mappings from a directory."""

import os
import re
from pathlib import Path
from typing import Dict, Union

from svgraster.core.constants import DEFAULT_OUTPUT_EXTENSION, DEFAULT_SOURCE_EXTENSION
from svgraster.core.exceptions import ContentReadError


def build_directory_mapping(
    source_dir: Union[str, Path],
    destination_dir: Union[str, Path],
    source_extension: str = DEFAULT_SOURCE_EXTENSION,
    output_extension: str = DEFAULT_OUTPUT_EXTENSION,
) -> Dict[str, str]:
    """Map each matching file of ``source_dir`` to its raster destination.

    Only direct children are considered. The extension match is
    case-insensitive; the destination keeps the file stem.

    Raises:
        ContentReadError: If ``source_dir`` cannot be listed
    """
    source_dir = Path(source_dir)
    destination_dir = Path(destination_dir)
    pattern = re.compile(re.escape(source_extension) + "$", re.IGNORECASE)

    try:
        names = sorted(os.listdir(source_dir))
    except OSError as e:
        raise ContentReadError(
            f"Cannot list {source_dir}: {e.strerror or e}",
            details={"source_path": str(source_dir), "errno": e.errno or 0},
        ) from e

    file_map = {}
    for name in names:
        source = source_dir / name
        if not pattern.search(name) or not source.is_file():
            continue
        destination = destination_dir / (Path(name).stem + output_extension)
        file_map[str(source)] = str(destination)
    return file_map
