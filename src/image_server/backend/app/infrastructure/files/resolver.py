from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Sequence

from image_server.backend.app.domain.files.errors import ImageNotFound, InvalidFilename
from image_server.backend.app.domain.files.value_objects import is_valid_image_filename

logger = logging.getLogger(__name__)


def _is_readable_file(path: Path) -> bool:
    return path.is_file() and os.access(path, os.R_OK)


def resolve_image(name: str, roots: Sequence[Path]) -> Path:
    """
    Find ``name`` in the first root that holds a readable copy.

    Roots are tried in the given order and the first match wins. The name is
    validated before any filesystem call.
    """
    if not is_valid_image_filename(name):
        raise InvalidFilename()

    for root in roots:
        candidate = Path(root) / name
        if _is_readable_file(candidate):
            return candidate

    logger.info("File not found in any directory: %s", name)
    raise ImageNotFound(name)


def remove_image(name: str, roots: Sequence[Path]) -> Path:
    """
    Unlink ``name`` from the first root that holds it.

    A root without the file is skipped; any other OSError propagates and no
    further roots are tried.
    """
    if not is_valid_image_filename(name):
        raise InvalidFilename("Invalid filename format.")

    for root in roots:
        candidate = Path(root) / name
        try:
            candidate.unlink()
        except FileNotFoundError:
            logger.debug("File not in %s: %s", root, name)
            continue
        logger.info("Successfully deleted file: %s", candidate)
        return candidate

    raise ImageNotFound(name)
