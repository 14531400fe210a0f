from __future__ import annotations

import re
from dataclasses import dataclass, field

from image_server.backend.app.domain.files.errors import InvalidFilename

IMAGE_FILENAME_RE = re.compile(r"^[A-Za-z0-9._-]+\.(jpg|jpeg|png|gif)$", re.IGNORECASE)
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif")


def is_valid_image_filename(name: str) -> bool:
    if not name or ".." in name:
        return False
    # fullmatch: "$" alone would accept a trailing newline
    return IMAGE_FILENAME_RE.fullmatch(name) is not None


@dataclass(frozen=True)
class ImageFilename:
    value: str
    message: str = field(default="Invalid filename.", compare=False, repr=False)

    def __post_init__(self) -> None:
        if not is_valid_image_filename(self.value):
            raise InvalidFilename(self.message)

    def __str__(self) -> str:
        return self.value
