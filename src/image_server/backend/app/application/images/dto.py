from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from image_server.backend.app.domain.files.interfaces import Requester, UploadSource


@dataclass(frozen=True)
class UploadImageInputDTO:
    root_key: str
    source: UploadSource
    original_filename: str
    content_type: str


@dataclass(frozen=True)
class GetImageInputDTO:
    filename: str


@dataclass(frozen=True)
class DeleteImageInputDTO:
    filename: str
    requester: Requester


# ---------- OUTPUT DTOs ----------
@dataclass(frozen=True)
class StoredImageDTO:
    filename: str
    root_key: str
    url_prefix: str
    size_bytes: int
    content_type: str


@dataclass(frozen=True)
class ImageFileDTO:
    filename: str
    path: Path
