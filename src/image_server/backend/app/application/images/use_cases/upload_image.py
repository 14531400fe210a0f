from __future__ import annotations

import logging
from typing import Collection

from image_server.backend.app.application.images.dto import StoredImageDTO, UploadImageInputDTO
from image_server.backend.app.domain.files.errors import (
    FailedToSaveImage,
    FileTooLarge,
    InvalidFileType,
    MalformedUpload,
    UnexpectedFileField,
)
from image_server.backend.app.domain.files.interfaces import ImageStorage

logger = logging.getLogger(__name__)


class UploadImageUseCase:
    def __init__(
        self,
        storage: ImageStorage,
        allowed_mime_types: Collection[str],
        max_file_size: int,
    ) -> None:
        self._storage = storage
        self._allowed_mime_types = frozenset(allowed_mime_types)
        self._max_file_size = max_file_size

    async def execute(self, dto: UploadImageInputDTO) -> StoredImageDTO:
        # reject before the target directory sees a single byte
        if dto.content_type not in self._allowed_mime_types:
            logger.warning(
                "Rejected upload %r with content type %r", dto.original_filename, dto.content_type
            )
            raise InvalidFileType(dto.content_type)

        try:
            stored = await self._storage.save(
                root_key=dto.root_key,
                source=dto.source,
                original_filename=dto.original_filename,
                content_type=dto.content_type,
                max_bytes=self._max_file_size,
            )
        except (FileTooLarge, InvalidFileType):
            raise
        except OSError as e:
            raise FailedToSaveImage(dto.original_filename) from e

        # a second file after the image invalidates the whole upload
        try:
            await dto.source.finish()
        except (UnexpectedFileField, MalformedUpload):
            await self._storage.delete(stored.filename)
            raise

        root = self._storage.root(dto.root_key)
        return StoredImageDTO(
            filename=stored.filename,
            root_key=root.key,
            url_prefix=root.url_prefix,
            size_bytes=stored.size_bytes,
            content_type=stored.content_type,
        )
