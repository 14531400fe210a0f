from __future__ import annotations

import logging

from image_server.backend.app.application.images.dto import DeleteImageInputDTO
from image_server.backend.app.domain.files.errors import (
    FailedToDeleteImage,
    ImageAccessForbidden,
    ImageNotFound,
    InvalidFilename,
)
from image_server.backend.app.domain.files.interfaces import AuthorizationPolicy, ImageStorage
from image_server.backend.app.domain.files.value_objects import ImageFilename

logger = logging.getLogger(__name__)


class DeleteImageUseCase:
    def __init__(self, storage: ImageStorage, policy: AuthorizationPolicy) -> None:
        self._storage = storage
        self._policy = policy

    async def execute(self, dto: DeleteImageInputDTO) -> None:
        logger.info("Received request to delete image: %s", dto.filename)
        try:
            filename = ImageFilename(dto.filename, message="Invalid filename format.")
        except InvalidFilename:
            logger.warning("Invalid filename for deletion attempt: %s", dto.filename)
            raise

        if not await self._policy.authorize(requester=dto.requester, filename=filename.value):
            logger.warning("Unauthorized delete attempt for file: %s", filename)
            raise ImageAccessForbidden(filename.value)

        try:
            await self._storage.delete(filename.value)
        except ImageNotFound:
            raise
        except OSError as e:
            # the primary root may already be unlinked; no rollback across roots
            raise FailedToDeleteImage(filename.value) from e
