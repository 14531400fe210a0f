from __future__ import annotations

import logging
from functools import partial
from pathlib import Path
from typing import Sequence
from uuid import uuid4

import anyio

from image_server.backend.app.domain.files.entities import StorageRoot, StoredFile
from image_server.backend.app.domain.files.errors import FileTooLarge, InvalidFileType
from image_server.backend.app.domain.files.interfaces import AsyncReadable
from image_server.backend.app.domain.files.value_objects import IMAGE_EXTENSIONS
from image_server.backend.app.infrastructure.files.resolver import remove_image, resolve_image

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024

MIME_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
}


def derive_extension(original_filename: str, content_type: str) -> str:
    ext = Path(original_filename).suffix.lower()
    if ext in IMAGE_EXTENSIONS:
        return ext
    # no usable extension on the client name, fall back to the declared type
    try:
        return MIME_EXTENSIONS[content_type]
    except KeyError:
        raise InvalidFileType(content_type) from None


def generate_filename(prefix: str, original_filename: str, content_type: str) -> str:
    return f"{prefix}{uuid4()}{derive_extension(original_filename, content_type)}"


class FilesystemImageStorage:
    def __init__(self, roots: Sequence[StorageRoot], chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if not roots:
            raise ValueError("At least one storage root is required.")
        self._roots = tuple(roots)
        self._chunk_size = chunk_size

    @property
    def roots(self) -> tuple[StorageRoot, ...]:
        return self._roots

    @property
    def directories(self) -> list[Path]:
        return [root.directory for root in self._roots]

    def root(self, key: str) -> StorageRoot:
        for root in self._roots:
            if root.key == key:
                return root
        raise KeyError(f"Unknown storage root: {key}")

    def ensure_directories(self) -> None:
        for root in self._roots:
            if not root.directory.exists():
                root.directory.mkdir(parents=True, exist_ok=True)
                logger.info("Created %s directory: %s", root.key, root.directory)

    async def save(
        self,
        *,
        root_key: str,
        source: AsyncReadable,
        original_filename: str,
        content_type: str,
        max_bytes: int,
    ) -> StoredFile:
        root = self.root(root_key)
        stored_filename = generate_filename(root.filename_prefix, original_filename, content_type)
        await anyio.to_thread.run_sync(partial(root.directory.mkdir, parents=True, exist_ok=True))

        full_path = root.directory / stored_filename
        written = 0
        f = await anyio.open_file(full_path, "xb")
        try:
            async with f:
                while True:
                    chunk = await source.read(self._chunk_size)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > max_bytes:
                        raise FileTooLarge(max_bytes)
                    await f.write(chunk)
        except BaseException:
            # never leave a partial upload behind, even when cancelled
            with anyio.CancelScope(shield=True):
                await anyio.to_thread.run_sync(partial(full_path.unlink, missing_ok=True))
            raise

        logger.info("Stored %s (%d bytes) in %s", stored_filename, written, root.directory)
        return StoredFile(
            filename=stored_filename,
            directory=root.directory,
            size_bytes=written,
            content_type=content_type,
        )

    async def locate(self, filename: str) -> Path:
        return await anyio.to_thread.run_sync(resolve_image, filename, self.directories)

    async def delete(self, filename: str) -> Path:
        return await anyio.to_thread.run_sync(remove_image, filename, self.directories)
