import re
from pathlib import Path

import anyio
import pytest

from image_server.backend.app.domain.files import FileTooLarge, ImageNotFound, InvalidFileType, StorageRoot
from image_server.backend.app.infrastructure.files.filesystem_storage import FilesystemImageStorage
from tests.unit.fakes.upload import FakeUpload

pytestmark = pytest.mark.asyncio


@pytest.fixture
def fs_storage(tmp_path) -> FilesystemImageStorage:
    return FilesystemImageStorage(
        [
            StorageRoot(key="primary", directory=tmp_path / "uploads"),
            StorageRoot(
                key="chauffeur",
                directory=tmp_path / "uploads" / "chouffeur",
                filename_prefix="chauffeur_",
                url_prefix="/uploads/chouffeur/",
            ),
        ],
        chunk_size=16,
    )


async def test_save_writes_bytes_under_generated_name(fs_storage, tmp_path):
    data = b"\xff\xd8\xff" + b"a" * 100

    stored = await fs_storage.save(
        root_key="primary",
        source=FakeUpload(data, filename="photo.JPG"),
        original_filename="photo.JPG",
        content_type="image/jpeg",
        max_bytes=1024,
    )

    assert re.fullmatch(r"[0-9a-f-]{36}\.jpg", stored.filename)
    assert stored.directory == tmp_path / "uploads"
    assert stored.size_bytes == len(data)
    assert stored.path.read_bytes() == data


async def test_save_to_chauffeur_root_prefixes_name(fs_storage, tmp_path):
    stored = await fs_storage.save(
        root_key="chauffeur",
        source=FakeUpload(b"gif", filename="a.gif", content_type="image/gif"),
        original_filename="a.gif",
        content_type="image/gif",
        max_bytes=1024,
    )

    assert stored.filename.startswith("chauffeur_")
    assert (tmp_path / "uploads" / "chouffeur" / stored.filename).exists()


async def test_save_reads_in_chunks(fs_storage):
    upload = FakeUpload(b"x" * 100)

    await fs_storage.save(
        root_key="primary",
        source=upload,
        original_filename="x.png",
        content_type="image/png",
        max_bytes=1024,
    )

    # 100 bytes / 16 per chunk -> 7 reads with data + 1 empty read
    assert upload.reads == 8


async def test_save_oversized_leaves_no_partial_file(fs_storage, tmp_path):
    with pytest.raises(FileTooLarge):
        await fs_storage.save(
            root_key="primary",
            source=FakeUpload(b"x" * 200),
            original_filename="big.jpg",
            content_type="image/jpeg",
            max_bytes=50,
        )

    assert [p for p in (tmp_path / "uploads").iterdir() if p.is_file()] == []


async def test_save_runs_file_io_in_worker_threads(fs_storage, monkeypatch):
    called = []
    run_sync = anyio.to_thread.run_sync

    async def recording_run_sync(func, *args, **kwargs):
        called.append(getattr(getattr(func, "func", func), "__name__", ""))
        return await run_sync(func, *args, **kwargs)

    monkeypatch.setattr(anyio.to_thread, "run_sync", recording_run_sync)

    with pytest.raises(FileTooLarge):
        await fs_storage.save(
            root_key="primary",
            source=FakeUpload(b"x" * 200),
            original_filename="big.jpg",
            content_type="image/jpeg",
            max_bytes=50,
        )

    assert {"open", "write", "close", "unlink"} <= set(called)


async def test_save_exactly_max_bytes_is_accepted(fs_storage):
    stored = await fs_storage.save(
        root_key="primary",
        source=FakeUpload(b"x" * 64),
        original_filename="edge.jpg",
        content_type="image/jpeg",
        max_bytes=64,
    )

    assert stored.size_bytes == 64


async def test_save_without_usable_extension_uses_content_type(fs_storage):
    stored = await fs_storage.save(
        root_key="primary",
        source=FakeUpload(b"png"),
        original_filename="blob",
        content_type="image/png",
        max_bytes=64,
    )

    assert stored.filename.endswith(".png")


async def test_save_unknown_extension_and_type_is_rejected(fs_storage, tmp_path):
    with pytest.raises(InvalidFileType):
        await fs_storage.save(
            root_key="primary",
            source=FakeUpload(b"webp"),
            original_filename="x.webp",
            content_type="image/webp",
            max_bytes=64,
        )

    assert not (tmp_path / "uploads").exists() or list((tmp_path / "uploads").iterdir()) == []


async def test_locate_and_delete_across_roots(fs_storage, tmp_path):
    fs_storage.ensure_directories()
    target = tmp_path / "uploads" / "chouffeur" / "chauffeur_x.jpg"
    target.write_bytes(b"x")

    assert await fs_storage.locate("chauffeur_x.jpg") == target
    assert await fs_storage.delete("chauffeur_x.jpg") == target
    with pytest.raises(ImageNotFound):
        await fs_storage.locate("chauffeur_x.jpg")


async def test_unknown_root_key(fs_storage):
    with pytest.raises(KeyError):
        fs_storage.root("archive")


async def test_ensure_directories_creates_all_roots(fs_storage, tmp_path):
    fs_storage.ensure_directories()

    assert (tmp_path / "uploads").is_dir()
    assert (tmp_path / "uploads" / "chouffeur").is_dir()


async def test_storage_requires_a_root():
    with pytest.raises(ValueError):
        FilesystemImageStorage([])
