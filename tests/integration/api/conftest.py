from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from image_server.backend.app.core.config import Settings
from image_server.backend.app.main import create_app


@pytest.fixture
def upload_dir(tmp_path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def chauffeur_dir(upload_dir) -> Path:
    return upload_dir / "chouffeur"


@pytest.fixture
def settings(upload_dir, chauffeur_dir) -> Settings:
    return Settings(
        UPLOAD_DIR=upload_dir,
        CHAUFFEUR_UPLOAD_DIR=chauffeur_dir,
        MAX_FILE_SIZE=16 * 1024,
        UPLOAD_CHUNK_SIZE=1024,
        RATE_LIMIT_MAX_REQUESTS=1000,
    )


@pytest.fixture
def app(settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app):
    # context manager runs the lifespan, which creates the upload dirs
    with TestClient(app) as c:
        yield c


@pytest.fixture
def jpeg_bytes() -> bytes:
    return b"\xff\xd8\xff\xe0" + bytes(range(256)) * 8
