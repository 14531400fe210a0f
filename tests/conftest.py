import pytest

from tests.unit.fakes.authorization import RecordingPolicy
from tests.unit.fakes.image_storage import FakeImageStorage


@pytest.fixture
def storage() -> FakeImageStorage:
    return FakeImageStorage()


@pytest.fixture
def policy() -> RecordingPolicy:
    return RecordingPolicy()
