from pathlib import Path

import pytest

from image_server.backend.app.domain.files import ImageNotFound, InvalidFilename
from image_server.backend.app.infrastructure.files.resolver import remove_image, resolve_image


@pytest.fixture
def roots(tmp_path) -> list[Path]:
    primary = tmp_path / "uploads"
    secondary = tmp_path / "chouffeur"
    primary.mkdir()
    secondary.mkdir()
    return [primary, secondary]


def test_resolve_prefers_first_root(roots):
    primary, secondary = roots
    (primary / "a.jpg").write_bytes(b"primary")
    (secondary / "a.jpg").write_bytes(b"secondary")

    assert resolve_image("a.jpg", roots) == primary / "a.jpg"


def test_resolve_falls_through_to_second_root(roots):
    _, secondary = roots
    (secondary / "b.png").write_bytes(b"x")

    assert resolve_image("b.png", roots) == secondary / "b.png"


def test_resolve_missing_everywhere(roots):
    with pytest.raises(ImageNotFound):
        resolve_image("missing.gif", roots)


def test_resolve_skips_directories_with_image_names(roots):
    primary, secondary = roots
    (primary / "c.jpg").mkdir()
    (secondary / "c.jpg").write_bytes(b"x")

    assert resolve_image("c.jpg", roots) == secondary / "c.jpg"


def test_resolve_rejects_traversal_without_touching_disk(tmp_path):
    # roots that do not exist: validation must fail first
    bogus = [tmp_path / "nope"]
    with pytest.raises(InvalidFilename):
        resolve_image("../x.jpg", bogus)


def test_resolve_works_for_more_than_two_roots(tmp_path):
    roots = [tmp_path / str(i) for i in range(4)]
    for root in roots:
        root.mkdir()
    (roots[3] / "d.jpeg").write_bytes(b"x")

    assert resolve_image("d.jpeg", roots) == roots[3] / "d.jpeg"


def test_remove_from_primary_only(roots):
    primary, secondary = roots
    (primary / "e.jpg").write_bytes(b"1")
    (secondary / "e.jpg").write_bytes(b"2")

    removed = remove_image("e.jpg", roots)

    assert removed == primary / "e.jpg"
    assert not (primary / "e.jpg").exists()
    assert (secondary / "e.jpg").exists()


def test_remove_falls_through_to_secondary(roots):
    _, secondary = roots
    (secondary / "f.gif").write_bytes(b"1")

    assert remove_image("f.gif", roots) == secondary / "f.gif"
    assert not (secondary / "f.gif").exists()


def test_remove_missing_is_not_found(roots):
    with pytest.raises(ImageNotFound):
        remove_image("g.png", roots)


def test_remove_twice_is_not_found(roots):
    primary, _ = roots
    (primary / "h.png").write_bytes(b"1")
    remove_image("h.png", roots)

    with pytest.raises(ImageNotFound):
        remove_image("h.png", roots)


def test_remove_propagates_other_os_errors(roots):
    primary, secondary = roots
    # unlink on a directory fails with something other than FileNotFoundError
    (primary / "i.jpg").mkdir()
    (secondary / "i.jpg").write_bytes(b"1")

    with pytest.raises(OSError) as exc_info:
        remove_image("i.jpg", roots)

    assert not isinstance(exc_info.value, FileNotFoundError)
    assert (secondary / "i.jpg").exists()


def test_remove_rejects_invalid_name(roots):
    with pytest.raises(InvalidFilename, match="Invalid filename format."):
        remove_image("x.txt", roots)
