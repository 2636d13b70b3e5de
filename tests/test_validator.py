import pytest

from user_directory.photo import PhotoFile, validate_image_file
from user_directory.photo.validator import MAX_FILE_SIZE

KIB = 1024
MIB = 1024 * KIB


def _file(size: int, content_type: str = "image/png") -> PhotoFile:
    return PhotoFile("photo", content_type, b"\0" * size)


def test_accepts_small_png() -> None:
    result = validate_image_file(_file(100 * KIB))
    assert result.valid
    assert result.error is None


@pytest.mark.parametrize("content_type", ["image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"])
def test_accepts_allowed_types(content_type: str) -> None:
    assert validate_image_file(_file(10, content_type)).valid


def test_rejects_plain_text() -> None:
    result = validate_image_file(_file(10, "text/plain"))
    assert not result.valid
    assert "JPG, PNG, GIF, WEBP" in result.error


def test_rejects_oversized_file() -> None:
    result = validate_image_file(_file(6 * MIB))
    assert not result.valid
    assert "5MB" in result.error


def test_limit_is_inclusive() -> None:
    assert validate_image_file(_file(MAX_FILE_SIZE)).valid
    assert not validate_image_file(_file(MAX_FILE_SIZE + 1)).valid


def test_rejects_empty_file() -> None:
    result = validate_image_file(_file(0))
    assert not result.valid
    assert result.error == "Файл пустой"


def test_type_is_checked_before_size() -> None:
    result = validate_image_file(_file(0, "application/pdf"))
    assert "JPG" in result.error
