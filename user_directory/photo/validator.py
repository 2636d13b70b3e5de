from __future__ import annotations

from dataclasses import dataclass

from .files import PhotoFile

ALLOWED_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp")
MAX_FILE_SIZE = 5 * 1024 * 1024


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: str | None = None


def validate_image_file(file: PhotoFile) -> ValidationResult:
    """Check type, then upper size bound, then emptiness; report the first failure."""
    if file.content_type not in ALLOWED_TYPES:
        return ValidationResult(False, "Недопустимый тип файла. Разрешены только: JPG, PNG, GIF, WEBP")
    if file.size > MAX_FILE_SIZE:
        return ValidationResult(False, "Размер файла превышает 5MB")
    if file.size == 0:
        return ValidationResult(False, "Файл пустой")
    return ValidationResult(True)
