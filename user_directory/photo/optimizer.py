"""Photo compression using pyvips.

A picked photo is shrunk to fit the configured bounds, then re-encoded at a
falling quality until it fits the size budget or the quality floor is hit.
"""

from __future__ import annotations

import contextlib
import time
from typing import Any

from ..errors import OptimizationError
from ..logger import get_logger
from ..metrics import metrics
from .files import KIB, PhotoFile

_logger = get_logger("optimizer")

DEFAULT_CONTENT_TYPE = "image/jpeg"

# Quality is tracked in whole percent so the floor comparison is exact.
QUALITY_FLOOR = 30
QUALITY_STEP = 10

# content type -> (pyvips save suffix, honours Q, keeps alpha)
_SAVERS: dict[str, tuple[str, bool, bool]] = {
    "image/jpeg": (".jpg", True, False),
    "image/jpg": (".jpg", True, False),
    "image/webp": (".webp", True, True),
    "image/png": (".png", False, True),
    "image/gif": (".gif", False, True),
}

_pyvips: Any | None = None


def _get_pyvips_module() -> Any:
    global _pyvips
    if _pyvips is None:
        import pyvips  # type: ignore

        _pyvips = pyvips
    return _pyvips


def quality_steps(quality: float) -> list[int]:
    """Quality percentages to try, starting one first, ending at or below the floor."""
    q = max(1, min(100, round(quality * 100)))
    steps = [q]
    while q > QUALITY_FLOOR:
        q -= QUALITY_STEP
        steps.append(q)
    return steps


def fit_within(width: int, height: int, max_width: int, max_height: int) -> tuple[int, int]:
    """Scale (width, height) down to fit the bounds, keeping the aspect ratio."""
    if width <= max_width and height <= max_height:
        return width, height
    ratio = min(max_width / width, max_height / height)
    return max(1, int(width * ratio)), max(1, int(height * ratio))


def _render(image: Any, width: int, height: int, keep_alpha: bool) -> Any:
    pyvips = _get_pyvips_module()
    if (image.width, image.height) != (width, height):
        image = image.thumbnail_image(width, height=height, size=pyvips.Size.FORCE)
    with contextlib.suppress(pyvips.Error):
        image = image.colourspace("srgb")
    if image.hasalpha() and not keep_alpha:
        image = image.flatten(background=[0, 0, 0])
    if image.format != "uchar":
        image = image.cast("uchar")
    return image.copy_memory()


def optimize_image(
    file: PhotoFile,
    max_width: int = 1920,
    max_height: int = 1920,
    quality: float = 0.8,
    max_size_kb: float = 500,
) -> PhotoFile:
    """Shrink and re-encode `file`, keeping its name and content type.

    Raises OptimizationError when the image cannot be decoded or encoded;
    callers are expected to fall back to the original file.
    """
    content_type = file.content_type or DEFAULT_CONTENT_TYPE
    saver = _SAVERS.get(content_type)
    if saver is None:
        raise OptimizationError(f"cannot encode {content_type!r}")
    suffix, honours_quality, keep_alpha = saver

    try:
        pyvips = _get_pyvips_module()
    except (ImportError, OSError) as e:
        raise OptimizationError(f"image library unavailable: {e}") from e

    try:
        source = pyvips.Image.new_from_buffer(file.data, "")
        width, height = fit_within(source.width, source.height, max_width, max_height)
        image = _render(source, width, height, keep_alpha)
    except pyvips.Error as e:
        raise OptimizationError(f"Ошибка при загрузке изображения: {e}") from e

    encoded = b""
    used_quality = 0
    for q in quality_steps(quality):
        try:
            encoded = image.write_to_buffer(suffix, Q=q) if honours_quality else image.write_to_buffer(suffix)
        except pyvips.Error as e:
            raise OptimizationError(f"encoding {content_type} failed: {e}") from e
        metrics.inc("optimizer.encode_attempts")
        used_quality = q
        # lossless savers produce the same bytes at every quality
        if len(encoded) / KIB <= max_size_kb or not honours_quality:
            break

    _logger.debug(
        "optimized %s: %dx%d -> %dx%d, %.1f KB -> %.1f KB at Q=%d",
        file.name,
        source.width,
        source.height,
        width,
        height,
        file.size_kb,
        len(encoded) / KIB,
        used_quality,
    )
    return PhotoFile(file.name, content_type, encoded, time.time())
