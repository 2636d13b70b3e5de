from __future__ import annotations

import uuid

from ..logger import get_logger
from ..models import TRANSIENT_PREFIX, TransientPhoto
from .files import PhotoFile

_logger = get_logger("transient")


class TransientRegistry:
    """In-process `blob:` handles to photo bytes.

    A handle keeps its bytes alive until `release()` is called; nothing is
    written to storage, so handles are meaningless after the process exits.
    """

    def __init__(self, namespace: str = "user-directory") -> None:
        self._namespace = namespace
        self._files: dict[str, PhotoFile] = {}

    def create(self, file: PhotoFile) -> TransientPhoto:
        handle = f"{TRANSIENT_PREFIX}{self._namespace}/{uuid.uuid4()}"
        self._files[handle] = file
        _logger.debug("transient handle created: %s (%s)", handle, file.name)
        return TransientPhoto(handle)

    def get(self, handle: str) -> PhotoFile | None:
        return self._files.get(handle)

    def release(self, handle: str) -> bool:
        released = self._files.pop(handle, None) is not None
        if released:
            _logger.debug("transient handle released: %s", handle)
        return released

    def __contains__(self, handle: object) -> bool:
        return handle in self._files

    def __len__(self) -> int:
        return len(self._files)


def create_image_url(registry: TransientRegistry, file_or_url: PhotoFile | str) -> str:
    """URL for showing a photo: strings pass through, files get a transient handle."""
    if isinstance(file_or_url, str):
        return file_or_url
    return registry.create(file_or_url).handle
