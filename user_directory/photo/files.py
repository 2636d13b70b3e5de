from __future__ import annotations

import base64
import binascii
import mimetypes
import os
import time
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import EncodingError

KIB = 1024


@dataclass(frozen=True)
class PhotoFile:
    """An image held in memory, the way a browser hands over a picked file."""

    name: str
    content_type: str
    data: bytes = field(repr=False)
    last_modified: float = field(default_factory=time.time)

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def size_kb(self) -> float:
        return len(self.data) / KIB

    @classmethod
    def from_path(cls, path: str | Path, content_type: str | None = None) -> PhotoFile:
        """Read a file from disk, guessing the content type from its extension.

        Raises EncodingError when the file cannot be read.
        """
        p = Path(path)
        if content_type is None:
            content_type = mimetypes.guess_type(p.name)[0] or ""
        try:
            data = p.read_bytes()
            mtime = os.path.getmtime(p)
        except OSError as e:
            raise EncodingError(f"Ошибка при чтении файла: {e}") from e
        return cls(p.name, content_type, data, mtime)


def file_to_data_url(file: PhotoFile) -> str:
    """Encode the file as a `data:` URL suitable for storing in `photo_url`."""
    try:
        payload = base64.b64encode(bytes(file.data)).decode("ascii")
    except (TypeError, ValueError, binascii.Error) as e:
        raise EncodingError(f"Ошибка при чтении файла: {e}") from e
    content_type = file.content_type or "application/octet-stream"
    return f"data:{content_type};base64,{payload}"


def data_url_to_bytes(data_url: str) -> tuple[str, bytes]:
    """Split a base64 `data:` URL into (content_type, bytes)."""
    try:
        header, payload = data_url.split(",", 1)
        if not header.startswith("data:") or not header.endswith(";base64"):
            raise ValueError("not a base64 data URL")
        return header[len("data:") : -len(";base64")], base64.b64decode(payload, validate=True)
    except (ValueError, binascii.Error) as e:
        raise EncodingError(f"invalid data URL: {e}") from e
