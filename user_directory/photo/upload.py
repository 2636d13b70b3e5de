from __future__ import annotations

from typing import Any

from PySide6.QtCore import Property, QObject, Signal

from ..errors import OptimizationError, PhotoValidationError, UserDirectoryError
from ..logger import get_logger
from ..metrics import metrics
from ..models import TransientPhoto, UserId
from ..notify import DEFAULT_DURATION_MS, LogNotifier, Notifier
from ..store.repository import UserRepository
from .files import PhotoFile, file_to_data_url
from .optimizer import optimize_image
from .transient import TransientRegistry
from .validator import ValidationResult, validate_image_file

_logger = get_logger("upload")

UPLOAD_SUCCESS_MESSAGE = "Фото успешно загружено"
VALIDATION_FALLBACK_MESSAGE = "Ошибка валидации файла"


class PhotoUploadCoordinator(QObject):
    """Validates, optimizes and stores user photos.

    An attempt runs validation, then best-effort optimization, then encoding
    to a `data:` URL. The repository is touched only once all of that has
    succeeded. Failures are recorded in `upload_error`, announced through the
    notifier and re-raised; a failed optimization only costs the size saving.
    """

    isUploadingChanged = Signal(bool)
    uploadErrorChanged = Signal(str)

    def __init__(
        self,
        repository: UserRepository,
        notifier: Notifier | None = None,
        transients: TransientRegistry | None = None,
        optimizer_options: dict[str, Any] | None = None,
        toast_duration_ms: int = DEFAULT_DURATION_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._repository = repository
        self._notifier: Notifier = notifier if notifier is not None else LogNotifier()
        self.transients = transients if transients is not None else TransientRegistry()
        self._optimizer_options = dict(optimizer_options or {})
        self._toast_duration_ms = toast_duration_ms
        self._is_uploading = False
        self._upload_error: str | None = None

    # ---- observable state ------------------------------------------------
    @property
    def is_uploading(self) -> bool:
        return self._is_uploading

    @property
    def upload_error(self) -> str | None:
        return self._upload_error

    def _get_is_uploading(self) -> bool:
        return bool(self._is_uploading)

    isUploading = Property(bool, _get_is_uploading, notify=isUploadingChanged)  # type: ignore[arg-type]

    def _get_upload_error(self) -> str:
        return self._upload_error or ""

    uploadError = Property(str, _get_upload_error, notify=uploadErrorChanged)  # type: ignore[arg-type]

    def _set_uploading(self, uploading: bool) -> None:
        v = bool(uploading)
        if v == self._is_uploading:
            return
        self._is_uploading = v
        self.isUploadingChanged.emit(v)

    def _set_upload_error(self, message: str | None) -> None:
        if message == self._upload_error:
            return
        self._upload_error = message
        self.uploadErrorChanged.emit(message or "")

    # ---- operations ------------------------------------------------------
    def validate_photo(self, file: PhotoFile) -> ValidationResult:
        self._set_upload_error(None)
        return validate_image_file(file)

    def upload_photo(self, file: PhotoFile, optimize: bool = True) -> str:
        """Turn `file` into a storable `data:` URL.

        Raises PhotoValidationError or EncodingError; both are also reported
        through `upload_error` and an error notification.
        """
        self._set_upload_error(None)
        self._set_uploading(True)
        try:
            validation = self.validate_photo(file)
            if not validation.valid:
                raise PhotoValidationError(validation.error or VALIDATION_FALLBACK_MESSAGE)

            to_encode = file
            if optimize:
                try:
                    to_encode = optimize_image(file, **self._optimizer_options)
                except OptimizationError as e:
                    metrics.inc("upload.optimize_fallbacks")
                    _logger.warning("could not optimize %s, keeping original: %s", file.name, e)

            data_url = file_to_data_url(to_encode)
        except UserDirectoryError as e:
            metrics.inc("upload.failures")
            self._set_upload_error(str(e))
            self._notifier.notify(str(e), "error", self._toast_duration_ms)
            raise
        finally:
            self._set_uploading(False)

        metrics.inc("upload.successes")
        _logger.debug("encoded %s: %d bytes -> %d chars", file.name, file.size, len(data_url))
        return data_url

    def upload_photo_for_user(self, user_id: UserId, file_or_url: PhotoFile | str, optimize: bool = True) -> str:
        """Store a photo for the user; a string is taken as a ready-made URL."""
        if isinstance(file_or_url, str):
            photo_url = file_or_url
        else:
            photo_url = self.upload_photo(file_or_url, optimize)

        self._repository.update_user_photo(user_id, photo_url)
        self._notifier.notify(UPLOAD_SUCCESS_MESSAGE, "success", self._toast_duration_ms)
        return photo_url

    def remove_photo(self, user_id: UserId) -> None:
        self._set_upload_error(None)
        user = self._repository.find_user(user_id)
        if user is None or not user.photo_url:
            return
        photo = user.photo
        if isinstance(photo, TransientPhoto):
            self.transients.release(photo.handle)
        self._repository.update_user_photo(user_id, "")

    def clear_error(self) -> None:
        self._set_upload_error(None)
