"""Photo handling: validation, compression, encoding and upload coordination.

Usage:
    from user_directory.photo import PhotoFile, PhotoUploadCoordinator

    coordinator = PhotoUploadCoordinator(repository, notifier=toasts)
    coordinator.upload_photo_for_user(user_id, PhotoFile.from_path("me.jpg"))
"""

from .files import PhotoFile, data_url_to_bytes, file_to_data_url
from .optimizer import optimize_image
from .transient import TransientRegistry, create_image_url
from .upload import PhotoUploadCoordinator
from .validator import ValidationResult, validate_image_file

__all__ = [
    "PhotoFile",
    "PhotoUploadCoordinator",
    "TransientRegistry",
    "ValidationResult",
    "create_image_url",
    "data_url_to_bytes",
    "file_to_data_url",
    "optimize_image",
    "validate_image_file",
]
