from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from user_directory.directory import UserDirectory
from user_directory.errors import EncodingError, PhotoValidationError
from user_directory.formatting import format_user_age, get_full_name
from user_directory.logger import get_logger
from user_directory.models import EmbeddedPhoto, NoPhoto, RemotePhoto, User, UserId
from user_directory.notify import LogNotifier
from user_directory.photo import PhotoFile, PhotoUploadCoordinator, data_url_to_bytes
from user_directory.settings_manager import SettingsManager
from user_directory.store import JsonFileStore, PersistenceAdapter, UserRepository

_DEFAULT_SETTINGS = Path.home() / ".user_directory" / "settings.json"
_URL_PREFIXES = ("http://", "https://", "data:", "blob:")


def _apply_cli_logging_options(argv: list[str]) -> list[str]:
    """Move --log-level/--log-cats into env vars and return the remaining args."""
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--log-level", help="Set log level")
    parser.add_argument("--log-cats", help="Set log categories")
    args, remaining = parser.parse_known_args(argv)
    if args.log_level:
        os.environ["USER_DIRECTORY_LOG_LEVEL"] = args.log_level
    if args.log_cats:
        os.environ["USER_DIRECTORY_LOG_CATS"] = args.log_cats
    return remaining


def _parse_user_id(raw: str) -> UserId:
    return int(raw) if raw.lstrip("-").isdigit() else raw


def _photo_label(user: User) -> str:
    photo = user.photo
    if isinstance(photo, NoPhoto):
        return "-"
    if isinstance(photo, RemotePhoto):
        return photo.url
    if isinstance(photo, EmbeddedPhoto):
        return f"embedded ({len(photo.data_url)} chars)"
    return "transient"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="user_directory", description="User directory")
    parser.add_argument("--settings", default=str(_DEFAULT_SETTINGS), help="Settings file")
    parser.add_argument("--store", help="Storage file (overrides the settings value)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="List users")
    p_list.add_argument("--adults", action="store_true", help="Only users aged 18 or more")
    p_list.add_argument("--min-age", type=int)
    p_list.add_argument("--max-age", type=int)
    p_list.add_argument("--name", help="Substring of first or last name")
    p_list.add_argument("--email", help="Substring of email")
    p_list.add_argument("--sort", choices=("name", "age"))
    p_list.add_argument("--desc", action="store_true", help="Sort descending")

    p_set = sub.add_parser("set-photo", help="Attach a photo file or URL to a user")
    p_set.add_argument("user_id")
    p_set.add_argument("source", help="Image file path or URL")
    p_set.add_argument("--no-optimize", action="store_true", help="Store the file as-is")

    p_remove = sub.add_parser("remove-photo", help="Remove a user's photo")
    p_remove.add_argument("user_id")

    p_export = sub.add_parser("export-photo", help="Write a user's embedded photo to a file")
    p_export.add_argument("user_id")
    p_export.add_argument("output")
    return parser


def _cmd_list(directory: UserDirectory, args: argparse.Namespace) -> int:
    directory.filter_only_adults(args.adults)
    directory.filter_by_age(args.min_age)
    directory.filter_by_max_age(args.max_age)
    directory.search_by_name(args.name)
    directory.filter_by_email(args.email)
    if args.sort:
        directory.sort_by(args.sort, "desc" if args.desc else "asc")

    users = directory.sorted_users
    for user in users:
        print(f"{user.id}\t{get_full_name(user)}\t{format_user_age(user.age)}\t{user.email}\t{_photo_label(user)}")
    print(f"{len(users)} of {len(directory.get_users())} users")
    return 0


def _cmd_set_photo(coordinator: PhotoUploadCoordinator, directory: UserDirectory, args: argparse.Namespace) -> int:
    user_id = _parse_user_id(args.user_id)
    if directory.get_user_by_id(user_id) is None:
        print(f"no user with id {args.user_id}", file=sys.stderr)
        return 1
    source = args.source
    try:
        if not source.startswith(_URL_PREFIXES):
            source = PhotoFile.from_path(source)
        coordinator.upload_photo_for_user(user_id, source, optimize=not args.no_optimize)
    except (PhotoValidationError, EncodingError) as e:
        print(str(e), file=sys.stderr)
        return 1
    return 0


def _cmd_remove_photo(coordinator: PhotoUploadCoordinator, args: argparse.Namespace) -> int:
    coordinator.remove_photo(_parse_user_id(args.user_id))
    return 0


def _cmd_export_photo(directory: UserDirectory, args: argparse.Namespace) -> int:
    user = directory.get_user_by_id(_parse_user_id(args.user_id))
    photo = user.photo if user is not None else NoPhoto()
    if not isinstance(photo, EmbeddedPhoto):
        print("user has no embedded photo", file=sys.stderr)
        return 1
    try:
        _content_type, data = data_url_to_bytes(photo.data_url)
    except EncodingError as e:
        print(str(e), file=sys.stderr)
        return 1
    Path(args.output).write_bytes(data)
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = build_parser().parse_args(_apply_cli_logging_options(list(argv)))
    logger = get_logger("main")

    settings = SettingsManager(args.settings)
    store_path = args.store or settings.storage_path
    logger.debug("using storage %s", store_path)

    repository = UserRepository(PersistenceAdapter(JsonFileStore(store_path)))
    directory = UserDirectory(repository)
    directory.initialize_users()
    coordinator = PhotoUploadCoordinator(
        repository,
        notifier=LogNotifier(),
        optimizer_options=settings.optimizer_options(),
        toast_duration_ms=settings.toast_duration_ms,
    )

    if args.command == "list":
        return _cmd_list(directory, args)
    if args.command == "set-photo":
        if not settings.optimize_photos:
            args.no_optimize = True
        return _cmd_set_photo(coordinator, directory, args)
    if args.command == "remove-photo":
        return _cmd_remove_photo(coordinator, args)
    return _cmd_export_photo(directory, args)


if __name__ == "__main__":
    raise SystemExit(main())
