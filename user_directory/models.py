from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

UserId = str | int
SortField = Literal["name", "age"]
SortDirection = Literal["asc", "desc"]

ADULT_AGE = 18
TRANSIENT_PREFIX = "blob:"
EMBEDDED_PREFIX = "data:"


@dataclass
class User:
    id: UserId
    first_name: str
    last_name: str
    age: int
    email: str
    # None: the record never had a photo field; "": photo removed
    photo_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "age": self.age,
            "email": self.email,
        }
        if self.photo_url is not None:
            data["photoUrl"] = self.photo_url
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> User:
        """Build a user from its stored form.

        Raises ValueError when a required key is missing or has the wrong type.
        """
        if not isinstance(data, dict):
            raise ValueError(f"user record must be an object, got {type(data).__name__}")
        try:
            uid = data["id"]
            first_name = data["firstName"]
            last_name = data["lastName"]
            age = data["age"]
            email = data["email"]
        except KeyError as e:
            raise ValueError(f"user record missing key {e}") from e
        if isinstance(uid, bool) or not isinstance(uid, (str, int)):
            raise ValueError(f"invalid user id: {uid!r}")
        if isinstance(age, bool) or not isinstance(age, int):
            raise ValueError(f"invalid age for user {uid!r}: {age!r}")
        if not all(isinstance(v, str) for v in (first_name, last_name, email)):
            raise ValueError(f"invalid name/email for user {uid!r}")
        photo_url = data.get("photoUrl")
        if photo_url is not None and not isinstance(photo_url, str):
            raise ValueError(f"invalid photoUrl for user {uid!r}")
        return cls(uid, first_name, last_name, age, email, photo_url)

    @property
    def photo(self) -> PhotoRef:
        return photo_ref(self.photo_url)


@dataclass(frozen=True)
class FilterParams:
    min_age: int | None = None
    max_age: int | None = None
    only_adults: bool = False
    name_search: str | None = None
    email_search: str | None = None


@dataclass(frozen=True)
class SortParams:
    field: SortField | None = None
    direction: SortDirection = "asc"


# ---- photo references --------------------------------------------------------


@dataclass(frozen=True)
class NoPhoto:
    pass


@dataclass(frozen=True)
class RemotePhoto:
    url: str


@dataclass(frozen=True)
class TransientPhoto:
    handle: str


@dataclass(frozen=True)
class EmbeddedPhoto:
    data_url: str = field(repr=False)


PhotoRef = NoPhoto | RemotePhoto | TransientPhoto | EmbeddedPhoto


def photo_ref(photo_url: str | None) -> PhotoRef:
    """Classify a stored photo string into its reference kind."""
    if not photo_url:
        return NoPhoto()
    if photo_url.startswith(TRANSIENT_PREFIX):
        return TransientPhoto(photo_url)
    if photo_url.startswith(EMBEDDED_PREFIX):
        return EmbeddedPhoto(photo_url)
    return RemotePhoto(photo_url)
