"""Place domain service containing pure business logic."""

import math
import re
from decimal import Decimal

from gem_finder.domain.exceptions import (
    InvalidDataFormat,
    InvalidLocationFormat,
    InvalidRange,
    PlaceNotOwned,
    RequiredFieldMissing,
)
from gem_finder.models.place_model import Place
from gem_finder.models.user_model import User


_DISALLOWED_CHARS = re.compile(r"[^\d.,-]")
_WHITESPACE_RUN = re.compile(r"\s+")
_COMMA_RUN = re.compile(r",+")

MIN_RATING = 1
MAX_RATING = 5

# Column sizes on Place
MAX_TITLE_LENGTH = 200
MAX_LOCATION_LENGTH = 64


class PlaceDomainService:
    """Pure domain service for place business rules."""

    @staticmethod
    def normalize_location(raw: str | None) -> str:
        """Reduce free-form input to a canonical ``"lat,lng"`` string.

        Everything but digits, ``.``, ``,`` and ``-`` is dropped, whitespace
        runs become commas and repeated commas collapse. The text is then
        split on the first comma and both halves must be finite numbers.

        >>> PlaceDomainService.normalize_location("  12.9716, N 77.5946 ")
        '12.9716,77.5946'
        """
        cleaned = _DISALLOWED_CHARS.sub(" ", (raw or "").strip())
        cleaned = _WHITESPACE_RUN.sub(",", cleaned)
        cleaned = _COMMA_RUN.sub(",", cleaned).strip(",")

        lat_str, sep, lng_str = cleaned.partition(",")
        if not sep:
            raise InvalidLocationFormat()
        lat = PlaceDomainService._parse_coordinate(lat_str)
        lng = PlaceDomainService._parse_coordinate(lng_str)
        location = f"{PlaceDomainService._format_coordinate(lat)},{PlaceDomainService._format_coordinate(lng)}"
        if len(location) > MAX_LOCATION_LENGTH:
            raise InvalidLocationFormat()
        return location

    @staticmethod
    def _parse_coordinate(text: str) -> float:
        try:
            value = float(text)
        except ValueError:
            raise InvalidLocationFormat() from None
        if not math.isfinite(value):
            raise InvalidLocationFormat()
        return value

    @staticmethod
    def _format_coordinate(value: float) -> str:
        # Positional notation only; repr() would give "1e-05" for tiny values
        return format(Decimal(repr(value)), "f")

    @staticmethod
    def require_text(field: str, value: str | None) -> str:
        if value is None or not value.strip():
            raise RequiredFieldMissing(field)
        return value.strip()

    @staticmethod
    def require_title(value: str | None) -> str:
        title = PlaceDomainService.require_text("title", value)
        if len(title) > MAX_TITLE_LENGTH:
            raise InvalidDataFormat("title", f"at most {MAX_TITLE_LENGTH} characters")
        return title

    @staticmethod
    def validate_rating(value: int) -> int:
        if value < MIN_RATING or value > MAX_RATING:
            raise InvalidRange("Rating", MIN_RATING, MAX_RATING, value)
        return value

    @staticmethod
    def ensure_can_edit(actor: User, place: Place) -> None:
        """Only the owner may edit; admins get no bypass here."""
        if place.user_id != actor.id:
            raise PlaceNotOwned("edit")

    @staticmethod
    def ensure_can_delete(actor: User, place: Place) -> None:
        if actor.is_admin:
            return
        if place.user_id != actor.id:
            raise PlaceNotOwned("delete")
