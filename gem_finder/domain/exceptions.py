"""Domain exceptions that represent business rule violations."""

from typing import Optional


class DomainException(Exception):
    """Base exception for all domain-related errors."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


# User Domain Exceptions
class UserException(DomainException):
    """Base exception for user-related errors."""


class UserAlreadyExists(UserException):
    """User already exists in the system."""

    def __init__(self, field: str, value: str):
        super().__init__(
            f"User with {field} '{value}' already exists",
            "USER_ALREADY_EXISTS",
        )


class InvalidCredentials(UserException):
    """Invalid login credentials."""

    def __init__(self):
        super().__init__("Invalid credentials", "INVALID_CREDENTIALS")


# Permission Domain Exceptions
class PermissionException(DomainException):
    """Base exception for permission-related errors."""


class PlaceNotOwned(PermissionException):
    """Caller is neither the owner nor allowed to bypass ownership."""

    def __init__(self, action: str):
        super().__init__(
            f"Not authorized to {action} this place", "PLACE_NOT_OWNED"
        )


# Place Domain Exceptions
class PlaceException(DomainException):
    """Base exception for place-related errors."""


class PlaceNotFound(PlaceException):
    """Place not found in the system."""

    def __init__(self, place_id: int):
        super().__init__(f"Place not found: {place_id}", "PLACE_NOT_FOUND")


class InvalidLocationFormat(PlaceException):
    """Location string does not resolve to two finite numbers."""

    def __init__(self):
        super().__init__(
            "Invalid location format. Use 'lat,lng'", "INVALID_LOCATION_FORMAT"
        )


class AlreadyReported(PlaceException):
    """User already filed a report against this place."""

    def __init__(self):
        super().__init__(
            "You have already reported this place", "ALREADY_REPORTED"
        )


# Validation Domain Exceptions
class ValidationException(DomainException):
    """Base exception for validation errors."""


class InvalidDataFormat(ValidationException):
    """Invalid data format provided."""

    def __init__(self, field: str, expected_format: str):
        super().__init__(
            f"Invalid format for {field}, expected: {expected_format}",
            "INVALID_DATA_FORMAT",
        )


class RequiredFieldMissing(ValidationException):
    """Required field is missing or blank."""

    def __init__(self, field: str):
        super().__init__(
            f"Required field missing: {field}", "REQUIRED_FIELD_MISSING"
        )


class InvalidRange(ValidationException):
    """Value is outside allowed range."""

    def __init__(
        self, field: str, min_val: float, max_val: float, actual: float
    ):
        super().__init__(
            f"{field} must be between {min_val} and {max_val}, got: {actual}",
            "INVALID_RANGE",
        )
