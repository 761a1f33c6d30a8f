"""Exception hierarchy for media-search."""

from pathlib import Path


class MediaSearchError(Exception):
    """Base exception for all media-search errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all media-search errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(MediaSearchError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Validation Errors
class ValidationError(MediaSearchError):
    """Invalid input value."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


# Schema Errors
class SchemaError(MediaSearchError):
    """The schema registry and its callers disagree."""

    pass


class UnknownIndexTypeError(SchemaError):
    """Index type is not a registered schema row."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Unknown index type: {value!r}")


class UnknownFieldError(SchemaError):
    """Field name has no column or term mapping in the index."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Unknown index field: {field!r}")


# Index Errors
class IndexStoreError(MediaSearchError):
    """Index database errors."""

    pass


class IndexNotFoundError(IndexStoreError):
    """Index database file doesn't exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Index database not found: {path}")


class DocumentError(IndexStoreError):
    """Document cannot be written to the index."""

    def __init__(self, ref: object, reason: str) -> None:
        self.ref = ref
        self.reason = reason
        super().__init__(f"Invalid document {ref!r}: {reason}")
