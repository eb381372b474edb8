"""Error taxonomy for ingest and retrieval.

"Not found" is deliberately absent: lookups return ``None`` for unknown ids
and for rows whose blob has gone missing.
"""


class EarlBoxError(Exception):
    """Base class for all service errors."""

    code = "error"


class ValidationError(EarlBoxError):
    """Malformed input: empty name, bad size, bad base64, malformed id."""

    code = "validation_error"


class SizeMismatchError(ValidationError):
    """Decoded payload length differs from the declared size."""

    code = "size_mismatch"

    def __init__(self, declared: int, actual: int):
        self.declared = declared
        self.actual = actual
        super().__init__(
            f"File size mismatch: declared {declared} bytes, decoded {actual} bytes"
        )


class StorageWriteError(EarlBoxError):
    """The blob write or the catalog insert failed."""

    code = "storage_write_error"
