"""Domain exceptions shared by the validation layer, content store, and HTTP surface"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single validation failure: dotted field path and a human-readable message."""
    path:    str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"path": self.path, "message": self.message}


class ContentValidationError(ValueError):
    """Payload failed schema validation; nothing was applied."""

    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        summary = "; ".join(f"{e.path or '<root>'}: {e.message}" for e in self.errors)
        super().__init__(f"Validation failed: {summary}")


class SlugConflictError(ValueError):
    """A blog post with the requested slug already exists."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Blog post with slug '{slug}' already exists")


class NotFoundError(LookupError):
    """The requested record does not exist (or is not visible to the caller)."""


class UnauthorizedError(PermissionError):
    """Caller is not the configured admin."""


class UploadRejectedError(ValueError):
    """An upload was refused before reaching the media store."""
