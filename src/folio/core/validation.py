"""Schema checks for incoming blog and project payloads.

Validation is all-or-nothing: a payload either yields a fully validated model
or a ContentValidationError listing every failing field. Slug uniqueness is not
checked here; the content store does that at write time.
"""

import datetime as dt
import re
from typing import Annotated, Any, Mapping, Optional, Type, TypeVar

from pydantic import AfterValidator, AnyHttpUrl, BaseModel, BeforeValidator, Field, StrictBool, TypeAdapter, ValidationError, field_validator

from folio.core.filters import normalize_tags
from folio.core.models import RichDocument, is_empty_document
from folio.errors import ContentValidationError, FieldError


SLUG_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
DATE_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")

SLUG_MESSAGE = "Slug must be lowercase alphanumeric with hyphens"
DATE_MESSAGE = "Date must be in YYYY-MM-DD format"

_HTTP_URL = TypeAdapter(AnyHttpUrl)
_DATETIME = TypeAdapter(dt.datetime)

ModelT = TypeVar("ModelT", bound=BaseModel)


def is_valid_slug(value: Any) -> bool:
    return isinstance(value, str) and SLUG_RE.match(value) is not None


# --- field checks shared by create and update models ---

def _check_title(v: str) -> str:
    if not v.strip():
        raise ValueError("Title is required")
    return v


def _check_slug(v: str) -> str:
    if not is_valid_slug(v):
        raise ValueError(SLUG_MESSAGE)
    return v


def _check_document(v: RichDocument) -> RichDocument:
    if is_empty_document(v):
        raise ValueError("Content must not be empty")
    return v


def _check_tags(v: list[str]) -> list[str]:
    if any(not t.strip() for t in v):
        raise ValueError("Tags must not be blank")
    return normalize_tags(v)


def _check_url(v: Any) -> Optional[str]:
    """Empty string means unset; anything else must be an absolute http(s) URL."""
    if v is None or v == "":
        return None
    if not isinstance(v, str):
        raise ValueError("Must be a valid URL")
    try:
        _HTTP_URL.validate_python(v.strip())
    except ValidationError:
        raise ValueError("Must be a valid URL") from None
    return v.strip()


def _check_date(v: Any) -> dt.date:
    """Accept a date, a YYYY-MM-DD string, or an ISO date-time.

    Date-times carrying an offset are converted to UTC before the date is taken.
    """
    if isinstance(v, dt.datetime):
        return _utc_date(v)
    if isinstance(v, dt.date):
        return v
    if not isinstance(v, str) or not DATE_PREFIX_RE.match(v):
        raise ValueError(DATE_MESSAGE)
    try:
        if len(v) == 10:
            return dt.date.fromisoformat(v)
        return _utc_date(_DATETIME.validate_python(v))
    except (ValueError, ValidationError):
        raise ValueError(DATE_MESSAGE) from None


def _utc_date(value: dt.datetime) -> dt.date:
    if value.tzinfo is not None:
        value = value.astimezone(dt.timezone.utc)
    return value.date()


def _reject_null(v: Any) -> Any:
    if v is None:
        raise ValueError("Field may not be null")
    return v


def _check_project_tags(v: list[str]) -> list[str]:
    v = _check_tags(v)
    if not v:
        raise ValueError("At least one tag is required")
    return v


Title       = Annotated[str, AfterValidator(_check_title)]
Slug        = Annotated[str, AfterValidator(_check_slug)]
Document    = Annotated[RichDocument, AfterValidator(_check_document)]
Tags        = Annotated[list[str], AfterValidator(_check_tags)]
ProjectTags = Annotated[list[str], AfterValidator(_check_project_tags)]
Url         = Annotated[Optional[str], BeforeValidator(_check_url)]
ProjectDate = Annotated[dt.date, BeforeValidator(_check_date)]


# --- payload models ---

class BlogCreate(BaseModel):
    title:     Title
    slug:      Slug
    content:   Document
    excerpt:   Optional[str] = None
    tags:      Tags = Field(default_factory=list)
    published: StrictBool = False


class BlogUpdate(BaseModel):
    """Partial update; only fields present in the payload are applied."""
    title:     Optional[Title] = None
    slug:      Optional[Slug] = None
    content:   Optional[Document] = None
    excerpt:   Optional[str] = None
    tags:      Optional[Tags] = None
    published: Optional[StrictBool] = None

    @field_validator("title", "slug", "content", "tags", "published", mode="before")
    @classmethod
    def not_null(cls, v: Any) -> Any:
        return _reject_null(v)


class ProjectCreate(BaseModel):
    title:       Title
    description: Document
    image:       Url = None
    github:      Url = None
    tags:        ProjectTags
    date:        ProjectDate


class ProjectUpdate(BaseModel):
    """Partial update; only fields present in the payload are applied."""
    title:       Optional[Title] = None
    description: Optional[Document] = None
    image:       Url = None
    github:      Url = None
    tags:        Optional[ProjectTags] = None
    date:        Optional[ProjectDate] = None

    @field_validator("title", "description", "tags", "date", mode="before")
    @classmethod
    def not_null(cls, v: Any) -> Any:
        return _reject_null(v)


# --- entry points ---

def _field_errors(exc: ValidationError) -> list[FieldError]:
    errors = []
    for err in exc.errors():
        message = err["msg"]
        if err["type"] == "value_error":
            message = message.removeprefix("Value error, ")
        errors.append(FieldError(path=".".join(str(p) for p in err["loc"]), message=message))
    return errors


def _validate(model: Type[ModelT], payload: Any) -> ModelT:
    if not isinstance(payload, Mapping):
        raise ContentValidationError([FieldError(path="", message="Expected a JSON object")])
    try:
        return model.model_validate(dict(payload))
    except ValidationError as e:
        raise ContentValidationError(_field_errors(e)) from e


def validate_blog_create(payload: Any) -> BlogCreate:
    return _validate(BlogCreate, payload)


def validate_blog_update(payload: Any) -> BlogUpdate:
    return _validate(BlogUpdate, payload)


def validate_project_create(payload: Any) -> ProjectCreate:
    return _validate(ProjectCreate, payload)


def validate_project_update(payload: Any) -> ProjectUpdate:
    return _validate(ProjectUpdate, payload)
