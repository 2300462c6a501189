"""
Shared pydantic building blocks.

Field types used by both the user entity and the request schemas, the
base model configuration (snake_case attributes, camelCase wire names)
and the conversion from pydantic errors to Violation objects.
"""

import re
from datetime import datetime, timezone
from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    HttpUrl,
    StringConstraints,
    TypeAdapter,
    ValidationError,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from hireboard.core.exceptions import ShapeViolation, Violation

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SchemaModel(BaseModel):
    """Base for every schema: python names in code, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ============== Field validators ==============


def _check_email(value: str) -> str:
    """Validate email format and normalise to lowercase."""
    if not value:
        raise PydanticCustomError("email_required", "Email is required")
    if not EMAIL_PATTERN.match(value):
        raise PydanticCustomError("email", "Invalid email address")
    return value.lower()


_http_url = TypeAdapter(HttpUrl)


def _check_url(value: str) -> str:
    """Accept http(s) URLs only. The value is stored as given, not normalised."""
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise PydanticCustomError("url", "Invalid URL") from None
    return value


def _check_url_or_clear(value: str) -> str:
    # "" is the explicit "clear this field" sentinel
    if value == "":
        return value
    return _check_url(value)


# ============== Field types ==============

Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
Email = Annotated[str, AfterValidator(_check_email)]
CompanyName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
Url = Annotated[str, AfterValidator(_check_url)]
UrlOrClear = Annotated[str, AfterValidator(_check_url_or_clear)]
Experience = Annotated[str, StringConstraints(max_length=2000)]
Education = Annotated[str, StringConstraints(max_length=1000)]


# ============== Error conversion ==============


def to_violations(exc: ValidationError) -> list[Violation]:
    """
    Turn a pydantic ValidationError into ShapeViolations.

    The offending input value is deliberately dropped so secrets never
    end up in error messages.
    """
    violations: list[Violation] = []
    for error in exc.errors(include_url=False, include_input=False):
        violations.append(ShapeViolation(tuple(error["loc"]), error["msg"], code=error["type"]))
    return violations
