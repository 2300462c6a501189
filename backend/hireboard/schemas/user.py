"""
User entity.

One model per role, joined into a tagged union on ``role``. Each variant
declares only its own fields and rejects anything else, so an employer
can never carry job-seeker attributes and vice versa. Users are frozen:
the role is fixed at creation and updates produce a new instance.
"""

from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union
from uuid import UUID, uuid4

from pydantic import AfterValidator, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from hireboard.core.exceptions import ShapeViolation, ValidationErrorSet
from hireboard.core.passwords import is_password_hashed
from hireboard.schemas.base import (
    CompanyName,
    Education,
    Email,
    Experience,
    Name,
    SchemaModel,
    Url,
    to_violations,
    utcnow,
)
from hireboard.schemas.requests import ProfileUpdate


class Role(str, Enum):
    JOB_SEEKER = "job_seeker"
    EMPLOYER = "employer"
    ADMIN = "admin"


def _check_stored_password(value: str) -> str:
    if not is_password_hashed(value):
        raise PydanticCustomError(
            "stored_credential", "Password must be stored as a hash, never as plain text"
        )
    return value


StoredPassword = Annotated[str, AfterValidator(_check_stored_password)]


# ============== Variants ==============


class UserBase(SchemaModel):
    """Fields shared by every role."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: UUID = Field(default_factory=uuid4)
    name: Name
    email: Email
    password: StoredPassword = Field(repr=False)
    avatar_url: Optional[Url] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class EmployerUser(UserBase):
    role: Literal["employer"] = "employer"
    company_name: CompanyName
    company_website: Optional[Url] = None
    verified: bool = False


class JobSeekerUser(UserBase):
    role: Literal["job_seeker"] = "job_seeker"
    resume_url: Optional[Url] = None
    skills: list[str] = Field(default_factory=list)
    experience: Optional[Experience] = None
    education: Optional[Education] = None


class AdminUser(UserBase):
    role: Literal["admin"] = "admin"


User = Annotated[Union[EmployerUser, JobSeekerUser, AdminUser], Field(discriminator="role")]

USER_MODELS: dict[str, type[UserBase]] = {
    Role.EMPLOYER.value: EmployerUser,
    Role.JOB_SEEKER.value: JobSeekerUser,
    Role.ADMIN.value: AdminUser,
}

COMMON_PROFILE_FIELDS = {"id", "name", "email", "role", "avatar_url", "created_at", "updated_at"}
EMPLOYER_FIELDS = {"company_name", "company_website", "verified"}
JOB_SEEKER_FIELDS = {"resume_url", "skills", "experience", "education"}


def parse_user(record: Mapping[str, Any]) -> User:
    """
    Validate a raw record into the variant selected by its role.

    Raises:
        ValidationErrorSet: If the role is unknown or any field is invalid
    """
    role = record.get("role")
    if isinstance(role, Role):
        role = role.value
    model = USER_MODELS.get(role) if isinstance(role, str) else None
    if model is None:
        allowed = ", ".join(repr(r.value) for r in Role)
        raise ValidationErrorSet([
            ShapeViolation(("role",), f"Role must be one of {allowed}", code="role"),
        ])

    try:
        return model.model_validate(record)
    except ValidationError as e:
        raise ValidationErrorSet(to_violations(e)) from None


# ============== Role tests ==============


def _get(user: Any, field: str) -> Any:
    # Works on user models and on projected dicts (wire or python names)
    if isinstance(user, Mapping):
        return user.get(to_camel(field), user.get(field))
    return getattr(user, field, None)


def is_employer(user: Any) -> bool:
    return _get(user, "role") == Role.EMPLOYER


def is_job_seeker(user: Any) -> bool:
    return _get(user, "role") == Role.JOB_SEEKER


def is_admin(user: Any) -> bool:
    return _get(user, "role") == Role.ADMIN


def is_complete_employer_profile(user: Any) -> bool:
    return is_employer(user) and bool(_get(user, "company_name"))


def is_complete_job_seeker_profile(user: Any) -> bool:
    return is_job_seeker(user) and (bool(_get(user, "skills")) or bool(_get(user, "resume_url")))


# ============== Projections ==============


def to_public_view(user: UserBase) -> dict[str, Any]:
    """Every attribute except the stored password, keyed by wire names."""
    return user.model_dump(exclude={"password"}, by_alias=True)


def to_employer_profile(user: UserBase) -> dict[str, Any]:
    """
    Employer-facing profile.

    A non-employer yields only the common profile fields, since it has no
    employer attributes to project.
    """
    return user.model_dump(include=COMMON_PROFILE_FIELDS | EMPLOYER_FIELDS, by_alias=True)


def to_job_seeker_profile(user: UserBase) -> dict[str, Any]:
    """
    Job-seeker-facing profile.

    A non-job-seeker yields only the common profile fields.
    """
    return user.model_dump(include=COMMON_PROFILE_FIELDS | JOB_SEEKER_FIELDS, by_alias=True)


def get_employer_fields(user: UserBase) -> Optional[dict[str, Any]]:
    if not is_employer(user):
        return None
    return user.model_dump(include=EMPLOYER_FIELDS, by_alias=True)


def get_job_seeker_fields(user: UserBase) -> Optional[dict[str, Any]]:
    if not is_job_seeker(user):
        return None
    return user.model_dump(include=JOB_SEEKER_FIELDS, by_alias=True)


# ============== Updates ==============


def apply_profile_update(user: UserBase, update: ProfileUpdate) -> User:
    """
    Return a copy of the user with the update's changes applied.

    The result is re-validated against the user's own variant, so a
    field belonging to another role is rejected.

    Raises:
        ValidationErrorSet: If the merged record is invalid
    """
    data = user.model_dump()
    data.update(update.changes())
    data["updated_at"] = utcnow()

    try:
        return type(user).model_validate(data)
    except ValidationError as e:
        raise ValidationErrorSet(to_violations(e)) from None
