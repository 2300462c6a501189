"""
Request schemas, one per use case.

These carry the field-level rules only. Cross-field rules (password
confirmation, terms agreement) live in hireboard.validation so they are
reported even when other fields fail.
"""

from typing import Annotated, Any, ClassVar, Literal, Optional

from pydantic import AfterValidator, ConfigDict, Field, StrictBool, ValidationInfo
from pydantic_core import PydanticCustomError

from hireboard.core.passwords import PasswordPolicy, validate_password_strength
from hireboard.schemas.base import (
    CompanyName,
    Education,
    Email,
    Experience,
    Name,
    SchemaModel,
    Url,
    UrlOrClear,
)


def _check_new_password(value: str, info: ValidationInfo) -> str:
    """Length bounds and strength rule for a password being set."""
    policy = (info.context or {}).get("password_policy") or PasswordPolicy.from_settings()

    if len(value) < policy.min_length:
        raise PydanticCustomError(
            "password_too_short",
            "Password must be at least {min_length} characters",
            {"min_length": policy.min_length},
        )
    if len(value) > policy.max_length:
        raise PydanticCustomError(
            "password_too_long",
            "Password cannot exceed {max_length} characters",
            {"max_length": policy.max_length},
        )
    if not validate_password_strength(value, policy):
        raise PydanticCustomError(
            "password_too_weak",
            "Password must contain uppercase, lowercase, number, and special character",
        )
    return value


def _check_login_password(value: str) -> str:
    if not value:
        raise PydanticCustomError("password_required", "Password is required")
    return value


NewPassword = Annotated[str, AfterValidator(_check_new_password)]
LoginPassword = Annotated[str, AfterValidator(_check_login_password)]


# ============== Registration ==============


class RegistrationBase(SchemaModel):
    """Fields every registration carries. Unknown keys are dropped."""

    model_config = ConfigDict(extra="ignore")

    name: Name
    email: Email
    password: NewPassword = Field(repr=False)
    confirm_password: str = Field(repr=False)
    agree_to_terms: StrictBool


class EmployerRegistration(RegistrationBase):
    role: Literal["employer"] = "employer"
    company_name: CompanyName
    company_website: Optional[Url] = None


class JobSeekerRegistration(RegistrationBase):
    role: Literal["job_seeker"] = "job_seeker"


# ============== Login ==============


class LoginRequest(SchemaModel):
    model_config = ConfigDict(extra="ignore")

    email: Email
    password: LoginPassword = Field(repr=False)
    remember_me: bool = False


# ============== Profile updates ==============


class ProfileUpdate(SchemaModel):
    """
    Partial update. Every field is optional and fields of other roles are
    rejected.

    An omitted field leaves the stored value alone; ``""`` on a URL field
    clears it.
    """

    model_config = ConfigDict(extra="forbid")

    clearable: ClassVar[frozenset[str]] = frozenset()

    name: Optional[Name] = None
    avatar_url: Optional[UrlOrClear] = None

    def changes(self) -> dict[str, Any]:
        """
        Fields to write: omitted and null fields are absent, cleared URL
        fields map to None.
        """
        changes = {}
        for field, value in self.model_dump(exclude_unset=True, exclude_none=True).items():
            if value == "" and field in self.clearable:
                value = None
            changes[field] = value
        return changes


class EmployerProfileUpdate(ProfileUpdate):
    clearable: ClassVar[frozenset[str]] = frozenset({"avatar_url", "company_website"})

    company_name: Optional[CompanyName] = None
    company_website: Optional[UrlOrClear] = None


class JobSeekerProfileUpdate(ProfileUpdate):
    clearable: ClassVar[frozenset[str]] = frozenset({"avatar_url", "resume_url"})

    resume_url: Optional[UrlOrClear] = None
    skills: Optional[list[str]] = None
    experience: Optional[Experience] = None
    education: Optional[Education] = None
