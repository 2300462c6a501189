"""
Validation pipeline.

Each use case pairs a request schema (field rules) with cross-field
rules that run on the raw record. Both always run, so the caller gets
every violation in one pass instead of the first one only.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Union

from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel

from hireboard.core.exceptions import (
    ConsentRequiredError,
    FieldMismatchError,
    ShapeViolation,
    ValidationErrorSet,
    Violation,
)
from hireboard.core.log import get_logger
from hireboard.core.passwords import PasswordPolicy
from hireboard.schemas.base import to_violations
from hireboard.schemas.requests import (
    EmployerProfileUpdate,
    EmployerRegistration,
    JobSeekerProfileUpdate,
    JobSeekerRegistration,
    LoginRequest,
    RegistrationBase,
)
from hireboard.schemas.user import Role

logger = get_logger("validation", "VALIDATION")

Rule = Callable[[Mapping[str, Any]], Optional[Violation]]

_MISSING = object()


class UseCase(str, Enum):
    REGISTRATION = "registration"
    EMPLOYER_REGISTRATION = "employer_registration"
    JOB_SEEKER_REGISTRATION = "job_seeker_registration"
    LOGIN = "login"
    EMPLOYER_PROFILE_UPDATE = "employer_profile_update"
    JOB_SEEKER_PROFILE_UPDATE = "job_seeker_profile_update"


def _lookup(raw: Mapping[str, Any], field: str) -> Any:
    """Read a field by wire name, falling back to its python name."""
    value = raw.get(to_camel(field), _MISSING)
    if value is _MISSING:
        value = raw.get(field, _MISSING)
    return value


# ============== Cross-field rules ==============


def passwords_match(raw: Mapping[str, Any]) -> Optional[Violation]:
    if _lookup(raw, "confirm_password") != _lookup(raw, "password"):
        return FieldMismatchError(("confirmPassword",), "Passwords don't match")
    return None


def terms_accepted(raw: Mapping[str, Any]) -> Optional[Violation]:
    if _lookup(raw, "agree_to_terms") is not True:
        return ConsentRequiredError(
            ("agreeToTerms",), "You must agree to the terms and conditions"
        )
    return None


REGISTRATION_RULES: tuple[Rule, ...] = (passwords_match, terms_accepted)


# ============== Pipelines ==============


class Pipeline:
    """
    One schema plus its cross-field rules.

    Args:
        schema: Request model carrying the field rules
        rules: Cross-field rules, run on the raw record
        fixed: Values forced onto the input whatever the caller sent
    """

    def __init__(
        self,
        schema: type[BaseModel],
        rules: Iterable[Rule] = (),
        fixed: Optional[Mapping[str, Any]] = None,
    ):
        self.schema = schema
        self.rules = tuple(rules)
        self.fixed = dict(fixed or {})

    def validate(self, raw: Mapping[str, Any], policy: Optional[PasswordPolicy] = None) -> BaseModel:
        if not isinstance(raw, Mapping):
            raise ValidationErrorSet([
                ShapeViolation((), "Input should be an object", code="model_type"),
            ])

        data = {**raw, **self.fixed}
        violations: list[Violation] = []
        record = None

        try:
            record = self.schema.model_validate(data, context={"password_policy": policy})
        except ValidationError as e:
            violations.extend(to_violations(e))

        # A field that already failed its own rule is not reported twice
        failed = {v.loc for v in violations}
        for rule in self.rules:
            violation = rule(data)
            if violation is not None and violation.loc not in failed:
                violations.append(violation)

        if violations:
            logger.debug(
                f"{self.schema.__name__} rejected: {sorted(v.field for v in violations)}"
            )
            raise ValidationErrorSet(violations)

        return record


class RoleDispatch:
    """Pick the pipeline matching the record's ``role``."""

    def __init__(self, base: Pipeline, variants: Mapping[str, Pipeline]):
        self.base = base
        self.variants = dict(variants)

    def validate(self, raw: Mapping[str, Any], policy: Optional[PasswordPolicy] = None) -> BaseModel:
        role = raw.get("role") if isinstance(raw, Mapping) else None
        if isinstance(role, Role):
            role = role.value

        pipeline = self.variants.get(role) if isinstance(role, str) else None
        if pipeline is not None:
            return pipeline.validate(raw, policy)

        allowed = " or ".join(repr(r) for r in self.variants)
        violations: list[Violation] = [
            ShapeViolation(("role",), f"Role must be {allowed}", code="role"),
        ]
        # Still report everything wrong with the common fields
        try:
            self.base.validate(raw, policy)
        except ValidationErrorSet as e:
            violations.extend(e.violations)
        raise ValidationErrorSet(violations)


employer_registration = Pipeline(
    EmployerRegistration, REGISTRATION_RULES, fixed={"role": Role.EMPLOYER.value}
)
job_seeker_registration = Pipeline(
    JobSeekerRegistration, REGISTRATION_RULES, fixed={"role": Role.JOB_SEEKER.value}
)

PIPELINES: dict[UseCase, Union[Pipeline, RoleDispatch]] = {
    UseCase.REGISTRATION: RoleDispatch(
        Pipeline(RegistrationBase, REGISTRATION_RULES),
        {
            Role.JOB_SEEKER.value: Pipeline(JobSeekerRegistration, REGISTRATION_RULES),
            Role.EMPLOYER.value: Pipeline(EmployerRegistration, REGISTRATION_RULES),
        },
    ),
    UseCase.EMPLOYER_REGISTRATION: employer_registration,
    UseCase.JOB_SEEKER_REGISTRATION: job_seeker_registration,
    UseCase.LOGIN: Pipeline(LoginRequest),
    UseCase.EMPLOYER_PROFILE_UPDATE: Pipeline(EmployerProfileUpdate),
    UseCase.JOB_SEEKER_PROFILE_UPDATE: Pipeline(JobSeekerProfileUpdate),
}


def validate(
    raw: Mapping[str, Any],
    use_case: Union[UseCase, str],
    policy: Optional[PasswordPolicy] = None,
) -> BaseModel:
    """
    Validate a raw record for one use case.

    Args:
        raw: Input record (camelCase or snake_case keys)
        use_case: Which schema variant to apply
        policy: Password policy override (defaults to the configured one)

    Returns:
        The validated request model

    Raises:
        ValidationErrorSet: With every violation found
    """
    return PIPELINES[UseCase(use_case)].validate(raw, policy)
