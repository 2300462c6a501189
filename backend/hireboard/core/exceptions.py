"""
Error taxonomy for the identity layer.

Validation problems are collected as Violation instances and raised
together inside a ValidationErrorSet. Credential engine faults and
persistence conflicts are raised directly to the caller.
"""

from typing import Iterable, Union

Loc = tuple[Union[str, int], ...]


class HireboardError(Exception):
    """Base class for every error raised by this package."""


# ============== Validation ==============


class Violation(HireboardError):
    """A single failed constraint, attributed to a field path."""

    code = "invalid"

    def __init__(self, loc: Loc, message: str):
        super().__init__(message)
        self.loc = tuple(loc)
        self.message = message

    @property
    def field(self) -> str:
        """Dotted field path, e.g. "skills.0"."""
        return ".".join(str(part) for part in self.loc)

    def as_dict(self) -> dict:
        return {"loc": self.loc, "msg": self.message, "type": self.code}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.field!r}, {self.message!r})"


class ShapeViolation(Violation):
    """A field failed its type, format or length rule."""

    def __init__(self, loc: Loc, message: str, code: str = "shape"):
        super().__init__(loc, message)
        self.code = code


class CrossFieldViolation(Violation):
    """A rule spanning several fields of the same record failed."""

    code = "cross_field"


class FieldMismatchError(CrossFieldViolation):
    """A confirmation field does not equal the field it confirms."""

    code = "field_mismatch"


class ConsentRequiredError(CrossFieldViolation):
    """A required agreement was not given."""

    code = "consent_required"


class ValidationErrorSet(HireboardError):
    """Every violation found while validating one record."""

    def __init__(self, violations: Iterable[Violation]):
        self.violations = list(violations)
        super().__init__(
            "; ".join(f"{v.field}: {v.message}" for v in self.violations)
        )

    def errors(self) -> list[dict]:
        return [v.as_dict() for v in self.violations]

    def fields(self) -> set[str]:
        return {v.field for v in self.violations}

    def __iter__(self):
        return iter(self.violations)

    def __len__(self) -> int:
        return len(self.violations)


# ============== Credentials ==============


class CredentialError(HireboardError):
    """The credential engine failed. Never carries the plaintext."""


class HashingError(CredentialError):
    pass


class ComparisonError(CredentialError):
    pass


# ============== Persistence / service ==============


class UniquenessConflict(HireboardError):
    """A unique attribute (email, id) is already taken."""

    def __init__(self, field: str, value: str):
        super().__init__(f"A user with this {field} already exists")
        self.field = field
        self.value = value


class AuthenticationError(HireboardError):
    """Email/password pair did not authenticate."""


class UserNotFoundError(HireboardError):
    pass
