"""
User Service.

Registration, login and profile maintenance on top of the validation
pipeline, the credential store and a UserRepository. Persistence errors
such as UniquenessConflict propagate unchanged.
"""

from collections.abc import Mapping
from typing import Any, Optional, Union
from uuid import UUID

from hireboard.core.breach import BreachChecker, NullBreachChecker
from hireboard.core.exceptions import (
    AuthenticationError,
    ShapeViolation,
    UniquenessConflict,
    UserNotFoundError,
    ValidationErrorSet,
)
from hireboard.core.log import get_logger
from hireboard.core.passwords import (
    PasswordPolicy,
    check_password_breach,
    validate_password_strength,
)
from hireboard.core.security import CredentialStore, credential_store
from hireboard.repositories.users import UserRepository
from hireboard.schemas.base import utcnow
from hireboard.schemas.requests import ProfileUpdate
from hireboard.schemas.user import Role, User, apply_profile_update, parse_user
from hireboard.validation import Pipeline, UseCase, validate

logger = get_logger("user_service", "USERS")

REGISTRATION_USE_CASES = {
    UseCase.REGISTRATION,
    UseCase.EMPLOYER_REGISTRATION,
    UseCase.JOB_SEEKER_REGISTRATION,
}

PROFILE_UPDATE_USE_CASES = {
    Role.EMPLOYER.value: UseCase.EMPLOYER_PROFILE_UPDATE,
    Role.JOB_SEEKER.value: UseCase.JOB_SEEKER_PROFILE_UPDATE,
}

# Admins only carry the common fields
admin_profile_update = Pipeline(ProfileUpdate)


class UserService:
    """
    User lifecycle operations.

    Args:
        repository: Persistence collaborator
        credentials: Credential store (defaults to the shared one)
        breach_checker: Breach-database lookup (defaults to the no-op one)
        policy: Password policy (defaults to the configured one)
    """

    def __init__(
        self,
        repository: UserRepository,
        credentials: Optional[CredentialStore] = None,
        breach_checker: Optional[BreachChecker] = None,
        policy: Optional[PasswordPolicy] = None,
    ):
        self.repository = repository
        self.credentials = credentials or credential_store
        self.breach_checker = breach_checker or NullBreachChecker()
        self.policy = policy or PasswordPolicy.from_settings()

    async def _reject_breached(self, password: str) -> None:
        if await check_password_breach(password, self.breach_checker):
            raise ValidationErrorSet([
                ShapeViolation(
                    ("password",),
                    "This password has appeared in a data breach, please choose another",
                    code="password_breached",
                ),
            ])

    def _ensure_email_free(self, email: str) -> None:
        if self.repository.find_by_email(email) is not None:
            raise UniquenessConflict("email", email)

    async def register(
        self,
        raw: Mapping[str, Any],
        use_case: Union[UseCase, str] = UseCase.REGISTRATION,
    ) -> User:
        """
        Register a new job seeker or employer.

        Raises:
            ValidationErrorSet: If the input is invalid or the password is breached
            UniquenessConflict: If the email is already registered
            HashingError: If the password cannot be hashed
        """
        use_case = UseCase(use_case)
        if use_case not in REGISTRATION_USE_CASES:
            raise ValueError(f"{use_case.value} is not a registration use case")

        request = validate(raw, use_case, self.policy)
        await self._reject_breached(request.password)
        self._ensure_email_free(request.email)

        data = request.model_dump(exclude={"password", "confirm_password", "agree_to_terms"})
        data["password"] = await self.credentials.hash_password(request.password)
        user = parse_user(data)

        self.repository.create(user)
        logger.info(f"Registered {user.role} {user.id} ({user.email})")
        return user

    async def create_admin(self, name: str, email: str, password: str) -> User:
        """
        Create an admin account. Admins cannot self-register.

        Raises:
            ValidationErrorSet: If a field is invalid or the password is weak
            UniquenessConflict: If the email is already registered
        """
        self._ensure_email_free(email.lower())

        if len(password) < self.policy.min_length:
            violation = ShapeViolation(
                ("password",),
                f"Password must be at least {self.policy.min_length} characters",
                code="password_too_short",
            )
        elif len(password) > self.policy.max_length:
            violation = ShapeViolation(
                ("password",),
                f"Password cannot exceed {self.policy.max_length} characters",
                code="password_too_long",
            )
        elif not validate_password_strength(password, self.policy):
            violation = ShapeViolation(
                ("password",),
                "Password must contain uppercase, lowercase, number, and special character",
                code="password_too_weak",
            )
        else:
            violation = None
        if violation is not None:
            raise ValidationErrorSet([violation])

        user = parse_user({
            "role": Role.ADMIN.value,
            "name": name,
            "email": email,
            "password": await self.credentials.hash_password(password),
        })

        self.repository.create(user)
        logger.info(f"Created admin {user.id} ({user.email})")
        return user

    async def login(self, raw: Mapping[str, Any]) -> User:
        """
        Check an email/password pair.

        A malformed request is a ValidationErrorSet; a well-formed request
        with an unknown email or a wrong password is an AuthenticationError.
        """
        request = validate(raw, UseCase.LOGIN, self.policy)

        user = self.repository.find_by_email(request.email)
        if user is None or not await self.credentials.compare_password(request.password, user.password):
            logger.info(f"Failed login for {request.email}")
            raise AuthenticationError("Incorrect email or password")

        if self.credentials.needs_rehash(user.password):
            user = user.model_copy(update={
                "password": await self.credentials.hash_password(request.password),
                "updated_at": utcnow(),
            })
            self.repository.update(user)
            logger.info(f"Rehashed password for {user.id} with cost {self.credentials.rounds}")

        logger.info(f"Login succeeded for {user.id}")
        return user

    def get(self, user_id: UUID) -> User:
        user = self.repository.get(user_id)
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found")
        return user

    def find_by_email(self, email: str) -> Optional[User]:
        return self.repository.find_by_email(email.lower())

    def find_by_role(self, role: Union[Role, str], limit: int = 50) -> list[User]:
        return self.repository.find_by_role(Role(role).value, limit)

    def update_profile(self, user_id: UUID, raw: Mapping[str, Any]) -> User:
        """
        Apply a profile update validated against the user's own role.

        Raises:
            UserNotFoundError: If the user does not exist
            ValidationErrorSet: If the update is invalid for this role
        """
        user = self.get(user_id)

        use_case = PROFILE_UPDATE_USE_CASES.get(user.role)
        if use_case is None:
            update = admin_profile_update.validate(raw, self.policy)
        else:
            update = validate(raw, use_case, self.policy)

        updated = apply_profile_update(user, update)
        self.repository.update(updated)
        logger.info(f"Updated profile {user.id}: {sorted(update.changes())}")
        return updated

    def delete(self, user_id: UUID) -> None:
        if not self.repository.delete(user_id):
            raise UserNotFoundError(f"User {user_id} not found")
        logger.info(f"Deleted user {user_id}")
