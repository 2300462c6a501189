from hireboard.schemas.requests import (
    EmployerProfileUpdate,
    EmployerRegistration,
    JobSeekerProfileUpdate,
    JobSeekerRegistration,
    LoginRequest,
    ProfileUpdate,
    RegistrationBase,
)
from hireboard.schemas.user import (
    AdminUser,
    EmployerUser,
    JobSeekerUser,
    Role,
    User,
    apply_profile_update,
    get_employer_fields,
    get_job_seeker_fields,
    is_admin,
    is_complete_employer_profile,
    is_complete_job_seeker_profile,
    is_employer,
    is_job_seeker,
    parse_user,
    to_employer_profile,
    to_job_seeker_profile,
    to_public_view,
)

__all__ = [
    "AdminUser",
    "EmployerProfileUpdate",
    "EmployerRegistration",
    "EmployerUser",
    "JobSeekerProfileUpdate",
    "JobSeekerRegistration",
    "JobSeekerUser",
    "LoginRequest",
    "ProfileUpdate",
    "RegistrationBase",
    "Role",
    "User",
    "apply_profile_update",
    "get_employer_fields",
    "get_job_seeker_fields",
    "is_admin",
    "is_complete_employer_profile",
    "is_complete_job_seeker_profile",
    "is_employer",
    "is_job_seeker",
    "parse_user",
    "to_employer_profile",
    "to_job_seeker_profile",
    "to_public_view",
]
