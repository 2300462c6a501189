from sqlalchemy import JSON, Boolean, Column, DateTime, Index, String, Uuid

from hireboard.db.base import Base


class UserRecord(Base):
    """
    Single users table for every role.

    Role-specific columns stay NULL for the other roles; the pydantic
    user variants decide which of them are read back.
    """

    __tablename__ = "users"
    __table_args__ = (
        Index("idx_users_email_role", "email", "role"),
    )

    id = Column(Uuid, primary_key=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String(20), index=True, nullable=False)  # 'job_seeker' | 'employer' | 'admin'
    avatar_url = Column(String, nullable=True)

    # Employer
    company_name = Column(String(200), nullable=True)
    company_website = Column(String, nullable=True)
    verified = Column(Boolean, default=False)

    # Job seeker
    resume_url = Column(String, nullable=True)
    skills = Column(JSON, default=list)
    experience = Column(String(2000), nullable=True)
    education = Column(String(1000), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
