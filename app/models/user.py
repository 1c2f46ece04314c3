"""
User model for authentication and job applications.

Users are keyed by username; the is_admin flag is copied into every token
issued for the user and drives the admin-only gates.
"""

from sqlalchemy import Column, String, Text, Boolean, Integer, ForeignKey
from sqlalchemy.orm import relationship
from app.core.database import Base


class User(Base):
    """
    User account. ``password`` stores the bcrypt hash, never the plain text.
    """
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)
    password = Column(Text, nullable=False)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)

    # Relationships
    applications = relationship(
        "Application",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="Application.job_id",
    )

    @property
    def job_ids(self):
        return [application.job_id for application in self.applications]

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"


class Application(Base):
    """A user's application to a job (one per user/job pair)."""
    __tablename__ = "applications"

    username = Column(
        String(25),
        ForeignKey("users.username", ondelete="CASCADE"),
        primary_key=True,
    )
    job_id = Column(
        Integer,
        ForeignKey("jobs.id", ondelete="CASCADE"),
        primary_key=True,
    )

    user = relationship("User", back_populates="applications")
    job = relationship("Job", back_populates="applications")

    def __repr__(self):
        return f"<Application(username='{self.username}', job_id={self.job_id})>"
