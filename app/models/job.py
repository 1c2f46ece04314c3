from sqlalchemy import Column, Integer, Text, String, Numeric, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base


class Job(Base):
    """
    Job model representing a job posting belonging to a company.
    """
    __tablename__ = "jobs"
    __table_args__ = (
        CheckConstraint("salary >= 0", name="ck_jobs_salary"),
        CheckConstraint("equity <= 1.0", name="ck_jobs_equity"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False, index=True)
    salary = Column(Integer, nullable=True)
    # Fraction of the company offered, 0..1
    equity = Column(Numeric(asdecimal=False), nullable=True)
    company_handle = Column(
        String(25),
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    company = relationship("Company", back_populates="jobs")
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}', company_handle='{self.company_handle}')>"
