"""
Pydantic schemas for the brag sheet export API.

These mirror the records owned by the achievement-tracking, academic
profile, and insights features. The export engine only reads them:
nothing here is persisted or mutated during a generation run.
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class BragCategory(str, Enum):
    """Fixed set of achievement categories."""
    VOLUNTEERING = "volunteering"
    JOB = "job"
    AWARD = "award"
    INTERNSHIP = "internship"
    LEADERSHIP = "leadership"
    CLUB = "club"
    EXTRACURRICULAR = "extracurricular"
    ACADEMIC = "academic"
    OTHER = "other"


class VerificationStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class DocumentStyle(str, Enum):
    """The three visual styles a brag sheet can be exported in."""
    PLAIN = "plain"
    PROFESSIONAL = "professional"
    APPLICATION = "application-format"


class AchievementEntry(BaseModel):
    """One brag sheet entry (activity, award, job, ...).

    When is_ongoing is set the end date is ignored everywhere it would
    otherwise be displayed.
    """
    title: str
    category: BragCategory
    description: Optional[str] = None
    impact: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_ongoing: bool = False
    grade_level: str = ""
    school_year: str = ""
    hours_spent: Optional[float] = None
    position_role: Optional[str] = None
    grades_participated: Optional[list[str]] = None
    year_received: Optional[str] = None
    image_urls: list[str] = Field(default_factory=list)
    verification_status: VerificationStatus = VerificationStatus.PENDING

    @field_validator("hours_spent")
    @classmethod
    def validate_hours(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v < 0:
            raise ValueError("hours_spent cannot be negative")
        return v

    @property
    def is_verified(self) -> bool:
        return self.verification_status == VerificationStatus.VERIFIED


class TestScore(BaseModel):
    """A standardized test result (SAT, ACT, AP, IB...)."""
    type: str
    subject: Optional[str] = None
    score: str


class Course(BaseModel):
    name: str
    teacher: Optional[str] = None


class AcademicRecord(BaseModel):
    """GPA, test scores, courses and target colleges."""
    gpa_weighted: Optional[float] = None
    gpa_unweighted: Optional[float] = None
    test_scores: list[TestScore] = Field(default_factory=list)
    courses: list[Course] = Field(default_factory=list)
    colleges_applying: Optional[list[str]] = None

    @property
    def has_gpa(self) -> bool:
        return bool(self.gpa_weighted or self.gpa_unweighted)

    @property
    def is_empty(self) -> bool:
        return not (
            self.has_gpa
            or self.test_scores
            or self.courses
            or self.colleges_applying
        )


class InsightAnswer(BaseModel):
    """Answer to one of the fixed insight questions."""
    question_key: str
    answer: Optional[str] = None


class ProfileSummary(BaseModel):
    """Student identity used in document headers and the filename."""
    full_name: Optional[str] = None
    school_name: Optional[str] = None
    grade_level: Optional[str] = None


class ExportRequest(BaseModel):
    """Everything needed for one brag sheet export.

    student_id identifies the caller for the one-export-at-a-time guard.
    When absent the student's name is used instead.
    """
    profile: ProfileSummary = Field(default_factory=ProfileSummary)
    entries: list[AchievementEntry] = Field(default_factory=list)
    academics: Optional[AcademicRecord] = None
    insights: list[InsightAnswer] = Field(default_factory=list)
    student_id: Optional[str] = None


class StyleOption(BaseModel):
    """One entry of the style selector."""
    value: DocumentStyle
    label: str
    description: str
