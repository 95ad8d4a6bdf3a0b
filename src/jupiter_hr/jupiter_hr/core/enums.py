from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for access control and dashboard routing."""

    STUDENT = "STUDENT"
    HR = "HR"
    ADMIN = "ADMIN"


class StudentStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    GRADUATED = "GRADUATED"
    SUSPENDED = "SUSPENDED"
    ON_LEAVE = "ON_LEAVE"


class SkillCategory(str, Enum):
    TECHNICAL = "TECHNICAL"
    PROGRAMMING = "PROGRAMMING"
    DATABASE = "DATABASE"
    FRAMEWORK = "FRAMEWORK"
    SOFT_SKILL = "SOFT_SKILL"
    LANGUAGE = "LANGUAGE"
    MANAGEMENT = "MANAGEMENT"
    DESIGN = "DESIGN"
    OTHER = "OTHER"


class ProficiencyLevel(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    EXPERT = "EXPERT"


class EvaluationType(str, Enum):
    ACADEMIC = "ACADEMIC"
    INTERNSHIP = "INTERNSHIP"
    PROJECT = "PROJECT"
    QUARTERLY = "QUARTERLY"
    ANNUAL = "ANNUAL"
    PROBATION = "PROBATION"
    SKILL_ASSESSMENT = "SKILL_ASSESSMENT"


class EvaluationStatus(str, Enum):
    """Lifecycle of a performance evaluation."""

    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class DocumentType(str, Enum):
    ID_PROOF = "ID_PROOF"
    ADDRESS_PROOF = "ADDRESS_PROOF"
    ACADEMIC_CERTIFICATE = "ACADEMIC_CERTIFICATE"
    PROFESSIONAL_CERTIFICATE = "PROFESSIONAL_CERTIFICATE"
    TRANSCRIPT = "TRANSCRIPT"
    RESUME = "RESUME"
    COVER_LETTER = "COVER_LETTER"
    OFFER_LETTER = "OFFER_LETTER"
    EXPERIENCE_LETTER = "EXPERIENCE_LETTER"
    RECOMMENDATION_LETTER = "RECOMMENDATION_LETTER"
    PASSPORT = "PASSPORT"
    VISA = "VISA"
    MEDICAL_RECORD = "MEDICAL_RECORD"
    OTHER = "OTHER"


class DocumentStatus(str, Enum):
    """Lifecycle of an uploaded document.

    Note: EXPIRED is a valid stored value but no workflow action produces it;
    expiry is evaluated from expiry_date at read time.
    """

    PENDING = "PENDING"
    UNDER_REVIEW = "UNDER_REVIEW"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"


class ReviewAction(str, Enum):
    """Actions an HR reviewer can apply to a record."""

    VERIFY = "VERIFY"
    APPROVE = "APPROVE"
    REJECT = "REJECT"
