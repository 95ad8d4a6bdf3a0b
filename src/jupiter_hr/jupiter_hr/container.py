from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_EXPIRY_WARNING_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .documents.mysql_document_repository import MySQLDocumentRepository
from .documents.repository import DocumentRepository
from .documents.service import DocumentService
from .performances.mysql_performance_repository import MySQLPerformanceRepository
from .performances.repository import PerformanceRepository
from .performances.service import PerformanceService
from .skills.mysql_skill_repository import MySQLSkillRepository
from .skills.repository import SkillRepository
from .skills.service import SkillService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    students_repo: StudentRepository
    skills_repo: SkillRepository
    performances_repo: PerformanceRepository
    documents_repo: DocumentRepository

    auth_service: AuthService
    user_service: UserService
    student_service: StudentService
    skill_service: SkillService
    performance_service: PerformanceService
    document_service: DocumentService

    conn: Optional[DatabaseConnection] = None


def wire(
    *,
    users_repo: UserRepository,
    students_repo: StudentRepository,
    skills_repo: SkillRepository,
    performances_repo: PerformanceRepository,
    documents_repo: DocumentRepository,
    expiry_warning_days: int = DEFAULT_EXPIRY_WARNING_DAYS,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build the services on top of any set of repositories."""
    return Container(
        users_repo=users_repo,
        students_repo=students_repo,
        skills_repo=skills_repo,
        performances_repo=performances_repo,
        documents_repo=documents_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        student_service=StudentService(students_repo),
        skill_service=SkillService(skills_repo),
        performance_service=PerformanceService(performances_repo),
        document_service=DocumentService(documents_repo, expiry_warning_days=expiry_warning_days),
        conn=conn,
    )


def build_container(*, db_config: dict, expiry_warning_days: int = DEFAULT_EXPIRY_WARNING_DAYS) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire(
        users_repo=MySQLUserRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        skills_repo=MySQLSkillRepository(conn),
        performances_repo=MySQLPerformanceRepository(conn),
        documents_repo=MySQLDocumentRepository(conn),
        expiry_warning_days=expiry_warning_days,
        conn=conn,
    )
