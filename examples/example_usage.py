"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the rules live in the services.
"""

import importlib

from config import get_settings_module

from src.jupiter_hr.jupiter_hr.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    for student in container.student_service.list_all()[:5]:
        latest = container.performance_service.latest(student.id)
        grade = latest.grade if latest else "-"
        print(f"{student.student_code:<10} {student.full_name:<30} grade={grade}")


if __name__ == "__main__":
    main()
