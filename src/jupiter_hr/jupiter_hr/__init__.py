"""Jupiter HR package.

This package is organized by feature modules (users, students, skills,
performances, documents) with a thin Flask controller layer over
service/repository layers.
"""
