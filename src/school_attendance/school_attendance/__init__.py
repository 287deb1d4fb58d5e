"""School attendance tracker package.

This package is organized by feature modules (students, attendance, stats,
reports, ...) with a thin Flask controller layer over service/repository
layers backed by an in-memory store.
"""
