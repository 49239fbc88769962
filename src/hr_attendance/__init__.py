"""HR attendance tracking package.

This package is organized by feature modules (employees, auth, attendance)
with a thin Flask controller layer and service/repository layers.
"""
