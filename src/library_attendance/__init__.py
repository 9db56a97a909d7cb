"""Library Attendance package.

This package is organized by feature modules (members, attendance, storage)
with a thin Flask controller layer over service/repository layers.
"""
