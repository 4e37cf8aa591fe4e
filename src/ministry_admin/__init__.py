"""Parish Ministry Admin package.

This package is organized by feature modules (members, attendance, dues, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""
