"""
EduCenter API Server Package.

This package contains the web server implementation for the education
center directory.

Subpackages:
    api: FastAPI dependencies and route definitions.
    core: Configuration, constants, errors and security primitives.
    exception_handlers: Error to JSON response translation.
    middleware: Request timing and monitoring.
    services: OTP, mail, uploads, device parsing and startup bootstrap.
"""
