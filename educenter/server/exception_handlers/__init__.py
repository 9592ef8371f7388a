"""
Exception handlers for the EduCenter API server.

This package contains the handlers that turn domain, validation, database
and unexpected errors into JSON responses, and a setup function that
registers them with the FastAPI application.
"""

from .global_handler import setup_exception_handlers

__all__ = ["setup_exception_handlers"]
