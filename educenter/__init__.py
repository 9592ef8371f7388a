"""EduCenter Directory API.

A REST backend for an education-center directory.

Core subpackages
----------------

- ``educenter.core``:

  - Logging and monitoring setup.
  - SQLModel entities for users, regions, categories, resources, subjects
    (fan), fields (soha), education centers, branches (fillial), course
    registrations, comments and likes.
  - Async repositories built on SQLAlchemy sessions.
  - Pydantic I/O schemas used by the HTTP layer.

- ``educenter.server``:

  - FastAPI application, routers and request dependencies.
  - JWT/bcrypt security primitives, OTP mail verification, local image uploads.
  - Exception handlers and request timing middleware.
"""
