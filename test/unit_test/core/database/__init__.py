"""Unit tests for the database layer.

Entities and repositories run against in-memory SQLite.
"""
