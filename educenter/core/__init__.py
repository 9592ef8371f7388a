"""Shared building blocks: logging, monitoring, persistence and I/O models."""
