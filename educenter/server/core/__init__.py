"""Core server configuration, constants and security primitives."""
