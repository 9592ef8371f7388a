"""
Version 1 API routers.

Each module exposes ``router``; ``educenter.server.main`` mounts them under
``/api/v1`` (except health).
"""
