"""Subject (fan) endpoints."""

from educenter.core.database.entities.subjects import Fan

from .subjects import make_subject_router

router = make_subject_router(Fan, "fan", "Fan")
