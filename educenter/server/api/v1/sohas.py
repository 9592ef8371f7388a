"""Field (soha) endpoints."""

from educenter.core.database.entities.subjects import Soha

from .subjects import make_subject_router

router = make_subject_router(Soha, "soha", "Soha")
