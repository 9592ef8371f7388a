"""Center-to-subject link endpoints."""

from educenter.core.database.entities.edu_centers import EduFan
from educenter.core.database.entities.subjects import Fan
from educenter.core.models.io.edu_centers import EduFanCreate, EduFanRead

from .center_links import make_link_router

router = make_link_router(EduFan, Fan, "fan_id", EduFanCreate, EduFanRead, "Fan")
