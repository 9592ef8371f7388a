"""Center-to-field link endpoints."""

from educenter.core.database.entities.edu_centers import EduSoha
from educenter.core.database.entities.subjects import Soha
from educenter.core.models.io.edu_centers import EduSohaCreate, EduSohaRead

from .center_links import make_link_router

router = make_link_router(EduSoha, Soha, "soha_id", EduSohaCreate, EduSohaRead, "Soha")
