"""All database models.

Import all models here so Alembic and SQLAlchemy can discover them.
"""

from app.models.base import Base, BaseModel, LookupModel  # noqa: F401

# Candidate registry
from app.models.candidate import Candidate, Project, Site  # noqa: F401

# System
from app.models.system import SystemSetting  # noqa: F401
