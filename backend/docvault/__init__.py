# backend/docvault/__init__.py
from .config import settings
from .database import Base, engine, get_db
from . import models
from . import schemas
from . import api

__version__ = "0.1.0"
