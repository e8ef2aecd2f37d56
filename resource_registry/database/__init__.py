from .database import Base, DataStore
from . import models

__all__ = ["Base", "DataStore", "models"]
