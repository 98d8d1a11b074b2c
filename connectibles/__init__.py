# Import-light: migrations/env.py takes Base from here.
from connectibles.shared.models.base import Base

__all__ = ["Base"]
