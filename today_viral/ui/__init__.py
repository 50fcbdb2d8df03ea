"""Server-rendered page surface for Today Viral."""
from .router import router

__all__ = ["router"]
