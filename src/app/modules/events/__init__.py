"""
Events Module
"""

from .router import router

__all__ = ["router"]
