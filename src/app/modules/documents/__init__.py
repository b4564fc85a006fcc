"""
Documents Module

Library of downloadable documents (metadata and URLs).
"""

from .router import router

__all__ = ["router"]
