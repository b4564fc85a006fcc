"""
Contacts Module

Public contact form and the admin inbox.
"""

from .router import router

__all__ = ["router"]
