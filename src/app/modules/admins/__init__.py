"""
Admins Module

Administrator accounts: seeding, login, password reset and credential updates.
"""

from .router import router

__all__ = ["router"]
