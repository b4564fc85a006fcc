"""
Notifications Module

Stored dashboard notices with CRUD and sample seeding.
"""

from .router import router

__all__ = ["router"]
