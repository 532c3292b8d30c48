"""
Credentials Service Routes
==========================

API route handlers for the credentials service.
"""

from services.credentials.routes import commitments, mint, networks, verification


__all__ = ["commitments", "mint", "networks", "verification"]
