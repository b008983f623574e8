"""
API data models. Single import surface for DB entities.

DB entities (api.models.models):
- Profile
"""

from api.models.models import Profile

__all__ = [
    "Profile",
]
