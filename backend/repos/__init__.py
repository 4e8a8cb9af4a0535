"""
Repository layer for the gallery.

All SQL lives here and ONLY here. No database access outside this module.
"""

from backend.repos.character_repo import CharacterRepo
from backend.repos.media_repo import MediaRepo
from backend.repos.tag_repo import TagRepo
from backend.repos.user_repo import UserRepo

__all__ = [
    "UserRepo",
    "CharacterRepo",
    "TagRepo",
    "MediaRepo",
]
