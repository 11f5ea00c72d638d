"""
Database models package
"""

from .rsvp import Rsvp
from .counter import IdCounter

__all__ = ["Rsvp", "IdCounter"]
