"""ORM models."""

from models.base import Base
from models.match import SoloMatch, SoloMatchPlayer
from models.queue import IgnoreEntry, QueuedParticipant

__all__ = [
    "Base",
    "IgnoreEntry",
    "QueuedParticipant",
    "SoloMatch",
    "SoloMatchPlayer",
]
