"""Repository classes for database operations."""
from lifematch.repositories.base import BaseRepository
from lifematch.repositories.job import ApplicationRepository, JobRepository
from lifematch.repositories.matchmaking import InterestRepository, MatchRepository
from lifematch.repositories.message import MessageRepository
from lifematch.repositories.profile import ProfileRepository
from lifematch.repositories.user import RoleRepository

__all__ = [
    "ApplicationRepository",
    "BaseRepository",
    "InterestRepository",
    "JobRepository",
    "MatchRepository",
    "MessageRepository",
    "ProfileRepository",
    "RoleRepository",
]
