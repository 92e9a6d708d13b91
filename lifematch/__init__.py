"""LifeMatch: job search and matrimonial matchmaking service."""

__version__ = "1.0.0"
