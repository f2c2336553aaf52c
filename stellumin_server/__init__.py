"""Authoritative server package for the Stellumin arena game."""

__all__ = [
    "broadcast",
    "config",
    "constants",
    "food",
    "main",
    "physics",
    "player",
    "protocol",
    "scheduler",
    "session",
    "utils",
    "world",
]
