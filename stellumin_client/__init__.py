"""Headless client package used to drive bots against a Stellumin server."""

__all__ = ["main", "network", "steering"]
