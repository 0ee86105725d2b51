"""
Database models for LinkTrackr.

A Link owns its click history; clicks are appended by the redirect path
and never updated or removed on their own.
"""

from .link import Link, Click

__all__ = ["Link", "Click"]
