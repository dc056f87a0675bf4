"""
Curation session for the Creator Curation Pipeline
"""

from .curation_session import CurationSession, UserIdentity

__all__ = ["CurationSession", "UserIdentity"]
