"""
Video selection state for the Creator Curation Pipeline
"""

from .selection_state import SelectionState

__all__ = ["SelectionState"]
