"""
Channel binding module
"""

from .binding_store import ChannelBinding, ChannelBindingStore

__all__ = ["ChannelBinding", "ChannelBindingStore"]
