"""Inbox module - mailbox status, message listing and processing endpoints"""

from .router import router

__all__ = ["router"]
