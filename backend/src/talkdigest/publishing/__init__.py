"""Publishing module - simulated social post and newsletter endpoints"""

from .router import router

__all__ = ["router"]
