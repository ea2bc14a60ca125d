"""Scratch storage for attachment extraction"""

from .temp_files import materialized, remove_quietly, derived_path

__all__ = ["materialized", "remove_quietly", "derived_path"]
