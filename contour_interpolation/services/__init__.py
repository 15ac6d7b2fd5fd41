"""
Service layer of the interpolation coordinator.
"""

from .interpolation_manager import InterpolationManager

__all__ = ["InterpolationManager"]
