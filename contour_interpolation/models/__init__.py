"""
Data models for the interpolation coordinator.
"""

from .annotation import Annotation, AnnotationData, AnnotationMetadata, Segmentation
from .interpolation import InterpolationContextData, SliceContext

__all__ = [
  'Annotation',
  'AnnotationData',
  'AnnotationMetadata',
  'Segmentation',
  'InterpolationContextData',
  'SliceContext',
]
