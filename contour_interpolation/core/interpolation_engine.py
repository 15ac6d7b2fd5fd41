"""
Interpolation engine seam.

The geometry that synthesises intermediate contours lives outside this
package. StoreBackedInterpolationEngine supplies the deletion path on top of an
AnnotationStore so concrete engines only implement `synthesize`.
"""

from abc import ABC, abstractmethod
from typing import List
import logging

from ..models.annotation import Annotation
from ..models.interpolation import InterpolationContextData
from .annotation_store import AnnotationStore


class InterpolationEngine(ABC):

  @abstractmethod
  def synthesize(self, context_data: InterpolationContextData) -> None:
    """Recompute the generated members of the group in context_data (idempotent)."""

  @abstractmethod
  def delete_generated(self, context_data: InterpolationContextData) -> None:
    """Remove the generated members tied to the keyframe/group in context_data."""



class StoreBackedInterpolationEngine(InterpolationEngine):

  def __init__(self, store: AnnotationStore):
    self.store = store
    self._log = logging.getLogger(f"interpolation.core.{type(self).__name__}")

  def group_members(self, context_data: InterpolationContextData) -> List[Annotation]:
    """Other annotations sharing the tool and interpolation uid of the request."""
    interpolation_uid = context_data.interpolation_uid
    annotation = context_data.annotation
    if not interpolation_uid or annotation.metadata is None:
      return []
    return [
      candidate for candidate in self.store.get_annotations(annotation.metadata.tool_name, context_data.group_selector)
      if candidate is not annotation and candidate.metadata is not None and candidate.interpolation_uid == interpolation_uid
    ]

  def generated_members(self, context_data: InterpolationContextData) -> List[Annotation]:
    """Generated annotations sharing the tool and interpolation uid of the request."""
    return [candidate for candidate in self.group_members(context_data) if candidate.auto_generated]

  def dependent_members(self, context_data: InterpolationContextData) -> List[Annotation]:
    """Generated members lying in the spans anchored by the request annotation.

    A span runs from the request's slice to the nearest other user drawn
    keyframe of the group on that side, or to the end of the stack when
    there is none.
    """
    members = self.group_members(context_data)
    if not members:
      return []
    slice_index = context_data.annotation.metadata.slice_index
    keyframe_slices = [c.metadata.slice_index for c in members if not c.auto_generated]
    lower = max((s for s in keyframe_slices if s < slice_index), default=float("-inf"))
    upper = min((s for s in keyframe_slices if s > slice_index), default=float("inf"))
    return [
      candidate for candidate in members
      if candidate.auto_generated and lower < candidate.metadata.slice_index < upper
    ]

  def delete_generated(self, context_data: InterpolationContextData) -> None:
    removed = 0
    for candidate in self.dependent_members(context_data):
      if self.store.remove_annotation(candidate.annotation_uid):
        removed += 1
    self._log.debug("delete_generated interpolation_uid=%s removed=%d", context_data.interpolation_uid, removed)
