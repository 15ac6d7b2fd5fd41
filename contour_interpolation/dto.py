from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, InstanceOf, field_validator

from .enums import ChangeTypes
from .models.annotation import Annotation


class AcceptInterpolationSelector(BaseModel):
  """Filter for accepting generated annotations.

    Present fields are AND-ed together; absent fields match everything.
    """

  tool_names: Optional[List[str]] = None
  segmentation_id: Optional[str] = None
  segment_index: Optional[int] = None
  slice_index: Optional[int] = None

  @field_validator("segmentation_id", mode="before")
  def _trim_segmentation_id(cls, v):
    return v.strip() if isinstance(v, str) else v

  @field_validator("tool_names", mode="before")
  def _trim_tool_names(cls, v):
    if isinstance(v, str):
      v = [v]
    if isinstance(v, (list, tuple)):
      return [t.strip() if isinstance(t, str) else t for t in v]
    return v

  def matches(self, annotation: Annotation) -> bool:
    if self.segment_index is not None and self.segment_index != annotation.segment_index:
      return False
    if (self.slice_index is not None and annotation.metadata is not None
        and self.slice_index != annotation.metadata.slice_index):
      return False
    if self.segmentation_id is not None and self.segmentation_id != annotation.segmentation_id:
      return False
    return True


# ---------------- annotation lifecycle event payloads ----------------


class _AnnotationEvent(BaseModel):
  # InstanceOf keeps the caller's object; handlers mutate it in place
  annotation: Optional[InstanceOf[Annotation]] = None


class AnnotationCompletedEvent(_AnnotationEvent):
  pass


class AnnotationModifiedEvent(_AnnotationEvent):
  change_type: ChangeTypes = ChangeTypes.HandlesUpdated

  @field_validator("change_type", mode="before")
  def _default_change_type(cls, v):
    # A modification without an explicit reason is a handle edit
    return ChangeTypes.HandlesUpdated if v is None else v


class AnnotationRemovedEvent(_AnnotationEvent):
  pass
