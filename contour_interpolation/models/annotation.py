"""
Contour annotation records.

Annotations are owned by the annotation store. Event handlers receive them by
reference and mutate `auto_generated` / `interpolation_uid` in place.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import uuid

import numpy as np

Vector3 = Tuple[float, float, float]


@dataclass
class AnnotationMetadata:
  """Where an annotation lives: tool, slice and slicing plane."""

  tool_name: str
  slice_index: int
  view_plane_normal: Vector3 = (0.0, 0.0, 1.0)
  view_up: Vector3 = (0.0, -1.0, 0.0)
  frame_of_reference_uid: Optional[str] = None


@dataclass
class Segmentation:
  """The logical segment a contour belongs to."""

  segmentation_id: str
  segment_index: int


@dataclass
class AnnotationData:
  segmentation: Segmentation
  contour: List[Vector3] = field(default_factory=list)


@dataclass(eq=False)
class Annotation:
  """A user drawn or generated contour on a single slice.

    Compared by identity: two annotations with the same geometry are still
    different annotations.
    """

  data: AnnotationData
  metadata: Optional[AnnotationMetadata] = None
  auto_generated: bool = False
  interpolation_uid: Optional[str] = None
  annotation_uid: str = field(default_factory=lambda: str(uuid.uuid4()))

  @property
  def tool_name(self) -> Optional[str]:
    return self.metadata.tool_name if self.metadata else None

  @property
  def segment_index(self) -> int:
    return self.data.segmentation.segment_index

  @property
  def segmentation_id(self) -> str:
    return self.data.segmentation.segmentation_id

  @property
  def center_point(self) -> Optional[np.ndarray]:
    """Centroid of the contour points, None for an empty contour."""
    if not self.data.contour:
      return None
    return np.asarray(self.data.contour, dtype=float).mean(axis=0)
