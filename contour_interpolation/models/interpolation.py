"""
Context records handed from the coordinator to the interpolation engine.
"""

from dataclasses import dataclass
from typing import Any, Hashable, Optional

from .annotation import Annotation


@dataclass(frozen=True)
class SliceContext:
  """Viewport scope an annotation was resolved to.

    group_selector is opaque: it is only compared and passed back to the store.
    """

  viewport_id: str
  group_selector: Hashable
  number_of_slices: int
  current_slice_index: int


@dataclass
class InterpolationContextData:
  annotation: Annotation
  context: SliceContext
  interpolation_uid: Optional[str] = None
  is_interpolation_update: bool = False

  @property
  def group_selector(self) -> Any:
    return self.context.group_selector
