"""
Registry of tool names that take part in interpolation.
"""

import logging
import threading
from typing import Iterable, Iterator, List, Optional


class ToolRegistry:
  """Monotonic, ordered set of tool names.

    Names are only ever added; there is no removal for the lifetime of the
    registry. One instance is created at startup and injected into the manager.
    """

  def __init__(self, tool_names: Optional[Iterable[str]] = None):
    self._names: List[str] = []
    self._lock = threading.RLock()
    self._log = logging.getLogger("interpolation.core.ToolRegistry")
    for name in tool_names or ():
      self.add_tool(name)

  def add_tool(self, tool_name: str) -> bool:
    """Register a tool name. Returns False if it was already registered."""
    with self._lock:
      if tool_name in self._names:
        return False
      self._names.append(tool_name)
    self._log.info("registered interpolation tool %s", tool_name)
    return True

  def contains(self, tool_name: Optional[str]) -> bool:
    with self._lock:
      return tool_name in self._names

  def names(self) -> List[str]:
    with self._lock:
      return list(self._names)

  def __contains__(self, tool_name) -> bool:
    return self.contains(tool_name)

  def __iter__(self) -> Iterator[str]:
    return iter(self.names())

  def __len__(self) -> int:
    with self._lock:
      return len(self._names)
