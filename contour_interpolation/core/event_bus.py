"""
Synchronous in-process dispatcher for annotation lifecycle events.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Union

from ..enums import Events

Listener = Callable[[Any], None]


class EventBus:
  """Calls listeners in registration order on the dispatching thread."""

  def __init__(self):
    self._listeners: Dict[Events, List[Listener]] = {event: [] for event in Events}
    self._lock = threading.RLock()
    self._log = logging.getLogger("interpolation.core.EventBus")

  @staticmethod
  def _event(event: Union[Events, str]) -> Events:
    try:
      return Events(event)
    except ValueError:
      raise ValueError(f"Unknown event: {event}") from None

  def add_event_listener(self, event: Union[Events, str], listener: Listener) -> None:
    event = self._event(event)
    with self._lock:
      if listener in self._listeners[event]:
        return
      self._listeners[event].append(listener)
    self._log.info("listener added for %s: %r", event.value, listener)

  def remove_event_listener(self, event: Union[Events, str], listener: Listener) -> bool:
    event = self._event(event)
    with self._lock:
      try:
        self._listeners[event].remove(listener)
      except ValueError:
        return False
    self._log.info("listener removed for %s: %r", event.value, listener)
    return True

  def listeners(self, event: Union[Events, str]) -> List[Listener]:
    event = self._event(event)
    with self._lock:
      return list(self._listeners[event])

  def dispatch(self, event: Union[Events, str], payload: Any) -> None:
    """Deliver payload to every listener of event.

        Listener exceptions propagate to the dispatcher; later listeners are
        not called.
        """
    for listener in self.listeners(event):
      listener(payload)
