import contextvars
import logging
import logging.config
import os
import sys
import uuid
from typing import Any, Dict, Optional

from pythonjsonlogger.json import JsonFormatter

_event_id_ctx: contextvars.ContextVar[str] = contextvars.ContextVar("event_id", default="-")


class EventContextFilter(logging.Filter):
  """Injects event-scoped fields into log records.

	Adds event_id of the lifecycle event being handled, "-" outside a handler.
	"""

  def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
    setattr(record, "event_id", _event_id_ctx.get())
    return True


def generate_event_id() -> str:
  return uuid.uuid4().hex[:12]


def set_event_id(event_id: str) -> contextvars.Token:
  return _event_id_ctx.set(event_id)


def reset_event_id(token: contextvars.Token) -> None:
  _event_id_ctx.reset(token)


def get_event_id() -> str:
  return _event_id_ctx.get()


def _build_text_formatter(dev_mode: bool) -> logging.Formatter:
  if dev_mode:
    fmt = "%(asctime)s %(levelname)s %(name)s:%(funcName)s:%(lineno)d [evt=%(event_id)s] - %(message)s"
  else:
    fmt = "%(asctime)s %(levelname)s %(name)s:%(funcName)s [evt=%(event_id)s] - %(message)s"
  datefmt = "%Y-%m-%dT%H:%M:%S%z"
  return logging.Formatter(fmt=fmt, datefmt=datefmt)


def _build_json_formatter() -> logging.Formatter:
  return JsonFormatter(
    '%(asctime)s %(levelname)s %(name)s %(funcName)s %(message)s %(event_id)s',
    json_ensure_ascii=False,
  )


def setup_logging(app_debug: Optional[bool] = None,
                  level_name: Optional[str] = None,
                  use_json: Optional[bool] = None,
                  log_file: Optional[str] = None) -> None:
  """Configure root logging for the interpolation coordinator.

	Explicit arguments win over the environment.

	Environment variables:
	- INTERPOLATION_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default INFO; DEBUG if app_debug True)
	- INTERPOLATION_LOG_JSON: 1 to enable JSON logs (default 0)
	- INTERPOLATION_LOG_FILE: path to log file (optional; stdout by default)
	"""
  level_name = level_name or os.getenv("INTERPOLATION_LOG_LEVEL")
  if not level_name and app_debug:
    level_name = "DEBUG"
  level = getattr(logging, (level_name or "INFO").upper(), logging.INFO)

  if use_json is None:
    use_json = os.getenv("INTERPOLATION_LOG_JSON", "0").strip() in ("1", "true", "TRUE")
  log_file = log_file or os.getenv("INTERPOLATION_LOG_FILE")
  dev_mode = bool(app_debug)

  handlers: Dict[str, Dict[str, Any]] = {}
  formatters: Dict[str, Dict[str, Any]] = {}
  filters: Dict[str, Dict[str, Any]] = {
    "event_context": {
      "()": EventContextFilter
    },
  }

  if use_json:
    formatters["json"] = {"()": _build_json_formatter}
    formatter_name = "json"
  else:
    formatters["text"] = {"()": _build_text_formatter, "dev_mode": dev_mode}
    formatter_name = "text"

  if log_file:
    handlers["file"] = {
      "class": "logging.handlers.RotatingFileHandler",
      "filename": log_file,
      "maxBytes": 10 * 1024 * 1024,
      "backupCount": 3,
      "formatter": formatter_name,
      "filters": ["event_context"],
      "encoding": "utf-8",
    }
    root_handlers = ["file"]
  else:
    handlers["stdout"] = {
      "class": "logging.StreamHandler",
      "stream": sys.stdout,
      "formatter": formatter_name,
      "filters": ["event_context"],
    }
    root_handlers = ["stdout"]

  config: Dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": filters,
    "formatters": formatters,
    "handlers": handlers,
    "root": {
      "level": level,
      "handlers": root_handlers,
    },
    "loggers": {
      # Listener (un)registration is noisy; keep at WARNING unless debugging
      "interpolation.core.EventBus": {
        "level": "WARNING" if level > logging.DEBUG else "DEBUG"
      },
    },
  }

  logging.config.dictConfig(config)
