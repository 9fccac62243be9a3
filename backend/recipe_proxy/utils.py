import json
import logging
from typing import Any, Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Union[int, str, None] = None) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Safe to call repeatedly (e.g. once per create_app() in tests); handlers are
    not duplicated.
    """
    logger = logging.getLogger("recipe_proxy")
    if level is None:
        level = logging.INFO
    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
        logger.addHandler(handler)

    # httpx logs full request URLs at INFO, and the Gemini key is a query parameter
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logger


def is_json_content_type(content_type: Optional[str]) -> bool:
    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def parse_json_body(raw: bytes) -> Optional[Any]:
    # Empty, malformed or absurdly nested bodies are treated as "no body"
    if not raw:
        return None
    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError, RecursionError):
        return None


def _reject_constant(name: str):
    raise ValueError(f"non-standard JSON constant {name}")


def loads_strict(text: str) -> Any:
    """``json.loads`` that refuses NaN/Infinity, which JSONResponse cannot render."""
    return json.loads(text, parse_constant=_reject_constant)


def truncate(text: str, limit: int = 2000) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "...[truncated]"
