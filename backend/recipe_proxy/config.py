import os
import logging
from dataclasses import dataclass, field
from typing import List, Optional
import pathlib
import yaml

logger = logging.getLogger(__name__)


DEFAULT_GEMINI_MODEL = "gemini-2.5-flash-preview-09-2025"
DEFAULT_GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class Settings:
    gemini_api_key: Optional[str]
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_api_base: str = DEFAULT_GEMINI_API_BASE
    request_timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    prompts: dict = field(default_factory=dict)


def load_settings() -> Settings:
    cors_env = os.getenv("CORS_ALLOW_ORIGINS", "*")
    cors = [o.strip() for o in cors_env.split(",") if o.strip()] or ["*"]
    model = os.getenv("GEMINI_MODEL", "").strip() or DEFAULT_GEMINI_MODEL
    api_base = (os.getenv("GEMINI_API_BASE", "").strip() or DEFAULT_GEMINI_API_BASE).rstrip("/")
    prompts = _load_prompts()
    return Settings(
        # An empty string counts as unset
        gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
        gemini_model=model,
        gemini_api_base=api_base,
        request_timeout=_parse_timeout(os.getenv("GEMINI_TIMEOUT_SECONDS")),
        cors_allow_origins=cors,
        prompts=prompts,
    )


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT_SECONDS
    value = raw.strip().lower()
    if value in {"none", "off"}:
        return None
    try:
        seconds = float(value)
    except ValueError:
        logger.warning("Ignoring invalid GEMINI_TIMEOUT_SECONDS=%r", raw)
        return DEFAULT_TIMEOUT_SECONDS
    if seconds < 0:
        logger.warning("Ignoring negative GEMINI_TIMEOUT_SECONDS=%r", raw)
        return DEFAULT_TIMEOUT_SECONDS
    return seconds or None


def _load_prompts() -> dict:
    # Look for prompts.yml in backend root (parent of recipe_proxy/)
    backend_root = pathlib.Path(__file__).resolve().parents[1]
    prompts_path = backend_root / "prompts.yml"
    try:
        with open(prompts_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                return {}
            return data
    except (OSError, yaml.YAMLError):
        return {}


DEFAULT_SYSTEM_PROMPT = (
    "You are a friendly and highly creative world-class chef. You specialize in generating "
    "clear, concise, and delicious recipes. Always format your output using markdown headings "
    "and bullet points for readability. Do not include any introductory or concluding chatter, "
    "only the recipe."
)

DEFAULT_USER_TEMPLATE = (
    "Give me a detailed recipe idea for **{cuisine}** that serves two people. "
    "Include the title, an ingredient list, and easy instructions."
)
