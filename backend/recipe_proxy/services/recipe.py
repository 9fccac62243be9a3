import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..config import Settings, DEFAULT_SYSTEM_PROMPT, DEFAULT_USER_TEMPLATE
from ..schemas import RecipeRequest
from ..utils import loads_strict, truncate
from .gemini import UpstreamClient

logger = logging.getLogger(__name__)

TEMPERATURE = 0.8

METHOD_NOT_ALLOWED = "Method Not Allowed"
MISSING_CUISINE = "Missing cuisine parameter."
CONFIG_ERROR = "Server configuration error."
UPSTREAM_ERROR = "Failed to fetch recipe from Gemini API."
INTERNAL_ERROR = "Internal server error during recipe generation."


@dataclass(frozen=True)
class ProxyResponse:
    status_code: int
    body: Any = field(default_factory=dict)

    @classmethod
    def error(cls, status_code: int, message: str) -> "ProxyResponse":
        return cls(status_code=status_code, body={"error": message})


def build_user_prompt(cuisine: str, template: Optional[str] = None) -> str:
    # Plain substitution so braces or percent signs in the cuisine are kept literally
    return (template or DEFAULT_USER_TEMPLATE).replace("{cuisine}", cuisine)


def build_payload(cuisine: str, *, prompts: Optional[dict] = None) -> Dict[str, Any]:
    prompts = prompts or {}
    system_prompt = (prompts.get("system") or {}).get("recipe_generation") or DEFAULT_SYSTEM_PROMPT
    user_template = (prompts.get("user") or {}).get("recipe_request")
    if user_template and "{cuisine}" not in user_template:
        logger.warning("Ignoring prompts.yml user.recipe_request without a {cuisine} placeholder")
        user_template = None

    return {
        "contents": [{"parts": [{"text": build_user_prompt(cuisine, user_template)}]}],
        "tools": [{"google_search": {}}],
        "systemInstruction": {"parts": [{"text": system_prompt}]},
        "config": {"temperature": TEMPERATURE},
    }


class RecipeProxyHandler:
    """Validates a recipe request, forwards it to Gemini and translates the outcome.

    Checks run in order and stop at the first failure: method, cuisine,
    credential. Every outcome is returned as a ``ProxyResponse``; nothing is
    raised to the caller. Client-caused errors are logged at INFO, server-side
    problems at ERROR.
    """

    def __init__(self, settings: Settings, client: UpstreamClient):
        self.settings = settings
        self.client = client

    async def handle(self, method: str, body: Any) -> ProxyResponse:
        if (method or "").upper() != "POST":
            logger.info("Rejected %s request to recipe generator", method)
            return ProxyResponse.error(405, METHOD_NOT_ALLOWED)

        request = RecipeRequest.from_body(body)
        if request.cuisine is None:
            logger.info("Rejected recipe request without cuisine")
            return ProxyResponse.error(400, MISSING_CUISINE)

        if not self.settings.gemini_api_key:
            logger.error("GEMINI_API_KEY environment variable is not set.")
            return ProxyResponse.error(500, CONFIG_ERROR)

        payload = build_payload(request.cuisine, prompts=self.settings.prompts)
        logger.info("Requesting recipe for cuisine=%r", request.cuisine)

        try:
            upstream = await self.client.generate(payload)
        except Exception:
            logger.exception("Proxy error while calling Gemini API")
            return ProxyResponse.error(500, INTERNAL_ERROR)

        if not upstream.ok:
            logger.error("Gemini API error (status %s): %s", upstream.status_code, truncate(upstream.text))
            return ProxyResponse.error(upstream.status_code, UPSTREAM_ERROR)

        try:
            data = loads_strict(upstream.text)
        except (ValueError, RecursionError):
            logger.exception("Gemini API returned a non-JSON success body: %s", truncate(upstream.text))
            return ProxyResponse.error(500, INTERNAL_ERROR)

        return ProxyResponse(status_code=200, body=data)
