from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..config import load_settings
from ..schemas import ErrorResponse
from ..services.gemini import GeminiClient
from ..services.recipe import RecipeProxyHandler
from ..utils import is_json_content_type, parse_json_body

router = APIRouter()

# Every method is routed here so the handler, not the framework, answers 405
ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def get_recipe_handler() -> RecipeProxyHandler:
    # Settings (and the credential) are read per invocation
    settings = load_settings()
    return RecipeProxyHandler(settings=settings, client=GeminiClient(settings))


@router.api_route(
    "/generate",
    methods=ALL_METHODS,
    responses={
        400: {"model": ErrorResponse},
        405: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def generate_recipe(request: Request, handler: RecipeProxyHandler = Depends(get_recipe_handler)):
    body = None
    # Only JSON-typed bodies are decoded; anything else cannot carry a cuisine field
    if request.method == "POST" and is_json_content_type(request.headers.get("content-type")):
        body = parse_json_body(await request.body())
    result = await handler.handle(request.method, body)
    return JSONResponse(status_code=result.status_code, content=result.body)
