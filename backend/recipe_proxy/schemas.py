import math
from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator


def _is_truthy(value: Any) -> bool:
    # JavaScript truthiness: only "", 0, NaN, null and false are falsy; [] and {} are not
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)):
        return not (value == 0 or (isinstance(value, float) and math.isnan(value)))
    return True


def _js_string(value: Any) -> str:
    """String form of a decoded JSON value as a template literal would render it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, list):
        # Array.prototype.join renders null/undefined members as empty strings
        return ",".join("" if item is None else _js_string(item) for item in value)
    return "[object Object]"


class RecipeRequest(BaseModel):
    cuisine: Optional[str] = Field(None, description="Cuisine or dish style to generate a recipe for, e.g. 'Thai'")

    @field_validator("cuisine", mode="before")
    @classmethod
    def _coerce_cuisine(cls, value: Any) -> Optional[str]:
        # Falsy values mean "missing"; anything else is rendered as a string.
        # An empty list is truthy but renders as "", so None is the only "missing" marker.
        if not _is_truthy(value):
            return None
        return _js_string(value)

    @classmethod
    def from_body(cls, body: Any) -> "RecipeRequest":
        if not isinstance(body, dict):
            return cls()
        return cls(cuisine=body.get("cuisine"))


class ErrorResponse(BaseModel):
    error: str
