from __future__ import annotations

from typing import Any, Dict, List


class TattooStudioError(Exception):
    """Base class for failures raised by the tattoo studio flows."""


class ValidationError(TattooStudioError, ValueError):
    """
    Raised when a request or result does not match its declared shape.

    `errors` holds one {"field", "message"} entry per problem, with fields
    named the way the caller sent them (camelCase aliases).
    """

    def __init__(self, errors: List[Dict[str, str]], *, model: str = ""):
        self.errors = list(errors)
        self.model = model
        details = "; ".join(f"{e['field']}: {e['message']}" for e in self.errors)
        prefix = f"Invalid {model}" if model else "Invalid input"
        super().__init__(f"{prefix}: {details}" if details else prefix)

    @property
    def fields(self) -> List[str]:
        return [e["field"] for e in self.errors]

    @classmethod
    def from_pydantic(cls, exc: Any, *, model: str = "") -> "ValidationError":
        errors = []
        for err in exc.errors():
            loc = ".".join(str(p) for p in err.get("loc", ())) or "__root__"
            errors.append({"field": loc, "message": err.get("msg", "invalid value")})
        return cls(errors, model=model)


class EmptyResultError(TattooStudioError):
    """The model call succeeded but produced no usable image."""
