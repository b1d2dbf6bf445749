from __future__ import annotations

from pydantic import BaseModel

from matchingref.models import Diagnostic, Explanation, Hint


class DiagnosticRequest(BaseModel):
    """One diagnostic together with the source it was reported against."""

    source: str
    kind: str
    arguments: list[str] = []
    anchor_start: int
    anchor_end: int
    seed: int | None = None


class ExplainRequest(BaseModel):
    source: str
    diagnostics: list[Diagnostic]
    seed: int | None = None


class HintsResponse(BaseModel):
    hints: list[Hint]


class LinkResponse(BaseModel):
    link: str | None = None


class ExplainResponse(BaseModel):
    explanations: list[Explanation]


class HealthResponse(BaseModel):
    status: str = "ok"
    kinds: list[str] = []
