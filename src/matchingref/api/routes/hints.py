from __future__ import annotations

import random

from fastapi import APIRouter, Depends, HTTPException

from matchingref.api.dependencies import get_api_settings
from matchingref.api.schemas import (
    DiagnosticRequest,
    ExplainRequest,
    ExplainResponse,
    HintsResponse,
    LinkResponse,
)
from matchingref.config import Settings
from matchingref.core.ast import parse_java_source, resolve_anchor_node
from matchingref.core.demo import DemoValues
from matchingref.core.explain import explain_source
from matchingref.core.hints import synthesize_hints
from matchingref.core.links import synthesize_reference_link
from matchingref.models import SyntaxNode

router = APIRouter(tags=["hints"])


def _rng(seed: int | None) -> random.Random | None:
    return random.Random(seed) if seed is not None else None


def _anchor(body: DiagnosticRequest) -> SyntaxNode:
    root = parse_java_source(body.source)
    anchor = resolve_anchor_node(root, body.anchor_start, body.anchor_end)
    if anchor is None:
        raise HTTPException(status_code=422, detail="No syntax node covers the anchor range.")
    return anchor


@router.post("/hints", response_model=HintsResponse)
def hints(body: DiagnosticRequest) -> HintsResponse:
    """Every hint for one diagnostic; empty when the kind is unsupported or its context is unresolvable."""
    anchor = _anchor(body)
    found = synthesize_hints(body.kind, body.arguments, anchor, demo=DemoValues(_rng(body.seed)))
    return HintsResponse(hints=found)


@router.post("/links", response_model=LinkResponse)
def links(
    body: DiagnosticRequest,
    settings: Settings = Depends(get_api_settings),
) -> LinkResponse:
    anchor = _anchor(body)
    return LinkResponse(link=synthesize_reference_link(body.kind, body.arguments, anchor, embedded=settings.embedded))


@router.post("/explain", response_model=ExplainResponse)
def explain(
    body: ExplainRequest,
    settings: Settings = Depends(get_api_settings),
) -> ExplainResponse:
    explanations = explain_source(body.source, body.diagnostics, embedded=settings.embedded, rng=_rng(body.seed))
    return ExplainResponse(explanations=explanations)
