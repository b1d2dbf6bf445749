"""FastMCP server exposing the hint engine as tools."""

from __future__ import annotations

import random
from typing import Any

from fastmcp import FastMCP

from matchingref.config import Settings
from matchingref.core.ast import parse_java_source, resolve_anchor_node
from matchingref.core.explain import explain_source
from matchingref.core.hints import synthesize_hints
from matchingref.core.links import synthesize_reference_link
from matchingref.models import Diagnostic


def create_mcp_server(settings: Settings) -> FastMCP:
    """Create a FastMCP server using the given settings for link assembly."""

    mcp = FastMCP("matchingref", instructions="Explain Java and Processing compiler diagnostics to learners.")

    @mcp.tool()
    async def hints(
        source: str, kind: str, anchor_start: int, anchor_end: int, arguments: list[str] | None = None
    ) -> list[dict[str, Any]]:
        """List every hint for one diagnostic reported against the given source."""
        anchor = resolve_anchor_node(parse_java_source(source), anchor_start, anchor_end)
        if anchor is None:
            return []
        return [hint.model_dump() for hint in synthesize_hints(kind, arguments or [], anchor)]

    @mcp.tool()
    async def reference_link(
        source: str, kind: str, anchor_start: int, anchor_end: int, arguments: list[str] | None = None
    ) -> str | None:
        """Return the reference catalog path for one diagnostic, if it has one."""
        anchor = resolve_anchor_node(parse_java_source(source), anchor_start, anchor_end)
        if anchor is None:
            return None
        return synthesize_reference_link(kind, arguments or [], anchor, embedded=settings.embedded)

    @mcp.tool()
    async def explain(source: str, diagnostics: list[dict[str, Any]], seed: int | None = None) -> list[dict[str, Any]]:
        """Explain every diagnostic of one compile."""
        batch = [Diagnostic.model_validate(item) for item in diagnostics]
        rng = random.Random(seed) if seed is not None else None
        return [item.model_dump() for item in explain_source(source, batch, embedded=settings.embedded, rng=rng)]

    return mcp
