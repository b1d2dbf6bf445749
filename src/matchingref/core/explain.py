import logging
import random
from collections.abc import Sequence

from matchingref.bindings.source import SourceBindings
from matchingref.core.ast import parse_java_source, resolve_anchor_node
from matchingref.core.demo import DemoValues
from matchingref.core.hints import synthesize_hints
from matchingref.core.links import ReferenceLinkAssembler
from matchingref.models import Diagnostic, Explanation

logger = logging.getLogger(__name__)


def explain_source(
    source: str | bytes,
    diagnostics: Sequence[Diagnostic],
    *,
    embedded: bool = False,
    rng: random.Random | None = None,
) -> list[Explanation]:
    """Build hints and a reference link for every diagnostic of one compile.

    A failure while explaining one diagnostic leaves its explanation empty
    and never affects the others.
    """
    root = parse_java_source(source)
    bindings = SourceBindings(root)
    demo = DemoValues(rng)
    assembler = ReferenceLinkAssembler(embedded)

    explanations = []
    for diagnostic in diagnostics:
        anchor = resolve_anchor_node(root, diagnostic.anchor_start, diagnostic.anchor_end)
        if anchor is None:
            logger.debug(
                "No node covers %d-%d for %s", diagnostic.anchor_start, diagnostic.anchor_end, diagnostic.kind
            )
            explanations.append(Explanation(diagnostic=diagnostic))
            continue

        try:
            hints = synthesize_hints(diagnostic.kind, diagnostic.arguments, anchor, bindings, demo)
            link = assembler.assemble(diagnostic.kind, diagnostic.arguments, anchor, bindings)
        except Exception:
            logger.exception("Error explaining %s diagnostic", diagnostic.kind)
            explanations.append(Explanation(diagnostic=diagnostic))
            continue

        explanations.append(Explanation(diagnostic=diagnostic, hints=hints, link=link))

    logger.info("Explained %d diagnostic(s)", len(explanations))
    return explanations
