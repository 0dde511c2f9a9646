"""Parse the model's repertoire answer into validated works."""

from __future__ import annotations

import json
import re
from logging import getLogger

from pydantic import ValidationError

from .errors import RepertoireExtractionError
from .schema import RepertoireWork

log = getLogger(__name__)

_JSON_FENCE_RE = re.compile(r"```(?:json)?\s*\n?(.*?)\n?\s*```", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Return the JSON document embedded in ``text``.

    Models wrap JSON in Markdown fences or add prose around it despite being
    told not to; take the fenced block if present, else the outermost braces.
    """

    stripped = text.strip()
    fence_match = _JSON_FENCE_RE.search(stripped)
    if fence_match:
        stripped = fence_match.group(1).strip()

    if not stripped.startswith("{"):
        brace_start = stripped.find("{")
        brace_end = stripped.rfind("}")
        if brace_start != -1 and brace_end > brace_start:
            stripped = stripped[brace_start : brace_end + 1]
    return stripped


def parse_repertoire(content: str) -> list[RepertoireWork]:
    """Parse ``{"works": [...]}``; invalid entries are skipped, a bad document raises."""

    text = strip_code_fences(content)
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"Repertoire answer is not valid JSON: {exc}"
        raise RepertoireExtractionError(msg) from exc

    if not isinstance(document, dict):
        raise RepertoireExtractionError("Repertoire answer is not a JSON object")
    entries = document.get("works")
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise RepertoireExtractionError("Repertoire answer 'works' is not a list")

    works: list[RepertoireWork] = []
    for position, entry in enumerate(entries):
        try:
            works.append(RepertoireWork.model_validate(entry))
        except ValidationError as exc:
            log.debug("Skipping repertoire entry %d: %s", position, exc.errors()[0]["msg"])
    return works
