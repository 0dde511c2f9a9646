"""Candidate ranking and selection."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from worksfinder.domain.model import WorkCandidate


def rank_key(candidate: WorkCandidate) -> tuple[int, int]:
    """More PRO corroboration first, then candidates with an ISWC."""

    return (-candidate.pro_source_count, 0 if candidate.iswc else 1)


def select_top(candidates: Iterable[WorkCandidate], limit: int) -> list[WorkCandidate]:
    if limit <= 0:
        return []
    return sorted(candidates, key=rank_key)[:limit]
