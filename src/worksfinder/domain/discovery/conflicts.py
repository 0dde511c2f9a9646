"""Cross-PRO attribution conflict detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from worksfinder.domain.model import PRO_PRIORITY, RegistrationGap

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from worksfinder.domain.model import Attribution, ProAttribution, WorkSource

SHARE_PRECISION = 2


def detect_conflicts(details: Mapping[WorkSource, ProAttribution]) -> list[RegistrationGap]:
    """Gaps raised when at least two PROs disagree about the same work.

    Writer and publisher names are compared as sets across every reporting
    PRO, so an empty list disagrees with a non-empty one. A split conflict
    needs two sources giving a share for the same writer.
    """

    reports = [details[source] for source in PRO_PRIORITY if source in details]
    if len(reports) < 2:
        return []

    gaps: list[RegistrationGap] = []
    if _names_disagree(report.writers for report in reports):
        gaps.append(RegistrationGap.CONFLICTING_WRITERS)
    if _shares_disagree([report.writers for report in reports]):
        gaps.append(RegistrationGap.CONFLICTING_SPLITS)
    if _names_disagree(report.publishers for report in reports):
        gaps.append(RegistrationGap.CONFLICTING_PUBLISHERS)
    return gaps


def _names_disagree(lists: Iterable[Sequence[Attribution]]) -> bool:
    name_sets = {
        frozenset(entry.normalized_name for entry in entries if entry.name.strip())
        for entries in lists
    }
    return len(name_sets) > 1


def _shares_disagree(lists: Sequence[Sequence[Attribution]]) -> bool:
    reported: dict[str, set[float]] = {}
    for entries in lists:
        shares: dict[str, float] = {}
        for entry in entries:
            if entry.share is not None and entry.name.strip():
                shares.setdefault(entry.normalized_name, round(entry.share, SHARE_PRECISION))
        for name, share in shares.items():
            reported.setdefault(name, set()).add(share)
    return any(len(values) > 1 for values in reported.values())
