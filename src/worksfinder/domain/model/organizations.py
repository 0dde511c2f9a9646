"""Performing rights organizations consulted during discovery."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import PRO_PRIORITY, WorkSource


@dataclass(frozen=True, slots=True)
class PerformingRightsOrganization:
    source: WorkSource
    name: str
    domain: str

    def __post_init__(self) -> None:
        if not self.source.is_pro:
            raise ValueError(f"{self.source} is not a performing rights organization")


ASCAP = PerformingRightsOrganization(source=WorkSource.ASCAP, name="ASCAP", domain="ascap.com")
BMI = PerformingRightsOrganization(source=WorkSource.BMI, name="BMI", domain="bmi.com")
SESAC = PerformingRightsOrganization(source=WorkSource.SESAC, name="SESAC", domain="sesac.com")

_BY_SOURCE = {pro.source: pro for pro in (ASCAP, BMI, SESAC)}

PERFORMING_RIGHTS_ORGANIZATIONS: tuple[PerformingRightsOrganization, ...] = tuple(
    _BY_SOURCE[source] for source in PRO_PRIORITY
)


def organization_for(source: WorkSource) -> PerformingRightsOrganization:
    try:
        return _BY_SOURCE[source]
    except KeyError:
        raise ValueError(f"{source} is not a performing rights organization") from None
