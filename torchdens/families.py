"""Family enum — identifiers for the implemented models."""

from __future__ import annotations

from enum import Enum


class Family(str, Enum):
    unit_johnson = "unit_johnson"
    normal_copula = "normal_copula"


_FAMILY_NPARS = {
    Family.unit_johnson: 2,
    Family.normal_copula: 1,
}


def family_npars(fam: Family) -> int:
    return _FAMILY_NPARS[fam]


def normalize_family(fam: str | Family) -> Family:
    if isinstance(fam, Family):
        return fam
    try:
        return Family(str(fam).lower())
    except Exception as e:
        raise ValueError(f"Unknown Family: {fam!r}") from e
