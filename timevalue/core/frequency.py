"""Asset type to compounding frequency lookup."""

from __future__ import annotations

from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Mapping, Optional, Union


class CompoundingFrequency(IntEnum):
    """Number of compounding periods per year."""

    ANNUAL = 1
    SEMI_ANNUAL = 2
    QUARTERLY = 4
    MONTHLY = 12
    DAILY = 365


class AssetType(str, Enum):
    PPF = "PPF"
    FD = "FD"
    RD = "RD"
    NSC = "NSC"
    KVP = "KVP"
    EPF = "EPF"
    VPF = "VPF"
    SSY = "SSY"


DEFAULT_FREQUENCY = CompoundingFrequency.ANNUAL

COMPOUNDING_BY_ASSET_TYPE: Mapping[AssetType, CompoundingFrequency] = MappingProxyType(
    {
        AssetType.PPF: CompoundingFrequency.ANNUAL,
        AssetType.FD: CompoundingFrequency.QUARTERLY,  # most banks
        AssetType.RD: CompoundingFrequency.QUARTERLY,
        AssetType.NSC: CompoundingFrequency.ANNUAL,
        AssetType.KVP: CompoundingFrequency.ANNUAL,
        AssetType.EPF: CompoundingFrequency.ANNUAL,
        AssetType.VPF: CompoundingFrequency.ANNUAL,
        AssetType.SSY: CompoundingFrequency.ANNUAL,
    }
)


def parse_asset_type(asset_type: Union[AssetType, str, None]) -> Optional[AssetType]:
    """Return the matching ``AssetType`` or None for anything unrecognised."""
    if isinstance(asset_type, AssetType):
        return asset_type
    if not isinstance(asset_type, str):
        return None
    try:
        return AssetType(asset_type.strip().upper())
    except ValueError:
        return None


def resolve_compounding_frequency(asset_type: Union[AssetType, str, None]) -> CompoundingFrequency:
    """Periods per year for ``asset_type``; unknown types compound annually."""
    parsed = parse_asset_type(asset_type)
    if parsed is None:
        return DEFAULT_FREQUENCY
    return COMPOUNDING_BY_ASSET_TYPE.get(parsed, DEFAULT_FREQUENCY)
