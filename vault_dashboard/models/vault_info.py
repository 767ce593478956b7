from typing import Optional, List
from dataclasses import dataclass
from .base_model import BaseModel

@dataclass
class Strategy(BaseModel):
    """A yield source that an asset's funds may be allocated to."""
    address: Optional[str] = None
    name: Optional[str] = None
    paused: Optional[bool] = None


@dataclass
class Asset(BaseModel):
    """An underlying asset held by the vault, with its strategies in order."""
    address: Optional[str] = None
    name: Optional[str] = None
    symbol: Optional[str] = None
    strategies: Optional[List[Strategy]] = None

    @classmethod
    def from_dict(cls, data: dict):
        if isinstance(data, dict) and 'strategies' in data:
            data = dict(data)
            data['strategies'] = Strategy.from_list(data['strategies'])
        return super().from_dict(data)


@dataclass
class VaultRoles(BaseModel):
    manager: Optional[str] = None
    emergency_manager: Optional[str] = None
    rebalance_manager: Optional[str] = None
    fee_receiver: Optional[str] = None


@dataclass
class FeesBps(BaseModel):
    """Fee rates in basis points (hundredths of a percent)."""
    vault_fee: Optional[float] = None
    defindex_fee: Optional[float] = None


@dataclass
class VaultInfo(BaseModel):
    """Descriptive vault record returned by ``GET /vault/{address}``."""

    address: Optional[str] = None
    name: Optional[str] = None
    symbol: Optional[str] = None
    apy: Optional[float] = None  # already a percentage, e.g. 5.2 means 5.2%
    roles: Optional[VaultRoles] = None
    fees_bps: Optional[FeesBps] = None
    assets: Optional[List[Asset]] = None
    total_managed_funds: Optional[list] = None
    network: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict):
        """Convert API response to VaultInfo object."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if 'roles' in data:
            data['roles'] = VaultRoles.from_dict(data['roles'])
        if 'feesBps' in data:
            data['feesBps'] = FeesBps.from_dict(data['feesBps'])
        if 'assets' in data:
            data['assets'] = Asset.from_list(data['assets'])
        return super().from_dict(data)
