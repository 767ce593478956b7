from typing import Optional
from dataclasses import dataclass
from .base_model import BaseModel

@dataclass
class VaultAPY(BaseModel):
    """Current APY of a vault, as a percentage (5.2 means 5.2%)."""
    apy: Optional[float] = None
