from typing import Optional, List, Union
from dataclasses import dataclass
from .base_model import BaseModel

@dataclass
class VaultBalance(BaseModel):
    """A user's position in a vault: shares plus underlying amounts in stroops."""
    df_tokens: Optional[Union[str, int]] = None
    underlying_balance: Optional[List[Union[str, int]]] = None
