from .account import Account
from .prize import PrizeRecord, PrizeType

__all__ = [
    "Account",
    "PrizeRecord",
    "PrizeType",
]
