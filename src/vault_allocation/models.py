from typing import List, Optional, Literal
from pydantic import BaseModel, Field

OrderType = Literal['lend', 'borrow', 'two_way']


class AllocationEntry(BaseModel):
    """One market order's share of a vault"""
    id: str
    order_type: OrderType
    lend_apr: Optional[float] = None
    borrow_apr: Optional[float] = None
    allocation_percentage: float = Field(default=0.0, ge=0, le=100)
    allocated_amount: float = 0.0
    max_capacity: float = 0.0  # informational, not enforced by the normalizer

    @property
    def effective_rate(self) -> float:
        """Rate this order earns the vault: borrow, lend, or the mean of both for two-way orders"""
        lend = self.lend_apr or 0.0
        borrow = self.borrow_apr or 0.0
        if self.order_type == 'borrow':
            return borrow
        if self.order_type == 'lend':
            return lend
        return (lend + borrow) / 2


class RebalanceMetrics(BaseModel):
    """Vault-level figures shown while rebalancing"""
    total_vault_value: float
    allocated_value: float = 0.0
    unallocated_value: float = 0.0
    average_apy: float = 0.0


class AllocationCheck(BaseModel):
    """Result of validating allocations before a save"""
    total_percentage: float
    unallocated_percentage: float
    within_limit: bool
    warnings: List[str] = Field(default_factory=list)
