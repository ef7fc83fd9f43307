"""
Vault allocation normalizer

Spreads a vault's capital across market orders by percentage and keeps the
total at or under the configured limit. When an edit to one order pushes the
total over the limit, every other order is scaled down proportionally to
absorb the excess.
"""
import math
from typing import List, Optional
from range_config import AllocationConfig, AppLogger, get_config
from .models import AllocationCheck, AllocationEntry, RebalanceMetrics

app_logger = AppLogger(__name__)


def calculate_allocation_amount(percentage: float, total_value: float) -> float:
    return (percentage / 100) * total_value


class AllocationNormalizer:
    """Pure transforms from one allocation snapshot to the next"""

    def __init__(self, config: Optional[AllocationConfig] = None):
        self.config = config or get_config().allocation

    def set_allocation(self, entries: List[AllocationEntry], target_id: str,
                       new_percentage: float, total_vault_value: float) -> List[AllocationEntry]:
        """
        Set one order's allocation and scale the others down if the total overshoots

        The reduction is a single proportional pass; entries never go below 0.
        Callers that gate a save on the total must re-check it with check_allocations.

        Args:
            entries: Current allocation entries (left untouched)
            target_id: Id of the order being edited
            new_percentage: Requested allocation, clamped to [0, limit]
            total_vault_value: Vault value used to derive allocated amounts

        Returns:
            New list of entries
        """
        limit = self.config.max_total_percentage
        updated = [e.model_copy() for e in entries]

        if not any(e.id == target_id for e in updated):
            app_logger.log_warning(f"No allocation entry with id '{target_id}' - returning entries unchanged")
            return updated

        if math.isnan(new_percentage):
            new_percentage = 0.0
        new_percentage = max(0.0, min(limit, new_percentage))

        for entry in updated:
            if entry.id == target_id:
                entry.allocation_percentage = new_percentage
                entry.allocated_amount = calculate_allocation_amount(new_percentage, total_vault_value)

        total_percentage = self.total_percentage(updated)

        if total_percentage > limit:
            excess = total_percentage - limit
            others = [e for e in updated if e.id != target_id]
            others_total = sum(e.allocation_percentage for e in others)

            if others_total > 0:
                reduction_factor = excess / others_total
                app_logger.log_debug(
                    f"Total allocation {total_percentage:.2f}% exceeds {limit}%: "
                    f"scaling {len(others)} other orders down by {reduction_factor:.4f}"
                )
                for entry in others:
                    old_percentage = entry.allocation_percentage
                    entry.allocation_percentage = max(0.0, old_percentage - old_percentage * reduction_factor)
                    entry.allocated_amount = calculate_allocation_amount(
                        entry.allocation_percentage, total_vault_value
                    )
                    app_logger.log_debug(
                        f"Scaled down {entry.id}: {old_percentage:.3f}% -> {entry.allocation_percentage:.3f}%"
                    )

        return updated

    def recompute_metrics(self, entries: List[AllocationEntry], metrics: RebalanceMetrics,
                          deposit: float = 0.0, withdraw: float = 0.0) -> RebalanceMetrics:
        """Vault metrics after an entry edit or a deposit/withdraw change"""
        new_total_value = metrics.total_vault_value + deposit - withdraw

        if self.config.derive_allocated_value:
            allocated_value = sum(
                calculate_allocation_amount(e.allocation_percentage, new_total_value) for e in entries
            )
            unallocated_value = new_total_value - allocated_value
        else:
            # Running figures: allocated value is carried, only the idle part moves
            allocated_value = metrics.allocated_value
            unallocated_value = metrics.unallocated_value + deposit - withdraw

        return RebalanceMetrics(
            total_vault_value=new_total_value,
            allocated_value=allocated_value,
            unallocated_value=unallocated_value,
            average_apy=self.weighted_average_apy(entries),
        )

    def total_percentage(self, entries: List[AllocationEntry]) -> float:
        return sum(e.allocation_percentage for e in entries)

    def weighted_average_apy(self, entries: List[AllocationEntry]) -> float:
        return sum(e.effective_rate * e.allocation_percentage / 100 for e in entries)

    def distribute_funds(self, entries: List[AllocationEntry], total_vault_value: float) -> List[AllocationEntry]:
        """Recompute every allocated amount from its percentage"""
        return [
            e.model_copy(update={
                'allocated_amount': calculate_allocation_amount(e.allocation_percentage, total_vault_value)
            })
            for e in entries
        ]

    def check_allocations(self, entries: List[AllocationEntry],
                          total_vault_value: Optional[float] = None) -> AllocationCheck:
        """Validate the allocation total and order capacities before a save"""
        limit = self.config.max_total_percentage
        total = self.total_percentage(entries)
        within_limit = total <= limit + self.config.sum_tolerance
        warnings = []

        if not within_limit:
            warnings.append(f"Total allocation {total:.2f}% exceeds {limit:.0f}%")

        for entry in entries:
            amount = (
                calculate_allocation_amount(entry.allocation_percentage, total_vault_value)
                if total_vault_value is not None else entry.allocated_amount
            )
            if entry.max_capacity > 0 and amount > entry.max_capacity:
                warnings.append(
                    f"Order {entry.id} allocation ${amount:,.2f} exceeds its capacity ${entry.max_capacity:,.2f}"
                )

        for warning in warnings:
            app_logger.log_warning(warning)

        return AllocationCheck(
            total_percentage=total,
            unallocated_percentage=max(0.0, limit - total),
            within_limit=within_limit,
            warnings=warnings,
        )
