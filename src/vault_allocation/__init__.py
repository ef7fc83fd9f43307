from .normalizer import AllocationNormalizer, calculate_allocation_amount
from .models import AllocationEntry, AllocationCheck, OrderType, RebalanceMetrics

__version__ = "1.0.0"

__all__ = [
    "AllocationNormalizer",
    "calculate_allocation_amount",
    "AllocationEntry",
    "AllocationCheck",
    "OrderType",
    "RebalanceMetrics",
    "__version__",
]
