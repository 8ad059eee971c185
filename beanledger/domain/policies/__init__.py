"""Domain policies package."""

from .transaction_flows import (
    default_category_name,
    is_asset_decrease,
    is_asset_increase,
)

__all__ = [
    "is_asset_increase",
    "is_asset_decrease",
    "default_category_name",
]
