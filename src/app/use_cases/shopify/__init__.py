"""Use cases específicos da Shopify."""

from .process_order_created import (
    InvalidOrderPayloadError,
    OrderSyncSummary,
    ProcessOrderCreatedUseCase,
)

__all__ = [
    "InvalidOrderPayloadError",
    "OrderSyncSummary",
    "ProcessOrderCreatedUseCase",
]
