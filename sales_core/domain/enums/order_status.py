"""
Order Status Enum.

Lifecycle status values of an order.
"""
from enum import Enum


class OrderStatus(str, Enum):
    """Order lifecycle status values."""

    NEW = "NEW"
    PAID = "PAID"
    SHIPPED = "SHIPPED"
    RECEIVED = "RECEIVED"
