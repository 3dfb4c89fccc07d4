# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class OrderStatus(str, Enum):
    """Order status."""

    PLACED = "placed"
    APPROVED = "approved"
    DELIVERED = "delivered"


@dataclass
class Order:
    """An order for a pet from the pet store."""

    id: int | None = None
    pet_id: int | None = field(default=None, metadata={"json": "petId"})
    quantity: int | None = None
    ship_date: datetime | None = field(default=None, metadata={"json": "shipDate"})
    status: OrderStatus | None = None
    complete: bool | None = False
