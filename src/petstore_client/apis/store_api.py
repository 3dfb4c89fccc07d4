# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from typing import Annotated

from ..models import Order
from ..service import Body, Path, delete, get, post


class StoreApi:
    """Access to Petstore orders."""

    @delete("store/order/{orderId}")
    def delete_order(self, order_id: Annotated[str, Path("orderId")]) -> None:
        """Delete purchase order by ID."""

    @get("store/inventory")
    def get_inventory(self) -> dict[str, int]:
        """Returns pet inventories by status. Requires ``api_key``."""

    @get("store/order/{orderId}")
    def get_order_by_id(self, order_id: Annotated[int, Path("orderId")]) -> Order:
        """Find purchase order by ID."""

    @post("store/order")
    def place_order(self, order: Annotated[Order, Body()]) -> Order:
        """Place an order for a pet."""
