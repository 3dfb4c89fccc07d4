# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass models of the Petstore API."""

from .api_response import ModelApiResponse
from .pet import Category, Pet, PetStatus, Tag
from .store import Order, OrderStatus
from .user import User

__all__ = [
    "Category",
    "ModelApiResponse",
    "Order",
    "OrderStatus",
    "Pet",
    "PetStatus",
    "Tag",
    "User",
]
