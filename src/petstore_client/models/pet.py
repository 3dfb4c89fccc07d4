# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass
class Category:
    """A category for a pet."""

    id: int | None = None
    name: str | None = None


@dataclass
class Tag:
    """A tag for a pet."""

    id: int | None = None
    name: str | None = None


class PetStatus(str, Enum):
    """Pet status in the store."""

    AVAILABLE = "available"
    PENDING = "pending"
    SOLD = "sold"


@dataclass
class Pet:
    """A pet for sale in the pet store."""

    name: str
    photo_urls: list[str] = field(default_factory=list, metadata={"json": "photoUrls"})
    id: int | None = None
    category: Category | None = None
    tags: list[Tag] | None = None
    status: PetStatus | None = None
