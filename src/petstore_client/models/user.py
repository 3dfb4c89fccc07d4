# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class User:
    """A User who is purchasing from the pet store."""

    id: int | None = None
    username: str | None = None
    first_name: str | None = field(default=None, metadata={"json": "firstName"})
    last_name: str | None = field(default=None, metadata={"json": "lastName"})
    email: str | None = None
    password: str | None = None
    phone: str | None = None
    user_status: int | None = field(default=None, metadata={"json": "userStatus"})
