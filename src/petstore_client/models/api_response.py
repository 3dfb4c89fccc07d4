# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ModelApiResponse:
    """Describes the result of uploading an image resource."""

    code: int | None = None
    type: str | None = None
    message: str | None = None
