# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Service interfaces of the Petstore API."""

from .pet_api import PetApi
from .store_api import StoreApi
from .user_api import UserApi

__all__ = ["PetApi", "StoreApi", "UserApi"]
