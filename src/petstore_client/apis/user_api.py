# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from typing import Annotated

from ..models import User
from ..service import Body, Path, Query, delete, get, post, put


class UserApi:
    """Operations about user."""

    @post("user")
    def create_user(self, user: Annotated[User, Body()]) -> None: ...

    @post("user/createWithArray")
    def create_users_with_array_input(self, users: Annotated[list[User], Body()]) -> None: ...

    @post("user/createWithList")
    def create_users_with_list_input(self, users: Annotated[list[User], Body()]) -> None: ...

    @delete("user/{username}")
    def delete_user(self, username: Annotated[str, Path("username")]) -> None: ...

    @get("user/{username}")
    def get_user_by_name(self, username: Annotated[str, Path("username")]) -> User: ...

    @get("user/login")
    def login_user(
        self,
        username: Annotated[str, Query("username")],
        password: Annotated[str, Query("password")],
    ) -> str:
        """Logs user into the system; returns the session token."""

    @get("user/logout")
    def logout_user(self) -> None: ...

    @put("user/{username}")
    def update_user(self, username: Annotated[str, Path("username")], user: Annotated[User, Body()]) -> None: ...
