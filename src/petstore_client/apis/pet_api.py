# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from typing import Annotated

from ..models import ModelApiResponse, Pet, PetStatus
from ..service import Body, Field, Header, Part, Path, Query, delete, get, post, put


class PetApi:
    """Everything about your Pets."""

    @post("pet")
    def add_pet(self, pet: Annotated[Pet, Body()]) -> Pet:
        """Add a new pet to the store. Requires ``petstore_auth``."""

    @delete("pet/{petId}")
    def delete_pet(self, pet_id: Annotated[int, Path("petId")], api_key: Annotated[str | None, Header("api_key")] = None) -> None:
        """Deletes a pet."""

    @get("pet/findByStatus")
    def find_pets_by_status(self, status: Annotated[list[PetStatus], Query("status", collection_format="csv")]) -> list[Pet]:
        """Finds Pets by status; multiple values are comma separated."""

    @get("pet/findByTags")
    def find_pets_by_tags(self, tags: Annotated[list[str], Query("tags", collection_format="csv")]) -> list[Pet]:
        """Finds Pets by tags.

        Deprecated upstream; use ``find_pets_by_status``.
        """

    @get("pet/{petId}")
    def get_pet_by_id(self, pet_id: Annotated[int, Path("petId")]) -> Pet:
        """Returns a single pet. Requires ``api_key``."""

    @put("pet")
    def update_pet(self, pet: Annotated[Pet, Body()]) -> Pet:
        """Update an existing pet."""

    @post("pet/{petId}")
    def update_pet_with_form(
        self,
        pet_id: Annotated[int, Path("petId")],
        name: Annotated[str | None, Field("name")] = None,
        status: Annotated[str | None, Field("status")] = None,
    ) -> None:
        """Updates a pet in the store with form data."""

    @post("pet/{petId}/uploadImage")
    def upload_file(
        self,
        pet_id: Annotated[int, Path("petId")],
        additional_metadata: Annotated[str | None, Part("additionalMetadata")] = None,
        file: Annotated[bytes | None, Part("file")] = None,
    ) -> ModelApiResponse:
        """Uploads an image."""
