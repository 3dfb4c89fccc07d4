# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
from datetime import datetime, timezone
from typing import Annotated
from urllib.parse import parse_qs, urlsplit

import pytest

from petstore_client import ApiClient, PetApi, StoreApi, UserApi
from petstore_client.errors import ApiError, ServiceDefinitionError, TransportError
from petstore_client.http import HttpResponse, StubHttpClient, TransportBuilder
from petstore_client.models import Category, ModelApiResponse, Order, OrderStatus, Pet, PetStatus, Tag, User
from petstore_client.service import Body, Call, Path, Query, ServiceResponse, get, post, service_endpoints

BASE = "http://petstore.test/v2/"

PET_PAYLOAD = {
    "id": 7,
    "name": "doggie",
    "photoUrls": ["http://img/1"],
    "category": {"id": 1, "name": "Dogs"},
    "tags": [{"id": 2, "name": "good"}],
    "status": "available",
}


def make_client(stub):
    return ApiClient(base_url="http://petstore.test/v2", transport_builder=TransportBuilder(base_client=stub))


class PetCalls:
    @get("pet/{petId}")
    def get_pet(self, pet_id: Annotated[int, Path("petId")]) -> Call[Pet]: ...

    @get("pet/{petId}")
    def get_pet_response(self, pet_id: Annotated[int, Path("petId")]) -> ServiceResponse[Pet]: ...

    @get("pet/search", headers={"Accept": "application/json"})
    def search(self, ids: Annotated[list[int], Query("id")], limit: Annotated[int | None, Query()] = None) -> list[Pet]: ...


class PetNames:
    @get("pet/{petId}")
    def name_of(self, pet_id: Annotated[int, Path("petId")]) -> Pet: ...


class UpperNameAdapterFactory:
    def get(self, return_type):
        if return_type is not Pet:
            return None
        return _UpperNameAdapter()


class _UpperNameAdapter:
    response_type = Pet

    def adapt(self, call):
        return call.execute().body.name.upper()


def test_get_pet_by_id_decodes_model(json_response):
    stub = StubHttpClient({f"GET {BASE}pet/7": json_response(PET_PAYLOAD)})
    api = make_client(stub).create_service(PetApi)

    pet = api.get_pet_by_id(7)

    assert pet == Pet(
        name="doggie",
        photo_urls=["http://img/1"],
        id=7,
        category=Category(id=1, name="Dogs"),
        tags=[Tag(id=2, name="good")],
        status=PetStatus.AVAILABLE,
    )
    assert stub.requests[0].method == "GET"


def test_add_pet_sends_json_body(json_response):
    stub = StubHttpClient({f"POST {BASE}pet": json_response(PET_PAYLOAD)})
    api = make_client(stub).create_service(PetApi)

    api.add_pet(Pet(name="doggie", photo_urls=["http://img/1"], status=PetStatus.PENDING))

    sent = stub.requests[0]
    assert sent.header("Content-Type") == "application/json; charset=UTF-8"
    assert json.loads(sent.body) == {"name": "doggie", "photoUrls": ["http://img/1"], "status": "pending"}


def test_find_pets_by_status_joins_values_with_commas(json_response):
    stub = StubHttpClient({f"GET {BASE}pet/findByStatus": json_response([PET_PAYLOAD])})
    api = make_client(stub).create_service(PetApi)

    pets = api.find_pets_by_status([PetStatus.AVAILABLE, PetStatus.SOLD])

    assert [pet.id for pet in pets] == [7]
    assert parse_qs(urlsplit(stub.requests[0].url).query) == {"status": ["available,sold"]}


def test_delete_pet_sends_optional_header():
    stub = StubHttpClient({f"DELETE {BASE}pet/3": HttpResponse(ok=True, status_code=200)})
    api = make_client(stub).create_service(PetApi)

    assert api.delete_pet(3, api_key="abc") is None
    assert api.delete_pet(3) is None

    assert stub.requests[0].header("api_key") == "abc"
    assert stub.requests[1].header("api_key") is None


def test_update_pet_with_form_encodes_fields():
    stub = StubHttpClient({f"POST {BASE}pet/3": HttpResponse(ok=True, status_code=200)})
    api = make_client(stub).create_service(PetApi)

    api.update_pet_with_form(3, name="rex", status="sold")

    sent = stub.requests[0]
    assert sent.header("Content-Type") == "application/x-www-form-urlencoded"
    assert parse_qs(sent.body_bytes.decode()) == {"name": ["rex"], "status": ["sold"]}


def test_upload_file_sends_multipart(json_response):
    stub = StubHttpClient({f"POST {BASE}pet/3/uploadImage": json_response({"code": 200, "type": "unknown", "message": "ok"})})
    api = make_client(stub).create_service(PetApi)

    result = api.upload_file(3, additional_metadata="front", file=b"\x89PNG")

    assert result == ModelApiResponse(code=200, type="unknown", message="ok")
    sent = stub.requests[0]
    assert sent.header("Content-Type").startswith("multipart/form-data; boundary=")
    assert b'name="additionalMetadata"' in sent.body
    assert b'name="file"; filename="file"' in sent.body
    assert b"\x89PNG" in sent.body


def test_path_values_are_percent_encoded(json_response):
    stub = StubHttpClient({f"GET {BASE}user/a%20b%2Fc": json_response({"username": "a b/c", "firstName": "A", "userStatus": 1})})
    api = make_client(stub).create_service(UserApi)

    user = api.get_user_by_name("a b/c")

    assert user == User(username="a b/c", first_name="A", user_status=1)


def test_login_user_returns_plain_text():
    stub = StubHttpClient({f"GET {BASE}user/login": HttpResponse(ok=True, status_code=200, text="session-1", content=b"session-1")})
    api = make_client(stub).create_service(UserApi)

    assert api.login_user("bob", "p&ss") == "session-1"
    assert parse_qs(urlsplit(stub.requests[0].url).query) == {"username": ["bob"], "password": ["p&ss"]}


def test_create_users_with_list_input(json_response):
    stub = StubHttpClient({f"POST {BASE}user/createWithList": HttpResponse(ok=True, status_code=200)})
    api = make_client(stub).create_service(UserApi)

    api.create_users_with_list_input([User(username="a"), User(username="b", last_name="B")])

    assert json.loads(stub.requests[0].body) == [{"username": "a"}, {"username": "b", "lastName": "B"}]


def test_store_inventory_and_order(json_response):
    stub = StubHttpClient(
        {
            f"GET {BASE}store/inventory": json_response({"available": 3, "sold": 1}),
            f"POST {BASE}store/order": json_response(
                {"id": 1, "petId": 7, "quantity": 2, "shipDate": "2024-05-01T10:00:00Z", "status": "placed", "complete": False}
            ),
        }
    )
    api = make_client(stub).create_service(StoreApi)

    assert api.get_inventory() == {"available": 3, "sold": 1}

    order = api.place_order(Order(pet_id=7, quantity=2, status=OrderStatus.PLACED))
    assert order.ship_date == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
    assert order.status is OrderStatus.PLACED
    assert json.loads(stub.requests[1].body) == {"petId": 7, "quantity": 2, "status": "placed", "complete": False}


def test_non_success_raises_api_error_with_server_message(json_response):
    stub = StubHttpClient({f"GET {BASE}pet/404": json_response({"code": 1, "type": "error", "message": "Pet not found"}, status_code=404)})
    api = make_client(stub).create_service(PetApi)

    with pytest.raises(ApiError) as excinfo:
        api.get_pet_by_id(404)

    assert excinfo.value.status_code == 404
    assert str(excinfo.value) == "Pet not found"
    assert "Pet not found" in excinfo.value.body


def test_non_json_error_body_uses_status_message():
    stub = StubHttpClient({f"DELETE {BASE}store/order/9": HttpResponse(ok=True, status_code=400, text="bad id")})
    api = make_client(stub).create_service(StoreApi)

    with pytest.raises(ApiError, match="failed with 400"):
        api.delete_order("9")


def test_missing_response_raises_transport_error():
    api = make_client(StubHttpClient()).create_service(PetApi)

    with pytest.raises(TransportError, match="No stubbed response configured"):
        api.get_pet_by_id(1)


def test_call_return_type_is_lazy(json_response):
    stub = StubHttpClient({f"GET {BASE}pet/7": json_response(PET_PAYLOAD)})
    api = make_client(stub).create_service(PetCalls)

    call = api.get_pet(7)

    assert isinstance(call, Call)
    assert stub.requests == []
    response = call.execute()
    assert response.status_code == 200
    assert response.body.name == "doggie"


def test_service_response_exposes_error_body(json_response):
    stub = StubHttpClient({f"GET {BASE}pet/7": json_response({"message": "nope"}, status_code=404)})
    api = make_client(stub).create_service(PetCalls)

    response = api.get_pet_response(7)

    assert response.is_successful is False
    assert response.body is None
    assert json.loads(response.error_body) == {"message": "nope"}


def test_multi_query_and_static_headers(json_response):
    stub = StubHttpClient({f"GET {BASE}pet/search": json_response([])})
    api = make_client(stub).create_service(PetCalls)

    assert api.search([1, 2]) == []

    sent = stub.requests[0]
    assert urlsplit(sent.url).query == "id=1&id=2"
    assert sent.header("Accept") == "application/json"


def test_user_call_adapter_factories_take_precedence(json_response):
    stub = StubHttpClient({f"GET {BASE}pet/7": json_response(PET_PAYLOAD)})
    client = ApiClient(
        base_url=BASE,
        transport_builder=TransportBuilder(base_client=stub),
        call_adapter_factories=[UpperNameAdapterFactory()],
    )

    assert client.create_service(PetNames).name_of(7) == "DOGGIE"


def test_generated_service_is_a_subclass():
    client = make_client(StubHttpClient())
    api = client.create_service(PetApi)

    assert isinstance(api, PetApi)
    assert type(api) is not PetApi
    assert type(api).__name__ == "PetApi"
    assert set(service_endpoints(PetApi)) == {
        "add_pet",
        "delete_pet",
        "find_pets_by_status",
        "find_pets_by_tags",
        "get_pet_by_id",
        "update_pet",
        "update_pet_with_form",
        "upload_file",
    }


class MissingMarker:
    @get("pet/{petId}")
    def broken(self, pet_id: int) -> Pet: ...


class UnknownPlaceholder:
    @get("pet/{petId}")
    def broken(self, pet_id: Annotated[int, Path("id")]) -> Pet: ...


class TwoBodies:
    @post("pet")
    def broken(self, a: Annotated[Pet, Body()], b: Annotated[Pet, Body()]) -> Pet: ...


class NoEndpoints:
    def plain(self):
        return None


@pytest.mark.parametrize(
    "service_type, message",
    [
        (MissingMarker, "needs exactly one"),
        (UnknownPlaceholder, "not found in"),
        (TwoBodies, "multiple Body parameters"),
        (NoEndpoints, "declares no HTTP endpoints"),
    ],
)
def test_invalid_service_definitions(service_type, message):
    with pytest.raises(ServiceDefinitionError, match=message):
        make_client(StubHttpClient()).create_service(service_type)


def test_service_must_be_a_class():
    with pytest.raises(ServiceDefinitionError, match="must be classes"):
        make_client(StubHttpClient()).create_service(PetApi())


@pytest.mark.parametrize("username", [".", ".."])
def test_dot_segment_path_values_are_rejected(username):
    stub = StubHttpClient()
    api = make_client(stub).create_service(UserApi)

    with pytest.raises(ValueError, match="dot segment"):
        api.delete_user(username)

    assert stub.requests == []


def test_path_values_with_dots_stay_under_the_resource():
    ok = HttpResponse(ok=True, status_code=200)
    stub = StubHttpClient({f"DELETE {BASE}user/a.b": ok, f"DELETE {BASE}user/..%2Fadmin": ok})
    api = make_client(stub).create_service(UserApi)

    api.delete_user("a.b")
    api.delete_user("../admin")

    assert [request.url for request in stub.requests] == [f"{BASE}user/a.b", f"{BASE}user/..%2Fadmin"]


def test_unknown_enum_value_decodes_as_none(json_response):
    stub = StubHttpClient({f"GET {BASE}pet/1": json_response({"id": 1, "name": "x", "photoUrls": [], "status": "string"})})
    api = make_client(stub).create_service(PetApi)

    pet = api.get_pet_by_id(1)

    assert pet.status is None
    assert pet.name == "x"


def test_missing_required_field_decodes_as_none(json_response):
    stub = StubHttpClient({f"GET {BASE}pet/1": json_response({"id": 1, "photoUrls": []})})
    api = make_client(stub).create_service(PetApi)

    assert api.get_pet_by_id(1) == Pet(name=None, photo_urls=[], id=1)
