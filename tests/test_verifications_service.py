import pytest

from auth.service import IdentityLookup
from core.errors import AuthenticationRequired, ExternalUnavailable, InvalidArgument, StoreError
from verifications.schemas import VerificationFilter
from verifications.service import VerificationService

from .fakes import FakePlaces, place_details


def _service(store, places, list_filter=None) -> VerificationService:
    return VerificationService(
        store=store,
        places=places,
        identity=IdentityLookup(store),
        list_filter=list_filter,
    )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "operation,args",
    [
        ("list_verifications", ()),
        ("get_verification", ("v1",)),
        ("accept_verification", ("v1",)),
        ("decline_verification", ("v1",)),
    ],
)
async def test_requires_caller_before_store_access(store, places, operation, args):
    service = _service(store, places)

    with pytest.raises(AuthenticationRequired) as exc_info:
        await getattr(service, operation)(None, *args)

    assert exc_info.value.kind == "failed-precondition"
    assert store.call_count == 0
    assert places.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("operation", ["get_verification", "accept_verification", "decline_verification"])
@pytest.mark.parametrize("verification_id", [None, "", "   "])
async def test_missing_id_is_invalid_argument(store, places, caller, operation, verification_id):
    service = _service(store, places)

    with pytest.raises(InvalidArgument):
        await getattr(service, operation)(caller, verification_id)

    assert store.call_count == 0
    assert places.calls == []


@pytest.mark.asyncio
async def test_list_skips_rows_without_submitter(store, places, caller):
    store.tables["verifications"] = [
        {"id": "v1", "place_id": "p1", "auth_id": "u1"},
        {"id": "v2", "place_id": "p2", "auth_id": None},
        {"id": "v3", "place_id": "p3", "auth_id": "u3"},
        {"id": "v4", "place_id": "p4"},
    ]

    rows = await _service(store, places).list_verifications(caller)

    assert [row["id"] for row in rows] == ["v1", "v3"]
    assert len(rows) == 4 - 2


@pytest.mark.asyncio
async def test_list_attaches_caller_email_to_every_row(store, places, caller):
    store.tables["verifications"] = [
        {"id": "v1", "auth_id": "u1", "verification_email": "one@x.com"},
        {"id": "v2", "auth_id": "u2", "verification_email": "two@x.com"},
    ]

    rows = await _service(store, places).list_verifications(caller)

    assert {row["user_email"] for row in rows} == {"admin@example.com"}


@pytest.mark.asyncio
async def test_list_applies_configured_filter(store, places, caller):
    store.tables["verifications"] = [
        {"id": "v1", "auth_id": "u1", "verification_mode": "phone", "connection_type": "admin"},
        {"id": "v2", "auth_id": "u2", "verification_mode": "email", "connection_type": "admin"},
        {"id": "v3", "auth_id": "u3", "verification_mode": "phone", "connection_type": "staff"},
    ]
    service = _service(store, places, VerificationFilter(verification_mode="phone", connection_type="admin"))

    rows = await service.list_verifications(caller)

    assert [row["id"] for row in rows] == ["v1"]


@pytest.mark.asyncio
async def test_list_empty_is_not_an_error(store, places, caller):
    store.tables["verifications"] = []

    assert await _service(store, places).list_verifications(caller) == []


@pytest.mark.asyncio
async def test_list_store_error(store, places, caller):
    store.fail("select", "verifications")

    with pytest.raises(StoreError, match="Error fetching verifications"):
        await _service(store, places).list_verifications(caller)


@pytest.mark.asyncio
async def test_get_merges_address_and_camel_cases(store, places, caller):
    result = await _service(store, places).get_verification(caller, "v1")

    assert places.calls == ["p1"]
    assert result["placeId"] == "p1"
    assert result["verificationEmail"] == "a@x.com"
    assert result["userEmail"] == "admin@example.com"
    assert result["address"] == {
        "businessName": "Corner Bakery",
        "address": "Main Street",
        "streetNumber": "12",
        "city": "Springfield",
        "postalCode": "62701",
        "state": "IL",
        "country": "United States",
        "lat": 39.78,
        "lon": -89.65,
    }


@pytest.mark.asyncio
async def test_get_without_website_is_unavailable(store, caller):
    places = FakePlaces(place_details("p1", website=None))

    with pytest.raises(ExternalUnavailable) as exc_info:
        await _service(store, places).get_verification(caller, "v1")

    assert exc_info.value.kind == "unavailable"


@pytest.mark.asyncio
async def test_get_without_details_is_unavailable(store, caller):
    with pytest.raises(ExternalUnavailable):
        await _service(store, FakePlaces(None)).get_verification(caller, "v1")


@pytest.mark.asyncio
async def test_get_unknown_id_is_store_error(store, places, caller):
    with pytest.raises(StoreError):
        await _service(store, places).get_verification(caller, "nope")

    assert places.calls == []


@pytest.mark.asyncio
async def test_accept_creates_business_profile_and_connection(store, places, caller):
    result = await _service(store, places).accept_verification(caller, "v1")

    businesses = store.rows("businesses")
    profiles = store.rows("profiles")
    connections = store.rows("business_connections")

    assert len(businesses) == 1
    assert businesses[0]["place_id"] == "p1"
    assert businesses[0]["name"] == "Corner Bakery"
    assert businesses[0]["lat"] == 39.78
    assert businesses[0]["lon"] == -89.65

    assert len(profiles) == 1
    assert profiles[0]["auth_id"] == "u1"
    assert profiles[0]["email"] == "a@x.com"

    assert len(connections) == 1
    assert connections[0]["business_id"] == businesses[0]["id"]
    assert connections[0]["profile_id"] == profiles[0]["id"]
    assert connections[0]["connection_type"] == "admin"

    assert store.rows("verifications") == []

    assert result["connectionType"] == "admin"
    assert result["businessId"] == businesses[0]["id"]
    assert result["businesses"]["placeId"] == "p1"
    assert result["profiles"]["authId"] == "u1"


@pytest.mark.asyncio
async def test_accept_deletes_verification_last(store, places, caller):
    await _service(store, places).accept_verification(caller, "v1")

    mutations = [call for call in store.calls if call[0] in {"insert", "delete"}]
    assert mutations[-1] == ("delete", "verifications")
    assert mutations[-2] == ("insert", "business_connections")


@pytest.mark.asyncio
async def test_accept_without_website_creates_nothing(store, caller):
    with pytest.raises(ExternalUnavailable):
        await _service(store, FakePlaces(place_details("p1", website=None))).accept_verification(caller, "v1")

    assert store.op_counts()["insert"] == 0
    assert len(store.rows("verifications")) == 1


@pytest.mark.asyncio
async def test_accept_business_insert_failure_skips_connection(store, places, caller):
    store.fail("insert", "businesses", message="duplicate key value")

    with pytest.raises(StoreError, match="duplicate key value"):
        await _service(store, places).accept_verification(caller, "v1")

    assert store.rows("business_connections") == []
    assert len(store.rows("verifications")) == 1
    # The concurrent profile insert already committed and is left in place.
    assert len(store.rows("profiles")) == 1


@pytest.mark.asyncio
async def test_accept_insert_failure_without_message_uses_default(store, places, caller):
    store.fail("insert", "profiles", message="")

    with pytest.raises(StoreError, match="Error creating profile"):
        await _service(store, places).accept_verification(caller, "v1")


@pytest.mark.asyncio
async def test_accept_connection_failure_keeps_verification(store, places, caller):
    store.fail("insert", "business_connections", message="connection insert failed")

    with pytest.raises(StoreError, match="connection insert failed"):
        await _service(store, places).accept_verification(caller, "v1")

    assert len(store.rows("businesses")) == 1
    assert len(store.rows("profiles")) == 1
    assert len(store.rows("verifications")) == 1


@pytest.mark.asyncio
async def test_accept_delete_failure_leaves_new_rows(store, places, caller):
    store.fail("delete", "verifications", message="delete failed")

    with pytest.raises(StoreError, match="delete failed"):
        await _service(store, places).accept_verification(caller, "v1")

    assert len(store.rows("business_connections")) == 1
    assert len(store.rows("verifications")) == 1


@pytest.mark.asyncio
async def test_decline_removes_only_that_row(store, places, caller):
    store.tables["verifications"].append({"id": "v2", "place_id": "p2", "auth_id": "u2"})

    result = await _service(store, places).decline_verification(caller, "v1")

    assert result is None
    assert [row["id"] for row in store.rows("verifications")] == ["v2"]
    assert places.calls == []


@pytest.mark.asyncio
async def test_decline_unknown_id_surfaces_store_message(store, places, caller):
    with pytest.raises(StoreError, match="No rows in verifications matched the filter."):
        await _service(store, places).decline_verification(caller, "missing")


@pytest.mark.asyncio
@pytest.mark.parametrize("operation", ["get_verification", "accept_verification", "decline_verification"])
@pytest.mark.parametrize("verification_id", [["v1"], 1.5, True, {"id": "v1"}])
async def test_non_scalar_id_is_invalid_argument(store, places, caller, operation, verification_id):
    with pytest.raises(InvalidArgument, match="must be a string or an integer"):
        await getattr(_service(store, places), operation)(caller, verification_id)

    assert store.call_count == 0


@pytest.mark.asyncio
async def test_bad_id_type_without_caller_is_authentication_error(store, places):
    with pytest.raises(AuthenticationRequired):
        await _service(store, places).get_verification(None, ["v1"])


@pytest.mark.asyncio
async def test_integer_id_is_accepted(store, places, caller):
    store.tables["verifications"].append({"id": 7, "place_id": "p7", "auth_id": "u7"})

    await _service(store, places).decline_verification(caller, 7)

    assert [row["id"] for row in store.rows("verifications")] == ["v1"]
