"""
Letter store CRUD tests (sqlite via aiosqlite)
"""

import pytest

from app.services.validation_service import sanitize_create, sanitize_update
from app.utils.errors import FieldValidationError, NotFoundError
from conftest import letter_payload

OWNER = "user-a"
OTHER = "user-b"


async def _create(store, user_id=OWNER, **overrides):
    return await store.create_letter(sanitize_create(letter_payload(**overrides)), user_id)


@pytest.mark.asyncio
async def test_create_assigns_id_and_timestamps(store):
    letter = await _create(store, content="<p>Dear Committee,</p>")

    assert isinstance(letter["id"], int)
    assert letter["user_id"] == OWNER
    assert letter["created_at"] == letter["updated_at"]
    assert letter["content"] == "<p>Dear Committee,</p>"
    assert letter["referrer_email"] == "prof@uni.edu"


@pytest.mark.asyncio
async def test_ids_are_unique(store):
    first = await _create(store)
    second = await _create(store)
    assert first["id"] != second["id"]


@pytest.mark.asyncio
async def test_get_is_owner_scoped(store):
    letter = await _create(store)

    fetched = await store.get_letter(letter["id"], OWNER)
    assert fetched["applicant_name"] == "Jane Doe"

    with pytest.raises(NotFoundError):
        await store.get_letter(letter["id"], OTHER)
    with pytest.raises(NotFoundError):
        await store.get_letter(letter["id"] + 1000, OWNER)


@pytest.mark.asyncio
async def test_list_is_owner_scoped_in_insertion_order(store):
    a1 = await _create(store, applicantName="Alice")
    await _create(store, user_id=OTHER, applicantName="Bob")
    a2 = await _create(store, applicantName="Carol")

    letters = await store.list_letters(OWNER)
    assert [letter["id"] for letter in letters] == [a1["id"], a2["id"]]


@pytest.mark.asyncio
async def test_search_is_and_owned(store):
    await _create(store, applicantName="Alice", targetInstitution="Stanford")
    await _create(store, applicantName="Carol", fieldDomain="Biology")
    await _create(store, user_id=OTHER, applicantName="Alice Other", targetInstitution="Stanford")

    by_name = await store.list_letters(OWNER, search="alice")
    assert [letter["applicant_name"] for letter in by_name] == ["Alice"]

    by_institution = await store.list_letters(OWNER, search="STANFORD")
    assert [letter["applicant_name"] for letter in by_institution] == ["Alice"]

    by_domain = await store.list_letters(OWNER, search="bio")
    assert [letter["applicant_name"] for letter in by_domain] == ["Carol"]

    assert await store.list_letters(OWNER, search="nothing matches") == []
    assert await store.count_letters(OWNER, search="stanford") == 1
    assert await store.count_letters(OWNER) == 2


@pytest.mark.asyncio
async def test_search_wildcards_match_literally(store):
    await _create(store, applicantName="Jane Doe")
    await _create(store, applicantName="Top_1% Scholar")

    for term in ("_", "%", "1%", "\\"):
        matched = await store.list_letters(OWNER, search=term)
        expected = ["Top_1% Scholar"] if term != "\\" else []
        assert [letter["applicant_name"] for letter in matched] == expected, term
    assert await store.count_letters(OWNER, search="%") == 1


@pytest.mark.asyncio
async def test_out_of_range_values(store):
    letter = await _create(store)
    huge = 10 ** 20

    for letter_id in (huge, -huge):
        with pytest.raises(NotFoundError):
            await store.get_letter(letter_id, OWNER)
    with pytest.raises(NotFoundError):
        await store.update_letter(huge, OWNER, sanitize_update({"tone": "warm"}))
    with pytest.raises(NotFoundError):
        await store.delete_letter(huge, OWNER)
    with pytest.raises(FieldValidationError):
        await store.list_letters(OWNER, offset=huge)
    with pytest.raises(FieldValidationError):
        await store.list_letters(OWNER, limit=huge)

    assert (await store.get_letter(letter["id"], OWNER))["tone"] == "formal"


@pytest.mark.asyncio
async def test_pagination(store):
    created = [await _create(store, applicantName=f"Applicant {i}") for i in range(5)]

    page = await store.list_letters(OWNER, limit=2, offset=1)
    assert [letter["id"] for letter in page] == [created[1]["id"], created[2]["id"]]

    assert len(await store.list_letters(OWNER)) == 5
    assert await store.list_letters(OWNER, limit=0) == []


@pytest.mark.asyncio
async def test_limit_clamped_to_100(store):
    fields = sanitize_create(letter_payload())
    for _ in range(101):
        await store.create_letter(fields, OWNER)

    letters = await store.list_letters(OWNER, limit=500)
    assert len(letters) == 100


@pytest.mark.asyncio
@pytest.mark.parametrize("limit,offset", [(-1, 0), (10, -1), ("10", 0)])
async def test_invalid_page_params(store, limit, offset):
    with pytest.raises(FieldValidationError):
        await store.list_letters(OWNER, limit=limit, offset=offset)


@pytest.mark.asyncio
async def test_update_changes_only_supplied_fields(store):
    letter = await _create(store, anecdote="Fixed the cluster at 2am")

    updated = await store.update_letter(letter["id"], OWNER, sanitize_update({"tone": "warm"}))

    assert updated["tone"] == "warm"
    for key, value in letter.items():
        if key not in ("tone", "updated_at"):
            assert updated[key] == value
    assert updated["updated_at"] >= letter["updated_at"]


@pytest.mark.asyncio
async def test_repeated_update_is_idempotent(store):
    letter = await _create(store)
    changes = sanitize_update({"tone": "warm", "content": "<p>Draft</p>"})

    first = await store.update_letter(letter["id"], OWNER, changes)
    second = await store.update_letter(letter["id"], OWNER, changes)

    first.pop("updated_at")
    second.pop("updated_at")
    assert first == second


@pytest.mark.asyncio
async def test_update_by_other_user_is_not_found(store):
    letter = await _create(store)

    with pytest.raises(NotFoundError):
        await store.update_letter(letter["id"], OTHER, sanitize_update({"tone": "warm"}))

    unchanged = await store.get_letter(letter["id"], OWNER)
    assert unchanged["tone"] == "formal"


@pytest.mark.asyncio
async def test_delete_is_owner_scoped_and_final(store):
    letter = await _create(store)

    with pytest.raises(NotFoundError):
        await store.delete_letter(letter["id"], OTHER)

    result = await store.delete_letter(letter["id"], OWNER)
    assert result == {"message": "Letter deleted successfully", "id": letter["id"]}

    with pytest.raises(NotFoundError):
        await store.get_letter(letter["id"], OWNER)
    with pytest.raises(NotFoundError):
        await store.delete_letter(letter["id"], OWNER)


@pytest.mark.asyncio
async def test_update_after_delete_does_not_resurrect(store):
    letter = await _create(store)
    await store.delete_letter(letter["id"], OWNER)

    with pytest.raises(NotFoundError):
        await store.update_letter(letter["id"], OWNER, sanitize_update({"tone": "warm"}))

    assert await store.list_letters(OWNER) == []
