"""Element Store — lookups, atomic create, name reuse, and unique-key races.

Invariants:
    - Lookups raise ResourceNotFoundError for absent rows
    - Name lookup is case- and whitespace-insensitive
    - A conflicting combination insert leaves no orphan Element behind
    - Concurrent inserts for one key leave exactly one Combination row
"""

import asyncio
from uuid import uuid4

import pytest

from mixit.core.canonical_key import normalize
from mixit.core.errors import CombinationConflictError, ResourceNotFoundError
from mixit.models.combination import Combination
from mixit.models.element import Element


async def test_seed_is_idempotent(engine, count_rows):
    await engine.start()
    await engine.start()
    assert await count_rows(Element) == 4


async def test_get_element_unknown_id(engine):
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await engine.store.get_element(uuid4())
    assert exc_info.value.resource_type == "Element"


async def test_get_combination_unknown_key(engine, starters):
    key = normalize(starters["Water"].id, starters["Fire"].id)
    with pytest.raises(ResourceNotFoundError):
        await engine.store.get_combination(key)


async def test_find_by_name_ignores_case_and_spacing(engine, starters):
    found = await engine.store.find_element_by_name("  wATer ")
    assert found.id == starters["Water"].id


async def test_create_element_and_combination(engine, starters, count_rows):
    key = normalize(starters["Water"].id, starters["Earth"].id)

    element, combination = await engine.store.create_element_and_combination(
        key, "Mud", "🟤",
    )

    assert combination.key == key
    assert combination.result_element_id == element.id
    stored = await engine.store.get_combination(key)
    assert stored.result_element.name == "Mud"
    assert await count_rows(Element) == 5


async def test_create_reuses_existing_element(engine, starters, count_rows):
    key = normalize(starters["Fire"].id, starters["Fire"].id)

    element, _ = await engine.store.create_element_and_combination(key, "FIRE", "🔥")

    assert element.id == starters["Fire"].id
    assert await count_rows(Element) == 4


async def test_duplicate_key_rejected_without_orphan_element(
    engine, starters, count_rows,
):
    key = normalize(starters["Air"].id, starters["Water"].id)
    await engine.store.create_element_and_combination(key, "Mist", "🌫️")

    with pytest.raises(CombinationConflictError) as exc_info:
        await engine.store.create_element_and_combination(key, "Rain", "🌧️")

    assert exc_info.value.context.debug_info["conflict"] == "combination_key"
    assert await count_rows(Element, Element.normalized_name == "rain") == 0
    assert (await engine.store.get_combination(key)).result_element.name == "Mist"


async def test_concurrent_inserts_leave_one_row(engine, starters, count_rows):
    key = normalize(starters["Earth"].id, starters["Earth"].id)

    results = await asyncio.gather(
        engine.store.create_element_and_combination(key, "Mountain", "⛰️"),
        engine.store.create_element_and_combination(key, "Hill", "🏞️"),
        return_exceptions=True,
    )

    conflicts = [r for r in results if isinstance(r, CombinationConflictError)]
    assert len(conflicts) == 1
    assert await count_rows(Combination, Combination.key == key) == 1


async def test_list_elements_returns_starters(engine):
    names = {e.name for e in await engine.store.list_elements()}
    assert names == {"Water", "Earth", "Fire", "Air"}
