# SPDX-License-Identifier: MIT

from sheetshark.model.entity_id import (
    UNSET_ENTITY_ID,
    generate_entity_id,
    is_entity_id,
)


def test_ids_are_unique_and_sort_in_creation_order():
    ids = [generate_entity_id() for _ in range(2000)]

    assert len(set(ids)) == len(ids)
    assert sorted(ids) == ids


def test_id_shape():
    entity_id = generate_entity_id()

    assert entity_id.startswith("tent_")
    assert len(entity_id) == len("tent_") + 32
    assert is_entity_id(entity_id)
    assert is_entity_id(UNSET_ENTITY_ID)


def test_is_entity_id_rejects_other_strings():
    assert not is_entity_id("1")
    assert not is_entity_id("tent_123")
    assert not is_entity_id("task_" + "0" * 32)
    assert not is_entity_id("tent_" + "g" * 32)
