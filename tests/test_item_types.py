"""Tests for the item type registry."""

import asyncio

import pydantic
import pytest

from fieldstock.core.exceptions import AlreadySeeded, NotFound, ValidationError
from fieldstock.modules.item_types.defaults import DEFAULT_ITEM_TYPES
from fieldstock.modules.item_types.schemas import RESERVED_IDS, ItemTypeCreate, ItemTypeUpdate
from fieldstock.modules.item_types.service import ItemTypesService
from fieldstock.shared.schemas.enums import PackagingRule


@pytest.fixture
def service(db):
    return ItemTypesService(db)


class TestSeedDefaults:

    def test_seed_empty_catalog(self, service):
        created = asyncio.run(service.seed_defaults())
        assert created == len(DEFAULT_ITEM_TYPES) == 10

        ids = [t.id for t in asyncio.run(service.list_item_types())]
        assert ids[:3] == ["n950", "i9000s", "i9100"]
        assert "lebaraSim" in ids

    def test_seed_twice_raises(self, service):
        asyncio.run(service.seed_defaults())
        with pytest.raises(AlreadySeeded) as exc_info:
            asyncio.run(service.seed_defaults())
        assert exc_info.value.status_code == 409
        assert exc_info.value.details["existing_count"] == 10

    def test_seed_if_empty_is_noop(self, service):
        asyncio.run(service.seed_defaults())
        assert asyncio.run(service.seed_defaults(if_empty=True)) == 0
        assert len(asyncio.run(service.list_item_types())) == 10

    def test_seed_refuses_non_empty_catalog(self, service):
        asyncio.run(service.create_item_type(
            ItemTypeCreate(id="cable", name_local="كابل", name_alt="Cable")
        ))
        with pytest.raises(AlreadySeeded):
            asyncio.run(service.seed_defaults())
        assert len(asyncio.run(service.list_item_types())) == 1


class TestCreate:

    def test_generated_id(self, service):
        item_type = asyncio.run(service.create_item_type(
            ItemTypeCreate(name_local="شاحن", name_alt="Charger", units_per_box=25)
        ))
        assert item_type.id
        assert item_type.units_per_box == 25
        assert item_type.packaging_rule == PackagingRule.BOTH.value
        assert item_type.is_active and item_type.is_visible

    def test_explicit_id(self, service):
        item_type = asyncio.run(service.create_item_type(
            ItemTypeCreate(id="cable", name_local="كابل", name_alt="Cable",
                           packaging_rule=PackagingRule.UNIT_ONLY)
        ))
        assert item_type.id == "cable"
        assert asyncio.run(service.get_item_type("cable")).packaging_rule == "unit_only"

    def test_duplicate_id(self, service):
        data = ItemTypeCreate(id="cable", name_local="كابل", name_alt="Cable")
        asyncio.run(service.create_item_type(data))
        with pytest.raises(ValidationError):
            asyncio.run(service.create_item_type(data))

    def test_blank_name_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            ItemTypeCreate(name_local="   ", name_alt="Cable")

    def test_units_per_box_must_be_positive(self):
        with pytest.raises(pydantic.ValidationError):
            ItemTypeCreate(name_local="كابل", name_alt="Cable", units_per_box=0)

    @pytest.mark.parametrize("item_type_id", sorted(RESERVED_IDS) + ["a/b"])
    def test_route_segment_ids_rejected(self, item_type_id):
        with pytest.raises(pydantic.ValidationError):
            ItemTypeCreate(id=item_type_id, name_local="كابل", name_alt="Cable")


class TestUpdate:

    def test_patch_fields(self, seeded):
        service = ItemTypesService(seeded)
        item_type = asyncio.run(service.update_item_type(
            "stickers", ItemTypeUpdate(name_alt="Labels", units_per_box=200)
        ))
        assert item_type.name_alt == "Labels"
        assert item_type.units_per_box == 200
        assert item_type.name_local == "الملصقات"

    def test_null_for_required_field(self, seeded):
        service = ItemTypesService(seeded)
        with pytest.raises(ValidationError):
            asyncio.run(service.update_item_type("stickers", ItemTypeUpdate(name_local=None)))

    def test_id_is_immutable(self):
        with pytest.raises(pydantic.ValidationError):
            ItemTypeUpdate(id="other")

    def test_unknown_item_type(self, seeded):
        service = ItemTypesService(seeded)
        with pytest.raises(NotFound):
            asyncio.run(service.update_item_type("nope", ItemTypeUpdate(name_alt="X")))


class TestToggles:

    def test_list_active_hides_inactive_and_hidden(self, seeded):
        service = ItemTypesService(seeded)
        asyncio.run(service.toggle_active("n950", False))
        asyncio.run(service.toggle_visibility("stcSim", False))

        active_ids = [t.id for t in asyncio.run(service.list_active_item_types())]
        assert "n950" not in active_ids
        assert "stcSim" not in active_ids
        assert active_ids[0] == "i9000s"
        assert len(asyncio.run(service.list_item_types())) == 10

    def test_toggle_back(self, seeded):
        service = ItemTypesService(seeded)
        asyncio.run(service.toggle_active("n950", False))
        assert asyncio.run(service.toggle_active("n950", True)).is_active is True

    def test_get_missing(self, seeded):
        with pytest.raises(NotFound):
            asyncio.run(ItemTypesService(seeded).get_item_type("missing"))
