"""Tests for catalog reads and admin mutations."""

from swiftfix.schemas.catalog_schema import Brand, TimeSlot
from swiftfix.tools.catalog import (
    DEVICE_MODELS,
    INITIAL_ISSUES,
    CatalogStore,
    find_model,
    get_models_for_brand,
)


def _times(catalog):
    return [slot.time for slot in catalog.time_slots]


class TestSeedData:
    def test_every_brand_has_models(self):
        for brand in Brand:
            assert get_models_for_brand(brand)

    def test_model_brand_matches_key(self):
        for brand, models in DEVICE_MODELS.items():
            assert all(m.brand == brand for m in models)

    def test_find_model(self):
        assert find_model("zfold5").name == "Galaxy Z Fold 5"
        assert find_model("nokia") is None

    def test_seed_slots_are_open_and_ordered(self, catalog):
        assert _times(catalog) == [
            "09:00 AM", "10:00 AM", "11:00 AM",
            "01:00 PM", "02:00 PM", "03:00 PM", "04:00 PM",
        ]
        assert all(slot.available for slot in catalog.time_slots)

    def test_stores_do_not_share_state(self):
        first, second = CatalogStore(), CatalogStore()
        first.delete_time_slot("09:00 AM")
        first.block_date("2025-12-25")
        assert "09:00 AM" in _times(second)
        assert second.blocked_dates == []


class TestServices:
    def test_update_service(self, catalog):
        changed = catalog.get_service("screen").model_copy(update={"price_range": "₱4,000 - ₱13,000"})
        catalog.update_service(changed)
        assert catalog.get_service("screen").price_range == "₱4,000 - ₱13,000"
        assert [s.id for s in catalog.services] == [s.id for s in INITIAL_ISSUES]

    def test_update_unknown_service_is_ignored(self, catalog):
        ghost = INITIAL_ISSUES[0].model_copy(update={"id": "ghost"})
        catalog.update_service(ghost)
        assert catalog.get_service("ghost") is None
        assert len(catalog.services) == len(INITIAL_ISSUES)

    def test_seed_list_is_not_mutated(self, catalog):
        changed = catalog.get_service("battery").model_copy(update={"name": "Battery Swap"})
        catalog.update_service(changed)
        assert INITIAL_ISSUES[1].name == "Battery Replacement"


class TestTimeSlots:
    def test_toggle_availability(self, catalog):
        catalog.update_time_slot("01:00 PM", False)
        assert "01:00 PM" not in [s.time for s in catalog.available_time_slots()]
        catalog.update_time_slot("01:00 PM", True)
        assert "01:00 PM" in [s.time for s in catalog.available_time_slots()]

    def test_toggle_unknown_slot_is_ignored(self, catalog):
        before = catalog.time_slots
        catalog.update_time_slot("06:00 PM", False)
        assert catalog.time_slots == before

    def test_add_converts_and_sorts(self, catalog):
        catalog.add_time_slot("14:30")
        times = _times(catalog)
        assert times.index("02:30 PM") == times.index("02:00 PM") + 1

    def test_add_morning_slot_goes_first(self, catalog):
        catalog.add_time_slot("08:00")
        assert _times(catalog)[0] == "08:00 AM"

    def test_add_midnight_and_noon(self):
        catalog = CatalogStore(time_slots=[])
        catalog.add_time_slot("12:00")
        catalog.add_time_slot("00:30")
        assert _times(catalog) == ["12:30 AM", "12:00 PM"]

    def test_add_duplicate_is_ignored(self, catalog):
        catalog.add_time_slot("09:00")
        assert _times(catalog).count("09:00 AM") == 1

    def test_add_empty_or_malformed_is_ignored(self, catalog):
        before = _times(catalog)
        catalog.add_time_slot("")
        catalog.add_time_slot("9am")
        catalog.add_time_slot("25:00")
        assert _times(catalog) == before

    def test_delete(self, catalog):
        catalog.delete_time_slot("04:00 PM")
        assert "04:00 PM" not in _times(catalog)
        catalog.delete_time_slot("04:00 PM")
        assert len(catalog.time_slots) == 6

    def test_constructor_sorts_slots(self):
        catalog = CatalogStore(time_slots=[TimeSlot(time="03:00 PM"), TimeSlot(time="08:00 AM")])
        assert _times(catalog) == ["08:00 AM", "03:00 PM"]


class TestBlockedDates:
    def test_block_and_unblock(self, catalog):
        catalog.block_date("2025-03-14")
        assert catalog.is_blocked("2025-03-14")
        catalog.unblock_date("2025-03-14")
        assert not catalog.is_blocked("2025-03-14")

    def test_blocked_dates_sorted_and_unique(self, catalog):
        for day in ("2025-04-01", "2025-03-14", "2025-04-01"):
            catalog.block_date(day)
        assert catalog.blocked_dates == ["2025-03-14", "2025-04-01"]

    def test_malformed_date_is_ignored(self, catalog):
        catalog.block_date("")
        catalog.block_date("next friday")
        assert catalog.blocked_dates == []

    def test_unblock_unknown_is_noop(self, catalog):
        catalog.block_date("2025-03-14")
        catalog.unblock_date("2025-03-15")
        assert catalog.blocked_dates == ["2025-03-14"]
