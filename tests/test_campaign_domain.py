"""Tests for campaign rules and item recomputation."""

from datetime import date

import pytest

from charity_console.domain.campaigns import (
    Campaign,
    CampaignItem,
    recompute_campaign_items,
)
from charity_console.domain.packages import Package, PackageItem
from charity_console.domain.value_objects import ItemUnit
from charity_console.exceptions import InvalidDateRangeError, PastStartDateError


@pytest.fixture
def hygiene_kit() -> Package:
    return Package(
        name="Hygiene Kit",
        items=[
            PackageItem(name="Soap", quantity=2, unit=ItemUnit.UNIT),
            PackageItem(name="Rice", quantity=1, unit=ItemUnit.KILOGRAM),
        ],
    )


class TestRecomputeCampaignItems:
    def test_basic_basket_for_two_families(self, basic_basket: Package) -> None:
        items = recompute_campaign_items([], [basic_basket], [basic_basket.id], ["f1", "f2"])

        assert len(items) == 1
        assert items[0].name == "Rice"
        assert items[0].unit == ItemUnit.KILOGRAM
        assert items[0].target_quantity == 10
        assert items[0].collected_quantity == 0

    def test_removing_a_family_keeps_item_identity(self, basic_basket: Package) -> None:
        first = recompute_campaign_items([], [basic_basket], [basic_basket.id], ["f1", "f2"])
        second = recompute_campaign_items(first, [basic_basket], [basic_basket.id], ["f1"])

        assert second[0].target_quantity == 5
        assert second[0].collected_quantity == 0
        assert second[0].id == first[0].id

    def test_targets_merge_across_packages(
        self, basic_basket: Package, hygiene_kit: Package
    ) -> None:
        items = recompute_campaign_items(
            [],
            [basic_basket, hygiene_kit],
            [basic_basket.id, hygiene_kit.id],
            ["f1", "f2", "f3"],
        )
        by_key = {item.key: item.target_quantity for item in items}

        assert by_key[("Rice", ItemUnit.KILOGRAM)] == (5 + 1) * 3
        assert by_key[("Soap", ItemUnit.UNIT)] == 2 * 3

    def test_same_name_with_other_unit_is_separate(self, basic_basket: Package) -> None:
        rice_units = Package(
            name="Rice packs",
            items=[PackageItem(name="Rice", quantity=1, unit=ItemUnit.UNIT)],
        )
        items = recompute_campaign_items(
            [], [basic_basket, rice_units], [basic_basket.id, rice_units.id], ["f1"]
        )
        assert {item.key for item in items} == {
            ("Rice", ItemUnit.KILOGRAM),
            ("Rice", ItemUnit.UNIT),
        }

    def test_collected_quantity_is_preserved(self, basic_basket: Package) -> None:
        existing = [
            CampaignItem(
                name="Rice",
                unit=ItemUnit.KILOGRAM,
                target_quantity=10,
                collected_quantity=7,
            )
        ]
        items = recompute_campaign_items(
            existing, [basic_basket], [basic_basket.id], ["f1", "f2", "f3"]
        )
        assert items[0].target_quantity == 15
        assert items[0].collected_quantity == 7
        assert existing[0].target_quantity == 10

    def test_no_packages_keeps_manual_items(self) -> None:
        existing = [CampaignItem(name="Toys", unit=ItemUnit.UNIT, target_quantity=30)]
        items = recompute_campaign_items(existing, [], [], ["f1"])
        assert items == existing
        assert items[0] is not existing[0]

    def test_no_families_zeroes_targets(self, basic_basket: Package) -> None:
        existing = [
            CampaignItem(
                name="Rice",
                unit=ItemUnit.KILOGRAM,
                target_quantity=10,
                collected_quantity=4,
            )
        ]
        items = recompute_campaign_items(existing, [basic_basket], [basic_basket.id], [])
        assert items[0].target_quantity == 0
        assert items[0].collected_quantity == 4

    def test_missing_package_is_skipped(self, basic_basket: Package) -> None:
        items = recompute_campaign_items(
            [], [basic_basket], ["missing", basic_basket.id], ["f1"]
        )
        assert [item.target_quantity for item in items] == [5]

    def test_duplicate_selections_count_once(self, basic_basket: Package) -> None:
        items = recompute_campaign_items(
            [],
            [basic_basket],
            [basic_basket.id, basic_basket.id],
            ["f1", "f1", "f2"],
        )
        assert items[0].target_quantity == 10


class TestCampaignRules:
    def test_progress_percent(self, sample_campaign: Campaign) -> None:
        sample_campaign.items = [
            CampaignItem(name="Rice", target_quantity=10, collected_quantity=3),
            CampaignItem(name="Beans", target_quantity=10, collected_quantity=4),
        ]
        assert sample_campaign.progress_percent() == 35

    def test_progress_is_zero_without_target(self, sample_campaign: Campaign) -> None:
        assert sample_campaign.progress_percent() == 0

    def test_is_expired(self, sample_campaign: Campaign) -> None:
        assert not sample_campaign.is_expired(date(2025, 1, 31))
        assert sample_campaign.is_expired(date(2025, 2, 1))

    def test_end_before_start_is_rejected(self, sample_campaign: Campaign) -> None:
        sample_campaign.end_date = date(2025, 1, 1)
        with pytest.raises(InvalidDateRangeError):
            sample_campaign.validate_dates(date(2025, 1, 1), is_new=False)

    def test_new_campaign_cannot_start_in_the_past(
        self, sample_campaign: Campaign
    ) -> None:
        with pytest.raises(PastStartDateError):
            sample_campaign.validate_dates(date(2025, 1, 10), is_new=True)

    def test_existing_campaign_may_have_started(self, sample_campaign: Campaign) -> None:
        sample_campaign.validate_dates(date(2025, 1, 10), is_new=False)
