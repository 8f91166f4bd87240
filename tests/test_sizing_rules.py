"""Tests for gender eligibility and size ordering."""

import pytest

from storefront.sizing import (
    Gender,
    GENDER_ORDER,
    GarmentType,
    GenderRule,
    GenderRules,
    size_sort_key,
    sort_sizes,
    namespaced_size,
    split_namespaced_size,
)
from tests.conftest import POLO, TROUSERS, SKIRT, DRESS, CAP

M, F, U = Gender.MASCULINO, Gender.FEMENINO, Gender.UNISEX


class TestGenderRules:
    @pytest.mark.parametrize("garment,rule,legal", [
        (CAP, GenderRule.UNISEX_ONLY, (U,)),
        (TROUSERS, GenderRule.MALE_FEMALE, (M, F)),
        (SKIRT, GenderRule.FEMALE_UNISEX, (F, U)),
        (DRESS, GenderRule.FEMALE_UNISEX, (F, U)),
        (POLO, GenderRule.ALL, (M, F, U)),
    ])
    def test_exactly_one_rule(self, rules, garment, rule, legal):
        assert rules.rule_for(garment) is rule
        assert rules.legal_genders(garment) == legal

    def test_no_sizes_wins_over_trouser_id(self, rules):
        sizeless_trouser = GarmentType(4, "pantalon", requires_sizes=False)
        assert rules.legal_genders(sizeless_trouser) == (U,)

    def test_no_garment_allows_all(self, rules):
        assert rules.legal_genders(None) == GENDER_ORDER

    def test_select_intersects_in_canonical_order(self, rules):
        assert rules.select(POLO, ["unisex", "masculino"]) == (M, U)

    def test_select_drops_illegal_genders(self, rules):
        assert rules.select(TROUSERS, [M, F, U]) == (M, F)
        assert rules.select(SKIRT, [M]) == ()

    @pytest.mark.parametrize("requested", [[], ["masculino"], ["femenino", "masculino"]])
    def test_sizeless_type_selects_unisex(self, rules, requested):
        assert rules.select(CAP, requested) == (U,)

    def test_unknown_and_duplicate_values(self, rules):
        assert rules.select(POLO, ["Masculino", "masculino", "otro", M]) == (M,)

    def test_settings_defaults(self):
        rules = GenderRules.from_settings()
        assert rules.trouser_ids == frozenset({4})
        assert rules.skirt_dress_ids == frozenset({10, 11})


class TestGenderLabels:
    @pytest.mark.parametrize("gender,label,icon", [
        (M, "Hombre", "♂"),
        (F, "Mujer", "♀"),
        (U, "Unisex", "⚥"),
    ])
    def test_labels(self, gender, label, icon):
        assert gender.label == label
        assert gender.icon == icon


class TestSizeOrdering:
    @pytest.mark.parametrize("labels,expected", [
        (["XL", "S", "M"], ["S", "M", "XL"]),
        (["4XL", "XXL", "XS", "3XL", "L"], ["XS", "L", "XXL", "3XL", "4XL"]),
        (["34", "28", "30"], ["28", "30", "34"]),
        (["10", "9", "7.5"], ["7.5", "9", "10"]),
        (["Talla Única", "M", "32", "chico"], ["M", "32", "chico", "Talla Única"]),
        (["m", "S"], ["S", "m"]),
        (["M", "M", "S"], ["S", "M"]),
        ([], []),
    ])
    def test_sort(self, labels, expected):
        assert sort_sizes(labels) == expected

    def test_progression_before_numeric_before_alpha(self):
        assert size_sort_key("4XL") < size_sort_key("1") < size_sort_key("A")

    def test_numeric_is_by_value(self):
        assert size_sort_key("9") < size_sort_key("10")

    def test_2xl_sorts_like_xxl(self):
        assert sort_sizes(["3XL", "2XL", "XL", "30"]) == ["XL", "2XL", "3XL", "30"]


class TestNamespacedSize:
    def test_round_trip(self):
        assert split_namespaced_size(namespaced_size("femenino", "M")) == ("femenino", "M")

    def test_plain_label(self):
        assert split_namespaced_size("M") == (None, "M")
