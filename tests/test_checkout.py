"""Tests for the checkout summary graph."""

from decimal import Decimal

import pytest

from storefront.cart import CartItem
from storefront.checkout import checkout_summary, compose, SummaryNode, CheckoutInput
from storefront.pricing import Role
from storefront.session import CurrentUser, StaticUserSource


class DownSource:
    async def current_user(self):
        raise ConnectionError("auth down")


def signed_in(role):
    return StaticUserSource(CurrentUser("u1", "ana@example.com", role))


@pytest.fixture
def filled(store, polo_m):
    store.add_item(polo_m, 2)
    store.add_item(CartItem(30, "Pantalón", Decimal("400"), "32", "Negro"), 1)
    return store


class TestCheckoutSummary:
    # (role, subtotal, discount_total, total)
    SUMMARY_CASES = [
        (Role.PREMIUM, Decimal("899.80"), Decimal("134.970"), Decimal("764.830")),
        (Role.REGULAR, Decimal("899.80"), Decimal("71.984"), Decimal("827.816")),
        (Role.BASIC, Decimal("899.80"), Decimal("0"), Decimal("899.80")),
        (Role.ADMIN, Decimal("899.80"), Decimal("0"), Decimal("899.80")),
    ]

    @pytest.mark.parametrize("role,subtotal,discount_total,total", SUMMARY_CASES)
    async def test_totals_by_role(self, filled, role, subtotal, discount_total, total):
        summary = await checkout_summary(filled.lines, signed_in(role))
        assert summary.role is role
        assert summary.subtotal == subtotal
        assert summary.discount_total == discount_total
        assert summary.total == total
        assert summary.item_count == 3

    async def test_subtotal_matches_cart(self, filled):
        summary = await checkout_summary(filled.lines, signed_in(Role.PREMIUM))
        assert summary.subtotal == filled.totals().subtotal

    async def test_priced_lines(self, filled):
        summary = await checkout_summary(filled.lines, signed_in(Role.PREMIUM))
        polo = summary.lines[0]
        assert polo.line is filled.lines[0]
        assert polo.price.discounted_price == Decimal("212.415")
        assert polo.line_total == Decimal("424.830")
        assert polo.savings == Decimal("74.970")
        assert summary.discount_percent == 15

    async def test_anonymous_pays_full_price(self, filled):
        summary = await checkout_summary(filled.lines, StaticUserSource())
        assert summary.role is Role.BASIC
        assert summary.total == summary.subtotal

    async def test_role_lookup_failure_prices_as_basic(self, filled):
        summary = await checkout_summary(filled.lines, DownSource())
        assert summary.role is Role.BASIC
        assert summary.discount_total == 0

    async def test_empty_cart(self):
        summary = await checkout_summary([], signed_in(Role.PREMIUM))
        assert summary.lines == ()
        assert summary.total == 0
        assert summary.item_count == 0

    async def test_compose_directly(self, filled):
        node = await compose(SummaryNode, CheckoutInput(filled.lines, signed_in(Role.REGULAR)))
        assert node.data.discount_percent == 8
