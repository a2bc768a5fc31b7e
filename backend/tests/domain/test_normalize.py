import pytest

from checkout_api.core.errors import ValidationError
from checkout_api.domain.normalize import clamp_quantity, normalize_items
from checkout_api.domain.schema import InlineLineItem, PriceLineItem, PricingMode
from tests.cart_scenario_factory import CartScenarioFactory


def _inline(items):
    return normalize_items(items, pricing_mode=PricingMode.INLINE, currency="gbp")


class TestClampQuantity:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            (None, 1),
            (0, 1),
            ("", 1),
            (-5, 1),
            (1, 1),
            (2, 2),
            ("7", 7),
            (2.7, 2),
            (98, 98),
            (99, 99),
            (500, 99),
            (float("inf"), 99),
            (10**400, 99),
            ("many", 1),
            ([3], 1),
        ],
    )
    def test_clamp_quantity(self, raw, expected):
        q = clamp_quantity(raw)
        assert q == expected
        assert isinstance(q, int)


class TestNormalizeReference:
    @pytest.mark.parametrize("n", [1, 2, 17, 50])
    def test_same_length_and_order(self, n):
        cart = CartScenarioFactory.reference_cart(n)
        result = normalize_items(cart)

        assert result.ok
        items = result.unwrap()
        assert len(items) == n
        assert [li.price for li in items] == [c["priceId"] for c in cart]
        assert all(isinstance(li, PriceLineItem) for li in items)

    @pytest.mark.parametrize("items", [[], None, "price_1", {"priceId": "price_1"}, 3])
    def test_missing_items(self, items):
        result = normalize_items(items)

        assert not result.ok
        assert isinstance(result.error, ValidationError)
        assert str(result.error) == "Missing items[]"
        with pytest.raises(ValidationError, match=r"Missing items"):
            result.unwrap()

    @pytest.mark.parametrize(
        "price_id", ["abc123", "", None, 123, "PRICE_1", " price_1", ["price_1"]]
    )
    def test_invalid_price_id(self, price_id):
        result = normalize_items([{"priceId": price_id, "quantity": 1}])

        assert not result.ok
        assert str(result.error) == "Invalid priceId"

    def test_valid_price_id(self):
        result = normalize_items([{"priceId": "price_123"}])
        assert result.payload() == [{"price": "price_123", "quantity": 1}]

    def test_quantity_clamped_not_rejected(self):
        result = normalize_items(
            [
                {"priceId": "price_a", "quantity": 0},
                {"priceId": "price_b", "quantity": 500},
            ]
        )
        assert result.payload() == [
            {"price": "price_a", "quantity": 1},
            {"price": "price_b", "quantity": 99},
        ]

    def test_stops_at_first_invalid_item(self):
        result = normalize_items(
            [{"priceId": "price_ok"}, {"priceId": "bad"}, {"priceId": "also_bad"}]
        )

        assert not result.ok
        assert result.line_items is None
        assert str(result.error) == "Invalid priceId"

    def test_non_dict_item_is_invalid(self):
        result = normalize_items([{"priceId": "price_ok"}, "price_x"])
        assert str(result.error) == "Invalid priceId"

    def test_inline_fields_are_ignored_in_reference_mode(self):
        result = normalize_items([{"unit_amount": 500, "name": "Mug"}])
        assert str(result.error) == "Invalid priceId"


class TestNormalizeInline:
    def test_inline_cart(self):
        result = _inline(CartScenarioFactory.inline_cart())

        assert result.ok
        assert all(isinstance(li, InlineLineItem) for li in result.unwrap())
        assert result.payload() == [
            {
                "price_data": {
                    "currency": "gbp",
                    "unit_amount": 1500,
                    "product_data": {"name": "Tote bag", "description": "Natural cotton"},
                },
                "quantity": 2,
            },
            {
                "price_data": {
                    "currency": "gbp",
                    "unit_amount": 50,
                    "product_data": {"name": "Sticker"},
                },
                "quantity": 1,
            },
        ]

    @pytest.mark.parametrize("amount", [49, 50.5, 0, -100, None, "abc", True, float("nan")])
    def test_invalid_unit_amount(self, amount):
        result = _inline([{"name": "Mug", "unit_amount": amount}])

        assert not result.ok
        assert str(result.error) == "Invalid unit_amount"

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (50, 50),
            (50.0, 50),
            ("1200", 1200),
            ("1200.0", 1200),
            (10**17 + 1, 10**17 + 1),
        ],
    )
    def test_unit_amount_coerces_to_int(self, amount, expected):
        [li] = _inline([{"name": "Mug", "unit_amount": amount}]).unwrap()

        assert li.price_data.unit_amount == expected
        assert isinstance(li.price_data.unit_amount, int)

    def test_name_and_description_truncated(self):
        [li] = _inline(
            [{"name": "n" * 150, "description": "d" * 250, "unit_amount": 100}]
        ).unwrap()

        assert li.price_data.product_data.name == "n" * 100
        assert len(li.price_data.product_data.description) == 200

    def test_name_coerced_to_string(self):
        [li] = _inline([{"name": 42, "unit_amount": 100}]).unwrap()
        assert li.price_data.product_data.name == "42"

    def test_quantity_clamped(self):
        [li] = _inline([{"name": "Mug", "unit_amount": 100, "quantity": 1000}]).unwrap()
        assert li.quantity == 99

    def test_currency_passed_through(self):
        result = normalize_items(
            [{"name": "Mug", "unit_amount": 100}],
            pricing_mode=PricingMode.INLINE,
            currency="eur",
        )
        assert result.payload()[0]["price_data"]["currency"] == "eur"
