from decimal import Decimal

import pytest

from boutique_pos.money import money_str, to_money
from boutique_pos.validation import PRODUCT_POLICY, ValidationError, validate_payload


class TestValidatePayload:
    def test_partial_only_checks_given_fields(self):
        assert validate_payload(payload={"stock": "12"}, policy=PRODUCT_POLICY, partial=True) == {"stock": 12}

    def test_create_requires_name_and_price(self):
        with pytest.raises(ValidationError, match="Missing required fields: name, price"):
            validate_payload(payload={}, policy=PRODUCT_POLICY, partial=False)

    def test_optional_strings_blank_to_none(self):
        cleaned = validate_payload(
            payload={"barcode": "  ", "image_url": None},
            policy=PRODUCT_POLICY,
            partial=True,
        )
        assert cleaned == {"barcode": None, "image_url": None}

    def test_price_ceiling(self):
        with pytest.raises(ValidationError, match="exceeds maximum"):
            validate_payload(payload={"price": "10000000"}, policy=PRODUCT_POLICY, partial=True)

    def test_payload_must_be_mapping(self):
        with pytest.raises(ValidationError):
            validate_payload(payload=["name"], policy=PRODUCT_POLICY, partial=True)


class TestMoney:
    @pytest.mark.parametrize(
        "value,expected",
        [("49.99", "49.99"), (10, "10.00"), (0.1, "0.10"), ("2.005", "2.01"), (Decimal("3"), "3.00")],
    )
    def test_to_money(self, value, expected):
        assert money_str(to_money(value)) == expected

    @pytest.mark.parametrize("value", ["abc", None, True, "NaN", "Infinity"])
    def test_rejects_non_numbers(self, value):
        with pytest.raises(ValueError):
            to_money(value)
