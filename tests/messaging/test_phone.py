import pytest

from billshare.core.exceptions import InvalidPhoneNumberError
from billshare.messaging.phone import normalize_phone_number


class TestNormalizePhoneNumber:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("9876543210", "919876543210"),
            ("919876543210", "919876543210"),
            ("09876543210", "919876543210"),
            ("+91 98765-43210", "919876543210"),
            ("(987) 654 3210", "919876543210"),
            ("+44 20 7946 0958", "442079460958"),
            ("14155552671", "14155552671"),
        ],
    )
    def test_normalizes(self, raw, expected):
        assert normalize_phone_number(raw) == expected

    def test_custom_default_country_code(self):
        assert normalize_phone_number("4155552671", default_country_code="1") == (
            "14155552671"
        )

    @pytest.mark.parametrize("raw", ["123", "", "phone", "98765-4321"])
    def test_rejects_short_numbers(self, raw):
        with pytest.raises(InvalidPhoneNumberError) as exc_info:
            normalize_phone_number(raw)

        assert exc_info.value.raw == raw
        assert isinstance(exc_info.value, ValueError)
