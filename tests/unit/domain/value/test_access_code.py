"""Tests for the AccessCode value object."""

import pytest
from pydantic import ValidationError

from gate.domain.value import AccessCode


class TestAccessCode:
    """Tests for AccessCode."""

    def test_normalizes_case_and_whitespace(self):
        """Codes are trimmed and upper-cased."""
        assert AccessCode("  abc123xy ").root == "ABC123XY"

    def test_normalized_codes_compare_equal(self):
        assert AccessCode("vip2024a") == AccessCode("VIP2024A")

    @pytest.mark.parametrize("raw", ["ABC12", "A" * 21, "ABC-1234", "ÄBC12345", ""])
    def test_rejects_invalid_format(self, raw):
        """Length outside 6-20 or non [A-Z0-9] characters are rejected."""
        with pytest.raises(ValidationError):
            AccessCode(raw)

    def test_redacted_keeps_prefix_only(self):
        assert AccessCode("ADMINSECRET").redacted == "ADM***"
