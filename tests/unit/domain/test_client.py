"""Unit tests for Client e-mail rules"""

from src.domain.client import is_valid_email, normalize_email


class TestClientEmail:

    def test_valid_email(self):
        assert is_valid_email("billing@acme.example")

    def test_rejects_missing_domain(self):
        assert not is_valid_email("billing@")
        assert not is_valid_email("billing")
        assert not is_valid_email("")

    def test_rejects_whitespace_inside(self):
        assert not is_valid_email("bill ing@acme.example")

    def test_normalize_lowercases_and_strips(self):
        assert normalize_email("  Billing@ACME.example ") == "billing@acme.example"
