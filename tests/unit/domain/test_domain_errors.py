"""Tests for DomainError values."""

import pytest

from mockbank.domain.shared import (
    DomainError,
    ErrorKind,
    HttpError,
    NetworkError,
    ValidationError,
)


class TestFromStatus:
    """Tests for picking the error variant from a transport outcome."""

    def test_no_status_is_network_error(self):
        """Test that a missing status maps to NetworkError."""
        error = DomainError.from_status(None, "ignored")

        assert isinstance(error, NetworkError)
        assert error.kind is ErrorKind.NETWORK
        assert error.status_code is None
        assert error.message is None

    @pytest.mark.parametrize("status", [400, 422])
    def test_payload_rejections_are_validation_errors(self, status):
        """Test that 400 and 422 map to ValidationError."""
        error = DomainError.from_status(status, ["name must not be empty"])

        assert isinstance(error, ValidationError)
        assert isinstance(error, HttpError)
        assert error.kind is ErrorKind.VALIDATION
        assert error.message == ("name must not be empty",)

    @pytest.mark.parametrize("status", [401, 403, 404, 409, 429, 500])
    def test_other_statuses_are_http_errors(self, status):
        """Test that other non-2xx statuses map to HttpError."""
        error = DomainError.from_status(status, "nope")

        assert type(error) is HttpError
        assert error.kind is ErrorKind.HTTP
        assert error.status_code == status


class TestDisplayMessage:
    """Tests for user facing message extraction."""

    def test_single_message(self):
        error = HttpError(409, "Balance must be zero")

        assert error.display_message("fallback") == "Balance must be zero"

    def test_message_list_joined_with_newlines(self):
        """Test that every server message is shown in order."""
        error = ValidationError(400, ("amount must be an integer", "description is required"))

        assert (
            error.display_message("fallback")
            == "amount must be an integer\ndescription is required"
        )

    def test_blank_messages_fall_back(self):
        """Test that blank or missing messages use the caller's fallback."""
        assert HttpError(500, "   ").display_message("Try again") == "Try again"
        assert HttpError(500, ("", " ")).display_message("Try again") == "Try again"
        assert NetworkError().display_message("Offline") == "Offline"

    def test_str_uses_kind_as_fallback(self):
        assert str(NetworkError()) == "network"


class TestStatusPredicates:
    """Tests for the status helpers callers branch on."""

    def test_rate_limited(self):
        assert HttpError(429).is_rate_limited
        assert not HttpError(403).is_rate_limited

    def test_forbidden_and_unauthorized(self):
        assert HttpError(403).is_forbidden
        assert HttpError(401).is_unauthorized
        assert not NetworkError().is_forbidden

    def test_conflict(self):
        assert HttpError(409).is_conflict

    def test_errors_are_immutable(self):
        """Test that error values cannot be changed after creation."""
        error = HttpError(404, "Not found")

        with pytest.raises(AttributeError):
            error.status_code = 500
