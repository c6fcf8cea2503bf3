"""
Tests unitaires pour LOT 2: Logging - Sensitive Masker
"""

import pytest

from tasksession.logging import ISensitiveMasker, SensitiveMasker


MASK = "***MASKED***"


@pytest.fixture
def masker() -> SensitiveMasker:
    return SensitiveMasker()


class TestMaskDict:
    """Masquage par clé."""

    def test_implements_interface(self, masker) -> None:
        assert isinstance(masker, ISensitiveMasker)

    @pytest.mark.parametrize(
        "key",
        ["password", "Password", "access_token", "refresh_token", "Authorization", "client_secret", "jwt"],
    )
    def test_sensitive_keys_masked(self, masker, key) -> None:
        assert masker.mask({key: "value"}) == {key: MASK}

    def test_plain_keys_kept(self, masker) -> None:
        data = {"email": "a@b.com", "status_code": 401}
        assert masker.mask(data) == data

    def test_nested_structures(self, masker) -> None:
        data = {"data": {"access_token": "T1", "user": {"email": "a@b.com"}}, "items": [{"pwd": "x"}]}

        masked = masker.mask(data)

        assert masked["data"]["access_token"] == MASK
        assert masked["data"]["user"]["email"] == "a@b.com"
        assert masked["items"][0]["pwd"] == MASK

    def test_input_not_modified(self, masker) -> None:
        data = {"password": "secret"}
        masker.mask(data)
        assert data == {"password": "secret"}

    def test_non_dict_returned_as_is(self, masker) -> None:
        assert masker.mask("text") == "text"


class TestMaskString:
    """Masquage dans le texte libre."""

    def test_bearer_masked(self, masker) -> None:
        assert masker.mask_string("header: Bearer T1xyz") == f"header: Bearer {MASK}"

    def test_compact_token_masked(self, masker, make_token) -> None:
        token = make_token(sub="u")
        masked = masker.mask_string(f"got token {token} from server")

        assert token not in masked
        assert MASK in masked

    def test_plain_text_unchanged(self, masker) -> None:
        text = "Unable to reach the authentication service. Please try again later."
        assert masker.mask_string(text) == text

    def test_email_not_mistaken_for_token(self, masker) -> None:
        assert masker.mask_string("user first.last@example.com") == "user first.last@example.com"

    def test_empty(self, masker) -> None:
        assert masker.mask_string("") == ""


class TestPatterns:
    """Patterns configurables."""

    def test_additional_patterns(self) -> None:
        masker = SensitiveMasker(additional_patterns=["otp"])
        assert masker.mask({"OTP_code": "123456"}) == {"OTP_code": MASK}

    def test_add_pattern_empty_raises(self, masker) -> None:
        with pytest.raises(ValueError):
            masker.add_pattern("  ")

    def test_add_pattern_deduplicated(self, masker) -> None:
        before = len(masker.patterns)
        masker.add_pattern("PASSWORD")
        assert len(masker.patterns) == before

    def test_empty_key_not_sensitive(self, masker) -> None:
        assert masker.is_sensitive_key("") is False
