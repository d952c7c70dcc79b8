"""Unit tests for the HashedPassword value object."""

import pytest

from siteportal.domain.value_objects.password import HashedPassword


class TestHashedPassword:

    @pytest.mark.unit
    def test_accepts_bcrypt_hash(self, current_password_hash):
        hashed = HashedPassword(current_password_hash)

        assert str(hashed) == current_password_hash
        assert hashed.rounds == 4

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["", "OldPass123", "$2b$04$tooshort"])
    def test_rejects_non_hashes(self, value):
        with pytest.raises(ValueError):
            HashedPassword(value)

    @pytest.mark.unit
    def test_repr_hides_hash(self, current_password_hash):
        assert current_password_hash not in repr(HashedPassword(current_password_hash))
