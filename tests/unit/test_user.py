"""
Unit Tests - User and Category Entities
"""
import pytest

from demo_inventory.domain.category import Category
from demo_inventory.domain.exceptions import EntityValidationError
from demo_inventory.domain.user import User


def build_user(**overrides) -> User:
    fields = {
        "username": "jdoe",
        "email": "jdoe@example.com",
        "first_name": "Jane",
        "last_name": "Doe",
    }
    fields.update(overrides)
    return User(**fields)


class TestUser:
    """Tests for User validation"""

    def test_valid_user(self):
        user = build_user()

        assert user.is_active is True
        assert user.full_name == "Jane Doe"

    def test_username_and_email_lower_cased(self):
        user = build_user(username="JDoe_99", email="JDoe@Example.COM")

        assert user.username == "jdoe_99"
        assert user.email == "jdoe@example.com"

    @pytest.mark.parametrize(
        "username,message",
        [
            ("", "Username cannot be null or empty."),
            ("ab", "Username must be at least 3 characters long."),
            ("a" * 51, "Username cannot exceed 50 characters."),
            ("john-doe", "Username must contain only letters, numbers, and underscores."),
        ],
    )
    def test_invalid_username(self, username, message):
        with pytest.raises(EntityValidationError) as exc_info:
            build_user(username=username)

        assert exc_info.value.message == message
        assert exc_info.value.field == "username"

    @pytest.mark.parametrize("email", ["not-an-email", "a@b", "a b@example.com"])
    def test_invalid_email(self, email):
        with pytest.raises(EntityValidationError, match="Email format is invalid."):
            build_user(email=email)

    def test_names_required(self):
        with pytest.raises(EntityValidationError, match="First name cannot be null or empty."):
            build_user(first_name=" ")
        with pytest.raises(EntityValidationError, match="Last name cannot exceed 100 characters."):
            build_user(last_name="x" * 101)

    def test_names_trimmed(self):
        user = build_user(first_name=" Jane ", last_name=" Doe ")

        assert user.full_name == "Jane Doe"


class TestCategory:
    """Tests for Category validation"""

    def test_name_trimmed(self):
        assert Category(name="  Books ").name == "Books"

    def test_blank_name_rejected(self):
        with pytest.raises(EntityValidationError, match="Category name cannot be null or empty."):
            Category(name="")

    def test_name_length_limit(self):
        with pytest.raises(EntityValidationError, match="Category name cannot exceed 100 characters."):
            Category(name="c" * 101)

    def test_description_length_limit(self):
        with pytest.raises(EntityValidationError, match="Category description cannot exceed 500 characters."):
            Category(name="Books", description="d" * 501)
