import pytest

from hotel_booking.application.dtos.booking_dto import GuestDTO
from hotel_booking.domain.errors import ValidationError


def test_normalized_strips_whitespace(guest):
    raw = GuestDTO(
        name="  Nimal Perera ",
        national_id=" 901234567V",
        phone="0771234567 ",
        email=" nimal@example.com ",
        address="  ",
    )
    cleaned = raw.normalized()
    assert cleaned.name == "Nimal Perera"
    assert cleaned.national_id == "901234567V"
    assert cleaned.email == "nimal@example.com"
    assert cleaned.address is None


@pytest.mark.parametrize("missing", ["name", "national_id", "phone"])
def test_required_fields(guest, missing):
    setattr(guest, missing, "   ")
    with pytest.raises(ValidationError) as exc_info:
        guest.normalized()
    assert exc_info.value.field == missing


def test_invalid_email(guest):
    guest.email = "not-an-email"
    with pytest.raises(ValidationError) as exc_info:
        guest.normalized()
    assert exc_info.value.field == "email"


def test_email_is_optional(guest):
    guest.email = None
    assert guest.normalized().email is None
