import string

from shared.exceptions import ValidationError

from .schemas import BusinessProfileInput

MIN_PHONE_DIGITS = 9
MAX_PHONE_DIGITS = 15
MIN_REGISTRATION_LENGTH = 5
MAX_REGISTRATION_LENGTH = 20


def is_valid_phone_number(phone: str) -> bool:
    digits = [c for c in phone if c in string.digits]
    return MIN_PHONE_DIGITS <= len(digits) <= MAX_PHONE_DIGITS


def is_valid_url(url: str) -> bool:
    return url.startswith("https://") or url.startswith("http://")


def is_valid_registration_number(reg_num: str) -> bool:
    return MIN_REGISTRATION_LENGTH <= len(reg_num) <= MAX_REGISTRATION_LENGTH


def validate_profile(profile: BusinessProfileInput):
    if not profile.business_name.strip():
        raise ValidationError("business_name", "must not be blank")
    if not is_valid_phone_number(profile.phone_number):
        raise ValidationError(
            "phone_number", f"must contain {MIN_PHONE_DIGITS}-{MAX_PHONE_DIGITS} digits"
        )
    if not is_valid_url(profile.website_url):
        raise ValidationError("website_url", "must start with http:// or https://")
    if not is_valid_registration_number(profile.registration_number):
        raise ValidationError(
            "registration_number",
            f"must be {MIN_REGISTRATION_LENGTH}-{MAX_REGISTRATION_LENGTH} characters long",
        )
