"""
Tests for business profile registration.

Covers:
- Owner-only writes
- Duplicate creation
- Phone, URL and registration number validation
- Onboarding steps
"""

import pytest
from fastapi.testclient import TestClient

from business_profile_service.main import app
from business_profile_service.registry import ProfileRegistry
from business_profile_service.schemas import BusinessProfileInput
from business_profile_service.validation import (
    is_valid_phone_number,
    is_valid_registration_number,
    is_valid_url,
)
from shared.exceptions import AlreadyExistsError, NotAuthorizedError, NotFoundError, ValidationError

from conftest import DAY, NOW, FakeClock


def profile_data(owner="owner-1", **overrides) -> dict:
    data = {
        "owner": owner,
        "business_name": "Corner Grocer",
        "business_type": "SmallBusiness",
        "business_category": "GroceryStore",
        "country": "Kenya",
        "address": "12 Market St",
        "registration_number": "REG-12345",
        "phone_number": "+254 700 123 456",
        "email": "info@cornergrocer.example",
        "website_url": "https://cornergrocer.example",
    }
    data.update(overrides)
    return data


def profile(owner="owner-1", **overrides) -> BusinessProfileInput:
    return BusinessProfileInput(**profile_data(owner, **overrides))


@pytest.fixture
def registry(clock):
    return ProfileRegistry(clock=clock)


class TestValidators:
    """Tests for field validators."""

    @pytest.mark.parametrize(
        "phone, valid",
        [("123456789", True), ("+1 (555) 010-9999", True), ("12345678", False),
         ("1234567890123456", False), ("123456789012345", True), ("phone", False),
         ("\u0661\u0662\u0663\u0664\u0665\u0666\u0667\u0668\u0669", False), ("12345678\u00b2", False)],
    )
    def test_phone(self, phone, valid):
        assert is_valid_phone_number(phone) is valid

    @pytest.mark.parametrize(
        "url, valid",
        [("https://shop.example", True), ("http://shop.example", True),
         ("ftp://shop.example", False), ("shop.example", False)],
    )
    def test_url(self, url, valid):
        assert is_valid_url(url) is valid

    @pytest.mark.parametrize(
        "reg, valid",
        [("12345", True), ("1234", False), ("A" * 20, True), ("A" * 21, False)],
    )
    def test_registration_number(self, reg, valid):
        assert is_valid_registration_number(reg) is valid


class TestProfileRegistry:
    """Tests for ProfileRegistry."""

    def test_create_and_get(self, registry):
        created = registry.create("owner-1", profile())
        assert created.created_at == NOW
        assert created.updated_at == NOW
        assert registry.get("owner-1").business_name == "Corner Grocer"

    def test_create_for_someone_else(self, registry):
        with pytest.raises(NotAuthorizedError) as exc_info:
            registry.create("intruder", profile("owner-1"))
        assert exc_info.value.caller == "intruder"
        assert len(registry) == 0

    def test_create_twice(self, registry):
        registry.create("owner-1", profile())
        with pytest.raises(AlreadyExistsError):
            registry.create("owner-1", profile(business_name="Other"))
        assert registry.get("owner-1").business_name == "Corner Grocer"

    @pytest.mark.parametrize(
        "overrides, field",
        [({"phone_number": "123"}, "phone_number"),
         ({"website_url": "www.example.com"}, "website_url"),
         ({"registration_number": "R1"}, "registration_number"),
         ({"business_name": " "}, "business_name")],
    )
    def test_create_invalid(self, registry, overrides, field):
        with pytest.raises(ValidationError) as exc_info:
            registry.create("owner-1", profile(**overrides))
        assert exc_info.value.field == field
        assert len(registry) == 0

    def test_get_missing(self, registry):
        with pytest.raises(NotFoundError):
            registry.get("nobody")

    def test_update_keeps_created_at_and_steps(self, registry, clock):
        registry.create("owner-1", profile())
        registry.save_completed_step("owner-1", 1)
        clock.advance(DAY)

        updated = registry.update("owner-1", profile(business_name="Corner Grocer Ltd"))
        assert updated.business_name == "Corner Grocer Ltd"
        assert updated.created_at == NOW
        assert updated.updated_at == NOW + DAY
        assert updated.completed_steps == [1]

    def test_update_for_someone_else(self, registry):
        registry.create("owner-1", profile())
        with pytest.raises(NotAuthorizedError):
            registry.update("intruder", profile("owner-1"))

    def test_update_missing(self, registry):
        with pytest.raises(NotFoundError):
            registry.update("owner-1", profile())

    def test_update_invalid(self, registry):
        registry.create("owner-1", profile())
        with pytest.raises(ValidationError):
            registry.update("owner-1", profile(website_url="nope"))
        assert registry.get("owner-1").website_url == "https://cornergrocer.example"

    def test_completed_steps_are_unique_and_ordered(self, registry):
        registry.create("owner-1", profile())
        registry.save_completed_step("owner-1", 2)
        registry.save_completed_step("owner-1", 1)
        registry.save_completed_step("owner-1", 2)
        assert registry.get_completed_steps("owner-1") == [2, 1]

    def test_step_without_profile(self, registry):
        with pytest.raises(NotFoundError):
            registry.save_completed_step("owner-1", 1)


class TestProfileEndpoints:
    """HTTP tests; the caller identity comes from the X-Caller-Id header."""

    @pytest.fixture
    def client(self):
        with TestClient(app) as test_client:
            yield test_client

    def test_create_and_read(self, client):
        response = client.post("/profiles", json=profile_data(), headers={"X-Caller-Id": "owner-1"})
        assert response.status_code == 201
        assert client.get("/profiles/owner-1").json()["business_category"] == "GroceryStore"

    def test_missing_caller_header(self, client):
        assert client.post("/profiles", json=profile_data()).status_code == 422

    def test_not_authorized(self, client):
        response = client.post("/profiles", json=profile_data(), headers={"X-Caller-Id": "intruder"})
        assert response.status_code == 403
        assert response.json()["error"] == "NOT_AUTHORIZED"

    def test_already_exists(self, client):
        headers = {"X-Caller-Id": "owner-1"}
        client.post("/profiles", json=profile_data(), headers=headers)
        response = client.post("/profiles", json=profile_data(), headers=headers)
        assert response.status_code == 409
        assert response.json()["error"] == "ALREADY_EXISTS"

    def test_invalid_phone(self, client):
        response = client.post("/profiles", json=profile_data(phone_number="12"), headers={"X-Caller-Id": "owner-1"})
        assert response.status_code == 422
        assert response.json()["field"] == "phone_number"

    def test_update_and_steps(self, client):
        headers = {"X-Caller-Id": "owner-1"}
        client.post("/profiles", json=profile_data(), headers=headers)

        response = client.put("/profiles", json=profile_data(country="Uganda"), headers=headers)
        assert response.status_code == 200
        assert response.json()["country"] == "Uganda"

        assert client.post("/profiles/steps/3", headers=headers).json() == [3]
        assert client.get("/profiles/owner-1/steps").json() == [3]

    def test_read_missing(self, client):
        assert client.get("/profiles/nobody").status_code == 404
