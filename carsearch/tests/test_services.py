from __future__ import annotations

import pytest

from carsearch.core import db, models, services


def _create_search(**overrides) -> models.SearchRecord:
    payload = {
        "customer_first_name": "Sanne",
        "customer_last_name": "Visser",
        "customer_email": "sanne@example.com",
        "customer_phone": "06-87654321",
        "car_make": "Toyota",
        "car_model": "Yaris",
        "car_type": "Hatchback",
        "car_year": "2021",
        "car_color": "Red",
        "car_transmission": "Automatic",
        "car_fuel": "Hybrid",
        "min_price": 12000,
        "max_price": 18000,
    }
    payload.update(overrides)
    return services.create_search(models.SearchCreate(**payload))


def test_create_search_round_trips_images():
    search = _create_search(images=["a.jpg", "", "b.jpg"])

    stored = services.get_search(search.id)
    assert stored is not None
    assert stored.images == ["a.jpg", "b.jpg"]
    assert stored.status == "active"
    assert stored.created_at is not None


def test_update_search_status_rejects_unknown_values():
    search = _create_search()

    updated = services.update_search_status(search.id, "completed")
    assert updated is not None and updated.status == "completed"

    with pytest.raises(ValueError):
        services.update_search_status(search.id, "archived")


def test_update_search_images_drops_blank_references():
    search = _create_search()

    updated = services.update_search_images(search.id, ["x.jpg", None, "", "y.jpg"])

    assert updated is not None
    assert updated.images == ["x.jpg", "y.jpg"]


def test_branding_for_search_uses_organization_settings():
    organization = services.create_organization(
        models.OrganizationCreate(name="Garage Smit", pdf_company_name="Garage Smit", pdf_primary_color="#102030")
    )
    services.update_organization_logo(organization.id, "logos/smit.png")
    search = _create_search(organization_id=organization.id)

    branding = services.branding_for_search(search)

    assert branding == models.BrandingProfile(
        primary_color="#102030",
        secondary_color="#333333",
        company_name="Garage Smit",
        contact_info=organization.pdf_contact_info,
        logo="logos/smit.png",
    )


def test_branding_for_search_without_organization():
    assert services.branding_for_search(_create_search()) is None


def test_branding_for_search_with_deleted_organization():
    organization = services.create_organization(models.OrganizationCreate(name="Gone BV"))
    search = _create_search(organization_id=organization.id)
    with db.get_connection() as conn:
        conn.execute("DELETE FROM organizations WHERE id = ?", (organization.id,))

    assert services.branding_for_search(search) is None
    assert services.get_search(search.id).organization_id is None
