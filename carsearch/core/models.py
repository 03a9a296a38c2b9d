"""Pydantic models for the API and the report renderer."""
from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

SearchStatus = Literal["active", "completed", "in_progress", "sent", "rejected"]
SEARCH_STATUSES: tuple[str, ...] = ("active", "completed", "in_progress", "sent", "rejected")


class BrandingProfile(BaseModel):
    """Per-organization visual overrides; unset fields use the defaults."""

    model_config = ConfigDict(frozen=True)

    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    company_name: Optional[str] = None
    contact_info: Optional[str] = None
    logo: Optional[str] = None
    header_font: Optional[str] = None
    body_font: Optional[str] = None


class SearchBase(BaseModel):
    customer_first_name: str
    customer_last_name: str
    customer_email: str
    customer_phone: str
    car_make: str
    car_model: str
    car_type: str
    car_year: str
    car_color: str
    car_transmission: str
    car_fuel: str
    min_price: int
    max_price: int
    additional_requirements: Optional[str] = None
    status: SearchStatus = "active"
    organization_id: Optional[int] = None


class SearchCreate(SearchBase):
    images: list[str] = Field(default_factory=list)


class SearchRecord(SearchBase):
    """A stored car search, immutable while it is being rendered."""

    model_config = ConfigDict(frozen=True)

    id: int
    images: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: Optional[datetime] = None

    @field_validator("images", mode="before")
    @classmethod
    def _drop_empty_images(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [str(ref) for ref in value if ref]
        return value


class OrganizationCreate(BaseModel):
    name: str
    logo: Optional[str] = None
    pdf_primary_color: Optional[str] = "#4a6da7"
    pdf_secondary_color: Optional[str] = "#333333"
    pdf_company_name: Optional[str] = "CarSearch Pro"
    pdf_contact_info: Optional[str] = "Tel: 020-123456 | info@carsearchpro.nl | www.carsearchpro.nl"


class Organization(OrganizationCreate):
    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

    def branding(self) -> BrandingProfile:
        return BrandingProfile(
            primary_color=self.pdf_primary_color,
            secondary_color=self.pdf_secondary_color,
            company_name=self.pdf_company_name,
            contact_info=self.pdf_contact_info,
            logo=self.logo,
        )
