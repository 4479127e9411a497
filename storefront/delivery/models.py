"""
Types de livraison: palier de rapidité, adresse, demande de livraison.
"""
from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class SpeedTier(str, Enum):
    STANDARD = "standard"
    EXPRESS = "express"

    @classmethod
    def parse(cls, value: object) -> "SpeedTier":
        """None/"" -> standard; insensible à la casse; valeur inconnue -> ValueError."""
        if isinstance(value, cls):
            return value
        raw = str(value or "").strip().lower()
        return cls(raw) if raw else cls.STANDARD


PROVIDER_COLLECTED = "provider-collected"


class Address(BaseModel):
    """Adresse de livraison: chaînes nettoyées, la validation métier est faite par le planner."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    phone: str = ""
    line1: str = Field(default="", validation_alias=AliasChoices("line1", "address1", "addressLine1"))
    line2: str = Field(default="", validation_alias=AliasChoices("line2", "address2", "addressLine2"))
    city: str = ""
    postcode: str = Field(default="", validation_alias=AliasChoices("postcode", "postCode", "zip"))

    @field_validator("name", "phone", "line1", "line2", "city", "postcode", mode="before")
    @classmethod
    def _strip(cls, v):
        return str(v if v is not None else "").strip()

    def one_line(self) -> str:
        street = ", ".join(p for p in (self.line1, self.line2, self.city, self.postcode) if p)
        return f"{self.name} | {self.phone} | {street}"


class DeliveryRequest(BaseModel):
    count: int = 1
    speed: SpeedTier = SpeedTier.STANDARD
    delivery_date: Optional[date] = None
    addresses: List[Address] = Field(default_factory=list)

    @field_validator("count", mode="before")
    @classmethod
    def _clamp_count(cls, v):
        return normalize_delivery_count(v)

    @field_validator("speed", mode="before")
    @classmethod
    def _parse_speed(cls, v):
        return SpeedTier.parse(v)

    @field_validator("delivery_date", mode="before")
    @classmethod
    def _blank_date(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("addresses", mode="before")
    @classmethod
    def _none_addresses(cls, v):
        return v or []

    @property
    def multi_address(self) -> bool:
        return self.count > 1 or len(self.addresses) > 0


def normalize_delivery_count(value: object) -> int:
    """Arrondi inférieur, minimum 1; une valeur illisible vaut 1."""
    try:
        n = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 1
    return max(1, n)
