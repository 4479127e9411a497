"""
Contrats du checkout: requête client (non fiable) et manifeste de commande (faisant foi).
"""
from datetime import date
from typing import Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field, field_validator

from storefront.cart.models import CartLine
from storefront.delivery.models import Address, DeliveryRequest, SpeedTier, normalize_delivery_count


class CheckoutLine(BaseModel):
    """
    Ligne soumise au checkout: seuls id, quantité, options et note sont lus.
    "price" et "name" (instantanés client) ne sont jamais analysés, quelle que soit leur forme.
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1, validation_alias=AliasChoices("quantity", "qty"))
    options: Dict[str, Union[str, List[str]]] = Field(default_factory=dict)
    note: Optional[str] = None

    @field_validator("id")
    @classmethod
    def _strip_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("id vide")
        return v

    @field_validator("options", mode="before")
    @classmethod
    def _none_options(cls, v):
        return v or {}

    @field_validator("note", mode="before")
    @classmethod
    def _clean_note(cls, v):
        v = str(v if v is not None else "").strip()
        return v or None

    @classmethod
    def from_cart_line(cls, line: CartLine) -> "CheckoutLine":
        return cls(id=line.id, quantity=line.quantity, options=line.options, note=line.note)


class CheckoutRequest(BaseModel):
    """
    Corps attendu:
    {
      "cart": [{"id": "...", "quantity": 2, "options": {...}, "price": 0.01}],
      "deliveryCount": 1,
      "deliverySpeed": "standard",
      "deliveryDate": "2026-10-21",
      "addresses": [...]
    }
    Les champs "price" et "name" des lignes sont ignorés, même nuls ou non numériques.
    """
    model_config = ConfigDict(populate_by_name=True)

    cart: List[CheckoutLine] = Field(default_factory=list)
    delivery_count: int = Field(
        default=1,
        validation_alias=AliasChoices("deliveryCount", "deliveriesCount", "deliveries", "delivery_count"),
    )
    delivery_speed: SpeedTier = Field(
        default=SpeedTier.STANDARD,
        validation_alias=AliasChoices("deliverySpeed", "delivery_speed"),
    )
    delivery_date: Optional[date] = Field(
        default=None,
        validation_alias=AliasChoices("deliveryDate", "delivery_date"),
    )
    addresses: Optional[List[Address]] = None

    @field_validator("cart", mode="before")
    @classmethod
    def _none_cart(cls, v):
        return v or []

    @field_validator("delivery_count", mode="before")
    @classmethod
    def _clamp_count(cls, v):
        return normalize_delivery_count(v)

    @field_validator("delivery_speed", mode="before")
    @classmethod
    def _parse_speed(cls, v):
        return SpeedTier.parse(v)

    @field_validator("delivery_date", mode="before")
    @classmethod
    def _blank_date(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def to_delivery(self) -> DeliveryRequest:
        return DeliveryRequest(
            count=self.delivery_count,
            speed=self.delivery_speed,
            delivery_date=self.delivery_date,
            addresses=self.addresses or [],
        )


class ManifestLine(BaseModel):
    product_id: str
    name: str
    options: Dict[str, Union[str, List[str]]] = Field(default_factory=dict)
    options_text: str = ""
    note: Optional[str] = None
    unit_price: float
    quantity: int

    @computed_field
    @property
    def amount(self) -> float:
        return round(self.unit_price * self.quantity, 2)


class ShippingLine(BaseModel):
    name: str
    per_delivery: float
    delivery_count: int

    @computed_field
    @property
    def amount(self) -> float:
        return round(self.per_delivery * self.delivery_count, 2)


class DeliveryInfo(BaseModel):
    speed: SpeedTier
    date: str
    count: int
    # Liste d'adresses (multi-adresses) ou "provider-collected" (adresse saisie chez le prestataire)
    addresses: Union[List[Address], str]


class OrderManifest(BaseModel):
    currency: str
    lines: List[ManifestLine]
    shipping: ShippingLine
    delivery: DeliveryInfo

    @computed_field
    @property
    def subtotal(self) -> float:
        return round(sum(line.amount for line in self.lines), 2)

    @computed_field
    @property
    def total(self) -> float:
        return round(self.subtotal + self.shipping.amount, 2)
