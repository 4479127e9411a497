from typing import Any, Dict, List

from fastapi import APIRouter
from pydantic import AliasChoices, BaseModel, Field, field_validator

from .models import Address, SpeedTier, normalize_delivery_count
from .planner import BUSINESS_DAYS, address_report, earliest_date

router = APIRouter(prefix="/api/v1/delivery", tags=["Delivery API"])


class AddressesCheckRequest(BaseModel):
    delivery_count: int = Field(
        default=1,
        validation_alias=AliasChoices("deliveryCount", "deliveriesCount", "delivery_count"),
    )
    addresses: List[Address] = Field(default_factory=list)

    @field_validator("delivery_count", mode="before")
    @classmethod
    def _clamp_count(cls, v):
        return normalize_delivery_count(v)


# module storefront.delivery.views
@router.get("/earliest")
def earliest(speed: SpeedTier = SpeedTier.STANDARD) -> Dict[str, Any]:
    """Date plancher pour le sélecteur de date (l'UI peut y ramener une date trop tôt)."""
    return {
        "speed": speed.value,
        "business_days": BUSINESS_DAYS[speed],
        "earliest_date": earliest_date(speed).isoformat(),
    }


@router.post("/addresses/validate")
def validate(body: AddressesCheckRequest) -> Dict[str, Any]:
    """
    Rapport complet pour le formulaire multi-adresses (toutes les adresses, pas seulement la première).
    Le checkout applique la même règle et s'arrête à la première erreur.
    """
    count_ok = len(body.addresses) == body.delivery_count
    errors = address_report(body.addresses)
    return {
        "ok": count_ok and not errors,
        "expected": body.delivery_count,
        "received": len(body.addresses),
        "errors": errors,
    }
