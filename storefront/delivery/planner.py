"""
Planification des livraisons: date plancher en jours ouvrés et validation multi-adresses.
- Jours ouvrés: lundi..vendredi, pas de calendrier des jours fériés.
- Le planner signale si une date respecte le plancher; il ne la corrige jamais.
"""
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Sequence, Union

from storefront.errors import DeliveryCountMismatch, IncompleteAddress
from .models import Address, SpeedTier

BUSINESS_DAYS = {
    SpeedTier.STANDARD: 3,
    SpeedTier.EXPRESS: 1,
}

# Longueurs minimales (après nettoyage) des champs obligatoires, dans l'ordre du formulaire
ADDRESS_MIN_LENGTHS = {
    "name": 2,
    "phone": 7,
    "line1": 4,
    "city": 2,
    "postcode": 4,
}

AddressLike = Union[Address, Dict[str, Any]]


def is_business_day(d: date) -> bool:
    return d.weekday() < 5


def add_business_days(start: date, days: int) -> date:
    current = start
    remaining = days
    while remaining > 0:
        current += timedelta(days=1)
        if is_business_day(current):
            remaining -= 1
    return current


# module storefront.delivery.planner
def earliest_date(speed: Union[SpeedTier, str, None] = SpeedTier.STANDARD, today: Optional[date] = None) -> date:
    """
    Première date de livraison autorisée: today + 3 jours ouvrés (standard) ou + 1 (express).
    Ex: vendredi + 3 jours ouvrés (standard) -> mercredi suivant.
    """
    tier = SpeedTier.parse(speed)
    return add_business_days(today or date.today(), BUSINESS_DAYS[tier])


def satisfies_floor(delivery_date: date, speed: Union[SpeedTier, str, None] = SpeedTier.STANDARD, today: Optional[date] = None) -> bool:
    return delivery_date >= earliest_date(speed, today)


def _as_address(address: AddressLike) -> Address:
    if isinstance(address, Address):
        return address
    return Address.model_validate(address or {})


def address_errors(address: AddressLike) -> List[str]:
    """Liste des champs manquants/invalides d'une adresse (vide si valide)."""
    addr = _as_address(address)
    return [field for field, minimum in ADDRESS_MIN_LENGTHS.items() if len(getattr(addr, field)) < minimum]


def address_report(addresses: Sequence[AddressLike]) -> List[Dict[str, Any]]:
    """Rapport complet (toutes adresses) pour l'UI: [{index, fields}] des adresses invalides."""
    report = []
    for i, address in enumerate(addresses or []):
        fields = address_errors(address)
        if fields:
            report.append({"index": i, "fields": fields})
    return report


def validate_addresses(addresses: Sequence[AddressLike], expected_count: int) -> List[Address]:
    """
    Valide une liste d'adresses positionnelle (adresse i = livraison i).
    - DeliveryCountMismatch si le nombre d'adresses diffère du nombre de livraisons.
    - IncompleteAddress(index, champs) sur la première adresse invalide.
    Retour: les adresses normalisées.
    """
    addresses = list(addresses or [])
    if len(addresses) != expected_count:
        raise DeliveryCountMismatch(expected=expected_count, received=len(addresses))
    normalized = []
    for i, address in enumerate(addresses):
        addr = _as_address(address)
        fields = address_errors(addr)
        if fields:
            raise IncompleteAddress(i, fields)
        normalized.append(addr)
    return normalized
