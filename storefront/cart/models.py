"""
Modèle du panier: lignes ordonnées, fusion par signature, règles de quantité.
Logique pure (pas de Stripe, pas de stockage): le panier est une valeur détenue par l'appelant.
"""
import hashlib
import json
from typing import Dict, Iterator, List, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from storefront.pricing import selected_values

# Champs de texte libre (ex: message cadeau) exclus de la signature
ANNOTATION_FIELDS = frozenset({"note", "message", "gift_message"})

CartKey = Tuple[str, Tuple[Tuple[str, Tuple[str, ...]], ...]]


def canonical_options(options: Optional[Dict[str, object]]) -> Tuple[Tuple[str, Tuple[str, ...]], ...]:
    """
    Forme canonique des options: groupes triés, valeurs triées, groupes vides et annotations ignorés.
    {"size": "L", "extras": ["b", "a"]} -> (("extras", ("a", "b")), ("size", ("L",)))
    """
    entries = []
    for group, value in (options or {}).items():
        group = str(group).strip()
        if not group or group in ANNOTATION_FIELDS:
            continue
        values = selected_values(value)
        if values:
            entries.append((group, tuple(sorted(values))))
    return tuple(sorted(entries))


def line_key(product_id: str, options: Optional[Dict[str, object]] = None) -> CartKey:
    return (str(product_id).strip(), canonical_options(options))


def key_ref(key: CartKey) -> str:
    """Référence courte et stable d'une clé (utilisable dans une URL)."""
    raw = json.dumps([key[0], [[g, list(v)] for g, v in key[1]]], separators=(",", ":"))
    return hashlib.sha1(raw.encode("utf-8")).hexdigest()[:12]


class CartLine(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    name: str = "Item"
    # Instantané côté client: indicatif uniquement, jamais utilisé pour facturer
    price: float = 0.0
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

    @field_validator("note")
    @classmethod
    def _clean_note(cls, v: Optional[str]) -> Optional[str]:
        v = (v or "").strip()
        return v or None

    @property
    def key(self) -> CartKey:
        return line_key(self.id, self.options)

    @property
    def ref(self) -> str:
        return key_ref(self.key)

    @property
    def line_total(self) -> float:
        return self.price * self.quantity

    @property
    def options_text(self) -> str:
        return options_text(self.options)


def options_text(options: Optional[Dict[str, object]]) -> str:
    """
    'package: deluxe | extras: a, b' (ordre de saisie conservé, valeurs vides ignorées).
    Les annotations (message cadeau...) ne sont jamais affichées comme options.
    """
    parts = []
    for group, value in (options or {}).items():
        group = str(group).strip()
        if not group or group in ANNOTATION_FIELDS:
            continue
        values = selected_values(value)
        if values:
            parts.append(f"{group}: {', '.join(values)}")
    return " | ".join(parts)


class Cart:
    """
    Séquence ordonnée de CartLine (ordre d'insertion = ordre d'affichage).
    - add: fusionne sur (id, options canoniques); l'instantané existant l'emporte.
    - set_quantity: <= 0 supprime la ligne, sinon fixe exactement la quantité.
    - remove: idempotent.
    """

    def __init__(self, lines: Optional[List[CartLine]] = None):
        self._lines: List[CartLine] = []
        for line in lines or []:
            self.add(line)

    def _index(self, key: CartKey) -> Optional[int]:
        for i, line in enumerate(self._lines):
            if line.key == key:
                return i
        return None

    def add(self, line: CartLine) -> CartLine:
        idx = self._index(line.key)
        if idx is not None:
            existing = self._lines[idx]
            existing.quantity += line.quantity
            return existing
        copy = line.model_copy(deep=True)
        self._lines.append(copy)
        return copy

    def get(self, key: CartKey) -> Optional[CartLine]:
        idx = self._index(key)
        return self._lines[idx] if idx is not None else None

    def find(self, ref: str) -> Optional[CartLine]:
        for line in self._lines:
            if line.ref == ref:
                return line
        return None

    def set_quantity(self, key: CartKey, quantity: int) -> Optional[CartLine]:
        idx = self._index(key)
        if idx is None:
            return None
        if quantity <= 0:
            del self._lines[idx]
            return None
        self._lines[idx].quantity = int(quantity)
        return self._lines[idx]

    def increment(self, key: CartKey) -> Optional[CartLine]:
        line = self.get(key)
        if line is None:
            return None
        return self.set_quantity(key, line.quantity + 1)

    def decrement(self, key: CartKey) -> Optional[CartLine]:
        line = self.get(key)
        if line is None:
            return None
        return self.set_quantity(key, line.quantity - 1)

    def remove(self, key: CartKey) -> None:
        idx = self._index(key)
        if idx is not None:
            del self._lines[idx]

    def clear(self) -> None:
        self._lines = []

    def lines(self) -> List[CartLine]:
        return list(self._lines)

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity for line in self._lines)

    @property
    def subtotal(self) -> float:
        return sum(line.line_total for line in self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[CartLine]:
        return iter(list(self._lines))

    def __repr__(self) -> str:
        return f"Cart(lines={len(self._lines)}, units={self.total_quantity})"
