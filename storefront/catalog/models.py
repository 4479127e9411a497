"""
Schéma du catalogue: une entrée par produit, variante étiquetée par le mode de prix.
- fixed: prix unique
- lookup: groupe d'options + table valeur -> prix
- basePlus: prix de base + suppléments par groupe/valeur
Tous les montants sont en unités principales (livres, pas pence), positifs ou nuls.
"""
from typing import Annotated, Dict, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat


class _ProductBase(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    name: str = "Item"
    currency: str = "gbp"


class FixedProduct(_ProductBase):
    mode: Literal["fixed"] = "fixed"
    price: NonNegativeFloat


class LookupProduct(_ProductBase):
    mode: Literal["lookup"]
    option: str = Field(min_length=1)
    prices: Dict[str, NonNegativeFloat]


class BasePlusProduct(_ProductBase):
    mode: Literal["basePlus"]
    price: NonNegativeFloat
    surcharges: Dict[str, Dict[str, NonNegativeFloat]] = Field(default_factory=dict)


Product = Annotated[
    Union[FixedProduct, LookupProduct, BasePlusProduct],
    Field(discriminator="mode"),
]

Catalog = Dict[str, Union[FixedProduct, LookupProduct, BasePlusProduct]]
