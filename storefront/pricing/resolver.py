"""
Résolution du prix unitaire (logique pure: pas d'UI, pas de Stripe, pas d'E/S).
"""
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Union

from storefront.catalog.models import BasePlusProduct, FixedProduct, LookupProduct
from storefront.errors import MissingSelection

OptionValue = Union[str, List[str]]
SelectedOptions = Mapping[str, OptionValue]


def selected_values(value: object) -> List[str]:
    """
    Normalise une valeur sélectionnée en liste de chaînes non vides.
    - "deluxe" -> ["deluxe"]
    - ["a", "b"] (multi-sélection) -> ["a", "b"]
    - None / "" / [] -> []
    """
    if value is None:
        return []
    if isinstance(value, str):
        v = value.strip()
        return [v] if v else []
    if isinstance(value, Iterable):
        return [str(v).strip() for v in value if v is not None and str(v).strip()]
    v = str(value).strip()
    return [v] if v else []


def _single_value(value: object) -> Optional[str]:
    values = selected_values(value)
    if not values:
        return None
    # Un groupe "lookup" est mono-sélection: plusieurs valeurs ne correspondent à aucune entrée
    return values[0] if len(values) == 1 else "|".join(values)


def _resolve_fixed(product: FixedProduct, options: SelectedOptions) -> float:
    return float(product.price)


def _resolve_lookup(product: LookupProduct, options: SelectedOptions) -> float:
    chosen = _single_value((options or {}).get(product.option))
    if chosen is None:
        raise MissingSelection(product.id, product.option)
    return float(product.prices.get(chosen, 0))


def _resolve_base_plus(product: BasePlusProduct, options: SelectedOptions) -> float:
    total = float(product.price)
    for group, surcharges in product.surcharges.items():
        if group not in (options or {}):
            continue
        for value in selected_values(options[group]):
            total += float(surcharges.get(value, 0))
    return total


_RESOLVERS: Dict[type, Callable[..., float]] = {
    FixedProduct: _resolve_fixed,
    LookupProduct: _resolve_lookup,
    BasePlusProduct: _resolve_base_plus,
}


# module storefront.pricing.resolver
def resolve_price(product, selected_options: Optional[SelectedOptions] = None) -> float:
    """
    Calcule le prix unitaire d'un produit selon son mode et les options choisies.
    - fixed: prix de base, indépendamment des options.
    - lookup: prix de la valeur choisie dans le groupe configuré;
      MissingSelection si le groupe est absent; 0 si la valeur est inconnue.
    - basePlus: base + supplément de chaque valeur choisie (multi-sélection additionnée);
      valeurs inconnues = 0.
    """
    try:
        resolver = _RESOLVERS[type(product)]
    except KeyError:
        raise TypeError(f"Mode de prix non géré: {type(product).__name__}") from None
    return resolver(product, selected_options or {})
