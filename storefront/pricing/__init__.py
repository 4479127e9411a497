from .resolver import OptionValue, SelectedOptions, resolve_price, selected_values

__all__ = ["OptionValue", "SelectedOptions", "resolve_price", "selected_values"]
