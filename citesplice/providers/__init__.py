"""Item store and formatting engine providers."""
from .base import FormattingEngine
from .item_store import ItemStore, load_locales

__all__ = ["FormattingEngine", "ItemStore", "load_locales"]
