"""SQL values and casts, column schemas, an LRU frame replacer and string helpers."""

__version__ = "0.1.0"

__all__ = [
    "catalog",
    "lru_replacer",
    "string_util",
    "types",
    "value_factory",
]