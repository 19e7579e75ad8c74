"""Setting type catalog and the built-in types."""

from .base import (
    ChoiceAttrs,
    FloatRange,
    IntRange,
    LengthAttrs,
    NoAttrs,
    SecretAttrs,
    SettingType,
    TypeCatalog,
)
from .network import NETWORK_TYPES, same_subnet
from .primitive import PRIMITIVE_TYPES, mask_secret
from .region import COUNTRY_DEFAULTS, REGION_TYPES, get_country_defaults
from .system import SYSTEM_TYPES, default_disk, detect_disks

BUILTIN_TYPES = PRIMITIVE_TYPES + NETWORK_TYPES + SYSTEM_TYPES + REGION_TYPES


def build_default_catalog() -> TypeCatalog:
    """Create a catalog with every built-in setting type registered."""
    catalog = TypeCatalog()
    for type_class in BUILTIN_TYPES:
        catalog.register(type_class())
    return catalog


__all__ = [
    "BUILTIN_TYPES",
    "COUNTRY_DEFAULTS",
    "ChoiceAttrs",
    "FloatRange",
    "IntRange",
    "LengthAttrs",
    "NoAttrs",
    "SecretAttrs",
    "SettingType",
    "TypeCatalog",
    "build_default_catalog",
    "default_disk",
    "detect_disks",
    "get_country_defaults",
    "mask_secret",
    "same_subnet",
]
