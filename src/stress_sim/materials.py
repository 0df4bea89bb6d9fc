# MIT License (see LICENSE)
"""
Material catalog for the stress engine.

Each MaterialKind maps to one interned, immutable MaterialProperties record.
Bodies hold a reference to the catalog entry; entries are never copied or
mutated after import, so the catalog is safe to read from anywhere.

Strengths are asymmetric: concrete is ten times weaker in
tension than in compression, wood is twice as strong in tension as in
compression. Force classification in core/stress.py picks the limit that
matches the load type, so these produce visibly different failure modes.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType


class ForceType(str, Enum):
    """Load classification used to pick the governing strength limit."""
    COMPRESSION = "compression"
    TENSION = "tension"
    SHEAR = "shear"
    BENDING = "bending"


class MaterialKind(str, Enum):
    """Closed set of structural materials."""
    STEEL = "steel"
    CONCRETE = "concrete"
    WOOD = "wood"
    ALUMINUM = "aluminum"


@dataclass(frozen=True)
class MaterialProperties:
    """
    Physical constants of a structural material.

    Attributes:
        kind: Catalog key this record belongs to.
        density: Mass density in kg/m³.
        max_compression: Compressive strength in Pa.
        max_tension: Tensile strength in Pa.
        max_shear: Shear strength in Pa.
        elastic_modulus: Young's modulus E in Pa.
    """
    kind: MaterialKind
    density: float
    max_compression: float
    max_tension: float
    max_shear: float
    elastic_modulus: float

    def limit_for(self, force_type: ForceType) -> float:
        """
        Strength limit (Pa) that applies to a load of the given type.

        Bending combines both faces of a section, so the weaker of tension
        and compression governs.
        """
        if force_type is ForceType.COMPRESSION:
            return self.max_compression
        if force_type is ForceType.TENSION:
            return self.max_tension
        if force_type is ForceType.SHEAR:
            return self.max_shear
        if force_type is ForceType.BENDING:
            return min(self.max_tension, self.max_compression)
        raise TypeError(f"Unknown force type: {force_type!r}")


_CATALOG = MappingProxyType({
    MaterialKind.STEEL: MaterialProperties(
        kind=MaterialKind.STEEL,
        density=7850.0,
        max_compression=400e6,
        max_tension=400e6,
        max_shear=250e6,
        elastic_modulus=200e9,
    ),
    MaterialKind.CONCRETE: MaterialProperties(
        kind=MaterialKind.CONCRETE,
        density=2400.0,
        max_compression=30e6,
        max_tension=3e6,
        max_shear=5e6,
        elastic_modulus=30e9,
    ),
    MaterialKind.WOOD: MaterialProperties(
        kind=MaterialKind.WOOD,
        density=600.0,
        max_compression=30e6,
        max_tension=60e6,
        max_shear=10e6,
        elastic_modulus=11e9,
    ),
    MaterialKind.ALUMINUM: MaterialProperties(
        kind=MaterialKind.ALUMINUM,
        density=2700.0,
        max_compression=300e6,
        max_tension=300e6,
        max_shear=200e6,
        elastic_modulus=69e9,
    ),
})


def material_kind(kind: MaterialKind | str) -> MaterialKind:
    """
    Coerce a kind or its string name ("steel", "Concrete", ...) to MaterialKind.

    Raises:
        ValueError: If the string does not name a catalog material.
    """
    if isinstance(kind, MaterialKind):
        return kind
    try:
        return MaterialKind(str(kind).strip().lower())
    except ValueError:
        valid = ", ".join(k.value for k in MaterialKind)
        raise ValueError(f"Unknown material {kind!r} (expected one of: {valid})") from None


def properties(kind: MaterialKind | str) -> MaterialProperties:
    """Return the interned MaterialProperties for a material kind."""
    return _CATALOG[material_kind(kind)]


def all_materials() -> list[MaterialKind]:
    """All catalog materials in declaration order."""
    return list(_CATALOG.keys())
