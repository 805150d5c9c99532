"""Materials module.

The renderer uses a single material model: a blend between a mirror bounce
and a diffuse bounce, plus emission. Materials live in a fixed, read-only
table keyed by ``MaterialName``.

Components:
    table: Material dataclass, MaterialName enum and the material table
"""

from .table import (
    BACKGROUND_MATERIAL,
    MATERIALS,
    Material,
    MaterialName,
    get_material,
    make_material,
)

__all__ = [
    "BACKGROUND_MATERIAL",
    "MATERIALS",
    "Material",
    "MaterialName",
    "get_material",
    "make_material",
]
