"""Texture descriptions and the materials that refer to them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Optional


class WrapMode(IntEnum):
    """How texture coordinates outside 0..1 are treated."""

    CLAMP = 0
    WRAP = 1
    MIRROR = 2


@dataclass(eq=False)
class Texture:
    """Pixel data for a texture, with the materials that use it."""

    width: int = 0
    height: int = 0
    color: Optional[Any] = None
    wrap_u: WrapMode = WrapMode.WRAP
    wrap_v: WrapMode = WrapMode.WRAP
    hdr: bool = False
    tex_ref: Optional[int] = None
    materials: list = field(default_factory=list)

    def delete(self) -> None:
        """Release the pixel data, the device handle and material links."""
        self.tex_ref = None
        self.color = None
        self.materials.clear()