"""The textures and uniform values bound to one shader pass of a material."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from nitrokit.shader import ShaderInfo


class ShaderBinding:
    """Per-pass slots for a shader's textures and uniforms.

    ``textures`` and ``uniforms`` map each name the shader declares, in the
    shader's order, to what is bound to it (None while unbound).
    """

    def __init__(self, pass_name: Optional[str] = None) -> None:
        self.pass_name = pass_name
        self.shader: Optional[ShaderInfo] = None
        self.textures: dict[str, Any] = {}
        self.uniforms: dict[str, Any] = {}

    def setup(
        self,
        shader: ShaderInfo,
        textures: Optional[Mapping[str, Any]] = None,
        uniforms: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Bind ``shader``, clearing all slots, then fill those named in the maps."""
        self.shader = shader
        self.textures = dict.fromkeys(t.name for t in shader.textures)
        self.uniforms = dict.fromkeys(u.name for u in shader.uniforms)
        for name, texture in (textures or {}).items():
            if name in self.textures:
                self.textures[name] = texture
        for name, value in (uniforms or {}).items():
            if name in self.uniforms:
                self.uniforms[name] = value

    def set_texture(self, name: str, texture: Any) -> None:
        """Bind ``texture`` to ``name`` if the shader declares it."""
        if self.shader is not None and name in self.textures:
            self.textures[name] = texture

    def set_uniform(self, name: str, value: Any) -> None:
        """Bind ``value`` to ``name`` if the shader declares it."""
        if self.shader is not None and name in self.uniforms:
            self.uniforms[name] = value