"""Materials: named textures and uniform values bound to shader passes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from nitrokit.binding import ShaderBinding
from nitrokit.shader import ShaderInfo
from nitrokit.texture import Texture


@dataclass(eq=False)
class Material:
    """Textures and uniform values by name, with the shader passes they feed.

    Values are kept by name so that shaders set later pick them up, and each
    texture keeps a list of the materials that use it.
    """

    textures: dict[str, Texture] = field(default_factory=dict)
    uniforms: dict[str, Any] = field(default_factory=dict)
    main: ShaderBinding = field(default_factory=ShaderBinding)
    directional: ShaderBinding = field(default_factory=ShaderBinding)
    point: ShaderBinding = field(default_factory=ShaderBinding)
    passes: list[ShaderBinding] = field(default_factory=list)
    transparent: bool = False
    back_face_culling: bool = False
    front_face_culling: bool = False

    def _bindings(self) -> Iterator[ShaderBinding]:
        yield self.main
        yield self.directional
        yield self.point
        yield from self.passes

    def _uses(self, texture: Texture) -> bool:
        return any(existing is texture for existing in self.textures.values())

    def set_texture(self, name: str, texture: Texture) -> None:
        """Bind ``texture`` to ``name`` in this material and all its passes."""
        previous: Optional[Texture] = self.textures.get(name)
        self.textures[name] = texture
        if previous is not None and previous is not texture and not self._uses(previous):
            previous.materials[:] = [m for m in previous.materials if m is not self]
        if not any(m is self for m in texture.materials):
            texture.materials.append(self)
        for binding in self._bindings():
            binding.set_texture(name, texture)

    def _setup(self, binding: ShaderBinding, shader: ShaderInfo) -> None:
        binding.setup(shader, self.textures, self.uniforms)

    def set_shader(self, shader: ShaderInfo) -> None:
        """Use ``shader`` for the main pass."""
        self._setup(self.main, shader)

    def set_directional_shader(self, shader: ShaderInfo) -> None:
        """Use ``shader`` for the directional shadow pass."""
        self._setup(self.directional, shader)

    def set_point_shader(self, shader: ShaderInfo) -> None:
        """Use ``shader`` for the point shadow pass."""
        self._setup(self.point, shader)

    def set_pass_shader(self, shader: ShaderInfo, pass_name: str) -> None:
        """Use ``shader`` for the named pass, creating the pass if it is new."""
        for binding in self.passes:
            if binding.pass_name == pass_name:
                self._setup(binding, shader)
                return
        binding = ShaderBinding(pass_name)
        self._setup(binding, shader)
        self.passes.append(binding)

    def set_uniform(self, name: str, value: Any) -> None:
        """Set a uniform value by name in this material and all its passes."""
        self.uniforms[name] = value
        for binding in self._bindings():
            binding.set_uniform(name, value)

    def delete(self) -> None:
        """Detach from every texture and drop all values and passes."""
        for texture in self.textures.values():
            texture.materials[:] = [m for m in texture.materials if m is not self]
        self.textures.clear()
        self.uniforms.clear()
        self.main = ShaderBinding()
        self.directional = ShaderBinding()
        self.point = ShaderBinding()
        self.passes.clear()