"""Engine toolkit: ROM filesystem, timing, input, shaders, textures, meshes and materials."""

__version__ = "0.1.0"

__all__ = [
    "binding",
    "keys",
    "material",
    "mesh",
    "nitrofs",
    "shader",
    "texture",
    "timing",
]