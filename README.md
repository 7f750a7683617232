# nitrokit

A small, dependency-free toolkit holding engine-side pieces of a game:

- `nitrokit.nitrofs`: reads the NitroFS filesystem stored inside a ROM image.
  `NitroFS.from_rom` reads the file and allocation table offsets from the
  cartridge header; `listdir`, `open`, `stat` and `chdir` work on paths, with
  names matched without regard to case. Files open as read-only `NitroFile`
  objects; directory entries are `DirEntry` values. A header without an
  allocation table raises `NitroError`; missing paths raise `FileNotFoundError`.
- `nitrokit.timing`: `DeltaTimer` measures the time between updates, capped at
  `max_delta` (0.1 seconds by default); `Benchmark` measures the time between
  `start` and `stop`, and also works as a context manager that stores `elapsed`.
- `nitrokit.keys`: button bit flags (`Key`) and `KeyState`, which reads the key
  state from a callback on each `scan` and reports keys `down`, `held`,
  `current` and `up`.
- `nitrokit.shader`: a preprocessor for GLSL-style sources (`#define`,
  `#undef`, `#ifdef`, `#else`, `#elif`, `#endif`, `#include` through a
  callback; other directives such as `#version` pass through), uniform
  discovery (`parse_uniforms`, `Uniform`, `UniformType`), and
  `process_shader` / `load_shader`, which return a `ShaderInfo`.
- `nitrokit.texture`: `Texture` descriptions with `WrapMode` settings and the
  list of materials that use them.
- `nitrokit.mesh`: `Mesh` vertex data divided into `SubMesh` triangle lists.
- `nitrokit.binding`: `ShaderBinding`, the texture and uniform slots of one
  shader pass.
- `nitrokit.material`: `Material`, which keeps textures and uniform values by
  name and binds them to its main, shadow and named passes.

## Installing

```
pip install .
```

The package needs Python 3.10 or later and has no third-party dependencies.

## Examples

Reading a file from a ROM image:

```python
from nitrokit.nitrofs import NitroFS

with open("game.nds", "rb") as rom:
    fs = NitroFS.from_rom(rom)
    for entry in fs.listdir("/"):
        print(entry.name, entry.is_dir, entry.size)
    data = fs.open("/music/battle.wav").read(64)
```

Tracking input:

```python
from nitrokit.keys import Key, KeyState

state = KeyState(lambda: Key.A | Key.RIGHT)
state.scan()
if state.down() & Key.A:
    print("jump")
```

Timing frames:

```python
from nitrokit.timing import Benchmark, DeltaTimer

timer = DeltaTimer()
delta = timer.update()  # seconds since the last update, at most 0.1

with Benchmark() as bench:
    sum(range(10_000))
print(bench.elapsed)
```

Preprocessing a shader and finding its uniforms:

```python
from nitrokit.shader import parse_uniforms, preprocess

source = preprocess(
    "#define USE_TEXTURE\n"
    "#ifdef USE_TEXTURE\n"
    "uniform sampler2D albedo;\n"
    "#endif\n"
    "uniform mat4 mvp;\n"
)
for uniform in parse_uniforms(source):
    print(uniform.name, uniform.type, uniform.length)
```

Binding a material to a shader:

```python
from nitrokit.material import Material
from nitrokit.shader import process_shader
from nitrokit.texture import Texture

shader = process_shader(
    "uniform mat4 mvp;\n",
    "uniform sampler2D albedo;\nuniform vec4 tint;\n",
)
material = Material()
material.set_uniform("tint", (1.0, 1.0, 1.0, 1.0))
material.set_shader(shader)
material.set_texture("albedo", Texture(width=16, height=16))
print(material.main.textures, material.main.uniforms)
```

## What the package does not do

nitrokit keeps track of shaders, textures, meshes and materials but does not
draw anything: it opens no window and compiles no shaders on a graphics
device. It also has no collision detection or ray casting, and no command-line
program.

## Running the tests

```
pip install .[test]
pytest
```