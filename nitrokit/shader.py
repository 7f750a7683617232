"""Shader source preprocessing and uniform discovery."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import IntEnum
from itertools import chain
from pathlib import Path
from typing import Callable, Optional, Union

IncludeCallback = Callable[[str], Optional[str]]


class UniformType(IntEnum):
    """Kinds of uniform variable; values of 100 and above are textures."""

    OTHER = 0
    MAT4 = 1
    VEC2 = 2
    VEC3 = 3
    VEC4 = 4
    FLOAT = 5
    INT = 6
    SAMPLER2D = 100

    @property
    def is_texture(self) -> bool:
        return self.value >= 100


_TYPE_NAMES = {
    "mat4": UniformType.MAT4,
    "vec2": UniformType.VEC2,
    "vec3": UniformType.VEC3,
    "vec4": UniformType.VEC4,
    "float": UniformType.FLOAT,
    "int": UniformType.INT,
    "sampler2D": UniformType.SAMPLER2D,
}


@dataclass(frozen=True)
class Uniform:
    """A uniform declared in shader source; ``length`` is the array size."""

    name: str
    type: UniformType
    length: int = 1

    @property
    def is_texture(self) -> bool:
        return self.type.is_texture


@dataclass
class ShaderInfo:
    """Preprocessed shader sources with the uniforms and textures they declare."""

    vert: str
    frag: str
    orig_vert: str = ""
    orig_frag: str = ""
    uniforms: list[Uniform] = field(default_factory=list)
    textures: list[Uniform] = field(default_factory=list)


@dataclass
class _Branch:
    start: int
    delete: bool


# --- scanning helpers -------------------------------------------------------

def _skip_space(text: str, pos: int) -> int:
    """First position at or after ``pos`` holding a visible character."""
    n = len(text)
    while pos < n and text[pos] <= " ":
        pos += 1
    return pos


def _find_space(text: str, pos: int) -> int:
    """First position at or after ``pos`` holding whitespace or a control character."""
    n = len(text)
    while pos < n and text[pos] > " ":
        pos += 1
    return pos


def _find_space_or_bracket(text: str, pos: int) -> int:
    n = len(text)
    while pos < n:
        ch = text[pos]
        if ch <= " ":
            return pos
        if ch in "{}":
            return pos + 1
        pos += 1
    return pos


def _line_end(text: str, pos: int) -> int:
    """Position of the first control character at or after ``pos``."""
    n = len(text)
    while pos < n and text[pos] >= " ":
        pos += 1
    return pos


def _next_line(text: str, pos: int) -> int:
    """First printable character after the end of the line holding ``pos``."""
    n = len(text)
    seen_break = False
    while pos < n:
        if text[pos] < " ":
            seen_break = True
        elif seen_break:
            return pos
        pos += 1
    return pos


def _find_semi(text: str, pos: int) -> int:
    found = text.find(";", pos)
    return len(text) if found < 0 else found


def _scrub_comments(text: str, pos: int) -> int:
    """Skip a comment starting at ``pos``, if there is one."""
    if pos < len(text) - 1 and text[pos] == "/":
        marker = text[pos + 1]
        if marker == "/":
            return _next_line(text, pos)
        if marker == "*":
            end = text.find("*/", pos + 2)
            return len(text) if end < 0 else end + 2
    return pos


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


# --- preprocessing ----------------------------------------------------------

def _directive(
    text: str,
    start: int,
    stack: list[_Branch],
    defines: dict[str, str],
    include: Optional[IncludeCallback],
    skipping: bool,
) -> tuple[str, int]:
    """Handle the directive at ``start``; return the new text and scan position."""
    end = _find_space(text, start)
    directive = text[start:end]
    pos = _skip_space(text, end)

    if directive == "#define":
        if skipping:
            return text, _next_line(text, start)
        end = _find_space(text, pos)
        name = text[pos:end]
        name_line_end = _line_end(text, end)
        pos = _skip_space(text, end)
        value = text[pos:_line_end(text, pos)] if name_line_end >= pos else ""
        # An earlier definition of the same name wins.
        defines.setdefault(name, value)
    elif directive == "#undef":
        if skipping:
            return text, _next_line(text, start)
        defines.pop(text[pos:_find_space(text, pos)], None)
    elif directive == "#ifdef":
        name = text[pos:_find_space(text, pos)]
        stack.append(_Branch(start, skipping or name not in defines))
    elif directive in ("#endif", "#else", "#elif"):
        if stack:
            branch = stack[-1]
            parent_skipping = len(stack) > 1 and stack[-2].delete
            was_deleting = branch.delete
            if was_deleting:
                text = text[:branch.start] + text[start:]
                start = branch.start
            if directive == "#endif":
                stack.pop()
            elif directive == "#else":
                if not parent_skipping:
                    branch.delete = not branch.delete
                    branch.start = start
            elif was_deleting:
                name_pos = _skip_space(text, _find_space(text, start))
                name = text[name_pos:_find_space(text, name_pos)]
                if not parent_skipping and name in defines:
                    branch.delete = False
            else:
                branch.delete = True
                branch.start = start
    elif directive == "#include":
        if skipping:
            return text, _next_line(text, start)
        name = text[pos:_find_space(text, pos)]
        text = text[:start] + text[_next_line(text, start):]
        if include is not None:
            included = include(name)
            if included is None:
                raise FileNotFoundError(name)
            text = text[:start] + included + text[start:]
        return text, start
    else:
        # Directives such as #version are passed through untouched.
        return text, _next_line(text, start)

    return text[:start] + text[_next_line(text, start):], start


def preprocess(
    source: str,
    defines: Optional[dict[str, str]] = None,
    include: Optional[IncludeCallback] = None,
) -> str:
    """Apply #define, #undef, #ifdef/#elif/#else/#endif and #include to ``source``.

    ``defines`` is updated in place with the definitions met.  ``include`` is
    called with the name given to #include and returns the text to insert.
    Defined names are replaced only where they stand as whitespace-separated
    tokens.
    """
    if defines is None:
        defines = {}
    text = source
    stack: list[_Branch] = []
    i = 0
    while i < len(text):
        i = _scrub_comments(text, _skip_space(text, i))
        skipping = bool(stack) and stack[-1].delete
        if i < len(text) and text[i] == "#":
            text, i = _directive(text, i, stack, defines, include, skipping)
            continue
        end = _find_space(text, i)
        token = text[i:end]
        if token and not skipping and token in defines:
            value = preprocess(defines[token], defines, include)
            text = text[:i] + value + text[end:]
            i += len(value)
        else:
            i = end
    return text


# --- uniforms ---------------------------------------------------------------

def _read_uniform(source: str, pos: int) -> tuple[Uniform, int]:
    start = _skip_space(source, pos)
    end = _find_space(source, start)
    utype = _TYPE_NAMES.get(source[start:end], UniformType.OTHER)
    start = _skip_space(source, end)
    semi = _find_semi(source, start)
    name_end = semi
    length = 1
    if semi > start and source[semi - 1] == "]":
        bracket = source.rfind("[", start, semi)
        name_end = bracket if bracket >= 0 else start
        length = _atoi(source[name_end + 1:semi - 1])
    return Uniform(source[start:name_end], utype, length), semi + 1


def parse_uniforms(source: str) -> list[Uniform]:
    """Return the uniforms declared in ``source``, in order, without repeats."""
    found: list[Uniform] = []
    seen: set[tuple[str, bool]] = set()
    n = len(source)
    i = 0
    while i < n:
        i = _scrub_comments(source, _skip_space(source, i))
        if i >= n:
            break
        ch = source[i]
        if ch == "u":
            end = _find_space(source, i)
            if source[i:end] == "uniform":
                uniform, i = _read_uniform(source, end)
                key = (uniform.name, uniform.is_texture)
                if key not in seen:
                    seen.add(key)
                    found.append(uniform)
            else:
                i = _find_semi(source, i) + 1
        elif ch in "#{}":
            i = _find_space_or_bracket(source, i)
        else:
            i = _find_semi(source, i) + 1
    return found


def process_shader(
    vert: str, frag: str, include: Optional[IncludeCallback] = None
) -> ShaderInfo:
    """Preprocess a vertex and fragment source and collect their uniforms."""
    vert_out = preprocess(vert, {}, include)
    frag_out = preprocess(frag, {}, include)
    info = ShaderInfo(vert_out, frag_out, vert, frag)
    for uniform in chain(parse_uniforms(vert_out), parse_uniforms(frag_out)):
        target = info.textures if uniform.is_texture else info.uniforms
        if all(existing.name != uniform.name for existing in target):
            target.append(uniform)
    return info


def load_shader(
    vert_path: Union[str, Path],
    frag_path: Union[str, Path],
    include: Optional[IncludeCallback] = None,
) -> ShaderInfo:
    """Read and process a vertex and fragment shader from disk."""
    vert = Path(vert_path).read_text()
    frag = Path(frag_path).read_text()
    return process_shader(vert, frag, include)