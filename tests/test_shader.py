import pytest

from nitrokit.shader import (
    ShaderInfo,
    Uniform,
    UniformType,
    load_shader,
    parse_uniforms,
    preprocess,
    process_shader,
)


def test_define_replaces_token():
    prefix, suffix, value = "float x = ", " ;\n", "4"
    src = "#define SIZE " + value + "\n" + prefix + "SIZE" + suffix
    defines = {}
    assert preprocess(src, defines) == prefix + value + suffix
    assert defines == {"SIZE": value}


def test_define_without_value_is_empty():
    body = "void main();\n"
    defines = {}
    assert preprocess("#define FLAG\n" + body, defines) == body
    assert defines == {"FLAG": ""}


def test_nested_define_is_expanded():
    prefix, suffix, value = "y = ", " ;\n", "2"
    src = "#define A " + value + "\n#define B A\n" + prefix + "B" + suffix
    assert preprocess(src) == prefix + value + suffix


def test_token_glued_to_punctuation_is_left_alone():
    src = "x = FOO;\n"
    assert preprocess(src, {"FOO": "1"}) == src


def test_undef_removes_definition():
    body = "x = A ;\n"
    defines = {}
    assert preprocess("#define A 1\n#undef A\n" + body, defines) == body
    assert "A" not in defines


def test_ifdef_undefined_drops_block():
    kept, dropped = "b;\n", "a;\n"
    src = "#ifdef FOO\n" + dropped + "#endif\n" + kept
    assert preprocess(src) == kept


def test_ifdef_defined_keeps_block():
    inner, after = "a;\n", "b;\n"
    src = "#ifdef FOO\n" + inner + "#endif\n" + after
    assert preprocess(src, {"FOO": ""}) == inner + after


@pytest.mark.parametrize("defined", [True, False])
def test_else_branch(defined):
    first, second = "a;\n", "b;\n"
    src = "#ifdef FOO\n" + first + "#else\n" + second + "#endif\n"
    defines = {"FOO": ""} if defined else {}
    assert preprocess(src, defines) == (first if defined else second)


def test_elif_picks_defined_branch():
    first, second = "a;\n", "b;\n"
    src = "#ifdef FOO\n" + first + "#elif BAR\n" + second + "#endif\n"
    assert preprocess(src, {"BAR": ""}) == second


def test_define_inside_dropped_block_is_ignored():
    defines = {}
    preprocess("#ifdef NOPE\n#define X 1\n#endif\n", defines)
    assert defines == {}


def test_unknown_directive_passes_through():
    src = "#version 330\nvoid main();\n"
    assert preprocess(src) == src


def test_line_comment_is_not_expanded():
    comment, prefix, suffix, value = "// FOO stays\n", "x = ", " ;\n", "1"
    src = comment + prefix + "FOO" + suffix
    assert preprocess(src, {"FOO": value}) == comment + prefix + value + suffix


def test_include_inserts_text():
    shared, body = "float shared;\n", "void main();\n"
    names = []

    def include(name):
        names.append(name)
        return shared

    assert preprocess("#include common\n" + body, None, include) == shared + body
    assert names == ["common"]


def test_included_defines_are_processed():
    prefix, suffix, value = "x = ", " ;\n", "3"

    def include(name):
        return "#define N " + value + "\n"

    src = "#include defs\n" + prefix + "N" + suffix
    assert preprocess(src, None, include) == prefix + value + suffix


def test_include_missing_raises():
    with pytest.raises(FileNotFoundError):
        preprocess("#include gone\n", None, lambda name: None)


def test_include_in_dropped_block_is_not_called():
    calls = []
    preprocess("#ifdef NOPE\n#include x\n#endif\n", None, calls.append)
    assert calls == []


def test_parse_uniforms_kinds_and_arrays():
    src = (
        "uniform mat4 model;\n"
        "uniform vec3 lights[4];\n"
        "uniform sampler2D albedo;\n"
        "void main() { gl_Position = vec4(0.0); }\n"
    )
    assert parse_uniforms(src) == [
        Uniform("model", UniformType.MAT4, 1),
        Uniform("lights", UniformType.VEC3, 4),
        Uniform("albedo", UniformType.SAMPLER2D, 1),
    ]


def test_parse_uniforms_removes_duplicates():
    src = "uniform float a;\nuniform float a;\n"
    assert parse_uniforms(src) == [Uniform("a", UniformType.FLOAT)]


def test_parse_uniform_name_starting_with_u():
    assert parse_uniforms("uniform float uScale;\nuniform int uCount;\n") == [
        Uniform("uScale", UniformType.FLOAT),
        Uniform("uCount", UniformType.INT),
    ]


def test_parse_unknown_type_is_other():
    (uniform,) = parse_uniforms("uniform samplerCube sky;\n")
    assert uniform.type is UniformType.OTHER
    assert not uniform.is_texture


def test_process_shader_splits_textures_and_merges():
    vert = "uniform mat4 mvp;\nvoid main();\n"
    frag = "uniform mat4 mvp;\nuniform sampler2D tex;\nvoid main();\n"
    info = process_shader(vert, frag)
    assert isinstance(info, ShaderInfo)
    assert [u.name for u in info.uniforms] == ["mvp"]
    assert [t.name for t in info.textures] == ["tex"]
    assert info.orig_vert == vert and info.orig_frag == frag


def test_process_shader_defines_do_not_leak():
    frag = "y = X ;\n"
    info = process_shader("#define X 1\n", frag)
    assert info.frag == frag
    assert info.vert == ""


def test_load_shader_reads_files(tmp_path):
    vert = tmp_path / "a.vert"
    frag = tmp_path / "a.frag"
    vert.write_text("uniform vec4 color;\n")
    frag.write_text("uniform sampler2D tex;\n")
    info = load_shader(vert, frag)
    assert info.uniforms == [Uniform("color", UniformType.VEC4)]
    assert info.textures == [Uniform("tex", UniformType.SAMPLER2D)]


def test_load_shader_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_shader(tmp_path / "none.vert", tmp_path / "none.frag")