"""
どこで: `chromadepth.engine.render.shader`。
何を: マテリアル種別ごとの GLSL ソースと、moderngl プログラムの生成/ユニフォーム設定ヘルパ。
なぜ: シェーダ文字列と GL 呼び出しをレンダラ本体から切り離し、種別の追加を局所化するため。
"""

from __future__ import annotations

from typing import Any

_PHONG_VERTEX = """
#version 330
uniform mat4 u_model;
uniform mat4 u_view;
uniform mat4 u_projection;
uniform mat3 u_normal_matrix;

in vec3 in_position;
in vec3 in_normal;

out vec3 v_normal;
out vec3 v_world;

void main() {
    vec4 world = u_model * vec4(in_position, 1.0);
    v_world = world.xyz;
    v_normal = normalize(u_normal_matrix * in_normal);
    gl_Position = u_projection * u_view * world;
}
"""

_PHONG_FRAGMENT = """
#version 330
uniform vec3 u_color;
uniform float u_ambient;
uniform vec3 u_light_position;
uniform float u_light_intensity;
uniform vec3 u_camera_position;
uniform float u_shininess;

in vec3 v_normal;
in vec3 v_world;

out vec4 f_color;

void main() {
    vec3 n = normalize(v_normal);
    vec3 l = normalize(u_light_position);
    vec3 v = normalize(u_camera_position - v_world);
    // 裏面も照らす（片面メッシュ対策）
    if (dot(n, v) < 0.0) {
        n = -n;
    }
    float diffuse = max(dot(n, l), 0.0);
    vec3 h = normalize(l + v);
    float specular = pow(max(dot(n, h), 0.0), u_shininess) * 0.2;
    vec3 c = u_color * (0.3 * u_ambient + diffuse * u_light_intensity);
    c += vec3(specular * u_light_intensity);
    f_color = vec4(min(c, vec3(1.0)), 1.0);
}
"""

_DEPTH_VERTEX = """
#version 330
uniform mat4 u_model;
uniform mat4 u_view;
uniform mat4 u_projection;

in vec3 in_position;

void main() {
    gl_Position = u_projection * u_view * u_model * vec4(in_position, 1.0);
}
"""

_DEPTH_FRAGMENT = """
#version 330
out vec4 f_color;

void main() {
    // 深度 [0, 1] を 8bit 3 段へ分解（R が上位）
    float z = clamp(gl_FragCoord.z, 0.0, 1.0) * 255.0;
    float hi = floor(z);
    float rest = (z - hi) * 255.0;
    float mid = floor(rest);
    float lo = floor((rest - mid) * 255.0);
    f_color = vec4(hi / 255.0, mid / 255.0, lo / 255.0, 1.0);
}
"""

SOURCES: dict[str, tuple[str, str]] = {
    "phong": (_PHONG_VERTEX, _PHONG_FRAGMENT),
    "depth": (_DEPTH_VERTEX, _DEPTH_FRAGMENT),
}

# VBO は [x, y, z, nx, ny, nz] の float32 インターリーブ
VERTEX_LAYOUTS: dict[str, tuple[str, tuple[str, ...]]] = {
    "phong": ("3f 3f", ("in_position", "in_normal")),
    "depth": ("3f 12x", ("in_position",)),
}


class Shader:
    @staticmethod
    def create_program(ctx: Any, kind: str) -> Any:
        """マテリアル種別に対応する moderngl Program を生成する。"""
        try:
            vertex, fragment = SOURCES[kind]
        except KeyError:
            raise ValueError(f"no shader for material kind: {kind!r}") from None
        return ctx.program(vertex_shader=vertex, fragment_shader=fragment)


def set_uniform(program: Any, name: str, value: Any) -> None:
    """ユニフォームを設定する。最適化で除去された名前は無視する。"""
    member = program.get(name, None)
    if member is None:
        return
    if isinstance(value, (bytes, bytearray)):
        member.write(value)
    else:
        member.value = value


__all__ = ["SOURCES", "Shader", "VERTEX_LAYOUTS", "set_uniform"]
