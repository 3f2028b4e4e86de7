import math

import pytest

from comfykit.draw_curves import (
    draw_arc,
    draw_arc_outline,
    draw_arc_wedge,
    draw_circle,
    draw_circle_outline,
    draw_circle_z,
    draw_ellipse,
    draw_poly2_z,
    draw_poly_z,
)
from comfykit.draw_lines import Z_DIV
from comfykit.math2d import RED, WHITE, Vec2, Vec3
from comfykit.render_queues import BlendMode, consume_render_queues, use_default_shader
from comfykit.shaders import use_default_render_target


@pytest.fixture(autouse=True)
def clean_state():
    use_default_shader()
    use_default_render_target()
    consume_render_queues()
    yield
    consume_render_queues()


def queued():
    return [(key, mesh) for key, meshes in consume_render_queues().items() for mesh in meshes]


def rim_distances(mesh, center):
    return [v.position.truncate().distance(center) for v in mesh.vertices[1:]]


def test_draw_circle_fan():
    center = Vec2(2.0, -1.0)
    draw_circle(center, 3.0, RED, 5)
    [(key, mesh)] = queued()
    assert key.blend_mode is BlendMode.ALPHA
    assert key.z_index == 5
    assert len(mesh.vertices) == 40 + 2
    assert len(mesh.indices) == 40 * 3
    assert mesh.vertices[0].position == Vec3(2.0, -1.0, 5 / Z_DIV)
    assert all(d == pytest.approx(3.0) for d in rim_distances(mesh, center))


def test_draw_circle_z_uses_given_blend_mode():
    draw_circle_z(Vec2(0.0, 0.0), 1.0, WHITE, 0, BlendMode.ADDITIVE)
    [(key, _)] = queued()
    assert key.blend_mode is BlendMode.ADDITIVE


def test_draw_ellipse_points_on_ellipse():
    center = Vec2(1.0, 1.0)
    radius = Vec2(4.0, 2.0)
    draw_ellipse(center, radius, WHITE, 0)
    [(_, mesh)] = queued()
    for v in mesh.vertices[1:]:
        dx = (v.position.x - center.x) / radius.x
        dy = (v.position.y - center.y) / radius.y
        assert dx * dx + dy * dy == pytest.approx(1.0)


def test_poly_rotation_is_in_degrees():
    draw_poly_z(Vec2(0.0, 0.0), 4, 2.0, 90.0, WHITE, 0, BlendMode.NONE)
    [(_, mesh)] = queued()
    first = mesh.vertices[1].position
    assert first.x == pytest.approx(0.0, abs=1e-9)
    assert first.y == pytest.approx(2.0)
    assert mesh.indices[:3] == [0, 1, 2]


def test_poly_rejects_zero_sides():
    with pytest.raises(ValueError):
        draw_poly2_z(Vec2(0.0, 0.0), 0, Vec2(1.0, 1.0), 0.0, WHITE, 0, BlendMode.NONE)


def test_circle_outline_ring():
    center = Vec2(0.0, 0.0)
    draw_circle_outline(center, 5.0, 1.0, WHITE, 2)
    [(key, mesh)] = queued()
    assert key.blend_mode is BlendMode.NONE
    assert len(mesh.vertices) % 4 == 0
    assert len(mesh.indices) == len(mesh.vertices) // 4 * 6
    assert max(mesh.indices) == len(mesh.vertices) - 1
    distances = [v.position.truncate().distance(center) for v in mesh.vertices]
    assert min(distances) == pytest.approx(4.5)
    assert max(distances) == pytest.approx(5.5)


def test_draw_arc_spans_angles():
    center = Vec2(1.0, 2.0)
    draw_arc(center, 2.0, 0.0, math.pi / 2, WHITE, 4)
    [(key, mesh)] = queued()
    assert key.z_index == 4
    assert mesh.origin == Vec3(0.0, 0.0, 0.0)
    assert len(mesh.vertices) == 42
    first = mesh.vertices[1].position.truncate()
    last = mesh.vertices[-1].position.truncate()
    assert first.x == pytest.approx(center.x + 2.0)
    assert last.y == pytest.approx(center.y + 2.0)


def test_arc_outline_wraps_end_angle():
    center = Vec2(0.0, 0.0)
    draw_arc_outline(center, 3.0, 0.5, 3.0, 1.0, WHITE, 0)
    [(_, mesh)] = queued()
    assert len(mesh.vertices) > 0
    assert len(mesh.indices) == len(mesh.vertices) // 4 * 6
    for v in mesh.vertices:
        d = v.position.truncate().distance(center)
        assert 2.75 - 1e-9 <= d <= 3.25 + 1e-9


def test_arc_wedge_queues_arc_and_two_lines():
    draw_arc_wedge(Vec2(0.0, 0.0), 2.0, 0.2, 0.0, 1.0, WHITE, 1)
    meshes = [mesh for _, mesh in queued()]
    assert len(meshes) == 3
    line_meshes = [m for m in meshes if len(m.vertices) == 4]
    assert len(line_meshes) >= 2
    assert all(m.z_index == 1 for m in meshes)