import pytest

from pendelview.camera import (
    LERP_FACTOR,
    MAX_ZOOM,
    MIN_ZOOM,
    Camera,
    Transform,
    grid_lines,
    grid_spec,
    visible_bounds,
)

WIDTH, HEIGHT = 1200.0, 800.0


def _settle(camera, frames=400):
    for _ in range(frames):
        camera.relax()


# --- Relaxation ---


def test_relax_is_geometric():
    cam = Camera()
    cam.target_zoom, cam.target_x, cam.target_y = 3.0, 40.0, -20.0

    for n in range(1, 25):
        cam.relax()
        remaining = (1.0 - LERP_FACTOR) ** n
        assert 3.0 - cam.zoom == pytest.approx(2.0 * remaining)
        assert 40.0 - cam.pan_x == pytest.approx(40.0 * remaining)
        assert -20.0 - cam.pan_y == pytest.approx(-20.0 * remaining)


def test_relax_does_not_touch_target():
    cam = Camera(target_zoom=2.0, target_x=5.0, target_y=6.0)
    cam.relax()
    assert (cam.target_zoom, cam.target_x, cam.target_y) == (2.0, 5.0, 6.0)


def test_reset_restores_identity():
    cam = Camera()
    cam.apply_zoom_at(100.0, 50.0, -300.0, WIDTH, HEIGHT)
    cam.pan_by(25.0, -40.0)
    cam.relax()

    cam.reset()
    assert (cam.zoom, cam.pan_x, cam.pan_y) == (1.0, 0.0, 0.0)
    assert (cam.target_zoom, cam.target_x, cam.target_y) == (1.0, 0.0, 0.0)


def test_reset_target_eases_back():
    cam = Camera(zoom=4.0, pan_x=100.0, pan_y=-50.0, target_zoom=4.0, target_x=100.0, target_y=-50.0)
    cam.reset_target()
    assert cam.zoom == 4.0
    cam.relax()
    assert 1.0 < cam.zoom < 4.0
    _settle(cam)
    assert cam.zoom == pytest.approx(1.0)
    assert cam.pan_x == pytest.approx(0.0, abs=1e-9)
    assert cam.pan_y == pytest.approx(0.0, abs=1e-9)


# --- Zoom ---


def test_wheel_notch_factor():
    cam = Camera()
    cam.apply_zoom_at(WIDTH / 2, HEIGHT / 3, -100.0, WIDTH, HEIGHT)
    assert cam.target_zoom == pytest.approx(1.1)
    # zoom at the pivot leaves the pan alone
    assert cam.target_x == pytest.approx(0.0)
    assert cam.target_y == pytest.approx(0.0)
    # current camera only moves on relax
    assert cam.zoom == 1.0


@pytest.mark.parametrize("delta, bound", [(-5000.0, MAX_ZOOM), (5000.0, MIN_ZOOM)])
def test_zoom_is_clamped(delta, bound):
    cam = Camera()
    for _ in range(20):
        cam.apply_zoom_at(300.0, 200.0, delta, WIDTH, HEIGHT)
    assert cam.target_zoom == pytest.approx(bound)
    assert MIN_ZOOM <= cam.target_zoom <= MAX_ZOOM


@pytest.mark.parametrize(
    "cursor, delta",
    [((700.0, 150.0), -120.0), ((10.0, 790.0), 240.0), ((600.0, 266.0), -53.0), ((1199.0, 0.0), -1000.0)],
)
def test_zoom_keeps_world_point_under_cursor(cursor, delta):
    cam = Camera(zoom=1.7, pan_x=-35.0, pan_y=80.0, target_zoom=1.7, target_x=-35.0, target_y=80.0)
    world = cam.target_transform(WIDTH, HEIGHT).to_world(*cursor)

    cam.apply_zoom_at(cursor[0], cursor[1], delta, WIDTH, HEIGHT)
    sx, sy = cam.target_transform(WIDTH, HEIGHT).to_screen(*world)
    assert sx == pytest.approx(cursor[0])
    assert sy == pytest.approx(cursor[1])

    # once the rendered camera has caught up the point is back under the cursor
    _settle(cam)
    sx, sy = cam.transform(WIDTH, HEIGHT).to_screen(*world)
    assert sx == pytest.approx(cursor[0], abs=1e-6)
    assert sy == pytest.approx(cursor[1], abs=1e-6)


def test_zoom_percent():
    cam = Camera(zoom=1.234)
    assert cam.zoom_percent == 123


# --- Pan ---


def test_pan_moves_target_and_current_together():
    cam = Camera()
    cam.pan_by(12.0, -7.0)
    assert (cam.pan_x, cam.pan_y) == (12.0, -7.0)
    assert (cam.target_x, cam.target_y) == (12.0, -7.0)
    cam.relax()
    assert (cam.pan_x, cam.pan_y) == (12.0, -7.0)


# --- Transform ---


def test_transform_round_trip():
    t = Camera(zoom=2.5, pan_x=30.0, pan_y=-10.0).transform(WIDTH, HEIGHT)
    assert t == Transform(2.5, 630.0, HEIGHT / 3 - 10.0)
    assert t.to_world(*t.to_screen(13.0, -42.0)) == pytest.approx((13.0, -42.0))


def test_pivot_is_one_third_down():
    t = Camera().transform(WIDTH, HEIGHT)
    assert t.to_screen(0.0, 0.0) == pytest.approx((600.0, 800.0 / 3))


# --- Grid ---


@pytest.mark.parametrize(
    "zoom, minor",
    [(1.0, 100.0), (2.0, 10.0), (0.5, 100.0), (0.2, 100.0), (0.1, 1000.0), (20.0, 1.0), (55.0, 1.0)],
)
def test_grid_spec(zoom, minor):
    spec = grid_spec(zoom)
    assert spec.minor == pytest.approx(minor)
    assert spec.major == pytest.approx(10.0 * minor)


def test_grid_spacing_on_screen_stays_within_a_decade():
    zoom = MIN_ZOOM
    while zoom <= MAX_ZOOM:
        on_screen = grid_spec(zoom).minor * zoom
        assert 10.0 * (1 - 1e-9) <= on_screen <= 100.0 * (1 + 1e-9)
        zoom *= 1.07


def test_visible_bounds_identity_camera():
    b = visible_bounds(Camera().transform(WIDTH, HEIGHT), WIDTH, HEIGHT)
    assert b.left == pytest.approx(-600.0)
    assert b.right == pytest.approx(600.0)
    assert b.top == pytest.approx(-800.0 / 3)
    assert b.bottom == pytest.approx(1600.0 / 3)


def test_visible_bounds_zoomed_and_panned():
    cam = Camera(zoom=2.0, pan_x=100.0, pan_y=0.0)
    b = visible_bounds(cam.transform(WIDTH, HEIGHT), WIDTH, HEIGHT)
    assert b.left == pytest.approx((-600.0 - 100.0) / 2.0)
    assert b.right == pytest.approx((600.0 - 100.0) / 2.0)


def test_grid_lines_snap_outward():
    assert grid_lines(-250.0, 250.0, 100.0) == [-300.0, -200.0, -100.0, 0.0, 100.0, 200.0, 300.0]


def test_grid_lines_exact_multiples():
    assert grid_lines(0.0, 30.0, 10.0) == [0.0, 10.0, 20.0, 30.0]
