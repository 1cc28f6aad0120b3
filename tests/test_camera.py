import pytest

from lovehop.camera import Camera
from lovehop.config import CAMERA_START_Y, TILE, WINDOW_H


def test_target_follows_new_records_only():
    cam = Camera()
    assert not cam.record_progress(0)
    assert cam.target_y == CAMERA_START_Y

    assert cam.record_progress(-1)
    assert cam.target_y == pytest.approx(-1 * TILE - 0.7 * WINDOW_H)

    target = cam.target_y
    assert not cam.record_progress(-1)
    assert not cam.record_progress(0)
    assert cam.target_y == target


def test_converges_without_overshoot():
    cam = Camera()
    cam.record_progress(-5)

    previous = cam.y
    for _ in range(300):
        cam.update()
        assert cam.y <= previous
        assert cam.y >= cam.target_y
        previous = cam.y

    assert cam.y == pytest.approx(cam.target_y, abs=1e-6)


def test_target_only_moves_forward():
    cam = Camera()
    targets = []
    for row in [-1, -2, -1, 0, -3, -2, -6]:
        cam.record_progress(row)
        targets.append(cam.target_y)
    assert targets == sorted(targets, reverse=True)
    assert cam.max_progress == -6


def test_reset():
    cam = Camera()
    cam.record_progress(-40)
    cam.update()
    cam.reset()
    assert cam.y == CAMERA_START_Y
    assert cam.target_y == CAMERA_START_Y
    assert cam.max_progress == 0
