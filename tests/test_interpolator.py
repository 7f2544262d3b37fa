import numpy as np

from tmap_lib.rendering.interpolator import fill_corner_angles

from helpers import SINGLE_WALL


def test_fills_unset_cluster_members_with_mean():
    angle = np.zeros((8, 8), dtype=np.int16)
    angle[3, 3] = 90
    angle[4, 4] = 180

    filled = fill_corner_angles(angle, rows=2, cols=2, tile_size=4)

    assert filled == 2
    assert angle[3, 4] == 135
    assert angle[4, 3] == 135
    assert angle[3, 3] == 90 and angle[4, 4] == 180


def test_cluster_without_known_angles_is_untouched():
    angle = np.zeros((8, 8), dtype=np.int16)
    assert fill_corner_angles(angle, rows=2, cols=2, tile_size=4) == 0
    assert not angle.any()


def test_single_wall_corners(classify):
    angle = classify(SINGLE_WALL).angle
    fill_corner_angles(angle, rows=3, cols=3, tile_size=4)

    assert angle[3, 3] == (180 + 90 + 180) // 3
    assert angle[3, 8] == (180 + 180 + 270) // 3
    assert angle[8, 8] == (360 % 360 + 270 + 360 % 360) // 3


def test_north_angles_count_as_zero_in_the_mean(classify):
    angle = classify(SINGLE_WALL).angle
    fill_corner_angles(angle, rows=3, cols=3, tile_size=4)

    # Cluster holds 90 and two 360s, averaged as 90, 0, 0.
    assert angle[8, 3] == 30
