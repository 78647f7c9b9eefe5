import pytest

from thrivesim import hex as hexgrid

COORDS = [(q, r) for q in range(-6, 7) for r in range(-6, 7)]


def _distance(cube):
    return max(abs(c) for c in cube)


def test_hex_size_is_default():
    assert hexgrid.get_hex_size() == hexgrid.DEFAULT_HEX_SIZE == 0.75


@pytest.mark.parametrize("q,r", COORDS)
def test_cartesian_round_trip(q, r):
    x, y, z = hexgrid.axial_to_cartesian(q, r)
    assert y == 0
    assert hexgrid.cartesian_to_axial(x, z) == (q, r)


def test_origin_maps_to_origin():
    assert hexgrid.axial_to_cartesian(0, 0) == (0.0, 0.0, 0.0)


@pytest.mark.parametrize("q,r", COORDS)
def test_cube_coordinates_sum_to_zero(q, r):
    cube = hexgrid.axial_to_cube(q, r)
    assert sum(cube) == 0
    assert hexgrid.cube_to_axial(*cube) == (q, r)


def test_cube_hex_round_keeps_integer_cubes():
    for q, r in COORDS:
        cube = hexgrid.axial_to_cube(q, r)
        assert hexgrid.cube_hex_round(*map(float, cube)) == cube


def test_cube_hex_round_result_is_valid_cube():
    for x, y in [(0.3, 0.4), (1.6, -0.2), (-2.4, 1.1), (0.49, 0.49)]:
        rounded = hexgrid.cube_hex_round(x, y, -(x + y))
        assert sum(rounded) == 0


def test_cube_hex_round_near_integer_cube():
    assert hexgrid.cube_hex_round(1.1, -2.05, 0.95) == (1, -2, 1)


@pytest.mark.parametrize("q,r", COORDS + [(255, -255), (-255, 255)])
def test_encode_decode_round_trip(q, r):
    assert hexgrid.decode_axial(hexgrid.encode_axial(q, r)) == (q, r)


def test_encode_is_unique():
    encoded = {hexgrid.encode_axial(q, r) for q, r in COORDS}
    assert len(encoded) == len(COORDS)


@pytest.mark.parametrize("q,r", [(256, 0), (0, 256), (-256, 0), (0, -300)])
def test_encode_out_of_range(q, r):
    with pytest.raises(ValueError):
        hexgrid.encode_axial(q, r)


@pytest.mark.parametrize("q,r", COORDS)
def test_rotation_preserves_distance(q, r):
    rotated = hexgrid.rotate_axial(q, r)
    assert _distance(hexgrid.axial_to_cube(*rotated)) == _distance(
        hexgrid.axial_to_cube(q, r)
    )


@pytest.mark.parametrize("q,r", COORDS)
def test_six_rotations_are_identity(q, r):
    assert hexgrid.rotate_axial_n_times(q, r, 6) == (q, r)
    assert hexgrid.rotate_axial_n_times(q, r, 0) == (q, r)


def test_rotate_n_times_matches_repeated_rotation():
    q, r = 3, -1
    expected = (q, r)
    for n in range(1, 13):
        expected = hexgrid.rotate_axial(*expected)
        assert hexgrid.rotate_axial_n_times(q, r, n) == expected


def test_rotate_unit_hex():
    assert hexgrid.rotate_axial(1, 0) == (0, 1)


@pytest.mark.parametrize("q,r", COORDS)
def test_flip_twice_is_identity(q, r):
    assert hexgrid.flip_horizontally(*hexgrid.flip_horizontally(q, r)) == (q, r)


def test_flip_preserves_distance():
    for q, r in COORDS:
        flipped = hexgrid.flip_horizontally(q, r)
        assert _distance(hexgrid.axial_to_cube(*flipped)) == _distance(
            hexgrid.axial_to_cube(q, r)
        )