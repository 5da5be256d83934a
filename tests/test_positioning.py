import math

import pytest

from impressflow.exceptions import PositioningError, UnknownLayoutError
from impressflow.positioning import (
    CascadeConfig,
    GridConfig,
    LayoutName,
    LineConfig,
    SphereConfig,
    SpiralConfig,
    ZoomConfig,
    calculate_line_positions,
    calculate_positions,
    coerce_config,
    default_config,
    get_positioner,
    is_valid_layout,
    layout_names,
    line_config_for,
    overview_position,
    position_of,
)
from impressflow.slide_models import IDENTITY_POSITION, Direction, Position


INDEX_LAYOUTS = [name for name in LayoutName if name is not LayoutName.LINE]


@pytest.mark.parametrize("layout", list(LayoutName))
@pytest.mark.parametrize("total", [1, 2, 7, 13])
def test_batch_returns_one_pose_per_slide(layout, total):
    assert len(calculate_positions(layout, total)) == total


@pytest.mark.parametrize("layout", INDEX_LAYOUTS)
def test_batch_matches_single_pose(layout):
    total = 9
    batch = calculate_positions(layout, total)

    assert batch == [position_of(layout, index, total) for index in range(total)]


def test_zero_slides_give_no_poses():
    assert calculate_positions("spiral", 0) == []


def test_negative_total_is_rejected():
    with pytest.raises(PositioningError):
        calculate_positions("grid", -1)


def test_position_of_checks_range():
    with pytest.raises(PositioningError):
        position_of("grid", -1, 3)
    with pytest.raises(PositioningError):
        position_of("grid", 0, 0)


def test_position_of_accepts_index_past_total():
    assert position_of("cascade", 150, 10).scale == 0.5
    assert position_of("grid", 5, 3) == Position(x=2200, y=1400)


def test_sphere_index_must_be_within_total():
    with pytest.raises(PositioningError):
        position_of("sphere", 4, 4)


def test_unknown_layout_raises_with_available_names():
    with pytest.raises(UnknownLayoutError) as excinfo:
        calculate_positions("helix", 3)

    assert excinfo.value.layout == "helix"
    assert "spiral" in excinfo.value.available
    assert isinstance(excinfo.value, ValueError)
    assert str(excinfo.value).startswith("unknown_layout: ")


def test_layout_names_lists_every_algorithm():
    assert layout_names() == [
        "spiral",
        "grid",
        "herringbone",
        "zoom",
        "sphere",
        "cascade",
        "line",
    ]


def test_is_valid_layout():
    assert is_valid_layout("sphere")
    assert is_valid_layout(LayoutName.LINE)
    assert not is_valid_layout("helix")


def test_spiral_radius_grows():
    positions = calculate_positions("spiral", 12, SpiralConfig(radius_increment=1))
    radii = [math.hypot(position.x, position.y) for position in positions]

    assert all(later > earlier for earlier, later in zip(radii, radii[1:]))


def test_spiral_first_slide():
    position = position_of("spiral", 0, 3)

    assert position.x == pytest.approx(1000)
    assert position.y == pytest.approx(0)
    assert position.rotate_z == 0


def test_spiral_rotation_wraps():
    position = position_of("spiral", 9, 10)

    assert position.rotate_z == pytest.approx(45)


def test_spiral_negative_angle_keeps_its_sign():
    position = position_of("spiral", 1, 2, SpiralConfig(angle_increment=-45))

    assert position.rotate_z == pytest.approx(-45)
    assert position_of("spiral", 9, 10, {"angleIncrement": -45}).rotate_z == pytest.approx(-45)


def test_grid_wraps_rows():
    positions = calculate_positions("grid", 6, GridConfig(columns=4))

    assert positions[4].x == positions[0].x
    assert positions[4].y > positions[0].y
    assert positions[5] == Position(x=2200, y=1400)


def test_grid_rejects_zero_columns():
    with pytest.raises(PositioningError):
        GridConfig(columns=0)


def test_herringbone_alternates():
    positions = calculate_positions("herringbone", 8)

    for earlier, later in zip(positions, positions[1:]):
        assert earlier.y * later.y < 0
    for position in positions:
        assert (position.y > 0) == (position.rotate_z > 0)
    assert positions[3].x == 3 * 1800


def test_zoom_in_grows_and_out_shrinks():
    zoom_in = calculate_positions("zoom", 5)
    zoom_out = calculate_positions("zoom", 5, ZoomConfig(direction="out"))

    assert all(b.scale > a.scale for a, b in zip(zoom_in, zoom_in[1:]))
    assert all(b.scale < a.scale for a, b in zip(zoom_out, zoom_out[1:]))
    assert zoom_in[2].scale == pytest.approx(9)
    assert zoom_in[2].z == -6000
    assert zoom_in[0].scale == 1


def test_zoom_rejects_non_positive_multiplier():
    with pytest.raises(PositioningError):
        ZoomConfig(scale_multiplier=0)


@pytest.mark.parametrize("total", [1, 2, 5, 50])
def test_sphere_points_lie_on_radius(total):
    config = SphereConfig(radius=2500)

    for position in calculate_positions("sphere", total, config):
        distance = math.sqrt(position.x ** 2 + position.y ** 2 + position.z ** 2)
        assert distance == pytest.approx(2500)


def test_sphere_uses_golden_angle():
    position = position_of("sphere", 1, 4)

    theta = math.pi * (1 + math.sqrt(5))
    assert position.rotate_y == pytest.approx(math.degrees(theta))


def test_cascade_scale_floor():
    assert position_of("cascade", 100, 101).scale == 0.5
    assert position_of("cascade", 10, 11).scale == pytest.approx(0.8)


def test_cascade_geometry():
    position = position_of("cascade", 2, 3, CascadeConfig())

    assert position == Position(
        x=3200, y=1600, z=-400, rotate_x=5, rotate_z=10, scale=pytest.approx(0.96)
    )


def test_line_walk_snakes_on_down_markers():
    config = LineConfig(directions=("right", "right", "down", "right", "right"))

    positions = calculate_line_positions(5, config)

    assert [(position.x, position.y) for position in positions] == [
        (0, 0),
        (2200, 0),
        (4400, 0),
        (4400, 1400),
        (2200, 1400),
    ]


def test_line_without_directions_runs_right():
    positions = calculate_positions("line", 3)

    assert [position.x for position in positions] == [0, 2200, 4400]
    assert all(position.y == 0 for position in positions)


def test_line_single_pose_replays_walk():
    config = LineConfig(directions=(Direction.DOWN, Direction.RIGHT))

    assert position_of("line", 2, 3, config) == calculate_positions("line", 3, config)[2]


def test_line_config_normalizes_directions():
    config = line_config_for(["down", Direction.RIGHT, "sideways"])

    assert config.directions == (Direction.DOWN, Direction.RIGHT, Direction.RIGHT)
    assert config.to_dict()["directions"] == ["down", "right", "right"]


def test_coerce_config_accepts_camel_case_mapping():
    config = coerce_config("grid", {"columns": 3, "cellWidth": 100, "unknown": 1})

    assert config == GridConfig(columns=3, cell_width=100)


def test_coerce_config_keeps_defaults_for_missing_keys():
    config = coerce_config("spiral", {"angleIncrement": 90, "startRadius": None})

    assert config.angle_increment == 90
    assert config.start_radius == 1000


def test_coerce_config_rejects_other_types():
    with pytest.raises(PositioningError):
        coerce_config("grid", SpiralConfig())


def test_default_config_and_positioner():
    assert default_config("cascade") == CascadeConfig()
    assert default_config(LayoutName.ZOOM).direction == "in"
    assert get_positioner("grid")(5, 6, GridConfig()) == Position(x=2200, y=1400)


def test_overview_of_nothing_is_identity():
    assert overview_position([]) == IDENTITY_POSITION
    assert overview_position([]).to_dict() == {
        "x": 0.0,
        "y": 0.0,
        "z": 0.0,
        "rotateX": 0.0,
        "rotateY": 0.0,
        "rotateZ": 0.0,
        "scale": 1.0,
    }


def test_overview_is_flat_centroid():
    positions = [
        Position(x=0, y=0, z=-500, rotate_z=30),
        Position(x=100, y=300, z=200),
    ]

    overview = overview_position(positions, scale=10)

    assert overview == Position(x=50, y=150, z=0, scale=10)
