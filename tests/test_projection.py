import pytest

from video2hltas.core import ConversionSettings
from video2hltas.core.hltas_writer import format_angle
from video2hltas.core.projection import project, project_all


def test_center_maps_to_origin_for_any_grid():
    settings = ConversionSettings()
    for width, height in [(1, 1), (2, 2), (3, 5), (160, 90), (17, 4)]:
        pitch, yaw = project((width, height), width // 2, height // 2, settings)
        assert pitch == settings.starting_pitch
        assert yaw == settings.starting_yaw


def test_yaw_is_linear_in_horizontal_offset():
    settings = ConversionSettings()
    dims = (160, 90)
    _, yaw_one = project(dims, 80 + 10, 45, settings)
    _, yaw_two = project(dims, 80 + 20, 45, settings)
    delta_one = yaw_one - settings.starting_yaw
    delta_two = yaw_two - settings.starting_yaw
    assert delta_two == pytest.approx(2 * delta_one)
    # 10 grid pixels of 160 span 80 screen pixels
    assert delta_one == pytest.approx(10 / 160 * 1280 * settings.angle_per_pixel)


def test_pitch_is_inverted_against_image_y():
    settings = ConversionSettings(starting_pitch=0.0)
    above, _ = project((10, 10), 5, 0, settings)
    below, _ = project((10, 10), 5, 9, settings)
    assert above > 0 > below


def test_horizontal_offset_leaves_pitch_untouched():
    settings = ConversionSettings()
    pitch, yaw = project((10, 10), 0, 5, settings)
    assert pitch == settings.starting_pitch
    assert yaw < settings.starting_yaw


def test_project_all_keeps_order(small_settings):
    angles = project_all((2, 2), [(0, 0), (0, 1), (1, 0), (1, 1)], small_settings)
    assert angles == [(50.0, 40.0), (0.0, 40.0), (50.0, 90.0), (0.0, 90.0)]


def test_center_renders_configured_origin_text():
    settings = ConversionSettings()
    pitch, yaw = project((160, 90), 80, 45, settings)
    assert format_angle(pitch) == "-0.022"
    assert format_angle(yaw) == "90.197754"
