from pathlib import Path

from video2hltas.core import ConversionSettings
from video2hltas.core.hltas_writer import (
    CLEAR_DISABLE,
    CLEAR_ENABLE,
    assemble_script,
    delay_line,
    encode_frame,
    format_angle,
    script_path_for,
)

ANGLES = [(1.5, 90.0), (2.0, 91.0), (-3.25, 89.5), (0.0, 90.0)]


def test_empty_frame_encodes_to_nothing():
    assert encode_frame([], ConversionSettings()) == ""
    assert encode_frame([], ConversionSettings(slow_draw=False)) == ""


def test_line_count_without_slow_draw():
    text = encode_frame(ANGLES, ConversionSettings(slow_draw=False))
    assert len(text.splitlines()) == len(ANGLES) + 1
    assert text.endswith("\n")


def test_line_count_with_slow_draw():
    settings = ConversionSettings(slow_draw=True)
    lines = encode_frame(ANGLES, settings).splitlines()
    assert len(lines) == 2 * len(ANGLES) + 1
    assert lines[1] == f"----------|------|------|{settings.slow_wait}|-|-|1|"


def test_clear_directives_by_position():
    lines = encode_frame(ANGLES, ConversionSettings(slow_draw=False)).splitlines()
    assert lines[0].endswith("|1|" + CLEAR_ENABLE)
    assert lines[1].endswith("|1|" + CLEAR_DISABLE)
    assert lines[2].endswith("|1|")
    assert lines[3].endswith("|1|")


def test_single_dot_only_clears():
    lines = encode_frame([(0.0, 90.0)], ConversionSettings(slow_draw=False)).splitlines()
    assert len(lines) == 2
    assert lines[0].endswith(CLEAR_ENABLE)
    assert CLEAR_DISABLE not in lines[1]


def test_view_change_line_layout():
    settings = ConversionSettings(slow_draw=False)
    first = encode_frame([(1.5, 90.0)], settings).splitlines()[0]
    assert first == f"----------|------|------|0.0000000001|90|1.5|1|{CLEAR_ENABLE}"


def test_delay_line_holds_origin_for_one_video_frame():
    settings = ConversionSettings()
    assert delay_line(settings) == "----------|------|------|0.04171|90.197754|-0.022|1"
    text = encode_frame(ANGLES, settings)
    assert text.splitlines()[-1] == delay_line(settings)


def test_format_angle_is_positional_float32():
    assert format_angle(90.0) == "90"
    assert format_angle(0.03125) == "0.03125"
    assert format_angle(90.197754) == "90.197754"
    assert format_angle(1e-10) == "0.0000000001"
    assert "e" not in format_angle(-123456.789)


def test_assemble_header_and_body():
    settings = ConversionSettings()
    body = encode_frame(ANGLES, settings)
    document = assemble_script(body, None, settings)
    assert document.startswith(
        "version 1\n"
        "hlstrafe_version 5\n"
        "load_command bxt_anglespeed_cap 0; gl_clear 1; bxt_force_clear 1; sv_zmax 1;\n"
        "frametime0ms 0.0000000001\n"
        "frames\n"
        "strafing vectorial\n"
        "target_yaw velocity_lock\n"
        "\n"
        "----------|------|------|0.0000000001|0|-|1\n"
    )
    assert document.endswith(body + "\n")
    assert "bxt_tas_loadscript" not in document


def test_assemble_links_next_script():
    settings = ConversionSettings()
    document = assemble_script("", 7, settings)
    assert document.endswith(
        '----------|------|------|0.0000000001|0|-|1|echo "frame 7"; bxt_tas_loadscript out/7.hltas'
    )


def test_assemble_uses_configured_directory_name():
    settings = ConversionSettings(output_dir_name="frames")
    assert assemble_script("", 3, settings).endswith("bxt_tas_loadscript frames/3.hltas")


def test_assemble_is_deterministic():
    settings = ConversionSettings()
    body = encode_frame(ANGLES, settings)
    assert assemble_script(body, 4, settings) == assemble_script(body, 4, settings)
    assert assemble_script(body, None, settings) == assemble_script(body, None, settings)


def test_script_path_uses_bare_index():
    assert script_path_for(Path("out"), 12) == Path("out") / "12.hltas"
