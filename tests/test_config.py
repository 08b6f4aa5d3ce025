import json

import pytest

from video2hltas.config import ConversionRequest, build_settings, load_request
from video2hltas.core import ConversionSettings, SelectionMode
from video2hltas.core.errors import ValidationError


def test_defaults_match_settings_defaults():
    assert build_settings() == ConversionSettings()


def test_zero_limits_mean_unlimited():
    request = ConversionRequest.model_validate({"max_dots": 0, "max_frames": 0})
    assert request.max_dots is None
    assert request.max_frames is None


def test_frametimes_stay_verbatim():
    request = ConversionRequest.model_validate({"frame_frametime": " 0.0333 "})
    assert request.frame_frametime == "0.0333"
    with pytest.raises(ValueError):
        ConversionRequest.model_validate({"frame_frametime": 0.0333})
    with pytest.raises(ValueError):
        ConversionRequest.model_validate({"slow_wait": "soon"})


def test_config_file_with_overrides(tmp_path):
    config_path = tmp_path / "settings.json"
    config_path.write_text(
        json.dumps({"mode": "canny", "max_dots": 240, "chained": False, "sigma": 2.0}),
        encoding="utf-8",
    )
    settings = build_settings(config_path, {"max_dots": 100, "mode": None})
    assert settings.mode is SelectionMode.CANNY
    assert settings.max_dots == 100
    assert settings.chained is False
    assert settings.sigma == 2.0


def test_unknown_keys_are_rejected(tmp_path):
    config_path = tmp_path / "settings.json"
    config_path.write_text(json.dumps({"scale": 0.5}), encoding="utf-8")
    with pytest.raises(ValidationError):
        load_request(config_path)


def test_missing_config_file(tmp_path):
    with pytest.raises(ValidationError):
        load_request(tmp_path / "missing.json")


def test_inverted_thresholds_are_rejected():
    with pytest.raises(ValidationError):
        build_settings(overrides={"strong_threshold": 0.01, "weak_threshold": 0.2})


def test_output_dir_name_must_be_one_component():
    with pytest.raises(ValidationError):
        build_settings(overrides={"output_dir_name": "a/b"})
