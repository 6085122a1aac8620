"""
Unit tests for EditorConfig.
"""

from rerail.core.editor_config import (
    DEFAULT_WORLD_ORIGIN,
    DRAG_THRESHOLD_PX,
    HIT_THRESHOLD_PX,
    EditorConfig,
)


def test_defaults_from_empty_environment():
    config = EditorConfig.from_env({})
    assert config == EditorConfig()
    assert config.hit_threshold_px == HIT_THRESHOLD_PX
    assert config.drag_threshold_px == DRAG_THRESHOLD_PX
    assert config.initial_top_x == DEFAULT_WORLD_ORIGIN
    assert config.log_dir == "logs"


def test_values_from_environment():
    config = EditorConfig.from_env(
        {
            "RERAIL_HIT_THRESHOLD": "14",
            "RERAIL_DRAG_THRESHOLD": "3",
            "RERAIL_TOP_X": "500",
            "RERAIL_TOP_Y": "-200",
            "RERAIL_ZOOM_LEVEL": "7",
            "RERAIL_DEBUG": "true",
            "RERAIL_DEMO_MAP": "1",
            "RERAIL_LOG_DIR": "/tmp/rerail-logs",
        }
    )
    assert config.hit_threshold_px == 14
    assert config.drag_threshold_px == 3
    assert (config.initial_top_x, config.initial_top_y) == (500, -200)
    assert config.initial_zoom_level == 7
    assert config.debug is True
    assert config.demo_map is True
    assert config.log_dir == "/tmp/rerail-logs"


def test_invalid_number_falls_back(caplog):
    config = EditorConfig.from_env({"RERAIL_HIT_THRESHOLD": "wide"})
    assert config.hit_threshold_px == HIT_THRESHOLD_PX
    assert "RERAIL_HIT_THRESHOLD" in caplog.text


def test_false_flags():
    config = EditorConfig.from_env({"RERAIL_DEBUG": "no", "RERAIL_DEMO_MAP": ""})
    assert config.debug is False
    assert config.demo_map is False
