"""
Editor Configuration Module.

Holds the tunable interaction parameters of the editor. Values can be
overridden from the environment (``RERAIL_*`` variables, optionally loaded
from a ``.env`` file by the application entry point).
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_WORLD_ORIGIN = 1_000_000_000
DEFAULT_ZOOM_LEVEL_INDEX = 5
HIT_THRESHOLD_PX = 10
DRAG_THRESHOLD_PX = 5

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class EditorConfig:
    """
    Interaction parameters for the map editor.

    Attributes:
        hit_threshold_px: Maximum pixel distance for hit-testing map features.
        drag_threshold_px: Manhattan distance in pixels after which a press
            on a station anchor counts as a drag rather than a click.
        initial_top_x: World X of the viewport's top-left corner at startup.
        initial_top_y: World Y of the viewport's top-left corner at startup.
        initial_zoom_level: Index into the zoom factor table at startup.
        debug: Enables DEBUG level logging.
        demo_map: Start with the bundled sample map instead of an empty one.
        log_dir: Directory for the rotating log file.
    """

    hit_threshold_px: int = HIT_THRESHOLD_PX
    drag_threshold_px: int = DRAG_THRESHOLD_PX
    initial_top_x: int = DEFAULT_WORLD_ORIGIN
    initial_top_y: int = DEFAULT_WORLD_ORIGIN
    initial_zoom_level: int = DEFAULT_ZOOM_LEVEL_INDEX
    debug: bool = False
    demo_map: bool = False
    log_dir: str = "logs"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        """
        Builds a configuration from ``RERAIL_*`` environment variables.

        Unparseable numeric values are logged and replaced by the default.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            EditorConfig: The resolved configuration.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        def _int(key: str, default: int) -> int:
            raw = env.get(key)
            if raw is None or raw == "":
                return default
            try:
                return int(raw)
            except ValueError:
                logger.warning(f"Ignoring invalid value for {key}: {raw!r}")
                return default

        def _bool(key: str, default: bool) -> bool:
            raw = env.get(key)
            if raw is None:
                return default
            return raw.strip().lower() in _TRUE_VALUES

        return cls(
            hit_threshold_px=_int("RERAIL_HIT_THRESHOLD", defaults.hit_threshold_px),
            drag_threshold_px=_int(
                "RERAIL_DRAG_THRESHOLD", defaults.drag_threshold_px
            ),
            initial_top_x=_int("RERAIL_TOP_X", defaults.initial_top_x),
            initial_top_y=_int("RERAIL_TOP_Y", defaults.initial_top_y),
            initial_zoom_level=_int("RERAIL_ZOOM_LEVEL", defaults.initial_zoom_level),
            debug=_bool("RERAIL_DEBUG", defaults.debug),
            demo_map=_bool("RERAIL_DEMO_MAP", defaults.demo_map),
            log_dir=env.get("RERAIL_LOG_DIR") or defaults.log_dir,
        )
