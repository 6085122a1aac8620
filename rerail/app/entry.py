"""
Application Entry Point.

This module contains the main() function and cleanup logic for the application.
Separated from MainWindow to allow for easier testing.
"""

import sys

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Imports after load_dotenv() to allow modules to access environment variables
from PySide6.QtCore import Qt  # noqa: E402
from PySide6.QtWidgets import QApplication  # noqa: E402

from rerail.app.constants import WINDOW_SETTINGS_APP, WINDOW_SETTINGS_KEY  # noqa: E402
from rerail.core.editor_config import EditorConfig  # noqa: E402
from rerail.core.logging_config import (  # noqa: E402
    get_logger,
    setup_logging,
    shutdown_logging,
)
from rerail.core.railway_map import RailwayMap  # noqa: E402
from rerail.core.sample_map import build_sample_map  # noqa: E402

logger = get_logger(__name__)


def main() -> None:
    """Application entry point."""
    from rerail.app.main_window import MainWindow

    config = EditorConfig.from_env()
    setup_logging(debug_mode=config.debug, log_dir=config.log_dir)

    try:
        logger.info("Starting Application...")

        QApplication.setHighDpiScaleFactorRoundingPolicy(
            Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
        )

        app = QApplication(sys.argv)
        app.setOrganizationName(WINDOW_SETTINGS_KEY)
        app.setApplicationName(WINDOW_SETTINGS_APP)

        if "--reset-settings" in sys.argv:
            from PySide6.QtCore import QSettings

            logger.info("Resetting application settings")
            settings = QSettings(WINDOW_SETTINGS_KEY, WINDOW_SETTINGS_APP)
            settings.clear()
            settings.sync()

        demo = config.demo_map or "--demo" in sys.argv
        snapshot = build_sample_map() if demo else RailwayMap.empty()
        window = MainWindow(snapshot=snapshot, config=config)
        window.show()

        logger.info("Entering Event Loop...")
        exit_code = app.exec()
        cleanup_app()
        sys.exit(exit_code)
    except Exception:
        logger.exception("CRITICAL: Unhandled exception in main application loop")
        sys.exit(1)


def cleanup_app() -> None:
    """Performs global cleanup operations before exit."""
    logger.info("Shutting down logging.")
    shutdown_logging()
