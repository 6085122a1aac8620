"""
Application Constants.
Stores default values for UI configuration and magic numbers.
"""

from rerail import __version__

# Window Configuration
WINDOW_TITLE = f"Rerail Editor - v{__version__}"
DEFAULT_WINDOW_WIDTH = 1280
DEFAULT_WINDOW_HEIGHT = 800
WINDOW_SETTINGS_KEY = "Rerail"
WINDOW_SETTINGS_APP = "RerailEditor"
SETTINGS_GEOMETRY_KEY = "geometry"
SETTINGS_WINDOW_STATE_KEY = "windowState"

# Dock Object Names
DOCK_OBJ_RAILWAYS = "RailwayListDock"

# Dock Titles
DOCK_TITLE_RAILWAYS = "Railways"

# Toolbar
TOOLBAR_OBJ_MODES = "ModeToolbar"
TOOLBAR_TITLE_MODES = "Tools"

# Tool mode hotkeys
HOTKEY_PAN = "M"
HOTKEY_EDIT_RAILWAY = "R"
HOTKEY_EDIT_STATION = "S"
HOTKEY_EDIT_BORDERS = "B"
HOTKEY_NEW_RAILWAY = "N"

# Status Messages
STATUS_MODE_REFUSED = "Finish or cancel (Esc) the current gesture first"
STATUS_MESSAGE_TIMEOUT_MS = 3000

# Confirmation prompts
CONFIRM_DELETE_RAILWAY = "Delete railway '{name}'?"
