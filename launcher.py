"""
Rerail Editor Launcher.
Entry point for running the editor from a source checkout or a frozen build.
"""

from rerail.app.entry import main

if __name__ == "__main__":
    main()
