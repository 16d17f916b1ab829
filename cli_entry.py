"""Entry point for PyInstaller EXE build of the CLI.

Usage (development)::

    python cli_entry.py [args]

Usage (build)::

    pyinstaller --onefile --name vpncore-kit --console cli_entry.py
"""
from vpncore_kit.cli import main

if __name__ == "__main__":
    main()
