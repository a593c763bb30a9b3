import os
import sys
from pathlib import Path


def get_platform():
    if sys.platform == "darwin":
        return "osx"
    elif sys.platform.startswith("linux"):
        return "linux"
    elif sys.platform.startswith("win"):
        return "windows"
    else:
        return "unknown"


def get_data_directory(package: str = "boardsync") -> Path:
    """
    Returns the writable data directory for the application.
    Windows: %LOCALAPPDATA%/boardsync
    Linux/Mac: ~/.config/boardsync
    """
    if get_platform() == "windows":
        base_path = os.environ.get("LOCALAPPDATA") or str(Path.home() / "AppData" / "Local")
        return Path(base_path) / package
    return Path.home() / ".config" / package
