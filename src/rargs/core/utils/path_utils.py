# src/rargs/core/utils/path_utils.py
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for retrieving the package and user paths rargs reads from.
    """

    # --- Package specific paths

    @staticmethod
    def get_package_root() -> Path:
        """Returns the directory of the installed 'rargs' package."""
        return Path(__file__).resolve().parents[2]

    @staticmethod
    def get_default_settings_file() -> Path:
        return PathUtils.get_package_root() / "settings.json"

    # --- User specific paths ---

    @staticmethod
    def get_user_config_dir() -> Path:
        """
        Returns the path to the user's .rargs config directory.
        (e.g., ~/.rargs/)
        """
        return Path.home() / ".rargs"

    @staticmethod
    def get_user_settings_file() -> Path:
        return PathUtils.get_user_config_dir() / "settings.json"
