"""
Sensor Calibration Tool - Application

Loads settings, configures logging and runs the interactive menu.
"""

import logging
import sys
from typing import Optional

from .config.settings import Settings
from .shell.menu import CalibrationShell
from .utils.logging_config import setup_logging


class SensorCalibrationTool:
    """Coordinates configuration, logging and the menu shell."""

    def __init__(self, config_file: Optional[str] = None):
        self.config_file = config_file
        self.logger = logging.getLogger(__name__)

        self.settings: Optional[Settings] = None
        self.shell: Optional[CalibrationShell] = None

    def initialize(self) -> bool:
        """
        Load configuration and set up logging.

        Invalid configuration is reported and replaced by defaults so the
        tool always starts.

        Returns:
            bool: True if the configured settings were used
        """
        self.settings = Settings(self.config_file)
        configured = self.settings.load_config() and self.settings.load_environment_overrides()
        if not configured:
            print(f"Warning: invalid configuration in {self.settings.config_file}, using defaults")
            self.settings = Settings(self.config_file)

        if not setup_logging(self.settings.logging):
            print("Warning: logging could not be set up")

        self.shell = CalibrationShell(self.settings)
        self.logger.info("Sensor calibration tool started")
        return configured

    def run(self) -> int:
        """Run the tool and return the process exit code."""
        if self.shell is None:
            self.initialize()

        try:
            return self.shell.run()
        except KeyboardInterrupt:
            self.logger.info("Received Ctrl+C, shutting down")
            print("\n\nExiting program. Goodbye!")
            return 0
        finally:
            self.logger.info("Sensor calibration tool stopped")


def main() -> int:
    """Console script entry point."""
    tool = SensorCalibrationTool()
    return tool.run()


if __name__ == "__main__":
    sys.exit(main())
