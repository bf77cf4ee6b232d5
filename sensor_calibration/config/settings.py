"""
Configuration Management

Handles tool settings, configuration loading from YAML or JSON,
validation, and environment variable overrides.
"""

import math
import os
import yaml
import json
import logging
from typing import Dict, Any, Optional
from dataclasses import dataclass, asdict
from pathlib import Path

DEFAULT_CONFIG_FILE = str(Path(__file__).parent / "default_config.yaml")
CONFIG_ENV_VAR = "SENSOR_CAL_CONFIG"


@dataclass
class CalibrationConfig:
    """Calibration engine configuration."""
    degeneracy_tolerance: float = 1e-10
    display_precision: int = 4  # digits after the decimal point on screen


@dataclass
class ShellConfig:
    """Interactive menu configuration."""
    pause_after_action: bool = True
    min_points: int = 2


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_file: str = "sensor_calibration.log"
    max_file_size_mb: float = 1.0
    backup_count: int = 3
    console_output: bool = False
    detailed_format: bool = False


class Settings:
    """
    Configuration manager for the calibration tool.

    Sections are plain dataclasses; values from a config file or the
    environment overwrite the defaults field by field.
    """

    SECTIONS = ('calibration', 'shell', 'logging')

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize settings manager.

        Args:
            config_file: Path to configuration file. Defaults to the file
                named by SENSOR_CAL_CONFIG, then the packaged defaults.
        """
        if config_file is None:
            config_file = os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE)
        self.config_file = config_file
        self.logger = logging.getLogger(__name__)

        self.calibration = CalibrationConfig()
        self.shell = ShellConfig()
        self.logging = LoggingConfig()

    def load_config(self, config_file: str = None) -> bool:
        """
        Load configuration from file.

        A missing file is not an error: the defaults stay in place.

        Args:
            config_file: Configuration file path (optional)

        Returns:
            bool: True if the resulting configuration is usable
        """
        if config_file:
            self.config_file = config_file

        try:
            if not os.path.exists(self.config_file):
                self.logger.warning(f"Config file {self.config_file} not found, using defaults")
                return True

            if self.config_file.endswith('.yaml') or self.config_file.endswith('.yml'):
                with open(self.config_file, 'r') as f:
                    config_data = yaml.safe_load(f) or {}
            elif self.config_file.endswith('.json'):
                with open(self.config_file, 'r') as f:
                    config_data = json.load(f)
            else:
                self.logger.error(f"Unsupported config file format: {self.config_file}")
                return False

            if not self._load_section_config(config_data):
                return False
            if not self._validate_config():
                return False

            self.logger.info(f"Configuration loaded from {self.config_file}")
            return True

        except (OSError, ValueError, yaml.YAMLError) as e:
            # ValueError covers JSON syntax errors and undecodable bytes
            self.logger.error(f"Failed to load configuration: {e}")
            return False

    def save_config(self, config_file: str = None) -> bool:
        """
        Save current configuration to file.

        Args:
            config_file: Configuration file path (optional)

        Returns:
            bool: True if saved successfully
        """
        if config_file:
            self.config_file = config_file

        try:
            config_dir = os.path.dirname(self.config_file)
            if config_dir:
                os.makedirs(config_dir, exist_ok=True)

            config_data = self.to_dict()

            if self.config_file.endswith('.yaml') or self.config_file.endswith('.yml'):
                with open(self.config_file, 'w') as f:
                    yaml.dump(config_data, f, default_flow_style=False, indent=2)
            elif self.config_file.endswith('.json'):
                with open(self.config_file, 'w') as f:
                    json.dump(config_data, f, indent=2)
            else:
                self.logger.error(f"Unsupported config file format: {self.config_file}")
                return False

            self.logger.info(f"Configuration saved to {self.config_file}")
            return True

        except OSError as e:
            self.logger.error(f"Failed to save configuration: {e}")
            return False

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'calibration': asdict(self.calibration),
            'shell': asdict(self.shell),
            'logging': asdict(self.logging)
        }

    def load_environment_overrides(self) -> bool:
        """
        Load configuration overrides from environment variables.

        Returns:
            bool: True if the overridden configuration is valid
        """
        try:
            if 'SENSOR_CAL_LOG_LEVEL' in os.environ:
                self.logging.level = os.environ['SENSOR_CAL_LOG_LEVEL'].upper()
            if 'SENSOR_CAL_LOG_FILE' in os.environ:
                self.logging.log_file = os.environ['SENSOR_CAL_LOG_FILE']
            if 'SENSOR_CAL_TOLERANCE' in os.environ:
                self.calibration.degeneracy_tolerance = float(os.environ['SENSOR_CAL_TOLERANCE'])
            if 'SENSOR_CAL_NO_PAUSE' in os.environ:
                no_pause = os.environ['SENSOR_CAL_NO_PAUSE'].lower() in ('true', '1', 'yes', 'on')
                self.shell.pause_after_action = not no_pause
        except ValueError as e:
            self.logger.error(f"Invalid environment override: {e}")
            return False

        self.logger.info("Environment variable overrides applied")
        return self._validate_config()

    def _load_section_config(self, config_data: Any) -> bool:
        """
        Load configuration data into sections.

        Returns:
            bool: False if the data or one of its sections is not a mapping
        """
        if not isinstance(config_data, dict):
            self.logger.error(f"Configuration in {self.config_file} is not a mapping")
            return False

        well_formed = True

        for section_name in self.SECTIONS:
            section_data = config_data.get(section_name)
            if not section_data:
                continue
            if not isinstance(section_data, dict):
                self.logger.error(f"Section '{section_name}' is not a mapping")
                well_formed = False
                continue

            section = getattr(self, section_name)
            for key, value in section_data.items():
                if hasattr(section, key):
                    setattr(section, key, value)
                else:
                    self.logger.warning(f"Unknown setting {section_name}.{key} ignored")

        return well_formed

    def _validate_config(self) -> bool:
        """Validate configuration values."""
        try:
            if not _is_number(self.calibration.degeneracy_tolerance):
                raise ValueError("Degeneracy tolerance must be a number")
            if not 0 < self.calibration.degeneracy_tolerance < math.inf:
                raise ValueError("Degeneracy tolerance must be positive and finite")
            if not _is_integer(self.calibration.display_precision):
                raise ValueError("Display precision must be an integer")
            if not 0 <= self.calibration.display_precision <= 15:
                raise ValueError("Display precision must be between 0 and 15")

            if not _is_integer(self.shell.min_points):
                raise ValueError("Minimum point count must be an integer")
            if self.shell.min_points < 2:
                raise ValueError("At least 2 calibration points are required")

            if not isinstance(self.logging.level, str):
                raise ValueError(f"Log level must be a name, got {self.logging.level!r}")
            if self.logging.level.upper() not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
                raise ValueError(f"Unknown log level: {self.logging.level}")
            if not isinstance(self.logging.log_file, str):
                raise ValueError("Log file must be a path")
            if not _is_number(self.logging.max_file_size_mb) or self.logging.max_file_size_mb <= 0:
                raise ValueError("Max log file size must be positive")
            if not _is_integer(self.logging.backup_count) or self.logging.backup_count < 0:
                raise ValueError("Log backup count must be a non-negative integer")

            return True

        except (TypeError, ValueError) as e:
            self.logger.error(f"Configuration validation failed: {e}")
            return False


def _is_integer(value: Any) -> bool:
    # bool is an int subclass but never a valid count
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
