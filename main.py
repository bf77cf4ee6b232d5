"""
Sensor Calibration Tool - Launcher

Runs the interactive calibration menu from a source checkout without
installing the package.
"""

import sys
from pathlib import Path

# Add the current directory to Python path for imports
sys.path.insert(0, str(Path(__file__).parent))

from sensor_calibration.app import main


if __name__ == "__main__":
    sys.exit(main())
