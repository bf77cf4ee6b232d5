"""
Interactive Calibration Menu

Text menu around the calibration engine. The shell owns the current
calibration record, collects input, and reports every error back to the
user before returning to the main menu.
"""

import logging
from typing import Callable, List, Optional

from ..calibration.engine import CalibrationRecord, DataPoint, fit, convert, fit_statistics
from ..calibration.errors import (
    CalibrationToolError, DegenerateInputError, FileOpenError,
    InsufficientPointsError, InvalidNumericInputError, NonFiniteFitError, ParseError
)
from ..calibration.storage import load_calibration, save_calibration
from ..config.settings import Settings
from .input_parsing import (
    MENU_OPTIONS, parse_menu_choice, parse_number, parse_point_count, wants_another
)

EXIT_OPTION = 5


class CalibrationShell:
    """
    Main menu loop for the sensor calibration tool.

    Input and output go through ``input_func`` and ``output_func`` so the
    loop can be driven from scripts and tests.
    """

    def __init__(self,
                 settings: Optional[Settings] = None,
                 input_func: Optional[Callable[[str], str]] = None,
                 output_func: Optional[Callable[..., None]] = None):
        """
        Initialize the shell.

        Args:
            settings: Tool settings, defaults when omitted
            input_func: Reads one line after showing a prompt
            output_func: Writes a line of output
        """
        self.settings = settings or Settings()
        self._input = input_func or input
        self._output = output_func or print
        self.logger = logging.getLogger(__name__)

        self.calibration = CalibrationRecord.unset()

        self._actions = {
            1: self.enter_calibration_data,
            2: self.load_calibration_from_file,
            3: self.convert_raw_reading,
            4: self.save_calibration_to_file,
        }

    @property
    def precision(self) -> int:
        return self.settings.calibration.display_precision

    def run(self) -> int:
        """
        Run the menu until the user exits or input ends.

        Returns:
            int: Process exit code, always 0
        """
        self._print("\n========================================")
        self._print("    SENSOR CALIBRATION TOOL")
        self._print("========================================\n")

        try:
            while self.run_once():
                pass
        except EOFError:
            self.logger.info("Input closed, leaving menu")

        self._print("\nExiting program. Goodbye!")
        return 0

    def run_once(self) -> bool:
        """
        Show the menu and handle one selection.

        Returns:
            bool: False when the user chose to exit
        """
        self.display_menu()
        text = self._input("\nChoose an option: ")

        try:
            choice = parse_menu_choice(text)
        except InvalidNumericInputError:
            self._print(f"\nInvalid input. Enter a number between "
                        f"{MENU_OPTIONS[0]} and {MENU_OPTIONS[-1]}.")
            self.pause_screen()
            return True

        if choice == EXIT_OPTION:
            return False

        action = self._actions.get(choice)
        if action is None:
            self._print(f"\nInvalid option. Choose between "
                        f"{MENU_OPTIONS[0]} and {MENU_OPTIONS[-1]}.")
            self.pause_screen()
            return True

        action()
        return True

    def display_menu(self):
        """Display the main menu options."""
        self._print("\n--- MAIN MENU ---")
        self._print("1. Enter new calibration data")
        self._print("2. Load existing calibration from file")
        self._print("3. Convert a raw reading")
        self._print("4. Save current calibration to file")
        self._print("5. Exit")

    def enter_calibration_data(self):
        """Collect data points and replace the calibration with a new fit."""
        min_points = self.settings.shell.min_points
        self._print("\n=== ENTER CALIBRATION DATA ===")

        count = self._read_value(
            f"Enter number of data points (minimum {min_points}): ",
            lambda text: parse_point_count(text, min_points),
            f"Invalid input. Enter an integer >= {min_points}."
        )

        points: List[DataPoint] = []
        for i in range(count):
            self._print(f"\nPoint {i + 1}:")
            reference = self._read_value("  Reference value: ", parse_number,
                                         "  Invalid input. Enter a number.")
            raw = self._read_value("  Raw reading: ", parse_number,
                                   "  Invalid input. Enter a number.")
            points.append(DataPoint(raw=raw, reference=reference))

        try:
            record = fit(points, tolerance=self.settings.calibration.degeneracy_tolerance)
        except (DegenerateInputError, NonFiniteFitError) as e:
            self._print(f"\nError: {e}")
            self.pause_screen()
            return

        self.calibration = record
        stats = fit_statistics(record, points)
        self.logger.info(f"Calibration fitted from {count} points: slope={record.slope}, "
                         f"offset={record.offset}, r2={stats.r_squared:.6f}")

        p = self.precision
        self._print("\n--- CALIBRATION RESULTS ---")
        self._print(f"Slope:  {record.slope:.{p}f}")
        self._print(f"Offset: {record.offset:.{p}f}")
        self._print(f"R²:     {stats.r_squared:.{p}f} ({stats.quality_grade})")
        self._print(f"RMSE:   {stats.rmse:.{p}f}")
        self._print("\nCalibration updated successfully.")
        self._print(f"Formula: {record.formula(p)}")

        self.pause_screen()

    def load_calibration_from_file(self):
        """Replace the calibration with one read from a file."""
        self._print("\n=== LOAD CALIBRATION ===")
        filename = self._input("Enter filename (e.g., calibration.txt): ")

        try:
            record = load_calibration(filename)
        except FileOpenError as e:
            self._print(f"\nError: {e}")
            self._print("Make sure the file exists in the current directory.")
            self.pause_screen()
            return
        except ParseError as e:
            self._print(f"\nError: {e}")
            self.pause_screen()
            return

        self.calibration = record

        p = self.precision
        self._print("\n--- LOADED CALIBRATION ---")
        self._print(f"Slope:  {record.slope:.{p}f}")
        self._print(f"Offset: {record.offset:.{p}f}")
        self._print(f"\nCalibration loaded successfully from '{filename}'")

        self.pause_screen()

    def convert_raw_reading(self):
        """Convert raw readings until the user declines another one."""
        self._print("\n=== CONVERT RAW READING ===")

        if not self.calibration.valid:
            self._report_no_calibration("No calibration loaded.")
            return

        p = self.precision
        self._print(f"Current calibration: Slope = {self.calibration.slope:.{p}f}, "
                    f"Offset = {self.calibration.offset:.{p}f}\n")

        while True:
            raw = self._read_value("Enter raw sensor reading: ", parse_number,
                                   "Invalid input. Enter a number.")
            real_value = convert(self.calibration, raw)
            self.logger.debug(f"Converted raw {raw} -> {real_value}")

            self._print(f"\nRaw Reading: {raw:.{p}f}")
            self._print(f"Real Value:  {real_value:.{p}f}\n")

            answer = self._input("Convert another reading? (y/n): ")
            self._print("")
            if not wants_another(answer):
                break

    def save_calibration_to_file(self):
        """Write the current calibration to a file."""
        self._print("\n=== SAVE CALIBRATION ===")

        if not self.calibration.valid:
            self._report_no_calibration("No calibration to save.")
            return

        filename = self._input("Enter filename to save (e.g., calibration.txt): ")

        try:
            save_calibration(self.calibration, filename)
        except CalibrationToolError as e:
            self._print(f"\nError: {e}")
            self.pause_screen()
            return

        p = self.precision
        self._print(f"\nCalibration saved successfully to '{filename}'")
        self._print(f"Slope:  {self.calibration.slope:.{p}f}")
        self._print(f"Offset: {self.calibration.offset:.{p}f}")

        self.pause_screen()

    def pause_screen(self):
        """Wait for Enter so the user can read the output."""
        if self.settings.shell.pause_after_action:
            self._input("\nPress Enter to continue...")

    def _report_no_calibration(self, message: str):
        self.logger.warning(message)
        self._print(f"\n{message}")
        self._print("Please enter calibration data (option 1) or "
                    "load from file (option 2) first.")
        self.pause_screen()

    def _read_value(self, prompt: str, parser: Callable[[str], object], error_message: str):
        """Prompt until ``parser`` accepts the input."""
        while True:
            text = self._input(prompt)
            try:
                return parser(text)
            except (InvalidNumericInputError, InsufficientPointsError) as e:
                self.logger.debug(f"Rejected input {text!r}: {e}")
                self._print(error_message)

    def _print(self, message: str = ""):
        self._output(message)
