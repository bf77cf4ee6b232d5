"""Tests for calibration file parsing and storage."""
import pytest

from sensor_calibration.calibration import (
    CalibrationRecord,
    FileOpenError,
    NoCalibrationError,
    ParseError,
    fit,
    load_calibration,
    parse,
    save_calibration,
    serialize,
)


def test_serialize_fixed_point_ten_digits():
    """Test the saved text layout."""
    record = CalibrationRecord.from_coefficients(1.8, 32)

    assert serialize(record) == "1.8000000000\n32.0000000000\n"


def test_serialize_negative_and_small_values():
    """Test that exponent notation is never written."""
    record = CalibrationRecord.from_coefficients(-0.00012345, -1e-12)

    assert serialize(record) == "-0.0001234500\n-0.0000000000\n"


def test_serialize_unset_record():
    """Test that an unset calibration cannot be serialized."""
    with pytest.raises(NoCalibrationError):
        serialize(CalibrationRecord.unset())


@pytest.mark.parametrize(
    "text,slope,offset",
    [
        ("1.8\n32\n", 1.8, 32.0),
        ("  -2.5e-3 \t +4E2", -0.0025, 400.0),
        ("10\n0\nsome trailing notes\n", 10.0, 0.0),
        (".5 7.", 0.5, 7.0),
    ],
)
def test_parse_valid_content(text, slope, offset):
    """Test parsing of accepted number formats."""
    record = parse(text)

    assert record.valid
    assert record.slope == pytest.approx(slope)
    assert record.offset == pytest.approx(offset)


@pytest.mark.parametrize(
    "text",
    ["", "   \n", "3.5\n", "abc 1", "1 abc", "nan 1", "1 inf", "1_000 2", "\u0661\u0662 1", "1 \u0662",
     "1e999 0"],
)
def test_parse_invalid_content(text):
    """Test that anything but two finite numbers is rejected."""
    with pytest.raises(ParseError):
        parse(text)


def test_parse_missing_offset_message():
    """Test the message for a file with only a slope."""
    with pytest.raises(ParseError, match="offset"):
        parse("1.25\n")


@pytest.mark.parametrize(
    "slope,offset",
    [(1.8, 32.0), (-123.456789012, 0.000000001), (1e-5, -98765.4321), (0.0, 0.0)],
)
def test_serialize_parse_round_trip(slope, offset):
    """Test that parsing serialized text reproduces the coefficients."""
    record = CalibrationRecord.from_coefficients(slope, offset)
    restored = parse(serialize(record))

    assert restored.slope == pytest.approx(slope, abs=1e-9)
    assert restored.offset == pytest.approx(offset, abs=1e-9)


def test_save_then_load(tmp_path):
    """Test that a saved calibration loads back unchanged."""
    path = tmp_path / "calibration.txt"
    record = fit([(0.13, 4.0), (2.71, 9.9), (5.5, 21.7)])

    save_calibration(record, str(path))
    loaded = load_calibration(str(path))

    assert path.read_text().count("\n") == 2
    assert loaded.slope == pytest.approx(record.slope, abs=1e-9)
    assert loaded.offset == pytest.approx(record.offset, abs=1e-9)


def test_save_overwrites_existing_file(tmp_path):
    """Test that saving replaces previous content."""
    path = tmp_path / "calibration.txt"
    path.write_text("old content that is much longer than the new one\n" * 3)

    save_calibration(CalibrationRecord.from_coefficients(2, 3), str(path))

    assert path.read_text() == "2.0000000000\n3.0000000000\n"


def test_save_unset_record_does_not_create_file(tmp_path):
    """Test that an unset calibration is refused before touching the disk."""
    path = tmp_path / "calibration.txt"

    with pytest.raises(NoCalibrationError):
        save_calibration(CalibrationRecord.unset(), str(path))
    assert not path.exists()


def test_save_to_missing_directory(tmp_path):
    """Test that an unwritable path is reported."""
    path = tmp_path / "missing" / "calibration.txt"

    with pytest.raises(FileOpenError) as excinfo:
        save_calibration(CalibrationRecord.from_coefficients(1, 0), str(path))
    assert excinfo.value.path == str(path)
    assert "Cannot create file" in str(excinfo.value)


def test_load_nonexistent_file(tmp_path):
    """Test that a missing file is reported."""
    path = tmp_path / "nope.txt"

    with pytest.raises(FileOpenError, match="Cannot open file"):
        load_calibration(str(path))


def test_load_single_number_file(tmp_path):
    """Test that a file holding only the slope is malformed."""
    path = tmp_path / "calibration.txt"
    path.write_text("1.5\n")

    with pytest.raises(ParseError):
        load_calibration(str(path))


def test_load_binary_file(tmp_path):
    """Test that non-text content is malformed rather than missing."""
    path = tmp_path / "calibration.bin"
    path.write_bytes(b"\xff\xfe\x00\x81")

    with pytest.raises(ParseError):
        load_calibration(str(path))
