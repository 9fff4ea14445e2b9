"""
Error message definitions for the xlsx range reader
Provides natural language error messages with a suggested solution for each failure
"""

from enum import Enum
from zipfile import BadZipFile


class ErrorCategory(Enum):
    """Error category definitions"""

    SHEET_NOT_FOUND = "sheet_not_found"
    INVALID_RANGE = "invalid_range"
    RANGE_TOO_LARGE = "range_too_large"
    INVALID_PACKAGE = "invalid_package"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


class RangeReaderError(Exception):
    """Custom exception class for range extraction"""

    def __init__(
        self,
        category: ErrorCategory,
        message: str,
        solution: str,
        original_error: Exception | None = None,
    ):
        self.category = category
        self.message = message
        self.solution = solution
        self.original_error = original_error
        super().__init__(self.get_formatted_message())

    def get_formatted_message(self) -> str:
        """Get formatted error message"""
        return f"{self.message} {self.solution}"


class SheetNotFoundError(RangeReaderError):
    """The requested worksheet index has no part in the package"""

    def __init__(self, sheet_index: int, part_name: str, solution: str):
        self.sheet_index = sheet_index
        self.part_name = part_name
        super().__init__(
            category=ErrorCategory.SHEET_NOT_FOUND,
            message=f"Worksheet {sheet_index} was not found ({part_name}).",
            solution=solution,
        )


class InvalidRangeExpressionError(RangeReaderError, ValueError):
    """A range expression matches neither the range form nor the single-cell form"""

    def __init__(self, expression: str, message: str, solution: str):
        self.expression = expression
        super().__init__(
            category=ErrorCategory.INVALID_RANGE,
            message=message,
            solution=solution,
        )


def get_sheet_not_found_error(sheet_index: int, part_name: str) -> SheetNotFoundError:
    """Generate sheet not found error message"""
    if sheet_index < 1:
        solution = "Sheet indexes start at 1 (1 = first sheet, 2 = second sheet, ...)."
    else:
        solution = "Please verify the workbook contains that many worksheets."
    return SheetNotFoundError(sheet_index, part_name, solution)


def get_invalid_range_error(
    expression: str, reason: str | None = None
) -> InvalidRangeExpressionError:
    """Generate invalid range expression error message"""
    message = f"Invalid range expression: '{expression}'."
    if reason:
        message += f" {reason}"
    return InvalidRangeExpressionError(
        expression,
        message,
        "Use a single column range such as 'H12-H300' or a single cell such as 'H2'.",
    )


def get_range_too_large_error(requested_rows: int, max_rows: int) -> RangeReaderError:
    """Generate range too large error message"""
    return RangeReaderError(
        category=ErrorCategory.RANGE_TOO_LARGE,
        message=f"The requested ranges cover {requested_rows} rows, which exceeds the limit of {max_rows} rows.",
        solution="Please request a smaller range, e.g. 'H12-H300', or raise XLSX_RANGE_READER_MAX_RANGE_ROWS.",
    )


def get_invalid_package_error(original_error: Exception) -> RangeReaderError:
    """Generate invalid package error message"""
    return RangeReaderError(
        category=ErrorCategory.INVALID_PACKAGE,
        message="The file could not be opened as an xlsx package.",
        solution="Please verify the file is an Excel workbook (.xlsx) and is not corrupted or password protected.",
        original_error=original_error,
    )


def get_configuration_error(original_error: Exception) -> RangeReaderError:
    """Generate configuration error message"""
    return RangeReaderError(
        category=ErrorCategory.CONFIGURATION,
        message="There is a problem with the range reader configuration.",
        solution="Please check the XLSX_RANGE_READER_* environment variables.",
        original_error=original_error,
    )


def get_unknown_error(original_error: Exception) -> RangeReaderError:
    """Generate unknown error message"""
    return RangeReaderError(
        category=ErrorCategory.UNKNOWN,
        message="An unexpected error occurred.",
        solution="Please verify the input file and range expressions.",
        original_error=original_error,
    )


def handle_range_reader_error(error: Exception, context: str = "") -> RangeReaderError:
    """
    Classify extraction errors into appropriate categories and generate natural language messages

    Args:
        error: The exception that occurred
        context: The context where the error occurred ("open", "extract", etc.)

    Returns:
        RangeReaderError: Natural language error message
    """
    # Already classified
    if isinstance(error, RangeReaderError):
        return error

    if isinstance(error, BadZipFile):
        return get_invalid_package_error(error)

    error_str = str(error).lower()

    # Classification by error message content
    if context == "open" and any(
        keyword in error_str for keyword in ["zip", "archive", "central directory"]
    ):
        return get_invalid_package_error(error)
    elif any(keyword in error_str for keyword in ["config", "environment"]):
        return get_configuration_error(error)
    else:
        return get_unknown_error(error)
