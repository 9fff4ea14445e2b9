"""
xlsxファイルの指定セル範囲から型付きの値（文字列・数値・日付）を取り出すライブラリ
"""

from xlsx_range_reader.error_messages import (
    ErrorCategory,
    InvalidRangeExpressionError,
    RangeReaderError,
    SheetNotFoundError,
)
from xlsx_range_reader.range_reader import ExcelRangeReader, RangeResult, read_ranges

__all__ = [
    "ErrorCategory",
    "ExcelRangeReader",
    "InvalidRangeExpressionError",
    "RangeReaderError",
    "RangeResult",
    "SheetNotFoundError",
    "read_ranges",
]
