"""
xlsxパート解析ヘルパーモジュール

ワークシート・共有文字列・スタイルの各パートを解析し、セル値を解決するヘルパークラス群
"""

from xlsx_range_reader.excel.cell_resolver import (
    CellValue,
    ExcelCellResolver,
    serial_to_date_string,
)
from xlsx_range_reader.excel.range_parser import CellRange, ExcelRangeParser
from xlsx_range_reader.excel.shared_strings import SharedStringTable
from xlsx_range_reader.excel.style_table import (
    StyleTable,
    is_date_format,
    is_percent_format,
)
from xlsx_range_reader.excel.worksheet_index import CellNode, WorksheetIndex

__all__ = [
    "CellNode",
    "CellRange",
    "CellValue",
    "ExcelCellResolver",
    "ExcelRangeParser",
    "SharedStringTable",
    "StyleTable",
    "WorksheetIndex",
    "is_date_format",
    "is_percent_format",
    "serial_to_date_string",
]
