"""
セル範囲式の解析ユーティリティ

"H12-H300"（同一列の範囲）や "H2"（単一セル）を列と行範囲に変換する
"""

import logging
import re
from collections.abc import Iterator
from typing import NamedTuple

from xlsx_range_reader.error_messages import get_invalid_range_error

logger = logging.getLogger(__name__)

_RANGE_RE = re.compile(r"([A-Za-z]+)([0-9]+)-([A-Za-z]+)([0-9]+)")
_SINGLE_CELL_RE = re.compile(r"([A-Za-z]+)([0-9]+)")


class CellRange(NamedTuple):
    """1列分の行範囲（start, end とも含む）"""

    column: str
    start: int
    end: int

    @property
    def row_count(self) -> int:
        """範囲に含まれる行数（start > end の場合は0）"""
        return max(self.end - self.start + 1, 0)


class ExcelRangeParser:
    """セル範囲式の解析（全て staticmethod）"""

    @staticmethod
    def parse(expression: str) -> CellRange:
        """
        セル範囲式を解析

        Args:
            expression: セル範囲式（例: "H12-H300", "h2"）
                列は大文字・小文字を区別しない。"$" やシート名付きの参照は非対応

        Returns:
            CellRange（列は大文字に正規化）
            start > end の範囲はそのまま返す（行は0件になる）

        Raises:
            InvalidRangeExpressionError: どちらの形式にも一致しない、
                または範囲の左右で列が異なる場合
        """
        raw = expression.strip() if isinstance(expression, str) else ""

        # 範囲（例: H12-H300）
        range_match = _RANGE_RE.fullmatch(raw)
        if range_match:
            start_col, start_row, end_col, end_row = range_match.groups()
            if start_col.upper() != end_col.upper():
                raise get_invalid_range_error(
                    str(expression),
                    f"Both sides must use the same column ('{start_col.upper()}' != '{end_col.upper()}').",
                )
            cell_range = CellRange(start_col.upper(), int(start_row), int(end_row))

        else:
            # 単一セル（例: H2）
            single_match = _SINGLE_CELL_RE.fullmatch(raw)
            if not single_match:
                raise get_invalid_range_error(str(expression))
            column, row = single_match.groups()
            cell_range = CellRange(column.upper(), int(row), int(row))

        # 行番号は1始まり
        if cell_range.start < 1 or cell_range.end < 1:
            raise get_invalid_range_error(
                str(expression), "Row numbers start at 1."
            )

        if cell_range.start > cell_range.end:
            logger.debug(f"Range '{expression}' is reversed and selects no rows")

        return cell_range

    @staticmethod
    def iter_addresses(cell_range: CellRange) -> Iterator[tuple[int, str]]:
        """
        範囲内のセル座標を行の昇順で返す

        Yields:
            (行番号, "H12" 形式の座標) のタプル
        """
        for row in range(cell_range.start, cell_range.end + 1):
            yield (row, f"{cell_range.column}{row}")
