"""
セル値の解決

1つのセル座標から、共有文字列・スタイル（数値書式）を参照して型付きの値を返す。
"""

import datetime
import logging
import math
import re

from xlsx_range_reader.excel.shared_strings import SharedStringTable
from xlsx_range_reader.excel.style_table import (
    StyleTable,
    is_date_format,
    is_percent_format,
)
from xlsx_range_reader.excel.worksheet_index import WorksheetIndex

logger = logging.getLogger(__name__)

# セル値: 文字列 / 数値 / 空(None)。日付は "dd/mm/yyyy" 文字列で返す
CellValue = str | float | None

MILLISECONDS_PER_DAY = 86_400_000

# シリアル値0に対応する日（1899-12-30）
EXCEL_EPOCH_ORDINAL = datetime.date(1899, 12, 30).toordinal()

# 1900年を閏年として扱う不具合の補正境界（シリアル60 = 存在しない1900-02-29）
EXCEL_LEAP_BUG_SERIAL = 60

_NUMERIC_TOKEN_RE = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
)

# 共有文字列・スタイルの参照（ASCIIの非負整数のみ）
_INDEX_RE = re.compile(r"[0-9]+")


def serial_to_date_string(serial: float) -> str:
    """
    Excelのシリアル値を "dd/mm/yyyy" 形式の日付文字列に変換

    Args:
        serial: シリアル値（小数部の時刻は切り捨て）

    Returns:
        日付文字列（例: 1 -> "01/01/1900", 45000 -> "15/03/2023"）
        存在しない1900-02-29にあたるシリアル値60は、59と同じ "28/02/1900" になる

    Raises:
        ValueError: 日付として表現できない範囲のシリアル値
    """
    milliseconds = round(serial * MILLISECONDS_PER_DAY)
    days = milliseconds // MILLISECONDS_PER_DAY
    # 1900-03-01より前はエポックを1日後ろにずらす
    if 0 < serial < EXCEL_LEAP_BUG_SERIAL:
        days += 1

    try:
        date = datetime.date.fromordinal(EXCEL_EPOCH_ORDINAL + days)
    except (OverflowError, ValueError) as e:
        raise ValueError(f"Serial {serial} is out of the supported date range") from e

    return f"{date.day:02d}/{date.month:02d}/{date.year:04d}"


def parse_number(token: str) -> float | None:
    """10進数の数値リテラルならfloatを返す（それ以外はNone）"""
    stripped = token.strip()
    if not _NUMERIC_TOKEN_RE.fullmatch(stripped):
        return None
    number = float(stripped)
    if not math.isfinite(number):
        return None
    return number


def parse_index(token: str | None) -> int | None:
    """共有文字列・スタイルの参照をintに変換（ASCIIの非負整数以外はNone）"""
    if token is None:
        return None
    stripped = token.strip()
    if not _INDEX_RE.fullmatch(stripped):
        return None
    return int(stripped)


class ExcelCellResolver:
    """セル値の解決（全て staticmethod）"""

    @staticmethod
    def resolve(
        address: tuple[str, int],
        worksheet: WorksheetIndex,
        shared_strings: SharedStringTable,
        styles: StyleTable,
    ) -> CellValue:
        """
        1つのセルの値を解決

        Args:
            address: (列, 行) のタプル（例: ("H", 12)）
            worksheet: ワークシートのセルインデックス
            shared_strings: 共有文字列テーブル
            styles: スタイルテーブル

        Returns:
            文字列・数値・None のいずれか
            - セルが無い、値が無い、共有文字列の参照先が無い場合はNone
            - 日付書式の数値は "dd/mm/yyyy" 文字列
            - パーセント書式の数値はそのまま（0.1 は 0.1 のまま、100倍しない）
        """
        column, row = address
        cell = worksheet.get(column, row)
        if cell is None:
            return None

        # 共有文字列
        if cell.cell_type == "s":
            string_index = parse_index(cell.value)
            if string_index is None:
                return None
            return shared_strings.get(string_index)

        # 値なし（空セル、キャッシュ値の無い数式）
        if not cell.value:
            return None

        number = parse_number(cell.value)
        if number is None:
            # インライン文字列、エラー値など
            return cell.value

        # スタイル指定なし -> 通常の数値
        style_index = parse_index(cell.style_index)
        if style_index is None:
            return number

        num_fmt_id = styles.number_format_id(style_index)
        if num_fmt_id is None:
            logger.debug(
                f"Style index {cell.style_index} of {column}{row} is out of range"
            )
            return number

        format_code = styles.format_code(num_fmt_id)

        # 日付
        if is_date_format(num_fmt_id, format_code):
            try:
                return serial_to_date_string(number)
            except ValueError as e:
                logger.warning(f"Could not convert {column}{row} to a date: {e}")
                return number

        # パーセント（分数のまま返す）
        if is_percent_format(num_fmt_id, format_code):
            return number

        # 通貨・通常の数値
        return number
