"""
xlsxセル範囲読み取りモジュール（ワークブック全体を読み込まない軽量方式）
"""

import json
import logging
from collections.abc import Sequence

from xlsx_range_reader.config import config
from xlsx_range_reader.error_messages import (
    get_range_too_large_error,
    get_sheet_not_found_error,
)
from xlsx_range_reader.excel import (
    CellRange,
    CellValue,
    ExcelCellResolver,
    ExcelRangeParser,
    SharedStringTable,
    StyleTable,
    WorksheetIndex,
)
from xlsx_range_reader.package import (
    SHARED_STRINGS_PART,
    STYLES_PART,
    ZipPackage,
    worksheet_part_name,
)

logger = logging.getLogger(__name__)

# 列 -> (行番号 -> セル値)
RangeResult = dict[str, dict[int, CellValue]]


class ExcelRangeReader:
    """xlsxファイルの指定セル範囲から型付きの値を取り出すクライアント（状態を持たない）"""

    def read_ranges(
        self,
        file_bytes: bytes,
        sheet_index: int,
        ranges: Sequence[str],
    ) -> RangeResult:
        """
        xlsxファイルの指定シートからセル範囲の値を取得

        Args:
            file_bytes: xlsxファイルのバイト列
            sheet_index: シート番号（1 = 最初のシート、2 = 2番目のシート…）
            ranges: セル範囲式のリスト（例: ["H12-H300", "I10-I20", "H2"]）

        Returns:
            {列: {行番号: 値}} の辞書

        Raises:
            SheetNotFoundError: 指定シートのパートが存在しない場合
            InvalidRangeExpressionError: セル範囲式が不正な場合
            RangeReaderError: ファイルがxlsxとして開けない場合など
        """
        ranges = list(ranges)
        logger.info(
            f"Reading ranges from xlsx ({len(file_bytes)} bytes, sheet={sheet_index}, ranges={ranges})"
        )

        with ZipPackage(file_bytes) as package:
            return self.read_parts(package, sheet_index, ranges)

    def read_parts(
        self,
        package,
        sheet_index: int,
        ranges: Sequence[str],
    ) -> RangeResult:
        """
        パート読み取りクライアントからセル範囲の値を取得

        Args:
            package: has_part(name) -> bool と read_text(name) -> str メソッドを持つクライアント
            sheet_index: シート番号（1始まり）
            ranges: セル範囲式のリスト

        Returns:
            {列: {行番号: 値}} の辞書
        """
        sheet_part = worksheet_part_name(sheet_index)
        if sheet_index < 1 or not package.has_part(sheet_part):
            error = get_sheet_not_found_error(sheet_index, sheet_part)
            logger.error(f"Failed to read ranges: {str(error)}")
            raise error

        sheet_markup = package.read_text(sheet_part)

        # 共有文字列・スタイルは無くてもよい
        shared_strings_part = (
            package.read_text(SHARED_STRINGS_PART)
            if package.has_part(SHARED_STRINGS_PART)
            else None
        )
        styles_part = (
            package.read_text(STYLES_PART) if package.has_part(STYLES_PART) else None
        )

        return self.extract(
            sheet_markup,
            ranges,
            SharedStringTable.build(shared_strings_part),
            StyleTable.build(styles_part),
            sheet_label=sheet_part,
        )

    def extract(
        self,
        sheet_markup: str,
        ranges: Sequence[str],
        shared_strings: SharedStringTable,
        styles: StyleTable,
        sheet_label: str = "worksheet",
    ) -> RangeResult:
        """
        ワークシートのXMLテキストからセル範囲の値を取得

        Args:
            sheet_markup: ワークシートパートの内容
            ranges: セル範囲式のリスト
            shared_strings: 共有文字列テーブル
            styles: スタイルテーブル
            sheet_label: ログ出力用のパート名

        Returns:
            {列: {行番号: 値}} の辞書
            - 列は最初に現れた順
            - 同じ列の複数範囲は上書きせずに行を追加する
        """
        # セル解決の前に全範囲式を検証する
        cell_ranges = [ExcelRangeParser.parse(expression) for expression in ranges]
        self._validate_range_size(cell_ranges)

        worksheet = WorksheetIndex.build(sheet_markup, sheet_label)

        result: RangeResult = {}
        for cell_range in cell_ranges:
            # 既存の列は上書きしない
            column_values = result.setdefault(cell_range.column, {})
            for row, _address in ExcelRangeParser.iter_addresses(cell_range):
                column_values[row] = ExcelCellResolver.resolve(
                    (cell_range.column, row), worksheet, shared_strings, styles
                )

        logger.info(
            f"Resolved {sum(len(rows) for rows in result.values())} cells "
            f"in {len(result)} columns from {sheet_label}"
        )
        return result

    def read_ranges_to_json(
        self,
        file_bytes: bytes,
        sheet_index: int,
        ranges: Sequence[str],
    ) -> str:
        """
        read_rangesの結果をJSON文字列で返す（行番号のキーは文字列になる）
        """
        result = self.read_ranges(file_bytes, sheet_index, ranges)
        return json.dumps(result, ensure_ascii=False, indent=2)

    def _validate_range_size(self, cell_ranges: list[CellRange]) -> None:
        """要求された行数の合計を検証（DoS対策）"""
        requested_rows = sum(cell_range.row_count for cell_range in cell_ranges)
        if requested_rows > config.excel_max_range_rows:
            error = get_range_too_large_error(
                requested_rows, config.excel_max_range_rows
            )
            logger.error(f"Failed to read ranges: {str(error)}")
            raise error


def read_ranges(
    file_bytes: bytes, sheet_index: int, ranges: Sequence[str]
) -> RangeResult:
    """ExcelRangeReader().read_ranges のショートカット"""
    return ExcelRangeReader().read_ranges(file_bytes, sheet_index, ranges)
