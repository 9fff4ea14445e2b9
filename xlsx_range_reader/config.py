"""
設定管理モジュール
"""

import logging
import os

from dotenv import load_dotenv

# .envファイルを読み込み
load_dotenv()

# Excelの最大行数（1シートあたり）
EXCEL_MAX_ROWS = 1048576


class RangeReaderConfig:
    """xlsxセル範囲読み取りの設定クラス"""

    def __init__(self):
        # 1回の抽出で要求できる行数の上限（DoS対策）
        self.excel_max_range_rows = self._parse_int(
            os.getenv("XLSX_RANGE_READER_MAX_RANGE_ROWS", str(EXCEL_MAX_ROWS)),
            EXCEL_MAX_ROWS,
        )

        # CLIで--sheet未指定時に読むシート（1始まり）
        self.default_sheet_index = self._parse_int(
            os.getenv("XLSX_RANGE_READER_DEFAULT_SHEET", "1"), 1
        )

        # ログ出力レベル
        self.log_level = (
            os.getenv("XLSX_RANGE_READER_LOG_LEVEL", "INFO").strip().upper()
        )

    def _parse_int(self, value: str, default: int) -> int:
        """整数の環境変数を解析（不正値はデフォルトにフォールバック）"""
        try:
            return int(value.strip())
        except (AttributeError, ValueError):
            return default

    @property
    def log_level_value(self) -> int:
        """loggingモジュールのレベル値を取得（不明な名前はINFO）"""
        level = logging.getLevelName(self.log_level)
        if isinstance(level, int):
            return level
        return logging.INFO

    def validate(self) -> list[str]:
        """設定の検証を行い、エラーメッセージのリストを返す"""
        errors = []

        if self.excel_max_range_rows < 1:
            errors.append("XLSX_RANGE_READER_MAX_RANGE_ROWS must be a positive integer")

        if self.default_sheet_index < 1:
            errors.append("XLSX_RANGE_READER_DEFAULT_SHEET must be 1 or greater")

        if not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"Unknown XLSX_RANGE_READER_LOG_LEVEL: {self.log_level}")

        return errors

    @property
    def is_valid(self) -> bool:
        """設定が有効かどうかを返す"""
        return len(self.validate()) == 0


# グローバル設定インスタンス
config = RangeReaderConfig()
