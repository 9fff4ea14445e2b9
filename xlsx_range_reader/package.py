"""
xlsxパッケージ（zipコンテナ）からの名前付きパート読み取り
"""

import logging
from io import BytesIO
from zipfile import BadZipFile, ZipFile

from xlsx_range_reader.error_messages import handle_range_reader_error

logger = logging.getLogger(__name__)

# パッケージ内のパート名
WORKSHEET_PART_TEMPLATE = "xl/worksheets/sheet{index}.xml"
SHARED_STRINGS_PART = "xl/sharedStrings.xml"
STYLES_PART = "xl/styles.xml"


def worksheet_part_name(sheet_index: int) -> str:
    """1始まりのシート番号からワークシートのパート名を生成"""
    return WORKSHEET_PART_TEMPLATE.format(index=sheet_index)


class ZipPackage:
    """
    zipコンテナのパート読み取りクライアント

    ExcelRangeReaderが必要とするのは has_part(name) と read_text(name) の2つだけ。
    同じメソッドを持つオブジェクトであれば差し替え可能。
    """

    def __init__(self, file_bytes: bytes):
        """
        Args:
            file_bytes: xlsxファイルのバイト列

        Raises:
            RangeReaderError: zipとして開けない場合（category=INVALID_PACKAGE）
        """
        try:
            self._zip = ZipFile(BytesIO(file_bytes))
        except (BadZipFile, ValueError) as e:
            logger.error(f"Failed to open xlsx package: {str(e)}")
            raise handle_range_reader_error(e, "open") from e

        self._names = frozenset(self._zip.namelist())

    def has_part(self, name: str) -> bool:
        """パートが存在するかどうか"""
        return name in self._names

    def read_text(self, name: str) -> str:
        """
        パートをUTF-8テキストとして読み取る

        Args:
            name: パート名（例: "xl/styles.xml"）

        Returns:
            パートの内容（先頭のBOMは除去）
        """
        data = self._zip.read(name)
        logger.debug(f"Read part {name} ({len(data)} bytes)")
        return data.decode("utf-8-sig")

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> "ZipPackage":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
