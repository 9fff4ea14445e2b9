"""
ワークシートのセルインデックス（xl/worksheets/sheetN.xml）

ワークシートを1回だけ走査し、セル座標 -> セル要素 の対応表を構築する。
セルごとに文書全体を再走査しないため、範囲が大きくても線形時間で済む。
"""

import logging
from typing import NamedTuple

from openpyxl.utils.cell import coordinate_from_string
from openpyxl.utils.exceptions import CellCoordinatesException

from xlsx_range_reader.excel.xml_scanner import find_child, iter_elements

logger = logging.getLogger(__name__)


class CellNode(NamedTuple):
    """セル要素から取り出した情報"""

    cell_type: str | None  # t属性（"s" = 共有文字列）
    style_index: str | None  # s属性（生の文字列）
    value: str | None  # <v> の内容


class WorksheetIndex:
    """セル座標 (列, 行) -> CellNode の読み取り専用インデックス"""

    def __init__(self, cells: dict[tuple[str, int], CellNode] | None = None):
        self._cells = dict(cells or {})

    @classmethod
    def build(cls, sheet_markup: str, sheet_label: str = "worksheet") -> "WorksheetIndex":
        """
        ワークシートのXMLテキストからインデックスを構築

        Args:
            sheet_markup: ワークシートパートの内容
            sheet_label: ログ出力用のパート名

        Returns:
            WorksheetIndex

        同じ座標のセルが複数ある場合（不正なファイル）は文書順で最初のセルを採用する。
        """
        cells: dict[tuple[str, int], CellNode] = {}
        duplicates = 0

        for cell in iter_elements(sheet_markup, frozenset({"c"}), sheet_label):
            key = cls._cell_key(cell.get("r"))
            if key is None:
                cell.clear()
                continue

            if key in cells:
                duplicates += 1
                logger.warning(
                    "Duplicate cell address %s%d in %s, keeping the first occurrence",
                    key[0],
                    key[1],
                    sheet_label,
                )
            else:
                value_node = find_child(cell, "v")
                cells[key] = CellNode(
                    cell_type=cell.get("t"),
                    style_index=cell.get("s"),
                    value=value_node.text if value_node is not None else None,
                )
            cell.clear()

        logger.debug(
            f"Indexed {len(cells)} cells in {sheet_label} ({duplicates} duplicates)"
        )
        return cls(cells)

    @staticmethod
    def _cell_key(reference: str | None) -> tuple[str, int] | None:
        """r属性を (大文字の列, 行) に正規化（"$"付きや不正な座標はNone）"""
        if not reference or "$" in reference:
            return None
        try:
            column, row = coordinate_from_string(reference.strip())
        except (CellCoordinatesException, ValueError):
            logger.debug(f"Skipping cell with invalid address: {reference!r}")
            return None
        return (column.upper(), row)

    def get(self, column: str, row: int) -> CellNode | None:
        """セル要素を取得（存在しない場合はNone）"""
        return self._cells.get((column.upper(), row))

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, key: object) -> bool:
        return key in self._cells
