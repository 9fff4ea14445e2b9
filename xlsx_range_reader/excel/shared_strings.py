"""
共有文字列テーブル（xl/sharedStrings.xml）
"""

import logging

from xlsx_range_reader.excel.xml_scanner import find_descendant, iter_elements

logger = logging.getLogger(__name__)


class SharedStringTable:
    """
    共有文字列の順序付きテーブル

    インデックスは <si> の宣言順（0始まり）。構築後は変更しない。
    """

    def __init__(self, strings: tuple[str, ...] = ()):
        self._strings = tuple(strings)

    @classmethod
    def build(cls, shared_strings_part: str | None) -> "SharedStringTable":
        """
        sharedStrings.xmlのテキストからテーブルを構築

        Args:
            shared_strings_part: パートの内容（存在しない場合はNone）

        Returns:
            SharedStringTable（パートが無い場合は空）

        各 <si> からは最初の <t> の内容だけを取り出す。
        複数ランのリッチテキストは連結しない（2つ目以降のランは失われる）。
        <t> を持たない <si> は空文字として扱い、後続のインデックスをずらさない。
        """
        if not shared_strings_part:
            return cls()

        strings: list[str] = []
        for si in iter_elements(shared_strings_part, frozenset({"si"}), "sharedStrings"):
            text_run = find_descendant(si, "t")
            strings.append((text_run.text or "") if text_run is not None else "")
            si.clear()

        logger.debug(f"Loaded {len(strings)} shared strings")
        return cls(tuple(strings))

    def get(self, index: int) -> str | None:
        """インデックスに対応する文字列（範囲外はNone）"""
        if 0 <= index < len(self._strings):
            return self._strings[index]
        return None

    def __len__(self) -> int:
        return len(self._strings)
