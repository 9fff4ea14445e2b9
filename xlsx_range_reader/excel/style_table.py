"""
スタイルテーブル（xl/styles.xml）

セルのスタイルインデックス(s属性) -> numFmtId -> 書式コード の解決と、
書式が日付・パーセントかどうかの判定を担当する
"""

import logging
import re
from collections.abc import Mapping
from types import MappingProxyType

from xlsx_range_reader.excel.xml_scanner import iter_elements, local_name

logger = logging.getLogger(__name__)

# 組み込みの日付書式ID（14: m/d/yyyy, 15: d-mmm-yy, 16: d-mmm, 17: mmm-yy, 22: m/d/yyyy h:mm）
BUILTIN_DATE_FORMAT_IDS = frozenset({14, 15, 16, 17, 22})

# 組み込みのパーセント書式ID（9: 0%, 10: 0.00%）
BUILTIN_PERCENT_FORMAT_IDS = frozenset({9, 10})

# 日付トークン判定の前に除去する部分: "リテラル" / [色・ロケール] / \x / _x / *x
_FORMAT_LITERAL_RE = re.compile(r'"[^"]*"|\[[^\]]*\]|\\.|_.|\*.')
_DATE_TOKEN_RE = re.compile(r"d+|m+|y+", re.IGNORECASE)


def is_date_format(num_fmt_id: int, format_code: str | None = None) -> bool:
    """
    書式が日付書式かどうか

    Args:
        num_fmt_id: 書式ID
        format_code: カスタム書式コード（組み込み書式の場合はNone）
    """
    if num_fmt_id in BUILTIN_DATE_FORMAT_IDS:
        return True
    if not format_code or "%" in format_code:
        return False
    stripped = _FORMAT_LITERAL_RE.sub("", format_code)
    return _DATE_TOKEN_RE.search(stripped) is not None


def is_percent_format(num_fmt_id: int, format_code: str | None = None) -> bool:
    """書式がパーセント書式かどうか"""
    if num_fmt_id in BUILTIN_PERCENT_FORMAT_IDS:
        return True
    return bool(format_code) and "%" in format_code


def _parse_int_attribute(value: str | None, default: int | None) -> int | None:
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


class StyleTable:
    """
    スタイルインデックスと書式の対応表（構築後は変更しない）

    - number_format_ids: cellXfs の並び順 = スタイルインデックス
    - custom_formats: numFmts で宣言されたカスタム書式（ID -> 書式コード）
    """

    def __init__(
        self,
        number_format_ids: tuple[int, ...] = (),
        custom_formats: Mapping[int, str] | None = None,
    ):
        self._number_format_ids = tuple(number_format_ids)
        self._custom_formats = MappingProxyType(dict(custom_formats or {}))

    @classmethod
    def build(cls, styles_part: str | None) -> "StyleTable":
        """
        styles.xmlのテキストからテーブルを構築

        Args:
            styles_part: パートの内容（存在しない場合はNone）

        Returns:
            StyleTable（パートが無い場合は空。以降の数値はすべて通常の数値として扱われる）
        """
        if not styles_part:
            return cls()

        custom_formats: dict[int, str] = {}
        number_format_ids: list[int] = []

        for element in iter_elements(
            styles_part, frozenset({"numFmts", "cellXfs"}), "styles"
        ):
            if local_name(element.tag) == "numFmts":
                for num_fmt in element:
                    if local_name(num_fmt.tag) != "numFmt":
                        continue
                    fmt_id = _parse_int_attribute(num_fmt.get("numFmtId"), None)
                    code = num_fmt.get("formatCode")
                    if fmt_id is None or code is None:
                        continue
                    custom_formats[fmt_id] = code
            else:
                # cellStyleXfs 配下の xf は対象外
                for xf in element:
                    if local_name(xf.tag) != "xf":
                        continue
                    number_format_ids.append(
                        _parse_int_attribute(xf.get("numFmtId"), 0) or 0
                    )

        logger.debug(
            f"Loaded {len(number_format_ids)} cell formats, "
            f"{len(custom_formats)} custom number formats"
        )
        return cls(tuple(number_format_ids), custom_formats)

    def number_format_id(self, style_index: int) -> int | None:
        """スタイルインデックスに対応する書式ID（範囲外はNone）"""
        if 0 <= style_index < len(self._number_format_ids):
            return self._number_format_ids[style_index]
        return None

    def format_code(self, num_fmt_id: int) -> str | None:
        """書式IDに対応するカスタム書式コード（組み込み書式はNone）"""
        return self._custom_formats.get(num_fmt_id)

    @property
    def custom_formats(self) -> Mapping[int, str]:
        return self._custom_formats

    def __len__(self) -> int:
        return len(self._number_format_ids)
