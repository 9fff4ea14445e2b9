"""
プル型XMLスキャナー

パート全体のDOMを組み立てずに、必要なタグの終了イベントだけを取り出す。
名前空間の有無に関係なくローカル名で照合する。
"""

import logging
from collections.abc import Iterator
from xml.etree import ElementTree as ET

logger = logging.getLogger(__name__)

# 1回にパーサーへ渡す文字数
FEED_CHUNK_SIZE = 64 * 1024


def local_name(tag) -> str:
    """'{namespace}c' -> 'c'（コメント等の非文字列タグは空文字）"""
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def find_child(element: ET.Element, name: str) -> ET.Element | None:
    """直下の子要素からローカル名が一致する最初の要素を返す"""
    for child in element:
        if local_name(child.tag) == name:
            return child
    return None


def find_descendant(element: ET.Element, name: str) -> ET.Element | None:
    """子孫要素（文書順）からローカル名が一致する最初の要素を返す"""
    for descendant in element.iter():
        if descendant is element:
            continue
        if local_name(descendant.tag) == name:
            return descendant
    return None


def iter_elements(
    markup: str, names: frozenset[str], part_label: str = "part"
) -> Iterator[ET.Element]:
    """
    指定したローカル名を持つ要素を終了タグの順に返す

    Args:
        markup: パートのXMLテキスト
        names: 取り出す要素のローカル名
        part_label: ログ出力用のパート名

    Yields:
        子要素まで読み込み済みの要素

    不正なXMLの場合は、エラー位置までに読めた要素だけを返して警告をログに出す。
    """
    parser = ET.XMLPullParser(events=("end",))
    try:
        for offset in range(0, len(markup), FEED_CHUNK_SIZE):
            parser.feed(markup[offset : offset + FEED_CHUNK_SIZE])
            yield from _read_matching(parser, names)
        parser.close()
        yield from _read_matching(parser, names)
    except ET.ParseError as e:
        logger.warning(f"Malformed XML in {part_label}, using entries read so far: {e}")


def _read_matching(
    parser: ET.XMLPullParser, names: frozenset[str]
) -> Iterator[ET.Element]:
    for _event, element in parser.read_events():
        if local_name(element.tag) in names:
            yield element
