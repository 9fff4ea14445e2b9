import datetime
import os
from io import BytesIO
from unittest.mock import Mock, patch
from zipfile import ZIP_DEFLATED, ZipFile

import pytest
from openpyxl import Workbook

from xlsx_range_reader.config import RangeReaderConfig

MAIN_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"


def _worksheet_xml(cells: str) -> str:
    """<sheetData> の中身からワークシートXMLを組み立てる"""
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<worksheet xmlns="{MAIN_NS}"><sheetData>{cells}</sheetData></worksheet>'
    )


def _shared_strings_xml(items: str) -> str:
    """<si> 要素の並びから共有文字列XMLを組み立てる"""
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<sst xmlns="{MAIN_NS}">{items}</sst>'
    )


def _styles_xml(num_fmts: str = "", cell_xfs: str = "") -> str:
    """numFmts / cellXfs の中身からスタイルXMLを組み立てる"""
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<styleSheet xmlns="{MAIN_NS}">'
        f"<numFmts>{num_fmts}</numFmts>"
        '<cellStyleXfs count="1"><xf numFmtId="99"/></cellStyleXfs>'
        f"<cellXfs>{cell_xfs}</cellXfs>"
        "</styleSheet>"
    )


@pytest.fixture
def worksheet_xml():
    return _worksheet_xml


@pytest.fixture
def shared_strings_xml():
    return _shared_strings_xml


@pytest.fixture
def styles_xml():
    return _styles_xml


@pytest.fixture
def make_package():
    """パート名 -> XMLテキスト の辞書からxlsx(zip)のバイト列を作る"""

    def _make_package(parts: dict[str, str]) -> bytes:
        buffer = BytesIO()
        with ZipFile(buffer, "w", ZIP_DEFLATED) as archive:
            for name, content in parts.items():
                archive.writestr(name, content)
        return buffer.getvalue()

    return _make_package


@pytest.fixture
def sample_workbook_bytes() -> bytes:
    """openpyxlで作成した2シートのテスト用Excelファイル（数値・日付・パーセント・数式のみ）

    openpyxlは文字列をインライン文字列（t="inlineStr"）で書き出すため、
    文字列セルのテストには text_workbook_bytes を使う
    """
    wb = Workbook()

    # 1枚目: 数値・日付・パーセント・数式
    ws1 = wb.active
    ws1.title = "Summary"
    ws1["B2"] = 1300
    ws1["B3"] = 1400.5
    ws1["C1"] = datetime.date(2026, 7, 7)
    ws1["C2"] = 45000
    ws1["C2"].number_format = "mm-dd-yy"  # 組み込み書式ID 14
    ws1["D1"] = 0.1
    ws1["D1"].number_format = "0%"  # 組み込み書式ID 9
    ws1["D2"] = 0.125
    ws1["D2"].number_format = "0.00%"  # 組み込み書式ID 10
    ws1["E1"] = 1234.5
    ws1["E1"].number_format = '"R$" #,##0.00'
    ws1["F1"] = "=B2+B3"

    # 2枚目
    ws2 = wb.create_sheet("Detail")
    for row in range(1, 11):
        ws2.cell(row=row, column=8, value=row * 100)

    excel_bytes = BytesIO()
    wb.save(excel_bytes)
    excel_bytes.seek(0)
    return excel_bytes.getvalue()


@pytest.fixture
def text_workbook_bytes(make_package) -> bytes:
    """共有文字列を使う2シートのテスト用xlsx（Excelが保存する形式）"""
    return make_package(
        {
            "xl/worksheets/sheet1.xml": _worksheet_xml(
                '<row r="1"><c r="A1" t="s"><v>0</v></c></row>'
                '<row r="2"><c r="A2" t="s"><v>1</v></c><c r="B2"><v>1300</v></c></row>'
                '<row r="3"><c r="A3" t="s"><v>2</v></c><c r="B3" s="1"><v>46210</v></c></row>'
            ),
            "xl/worksheets/sheet2.xml": _worksheet_xml(
                '<row r="1"><c r="H1"><v>100</v></c></row>'
                '<row r="2"><c r="H2"><v>200</v></c></row>'
                '<row r="10"><c r="I10" t="s"><v>3</v></c></row>'
            ),
            "xl/sharedStrings.xml": _shared_strings_xml(
                "<si><t>Name</t></si><si><t>John</t></si>"
                "<si><t>Mary</t></si><si><t>Total</t></si>"
            ),
            "xl/styles.xml": _styles_xml(cell_xfs='<xf numFmtId="0"/><xf numFmtId="14"/>'),
        }
    )


@pytest.fixture
def mock_config():
    """Mock range reader configuration for testing"""
    config = Mock(spec=RangeReaderConfig)
    config.excel_max_range_rows = 1048576
    config.default_sheet_index = 1
    config.log_level = "INFO"
    config.log_level_value = 20
    config.validate.return_value = []
    config.is_valid = True
    return config


@pytest.fixture
def mock_env_vars():
    """Mock environment variables for testing"""
    env_vars = {
        "XLSX_RANGE_READER_MAX_RANGE_ROWS": "5000",
        "XLSX_RANGE_READER_DEFAULT_SHEET": "2",
        "XLSX_RANGE_READER_LOG_LEVEL": "debug",
    }

    with patch.dict(os.environ, env_vars, clear=True):
        yield env_vars
