"""
StyleTableと書式判定のテスト
"""

import pytest

from xlsx_range_reader.excel import StyleTable, is_date_format, is_percent_format


class TestStyleTable:
    """StyleTable（スタイルインデックス -> 書式）のテスト"""

    def test_build_cell_formats_in_order(self, styles_xml):
        """cellXfsの並び順がスタイルインデックスになること"""
        table = StyleTable.build(
            styles_xml(
                cell_xfs='<xf numFmtId="0"/><xf numFmtId="14"/><xf numFmtId="9"/>'
            )
        )
        assert len(table) == 3
        assert table.number_format_id(0) == 0
        assert table.number_format_id(1) == 14
        assert table.number_format_id(2) == 9

    def test_build_ignores_cell_style_xfs(self, styles_xml):
        """cellStyleXfs配下のxfは対象外であること"""
        table = StyleTable.build(styles_xml(cell_xfs='<xf numFmtId="4"/>'))
        assert len(table) == 1
        assert table.number_format_id(0) == 4

    def test_build_missing_num_fmt_id_defaults_to_general(self, styles_xml):
        """numFmtIdが無い・不正な場合は0(General)になること"""
        table = StyleTable.build(
            styles_xml(cell_xfs='<xf fontId="1"/><xf numFmtId="abc"/>')
        )
        assert table.number_format_id(0) == 0
        assert table.number_format_id(1) == 0

    def test_build_custom_formats(self, styles_xml):
        """カスタム書式が書式ID -> 書式コードで取得できること"""
        table = StyleTable.build(
            styles_xml(
                num_fmts=(
                    '<numFmt numFmtId="164" formatCode="dd/mm/yyyy"/>'
                    '<numFmt numFmtId="165" formatCode="0.0%"/>'
                ),
                cell_xfs='<xf numFmtId="164"/>',
            )
        )
        assert table.format_code(164) == "dd/mm/yyyy"
        assert table.format_code(165) == "0.0%"
        assert table.format_code(14) is None
        assert dict(table.custom_formats) == {164: "dd/mm/yyyy", 165: "0.0%"}

    def test_build_skips_incomplete_custom_formats(self, styles_xml):
        """IDまたは書式コードが欠けたカスタム書式は無視されること"""
        table = StyleTable.build(
            styles_xml(
                num_fmts='<numFmt numFmtId="164"/><numFmt formatCode="0.0"/>'
            )
        )
        assert dict(table.custom_formats) == {}

    def test_number_format_id_out_of_range(self, styles_xml):
        """範囲外のスタイルインデックスはNoneになること"""
        table = StyleTable.build(styles_xml(cell_xfs='<xf numFmtId="0"/>'))
        assert table.number_format_id(1) is None
        assert table.number_format_id(-1) is None

    def test_build_absent_part(self):
        """パートが無い場合は空のテーブルになること"""
        table = StyleTable.build(None)
        assert len(table) == 0
        assert table.number_format_id(0) is None
        assert table.format_code(164) is None

    def test_custom_formats_are_read_only(self, styles_xml):
        """構築後のカスタム書式は変更できないこと"""
        table = StyleTable.build(
            styles_xml(num_fmts='<numFmt numFmtId="164" formatCode="0.0"/>')
        )
        with pytest.raises(TypeError):
            table.custom_formats[165] = "0.00"  # type: ignore[index]

    def test_build_malformed_xml_does_not_raise(self):
        """不正なXMLでも例外にならないこと"""
        table = StyleTable.build("<styleSheet><cellXfs><xf numFmtId='14'/></cellXfs><broken")
        assert table.number_format_id(0) == 14


class TestFormatClassification:
    """is_date_format / is_percent_format のテスト"""

    @pytest.mark.parametrize("num_fmt_id", [14, 15, 16, 17, 22])
    def test_builtin_date_formats(self, num_fmt_id):
        """組み込みの日付書式IDは日付と判定されること"""
        assert is_date_format(num_fmt_id) is True
        assert is_percent_format(num_fmt_id) is False

    @pytest.mark.parametrize("num_fmt_id", [9, 10])
    def test_builtin_percent_formats(self, num_fmt_id):
        """組み込みのパーセント書式IDはパーセントと判定されること"""
        assert is_percent_format(num_fmt_id) is True
        assert is_date_format(num_fmt_id) is False

    @pytest.mark.parametrize("num_fmt_id", [0, 1, 2, 4, 44])
    def test_builtin_plain_formats(self, num_fmt_id):
        """その他の組み込み書式は日付でもパーセントでもないこと"""
        assert is_date_format(num_fmt_id) is False
        assert is_percent_format(num_fmt_id) is False

    @pytest.mark.parametrize(
        "format_code",
        ["dd/mm/yyyy", "yyyy-mm-dd", "d-mmm-yy", "mmm yyyy", "DD.MM.YYYY", "yy"],
    )
    def test_custom_date_formats(self, format_code):
        """日付トークンを含むカスタム書式は日付と判定されること"""
        assert is_date_format(164, format_code) is True

    @pytest.mark.parametrize(
        "format_code",
        [
            "0.00",
            "#,##0",
            '"R$" #,##0.00',
            '"days" 0',
            "[Red]#,##0.00",
            "0.00E+00",
            "General",
            "@",
            '_-* #,##0.00_-;-* #,##0.00_-;_-* "-"??_-;_-@_-',
        ],
    )
    def test_custom_non_date_formats(self, format_code):
        """引用符内のリテラルや色指定の文字は日付トークンとみなさないこと"""
        assert is_date_format(164, format_code) is False

    def test_percent_excludes_date(self):
        """'%' を含む書式は日付と判定されないこと"""
        assert is_date_format(164, "0.0% mm") is False
        assert is_percent_format(164, "0.0% mm") is True

    def test_custom_percent_format(self):
        """'%' を含むカスタム書式はパーセントと判定されること"""
        assert is_percent_format(165, "0.0%") is True
        assert is_percent_format(165, "0.0") is False
        assert is_percent_format(165, None) is False
