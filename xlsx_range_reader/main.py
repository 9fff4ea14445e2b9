import logging
import sys
from pathlib import Path

import typer

from .config import config
from .error_messages import RangeReaderError, handle_range_reader_error
from .range_reader import ExcelRangeReader

# typerアプリケーションを作成
app = typer.Typer()


def setup_logging():
    """
    すべてのログ出力をstderrに向けるロギングを設定します。
    これにより、stdoutに出力するJSONが汚染されるのを防ぎます。
    """
    log_formatter = logging.Formatter("%(asctime)s [%(levelname)s] - %(message)s")
    root_logger = logging.getLogger()
    root_logger.setLevel(config.log_level_value)

    # stdoutへの出力を防ぐため、既存のハンドラをクリア
    root_logger.handlers.clear()

    # stderrにログを出力するハンドラを追加
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(log_formatter)
    root_logger.addHandler(stream_handler)

    logging.debug("Logging configured to output to stderr.")


@app.command()
def main(
    file: Path = typer.Argument(..., help="読み込むxlsxファイルのパス。"),
    ranges: list[str] = typer.Option(
        ...,
        "--range",
        "-r",
        help="セル範囲式（例: 'H12-H300' または 'H2'）。複数指定可。",
    ),
    sheet: int | None = typer.Option(
        None, "--sheet", "-s", help="シート番号（1始まり）。未指定時は設定値を使用。"
    ),
):
    """
    xlsxファイルの指定セル範囲を読み取り、JSONで標準出力に書き出します。
    """
    setup_logging()

    config_errors = config.validate()
    if config_errors:
        for error in config_errors:
            logging.error(error)
        raise typer.Exit(code=1)

    sheet_index = sheet if sheet is not None else config.default_sheet_index

    try:
        file_bytes = file.read_bytes()
    except OSError as e:
        logging.error(f"Failed to read file {file}: {str(e)}")
        raise typer.Exit(code=1) from e

    try:
        output = ExcelRangeReader().read_ranges_to_json(file_bytes, sheet_index, ranges)
    except RangeReaderError as e:
        logging.error(str(e))
        raise typer.Exit(code=1) from e
    except Exception as e:
        logging.error(str(handle_range_reader_error(e, "extract")))
        raise typer.Exit(code=1) from e

    typer.echo(output)


if __name__ == "__main__":
    app()
