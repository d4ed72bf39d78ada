"""CLI entry point for rladmin Info tool."""

import sys
from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from rladmin_info.formatters.json_formatter import JSONFormatter
from rladmin_info.rladmin.collections import Records
from rladmin_info.rladmin.exceptions import RLAdminBaseError
from rladmin_info.rladmin.info import ClusterInfo
from rladmin_info.utils import (
    FORMAT_EXTENSIONS,
    ensure_output_dir,
    parse_output_format,
    parse_sections,
    setup_logger,
)

app = typer.Typer(
    help="rladmin Info CLI Tool - Convert rladmin status output to JSON, CSV or Markdown"
)
console = Console(stderr=True)


def load_cluster_info(input_file: str, key: str) -> ClusterInfo:
    """Parse a report file, or stdin when input_file is "-"."""
    if input_file == "-":
        return ClusterInfo.parse(key, sys.stdin)

    with open(input_file, encoding="utf-8") as stream:
        return ClusterInfo.parse(key, stream)


def select_records(info: ClusterInfo, section: str, database: Optional[str] = None) -> Records:
    """Pick one section of the snapshot, optionally restricted to a database."""
    if section == "nodes":
        return info.nodes

    if section == "shards":
        return info.shards_for_db(database) if database else info.shards

    if section == "endpoints":
        return info.endpoints.for_db(database) if database else info.endpoints

    databases = info.databases
    if database:
        databases = type(databases)(db for db in databases if db.id == database)

    if section == "databases-with-nodes":
        return databases.with_nodes(info)
    return databases


def render_documents(
    info: ClusterInfo,
    sections: List[str],
    output_format: str,
    skip_headers: bool = False,
    database: Optional[str] = None,
    whole_snapshot: bool = False,
    indent: Optional[int] = None,
) -> Dict[str, str]:
    """Render the selected sections.

    Returns:
        Mapping of document name to formatted text. JSON output is always a
        single document.
    """
    if output_format == "json":
        if whole_snapshot:
            return {"cluster": info.to_json(indent)}
        if len(sections) == 1:
            return {sections[0]: select_records(info, sections[0], database).to_json(indent)}

        formatter = JSONFormatter(indent)
        combined = {}
        for section in sections:
            records = select_records(info, section, database)
            combined[section] = formatter.to_list(records, records.columns)
        return {"sections": formatter.dumps(combined)}

    documents = {}
    for section in sections:
        records = select_records(info, section, database)
        if output_format == "csv":
            documents[section] = records.to_csv(skip_headers)
        else:
            documents[section] = records.to_markdown(skip_headers)
    return documents


def print_summary(info: ClusterInfo, database: Optional[str], node: Optional[str]) -> None:
    """Display record counts, and shard placement for one database."""
    time_stamp = info.time_stamp.isoformat() if info.time_stamp else "N/A"
    console.print(f"\n[bold green]{info.key}[/bold green] (時間戳記：{time_stamp})\n")

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Section")
    table.add_column("Records", justify="right")
    table.add_row("Nodes", str(len(info.nodes)))
    table.add_row("Databases", str(len(info.databases)))
    table.add_row("Shards", str(len(info.shards)))
    table.add_row("Endpoints", str(len(info.endpoints)))
    console.print(table)

    if not database:
        return

    tally = info.node_tally(database)
    table = Table(
        title=f"{database} ({info.shard_count(database)} shards)",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Node")
    table.add_column("Masters", justify="right")
    table.add_column("Replicas", justify="right")
    for node_id, shards in tally.items():
        if shards.total > 0:
            table.add_row(node_id, str(shards.masters), str(shards.replicas))
    console.print(table)

    if node:
        shards = info.on_node(database, node)
        console.print(
            f"{database} 在 {node} 上：masters={shards.masters}, replicas={shards.replicas}"
        )


def write_documents(
    documents: Dict[str, str],
    output_file: str,
    key: str,
    output_format: str,
    append: bool = False,
) -> List[Path]:
    """Write rendered documents to a file or a directory.

    A directory receives one "{key}-{name}.{ext}" file per document.
    With append, existing files are extended instead of replaced.
    """
    output_path = Path(output_file)
    extension = FORMAT_EXTENSIONS[output_format]
    mode = "a" if append else "w"

    if output_file.endswith("/") or output_path.is_dir():
        ensure_output_dir(output_file)
        paths = []
        for name, text in documents.items():
            path = output_path / f"{key}-{name}.{extension}"
            with open(path, mode, encoding="utf-8") as out:
                out.write(text)
            paths.append(path)
        return paths

    if len(documents) > 1:
        raise ValueError("輸出多個區段時 --output-file 必須是目錄")

    ensure_output_dir(output_file)
    with open(output_path, mode, encoding="utf-8") as out:
        out.write(next(iter(documents.values())))
    return [output_path]


@app.command()
def main(
    input_file: str = typer.Argument(..., help="rladmin status 輸出檔案 ('-' 表示標準輸入)"),
    key: Optional[str] = typer.Option(
        None,
        "--key",
        "-k",
        help="報告識別碼 (預設: 輸入檔名)"
    ),
    section: str = typer.Option(
        "all",
        "--section",
        "-s",
        help="區段選擇，逗號分隔或 'all' (nodes, databases, shards, endpoints, databases-with-nodes)"
    ),
    output_format: str = typer.Option(
        "json",
        "--output-format",
        "-f",
        help="輸出格式：json, csv 或 markdown (預設: json)"
    ),
    output_file: Optional[str] = typer.Option(
        None,
        "--output-file",
        "-o",
        help="輸出檔案或目錄 (預設: 標準輸出；多個 CSV/Markdown 區段時為 ./output/)"
    ),
    skip_headers: bool = typer.Option(
        False,
        "--skip-headers",
        help="CSV/Markdown 不輸出標題列，並附加到既有檔案 (JSON 一律覆寫)"
    ),
    database: Optional[str] = typer.Option(
        None,
        "--database",
        "-d",
        help="只輸出指定資料庫 (例如 db:1) 的資料"
    ),
    node: Optional[str] = typer.Option(
        None,
        "--node",
        "-n",
        help="搭配 --database，顯示該資料庫在指定節點上的 shard 數"
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="JSON 以縮排格式輸出"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="啟用詳細日誌輸出"
    ),
):
    """Convert rladmin status output into JSON, CSV or Markdown.

    Examples:
        # Whole snapshot as JSON
        rladmin-info status.txt

        # Shards of one database as CSV
        rladmin-info status.txt -s shards -d db:3 -f csv

        # Append every section to existing CSV tables
        rladmin-info status.txt -f csv --skip-headers -o ./tables/

        # Read from stdin
        rladmin status | rladmin-info - -k cluster-a
    """
    logger = setup_logger(verbose)

    try:
        logger.info("=== rladmin Info CLI ===")
        logger.info(f"Input: {input_file}")
        logger.info(f"Section: {section}")
        logger.info(f"Output format: {output_format}")

        try:
            sections = parse_sections(section)
            output_format = parse_output_format(output_format)
        except ValueError as e:
            console.print(f"[red]錯誤：{e}[/red]")
            raise typer.Exit(1)

        if node and not database:
            console.print("[red]錯誤：--node 需要搭配 --database 使用[/red]")
            raise typer.Exit(1)

        if key is None:
            key = "stdin" if input_file == "-" else Path(input_file).stem
        logger.info(f"Key: {key}")

        try:
            info = load_cluster_info(input_file, key)
        except OSError as e:
            console.print(f"[red]錯誤：無法讀取 {input_file}：{e}[/red]")
            raise typer.Exit(1)
        except RLAdminBaseError as e:
            console.print(f"[red]錯誤：{e}[/red]")
            raise typer.Exit(1)

        if database and info.databases.get(database) is None:
            console.print(f"[red]錯誤：找不到資料庫 '{database}'[/red]")
            raise typer.Exit(1)

        print_summary(info, database, node)

        whole_snapshot = section.strip().lower() == "all" and not database
        documents = render_documents(
            info,
            sections,
            output_format,
            skip_headers=skip_headers,
            database=database,
            whole_snapshot=whole_snapshot,
            indent=2 if pretty else None,
        )

        if output_file is None and len(documents) > 1:
            output_file = "./output/"

        if output_file is None:
            typer.echo(next(iter(documents.values())))
            return

        try:
            paths = write_documents(
                documents, output_file, key, output_format, append=skip_headers and output_format != "json"
            )
        except ValueError as e:
            console.print(f"[red]錯誤：{e}[/red]")
            raise typer.Exit(1)

        for path in paths:
            console.print(f"[bold green]✓[/bold green] 輸出檔案已儲存：{path.absolute()}")
            logger.info(f"輸出檔案已儲存：{path.absolute()}")

    except typer.Exit:
        raise
    except KeyboardInterrupt:
        console.print("\n[yellow]操作已取消[/yellow]")
        logger.info("操作已取消")
        raise typer.Exit(130)
    except Exception as e:
        console.print(f"[red]未預期的錯誤：{e}[/red]")
        logger.exception("未預期的錯誤")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
