# filewriter/cli.py
from __future__ import annotations

import argparse
import logging
import os
import signal
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from filewriter.config.write_plan import LogSettings, WritePlan
from filewriter.errors import PlanError
from filewriter.files.file_writer import DEFAULT_ENCODING, FileWriter
from filewriter.logger import BasicLogger
from filewriter.runtime.plan_runner import STATUS_FAILED, STATUS_OK, PlanRunner

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2

console = Console(stderr=True)

_STATUS_STYLE = {STATUS_OK: "green", STATUS_FAILED: "bold red"}


def _handle_sigint(signum, frame) -> None:
    console.print("\n[yellow]\\[INTERRUPTED][/yellow] filewriter terminated by user (Ctrl+C).")
    raise SystemExit(130)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filewriter",
        description="Create, overwrite, append to, prepend to and delete text files.",
    )
    parser.add_argument(
        "--encoding",
        default=DEFAULT_ENCODING,
        help=f"Text encoding for reads and writes (plans set their own). Default: {DEFAULT_ENCODING}.",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    # --------------------
    # content commands
    # --------------------
    for name, help_text in (
        ("overwrite", "Replace the whole file with CONTENT"),
        ("append", "Add CONTENT to the end of the file"),
        ("prepend", "Add CONTENT to the beginning of the file"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("path", type=str, help="Target file (parent directories are created).")
        p.add_argument(
            "content",
            nargs="?",
            default=None,
            help="Text to write. Read from --from-file or stdin when omitted.",
        )
        p.add_argument(
            "--from-file",
            dest="from_file",
            type=str,
            default=None,
            help="Read the content from this file instead.",
        )

    # --------------------
    # path commands
    # --------------------
    del_p = sub.add_parser("delete", help="Delete the file")
    del_p.add_argument("path", type=str)

    read_p = sub.add_parser("read", help="Print the file content to stdout")
    read_p.add_argument("path", type=str)

    # --------------------
    # apply command
    # --------------------
    apply_p = sub.add_parser("apply", help="Execute a write plan JSON")
    apply_p.add_argument("plan", type=str, help="Path to write plan JSON")
    apply_p.add_argument(
        "--project-root",
        type=str,
        default=None,
        help="Root that step targets are resolved against. Default: current working directory.",
    )
    apply_p.add_argument(
        "--start-from",
        type=int,
        default=None,
        help="Zero-based index of the step to start from.",
    )

    return parser


def _make_logger() -> logging.Logger:
    settings = LogSettings.from_env()
    return BasicLogger(
        "filewriter",
        level=settings.level,
        log_to_file=settings.enabled,
        log_dir=settings.log_dir,
        log_file=settings.log_file,
    ).get_logger()


def _read_content(args: argparse.Namespace) -> Optional[str]:
    if args.content is not None and args.from_file:
        console.print("[red]Pass either CONTENT or --from-file, not both.[/red]")
        return None
    if args.content is not None:
        return args.content
    if args.from_file:
        try:
            with open(args.from_file, "r", encoding=args.encoding, newline="") as f:
                return f.read()
        except (OSError, UnicodeError, LookupError) as e:
            console.print(f"[red]Cannot read {escape(args.from_file)}:[/red] {escape(str(e))}")
            return None
    return sys.stdin.read()


def _run_content_command(args: argparse.Namespace, logger: logging.Logger) -> int:
    content = _read_content(args)
    if content is None:
        return EXIT_USAGE

    writer = FileWriter(args.path, encoding=args.encoding, logger=logger)
    ok = getattr(writer, args.command)(content)
    if not ok:
        console.print(f"[bold red]{args.command} failed:[/bold red] {escape(args.path)}")
        return EXIT_FAILED

    console.print(f"[green]{args.command}[/green] {escape(args.path)} ({len(content)} chars)")
    return EXIT_OK


def _run_delete(args: argparse.Namespace, logger: logging.Logger) -> int:
    # Constructing a FileWriter would create the file, so probe first.
    if not os.path.exists(args.path):
        console.print(f"[yellow]Not found:[/yellow] {escape(args.path)}")
        return EXIT_FAILED

    if not FileWriter(args.path, encoding=args.encoding, logger=logger).delete():
        console.print(f"[bold red]delete failed:[/bold red] {escape(args.path)}")
        return EXIT_FAILED

    console.print(f"[green]deleted[/green] {escape(args.path)}")
    return EXIT_OK


def _run_read(args: argparse.Namespace, logger: logging.Logger) -> int:
    if not os.path.exists(args.path):
        console.print(f"[yellow]Not found:[/yellow] {escape(args.path)}")
        return EXIT_FAILED

    content = FileWriter(args.path, encoding=args.encoding, logger=logger).read()
    if content is None:
        console.print(f"[bold red]read failed:[/bold red] {escape(args.path)}")
        return EXIT_FAILED

    sys.stdout.write(content)
    sys.stdout.flush()
    return EXIT_OK


def _run_apply(args: argparse.Namespace) -> int:
    project_root = Path(args.project_root).resolve() if args.project_root else Path.cwd().resolve()
    plan_path = Path(args.plan).resolve()

    try:
        plan = WritePlan.from_file(plan_path)
    except PlanError as e:
        console.print(f"[bold red]Invalid plan:[/bold red] {escape(str(e))}")
        return EXIT_USAGE
    except OSError as e:
        console.print(f"[bold red]Cannot open plan {escape(str(plan_path))}:[/bold red] {escape(str(e))}")
        return EXIT_USAGE

    runner = PlanRunner(project_root=project_root, plan=plan, start_from=args.start_from)
    result = runner.run()

    table = Table(title=f"Write plan: {escape(plan_path.name)}")
    table.add_column("#", justify="right")
    table.add_column("Step")
    table.add_column("Action")
    table.add_column("Target")
    table.add_column("Status")
    for step in result.steps:
        style = _STATUS_STYLE.get(step.status, "dim")
        table.add_row(
            str(step.index),
            escape(step.name),
            step.action,
            escape(step.target),
            f"[{style}]{step.status}[/{style}]",
        )
    console.print(table)

    return EXIT_OK if result.ok else EXIT_FAILED


def main(argv: list[str] | None = None) -> int:
    # Register Ctrl+C handler as early as possible
    signal.signal(signal.SIGINT, _handle_sigint)

    load_dotenv()

    args = _build_parser().parse_args(argv)

    if args.command == "apply":
        return _run_apply(args)

    try:
        logger = _make_logger()
    except PlanError as e:
        console.print(f"[bold red]Invalid logging environment:[/bold red] {escape(str(e))}")
        return EXIT_USAGE

    if args.command in ("overwrite", "append", "prepend"):
        return _run_content_command(args, logger)
    if args.command == "delete":
        return _run_delete(args, logger)
    if args.command == "read":
        return _run_read(args, logger)

    return EXIT_USAGE


if __name__ == "__main__":
    raise SystemExit(main())
