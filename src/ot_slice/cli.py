"""OctaSlice - chop Octatrack slices into sox command lines."""
from __future__ import annotations

from pathlib import Path

import click

from ot_core.reader import LoadError, load
from ot_verify.logic import canonical_json, verify_ot
from ot_slice.extract import recording_clamps
from ot_slice.sox import is_settings_file, sox_lines
from ot_slice.table import compile_slice_table


def _fail(path, reason: str) -> None:
    # One line per failed file, never a stack trace.
    click.echo(f"ERROR: {path}: {reason}", err=True)


def _warn(path, message: str) -> None:
    click.echo(f"WARNING: {path}: {message}", err=True)


class DefaultSoxGroup(click.Group):
    """Run `sox` when the first argument is not a subcommand.

    Keeps the plain `octasox OTFILE [OTFILE ...]` invocation working.
    """

    def parse_args(self, ctx, args):
        if args and args[0] not in self.commands and args[0] not in ("--help", "-h"):
            args = ["sox", *args]
        return super().parse_args(ctx, args)


@click.group(cls=DefaultSoxGroup)
def main() -> None:
    """Generate sox command lines that chop samples based on Octatrack slices."""


@main.command("sox")
@click.argument("otfiles", nargs=-1, required=True)
@click.option("--strict", is_flag=True, help="Verify header, slice count and checksum before chopping")
def sox_cmd(otfiles: tuple[str, ...], strict: bool) -> None:
    """Print one sox command line per slice of each OTFILE."""
    failed = 0
    for name in otfiles:
        if not is_settings_file(name):
            click.echo(f"Skipping {name}: Only .ot files are supported.", err=True)
            continue

        if strict:
            result = verify_ot(Path(name))
            if result["status"] != "PASS":
                codes = ",".join(e["code"] for e in result["errors"])
                _fail(name, f"strict verification failed ({codes})")
                failed += 1
                continue

        try:
            record = load(name)
        except LoadError as e:
            _fail(e.path, e.reason)
            failed += 1
            continue

        with recording_clamps() as messages:
            lines = sox_lines(name, record)
        for m in messages:
            _warn(name, m)
        for line in lines:
            click.echo(line)

    if failed:
        raise SystemExit(1)


@main.command("table")
@click.argument("otfiles", nargs=-1, required=True)
@click.option("--out", "out", default="slices.parquet", show_default=True,
              type=click.Path(dir_okay=False, path_type=Path), help="Parquet file to write")
def table_cmd(otfiles: tuple[str, ...], out: Path) -> None:
    """Write a Parquet slice table for every loadable OTFILE."""
    names = []
    for name in otfiles:
        if not is_settings_file(name):
            click.echo(f"Skipping {name}: Only .ot files are supported.", err=True)
            continue
        names.append(name)

    summary = compile_slice_table(names, out)
    for s in summary["skipped"]:
        _fail(s["path"], s["reason"])
    for w in summary["warnings"]:
        _warn(w["path"], w["message"])

    if summary["out"] is None:
        click.echo("No slices found; nothing written.", err=True)
    else:
        click.echo(f"PASS: Slice table written to {summary['out']}")
        click.echo(f"  Files: {summary['files']}")
        click.echo(f"  Slices: {summary['slices']}")

    if summary["skipped"]:
        raise SystemExit(1)


@main.command("inspect")
@click.argument("otfile")
def inspect_cmd(otfile: str) -> None:
    """Print the decoded record of OTFILE as canonical JSON."""
    try:
        record = load(otfile)
    except LoadError as e:
        _fail(e.path, e.reason)
        raise SystemExit(1)
    click.echo(canonical_json(record.as_dict()))


if __name__ == "__main__":
    main()
