from pathlib import Path
import click
from .logic import canonical_json, verify_ot

@click.command()
@click.argument("otfiles", nargs=-1, required=True, type=click.Path(path_type=Path))
def main(otfiles):
    """Strictly verify .ot settings files, one JSON result per file."""
    failed = 0
    for p in otfiles:
        result = verify_ot(p)
        click.echo(canonical_json(result))
        if result["status"] != "PASS":
            failed += 1
    if failed:
        raise SystemExit(1)

if __name__ == "__main__":
    main()
