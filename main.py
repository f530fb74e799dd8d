from pathlib import Path
from typing import List, Optional

import typer

from src.pipelines import run_build
from src.refdata import BuildConfig, fetch_reference_data
from src.refdata.config import DEFAULT_FIXTURES_PATH, DEFAULT_PACKAGES_ROOT, DEFAULT_RAW_ROOT
from src.resolution import MultipleScriptsError

app = typer.Typer()


@app.command("fetch")
def fetch(
    force: bool = typer.Option(False, "--force", help="Redownload even if files exist."),
    raw_root: Path = typer.Option(
        DEFAULT_RAW_ROOT,
        "--raw-root",
        exists=False,
        file_okay=False,
        dir_okay=True,
        writable=True,
        help="Directory to store reference files.",
    ),
) -> None:
    """
    Download the Unicode script table and the ISO-639-3 registry.
    """
    fetch_reference_data(raw_root, force=force)


@app.command("build")
def build(
    raw_root: Path = typer.Option(
        DEFAULT_RAW_ROOT,
        "--raw-root",
        file_okay=False,
        dir_okay=True,
        help="Directory holding the reference files.",
    ),
    packages_root: Path = typer.Option(
        DEFAULT_PACKAGES_ROOT,
        "--packages-root",
        file_okay=False,
        dir_okay=True,
        help="Directory with one sub-directory (and package.json) per package.",
    ),
    fixtures_path: Path = typer.Option(
        DEFAULT_FIXTURES_PATH,
        "--fixtures-path",
        dir_okay=False,
        help="Where the umbrella package's fixtures are written.",
    ),
    package: Optional[List[str]] = typer.Option(
        None,
        "--package",
        help="Only build the named package(s); repeat for several.",
    ),
) -> None:
    """
    Compile expressions, trigram data, readme and fixtures for every package.
    """
    try:
        builds = run_build(
            raw_root=raw_root,
            packages_root=packages_root,
            fixtures_path=fixtures_path,
            config=BuildConfig(),
            only=package,
        )
    except MultipleScriptsError as exc:
        typer.echo(f"[build] {exc}", err=True)
        raise typer.Exit(code=1) from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    typer.echo(f"[build] Wrote {len(builds)} package(s).")


if __name__ == "__main__":
    app()
