"""mdlinks CLI — entry-point for checking links in Markdown files.

Usage:
    python cli/main.py check README.md
    python cli/main.py check docs/ --validate --stats
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from mdlinks.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
import logging
from typing import Optional

import typer

from cli.rendering import render_failure, render_links, render_statistics
from mdlinks.config import settings
from mdlinks.errors import MdLinksError
from mdlinks.pipeline import FailurePolicy, md_links

app = typer.Typer(
    name="mdlinks",
    help="Extract, validate and count links in Markdown files.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Configure logging for every sub-command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="[%(levelname)s] %(message)s",
    )


@app.command("check")
def check(
    path: str = typer.Argument(..., help="Markdown file or directory to scan."),
    validate: bool = typer.Option(False, "--validate", help="Request every link and report its status."),
    stats: bool = typer.Option(False, "--stats", help="Print totals instead of the link list."),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON."),
    continue_on_error: bool = typer.Option(
        False, "--continue-on-error", help="Skip unreadable files instead of aborting."
    ),
    concurrency: Optional[int] = typer.Option(
        None, "--concurrency", min=1, help="Maximum simultaneous requests."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", min=0.001, help="Per-request timeout in seconds."
    ),
) -> None:
    """Scan PATH for Markdown links."""
    policy = FailurePolicy.CONTINUE if continue_on_error else None
    try:
        result = md_links(
            path,
            validate=validate,
            policy=policy,
            max_concurrency=concurrency,
            request_timeout=timeout,
        )
    except MdLinksError as exc:
        typer.echo(f"❌ {exc}", err=True)
        raise typer.Exit(code=1)

    for failure in result.failures:
        typer.echo(render_failure(failure), err=True)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    elif stats:
        typer.echo(render_statistics(result.statistics, include_broken=validate))
    elif result.links:
        typer.echo(render_links(result.links))
    else:
        typer.echo("No links found.")

    if validate and result.statistics.broken:
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
