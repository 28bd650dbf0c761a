"""CLI entrypoint for vaultscope."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .config import Config, load_config

FORMATS = ["text", "json"]


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _prepare(ctx: click.Context, vault: Path | None) -> tuple[Path, Config]:
    """Resolve the vault directory and load its configuration."""
    config_path: Path | None = ctx.obj.get("config_path")
    try:
        if config_path is not None:
            config = load_config(config_path)
        else:
            config = load_config(vault_path=vault or Path.cwd())
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    if vault is None:
        vault = config.vault_path or Path.cwd()

    if not vault.exists() or not vault.is_dir():
        raise click.BadParameter(f"Directory '{vault}' does not exist.", param_hint="VAULT")

    return vault.resolve(), config


vault_argument = click.argument(
    "vault",
    required=False,
    type=click.Path(exists=False, file_okay=False, dir_okay=True, path_type=Path),
)


def format_option(choices: list[str] = FORMATS):
    return click.option(
        "--format",
        "-f",
        "fmt",
        type=click.Choice(choices),
        default="text",
        show_default=True,
        help="Output format",
    )


@click.group()
@click.version_option(__version__, prog_name="vaultscope")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=False, dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: <vault>/.vaultscope.toml if present)",
)
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """vaultscope - analytics for Markdown note vaults.

    Statistics, duplicates, link structure, content quality, trends and
    INBOX triage for Obsidian-style vaults.
    """
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@cli.group()
def analyze() -> None:
    """Vault analysis commands."""
    pass


@analyze.command("stats")
@vault_argument
@format_option()
@click.option(
    "--output",
    "-o",
    "out",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write output to a file (default: stdout)",
)
@click.pass_context
def stats_command(ctx: click.Context, vault: Path | None, fmt: str, out: Path | None) -> None:
    """Generate vault statistics.

    File counts, frontmatter usage, field types and tag distribution.

    Examples:

        vaultscope analyze stats ~/notes

        vaultscope analyze stats --format json -o stats.json
    """
    from .commands.stats_cmd import run_stats

    vault, config = _prepare(ctx, vault)
    sys.exit(run_stats(vault, fmt=fmt, out=out, ignore_patterns=config.ignore_patterns))


@analyze.command("field")
@click.argument("field_name")
@vault_argument
@format_option()
@click.pass_context
def field_command(ctx: click.Context, field_name: str, vault: Path | None, fmt: str) -> None:
    """Analyze the values and types of one frontmatter field.

    Examples:

        vaultscope analyze field tags

        vaultscope analyze field status ~/notes --format json
    """
    from .commands.stats_cmd import run_field

    vault, config = _prepare(ctx, vault)
    sys.exit(run_field(vault, field_name, fmt=fmt, ignore_patterns=config.ignore_patterns))


@analyze.command("duplicates")
@vault_argument
@click.option(
    "--type",
    "-t",
    "dup_type",
    type=click.Choice(["all", "obsidian", "sync-conflicts", "content"]),
    default="all",
    show_default=True,
    help="Type of duplicates to find",
)
@click.option("--field", "field_name", default=None, help="Also group notes sharing a value for this field")
@click.option(
    "--similarity",
    type=click.FloatRange(0.0, 1.0),
    default=None,
    help="Similarity threshold for near-duplicate content (default: 0.8 or config)",
)
@format_option()
@click.pass_context
def duplicates_command(
    ctx: click.Context,
    vault: Path | None,
    dup_type: str,
    field_name: str | None,
    similarity: float | None,
    fmt: str,
) -> None:
    """Find duplicate files.

    \b
    - Obsidian copies (files with ' 1', ' 2' suffixes)
    - Sync conflicts (Syncthing, Dropbox, OneDrive, Google Drive, iCloud)
    - Content duplicates (identical or similar bodies)
    - Field duplicates (with --field)

    Examples:

        vaultscope analyze duplicates --type obsidian

        vaultscope analyze duplicates --field title
    """
    from .commands.duplicates_cmd import run_duplicates

    vault, config = _prepare(ctx, vault)
    sys.exit(
        run_duplicates(
            vault,
            dup_type=dup_type,
            field_name=field_name,
            similarity=similarity if similarity is not None else config.similarity_threshold,
            fmt=fmt,
            ignore_patterns=config.ignore_patterns,
        )
    )


@analyze.command("health")
@vault_argument
@format_option()
@click.pass_context
def health_command(ctx: click.Context, vault: Path | None, fmt: str) -> None:
    """Score overall vault health (0-100)."""
    from .commands.health_cmd import run_health

    vault, config = _prepare(ctx, vault)
    sys.exit(run_health(vault, fmt=fmt, ignore_patterns=config.ignore_patterns))


@analyze.command("links")
@vault_argument
@format_option()
@click.option("--graph", "show_graph", is_flag=True, help="Show a text link graph")
@click.option("--depth", type=click.IntRange(min=1), default=3, show_default=True, help="Maximum graph depth")
@click.option(
    "--min-connections",
    type=click.IntRange(min=0),
    default=1,
    show_default=True,
    help="Minimum outbound links for a note to appear in the graph",
)
@click.pass_context
def links_command(
    ctx: click.Context,
    vault: Path | None,
    fmt: str,
    show_graph: bool,
    depth: int,
    min_connections: int,
) -> None:
    """Analyze link structure: orphans, centrality and density."""
    from .commands.links_cmd import run_links

    vault, config = _prepare(ctx, vault)
    sys.exit(
        run_links(
            vault,
            fmt=fmt,
            show_graph=show_graph,
            depth=depth,
            min_connections=min_connections,
            ignore_patterns=config.ignore_patterns,
        )
    )


@analyze.command("content")
@vault_argument
@format_option(["text", "json", "table", "csv"])
@click.option("--scores", "include_scores", is_flag=True, help="Include individual file quality scores")
@click.option(
    "--min-score",
    type=click.FloatRange(0.0, 100.0),
    default=0.0,
    show_default=True,
    help="Minimum quality score (0-100) for listed files",
)
@click.option("--verbose", "-v", is_flag=True, help="Show per-factor scores and all suggested fixes")
@click.pass_context
def content_command(
    ctx: click.Context,
    vault: Path | None,
    fmt: str,
    include_scores: bool,
    min_score: float,
    verbose: bool,
) -> None:
    """Score note quality with the Zettelkasten model.

    \b
    Factors (equally weighted):
    1. Readability (Flesch Reading Ease)
    2. Link density (outbound links per 100 words)
    3. Completeness (title, summary, word count)
    4. Atomicity (one concept per note)
    5. Recency (recently modified content)
    """
    from .commands.content_cmd import run_content

    vault, config = _prepare(ctx, vault)
    sys.exit(
        run_content(
            vault,
            fmt=fmt,
            include_scores=include_scores,
            min_score=min_score,
            verbose=verbose,
            ignore_patterns=config.ignore_patterns,
        )
    )


@analyze.command("trends")
@vault_argument
@format_option()
@click.option(
    "--timespan",
    type=click.Choice(["1w", "1m", "3m", "6m", "1y", "all"]),
    default=None,
    help="Time span to analyze (default: 1y or config)",
)
@click.option(
    "--granularity",
    type=click.Choice(["day", "week", "month", "quarter"]),
    default=None,
    help="Timeline bucket size (default: month or config)",
)
@click.pass_context
def trends_command(
    ctx: click.Context,
    vault: Path | None,
    fmt: str,
    timespan: str | None,
    granularity: str | None,
) -> None:
    """Analyze writing activity over time."""
    from .commands.trends_cmd import run_trends

    vault, config = _prepare(ctx, vault)
    sys.exit(
        run_trends(
            vault,
            fmt=fmt,
            timespan=timespan or config.timespan,
            granularity=granularity or config.granularity,
            ignore_patterns=config.ignore_patterns,
        )
    )


@analyze.command("inbox")
@vault_argument
@format_option()
@click.option(
    "--heading",
    "headings",
    multiple=True,
    help="Heading label that marks an inbox section. Repeatable (default: INBOX or config)",
)
@click.option(
    "--sort",
    "sort_by",
    type=click.Choice(["size", "count", "urgency"]),
    default="size",
    show_default=True,
    help="Sort sections by",
)
@click.option(
    "--min-items",
    type=click.IntRange(min=0),
    default=None,
    help="Minimum items for a section to be listed (default: 1 or config)",
)
@click.pass_context
def inbox_command(
    ctx: click.Context,
    vault: Path | None,
    fmt: str,
    headings: tuple[str, ...],
    sort_by: str,
    min_items: int | None,
) -> None:
    """Find INBOX sections with pending items.

    Examples:

        vaultscope analyze inbox

        vaultscope analyze inbox --heading INBOX --heading TODO --sort urgency
    """
    from .commands.inbox_cmd import run_inbox

    vault, config = _prepare(ctx, vault)
    sys.exit(
        run_inbox(
            vault,
            fmt=fmt,
            headings=list(headings) or config.inbox_headings,
            sort_by=sort_by,
            min_items=min_items if min_items is not None else config.inbox_min_items,
            ignore_patterns=config.ignore_patterns,
        )
    )


def main() -> None:
    """Main entrypoint."""
    cli()


if __name__ == "__main__":
    main()
