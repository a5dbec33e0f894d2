"""CLI commands for docwright.

Provides the Click-based command group 'docwright' with subcommands for
reviewing staged changes, writing changesets, generating READMEs and
documentation pages, and building the VitePress sidebar.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from docwright import __version__
from docwright.generators.ai_client import AIClient
from docwright.generators.changeset import (
    BUMP_LEVELS,
    ChangesetGenerator,
    detect_package_name,
)
from docwright.generators.documentation import DocumentationGenerator
from docwright.generators.readme_gen import ReadmeGenerator
from docwright.generators.review import CodeReviewer
from docwright.sidebar.generator import run_sidebar, use_locale_collation
from docwright.utils.config import AppConfig, load_config
from docwright.utils.git_utils import (
    get_branch_diff,
    get_changed_files_git,
    get_repo_root,
    get_staged_diff,
    get_staged_files,
)
from docwright.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def _config(ctx: click.Context) -> AppConfig:
    return ctx.find_root().obj


def _report_usage(client: AIClient) -> None:
    if client.usage.total_tokens:
        click.echo(f"Tokens used: {client.usage.total_tokens:,}")


@click.group()
@click.version_option(version=__version__, prog_name="docwright")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to config.yaml.",
)
@click.pass_context
def docwright(ctx: click.Context, config_path: Optional[str]) -> None:
    """docwright: AI-assisted docs, changesets and reviews for git repositories."""
    config = load_config(config_path)
    setup_logging(
        level=config.logging.level,
        log_format=config.logging.format,
        log_file=config.logging.file,
    )
    use_locale_collation()
    ctx.obj = config


@docwright.command()
@click.option("--docs-root", type=click.Path(), default=None, help="Documentation root.")
@click.option("--output", type=click.Path(), default=None, help="Generated sidebar file.")
@click.option(
    "--ignore",
    "ignore_patterns",
    multiple=True,
    help="Glob pattern to exclude; repeat to give several. Replaces the configured list.",
)
@click.option(
    "--sort/--no-sort",
    "sort_by_prefix",
    default=None,
    help="Order items by numeric file-name prefix.",
)
@click.pass_context
def sidebar(
    ctx: click.Context,
    docs_root: Optional[str],
    output: Optional[str],
    ignore_patterns: tuple[str, ...],
    sort_by_prefix: Optional[bool],
) -> None:
    """Generate the VitePress sidebar from the markdown files in the docs root."""
    config = _config(ctx).sidebar.to_sidebar_config().with_overrides(
        docs_root=docs_root,
        output_path=output,
        ignore_patterns=ignore_patterns or None,
        sort_by_prefix=sort_by_prefix,
    )
    ctx.exit(run_sidebar(config))


@docwright.command()
@click.option("--repo", type=click.Path(exists=True, file_okay=False), default=".")
@click.pass_context
def check(ctx: click.Context, repo: str) -> None:
    """Review staged changes with AI before committing.

    Exits with status 1 when the review recommends blocking the commit.
    """
    diff = get_staged_diff(repo)
    if not diff.strip():
        click.echo("No staged changes to check.")
        return

    files = get_staged_files(repo)
    click.echo(f"Reviewing {len(files)} staged files...")

    client = AIClient(config=_config(ctx).api)
    try:
        result = CodeReviewer(client).review(diff, files)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    click.echo(result.feedback)
    _report_usage(client)
    if result.passed:
        click.echo("Check passed.")
    else:
        click.echo("Check failed: address the issues above before committing.", err=True)
        ctx.exit(1)


@docwright.command()
@click.option("--repo", type=click.Path(exists=True, file_okay=False), default=".")
@click.option("--base", default=None, help="Describe BASE...HEAD instead of staged changes.")
@click.option("--bump", type=click.Choice(BUMP_LEVELS), default=None, help="Release type.")
@click.option("--dry-run", is_flag=True, help="Print the changeset instead of writing it.")
@click.pass_context
def changeset(
    ctx: click.Context,
    repo: str,
    base: Optional[str],
    bump: Optional[str],
    dry_run: bool,
) -> None:
    """Write a changeset file describing the current changes."""
    config = _config(ctx)
    base = base or config.changeset.default_base
    diff = get_branch_diff(repo, base) if base else get_staged_diff(repo)
    if not diff.strip():
        click.echo("No changes found for a changeset.")
        return

    repo_root = get_repo_root(repo) or Path(repo)
    package = detect_package_name(repo_root)

    client = AIClient(config=config.api)
    generator = ChangesetGenerator(client, directory=config.changeset.directory)
    try:
        entry = generator.generate(diff, package, bump)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if dry_run:
        click.echo(entry.render())
        click.echo("Dry run complete. No file written.")
        return

    path = generator.write(entry, repo_root)
    _report_usage(client)
    click.echo(f"Changeset ({entry.bump}) written to {path}")


@docwright.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False))
@click.option(
    "--output", "-o", type=click.Path(), default=None, help="Output file path."
)
@click.pass_context
def readme(ctx: click.Context, path: str, output: Optional[str]) -> None:
    """Generate a README.md for a project.

    Analyzes the project layout and manifests and generates a README
    using AI.
    """
    config = _config(ctx)
    client = AIClient(config=config.api)
    gen = ReadmeGenerator(client)

    click.echo(f"Analyzing project: {path}")
    project_info = gen.analyze_project(path)
    click.echo(
        f"Found {len(project_info.dependencies)} dependencies, "
        f"{len(project_info.docs_pages)} documentation pages"
    )

    try:
        content = gen.generate_readme(project_info)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    output_path = Path(output) if output else Path(path) / "README.md"
    output_path.write_text(content + "\n", encoding="utf-8")
    _report_usage(client)
    click.echo(f"README written to {output_path}")


@docwright.command()
@click.argument("paths", nargs=-1, type=click.Path())
@click.option("--section", default=None, help="Docs subdirectory for the pages.")
@click.option("--changed", is_flag=True, help="Document files changed since HEAD~1.")
@click.option("--since", default=None, help="Git ref used with --changed.")
@click.option("--no-sidebar", is_flag=True, help="Do not regenerate the sidebar.")
@click.pass_context
def documentation(
    ctx: click.Context,
    paths: tuple[str, ...],
    section: Optional[str],
    changed: bool,
    since: Optional[str],
    no_sidebar: bool,
) -> None:
    """Generate documentation pages for source files with AI.

    Each file becomes one markdown page in the docs root; the sidebar is
    regenerated afterwards so the pages appear in the navigation.
    """
    config = _config(ctx)
    sources = list(paths)
    if changed:
        repo_root = get_repo_root(".") or Path(".")
        sources.extend(
            str(repo_root / f) for f in get_changed_files_git(str(repo_root), since)
        )
    if not sources:
        raise click.UsageError("Give at least one path or use --changed.")

    sidebar_config = config.sidebar.to_sidebar_config()
    client = AIClient(config=config.api)
    gen = DocumentationGenerator(
        client,
        docs_root=sidebar_config.docs_root,
        section=section or config.documentation.section,
        extensions=config.documentation.extensions,
    )

    try:
        run = gen.document_files(sources)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    for skipped in run.skipped:
        click.echo(f"  Skipped: {skipped}")
    click.echo(f"Wrote {len(run.written)} documentation pages to {gen.section_dir}")
    _report_usage(client)

    if run.written and config.documentation.update_sidebar and not no_sidebar:
        status = run_sidebar(sidebar_config)
        if status:
            ctx.exit(status)
