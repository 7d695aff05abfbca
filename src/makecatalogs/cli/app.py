# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI entry point that rebuilds repository catalogs."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .. import __version__
from ..catalog.engine import CatalogEngine
from ..config_loader import ConfigLoader, ConfigLoadResult
from ..errors import CatalogBuildAborted, ConfigError, RepoError
from ..interfaces.repo import RepoAccessor
from ..logging import configure_logging, fail, info
from ..repo.plugins import connect
from ..reporting import render_outcome
from .models import (
    COLOR_OPTION,
    CONFIG_OPTION,
    EMOJI_OPTION,
    FORCE_OPTION,
    JOBS_OPTION,
    NO_ICONS_OPTION,
    PLUGIN_OPTION,
    REPO_PATH_ARGUMENT,
    REPO_URL_OPTION,
    SKIP_CHECK_OPTION,
    VERBOSE_OPTION,
    CatalogOptions,
    build_catalog_options,
)

MISSING_REPO_EXIT_CODE = 2

app = typer.Typer(
    name="makecatalogs",
    help="Rebuild repository catalogs from package descriptions.",
    add_completion=False,
    no_args_is_help=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.command()
def main(
    repo_path: REPO_PATH_ARGUMENT = None,
    repo_url: REPO_URL_OPTION = None,
    plugin: PLUGIN_OPTION = None,
    force: FORCE_OPTION = False,
    skip_pkg_check: SKIP_CHECK_OPTION = False,
    jobs: JOBS_OPTION = None,
    no_icons: NO_ICONS_OPTION = False,
    config: CONFIG_OPTION = None,
    verbose: VERBOSE_OPTION = False,
    emoji: EMOJI_OPTION = None,
    color: COLOR_OPTION = None,
    version: Annotated[
        bool,
        typer.Option("--version", "-V", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = False,
) -> None:
    """Rebuild every catalog from the package descriptions in a repository."""

    options = build_catalog_options(
        repo_path,
        repo_url,
        plugin,
        force,
        skip_pkg_check,
        jobs,
        no_icons,
        config,
        verbose,
        emoji,
        color,
    )
    _run_build(options)


def _run_build(options: CatalogOptions) -> None:
    """Run the catalog build for the provided CLI options.

    Args:
        options: Parsed CLI options controlling the build.

    Raises:
        typer.Exit: Always; the exit code reflects the run outcome.
    """

    load_result = _load_configuration(options)
    settings = load_result.config
    use_emoji = settings.emoji
    use_color = settings.color
    configure_logging(verbose=settings.verbose, use_color=use_color)

    if not settings.repo_url:
        fail(
            "No repository URL configured. Pass a repository path or --repo-url.",
            use_emoji=use_emoji,
            use_color=use_color,
        )
        raise typer.Exit(code=MISSING_REPO_EXIT_CODE)

    if settings.verbose:
        for source in load_result.sources:
            info(f"Configuration: {source}", use_emoji=use_emoji, use_color=use_color)

    repo = _connect(settings.repo_url, settings.plugin, use_emoji=use_emoji, use_color=use_color)
    try:
        outcome = CatalogEngine(repo, settings).run()
    except CatalogBuildAborted as exc:
        fail(str(exc), use_emoji=use_emoji, use_color=use_color)
        raise typer.Exit(code=1) from exc

    render_outcome(outcome, use_emoji=use_emoji, use_color=use_color)
    raise typer.Exit(code=outcome.exit_code())


def _load_configuration(options: CatalogOptions) -> ConfigLoadResult:
    """Resolve configuration files plus CLI overrides.

    Raises:
        typer.Exit: When configuration resolution fails.
    """

    try:
        loader = ConfigLoader.for_root(Path.cwd(), explicit_config=options.config_path)
        return loader.load(options.overrides())
    except ConfigError as exc:
        use_emoji = options.emoji if options.emoji is not None else True
        fail(f"Configuration invalid: {exc}", use_emoji=use_emoji, use_color=bool(options.color))
        raise typer.Exit(code=1) from exc


def _connect(repo_url: str, plugin: str, *, use_emoji: bool, use_color: bool) -> RepoAccessor:
    """Connect to the repository or exit with a failure message.

    Raises:
        typer.Exit: When the backend cannot be reached.
    """

    try:
        return connect(repo_url, plugin)
    except RepoError as exc:
        fail(f"Could not connect to repository {repo_url}: {exc}", use_emoji=use_emoji, use_color=use_color)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
