"""Click CLI for ghdep.

Resolves the current user, fetches every matching Dependabot PR, narrows or
sorts the list and hands it to the TUI.
"""

import json

import click

from ghdep_core import gh_ops
from ghdep_core.dupefilter import filter_duplicate_units
from ghdep_core.paths import configure_logger, set_debug
from ghdep_core.query import SearchQuery, load_all
from ghdep_core.units import ReviewUnit, sort_by_updated

_log = configure_logger("ghdep.cli")

# Shared Click settings: make -h and --help both work
CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


def fetch_units(query: SearchQuery) -> list[ReviewUnit]:
    """Load all pages for *query*, echoing progress to stderr."""
    search = query.search_string()
    click.echo(f'Searching "{search}"...', err=True)

    def progress(loaded: int, total: int) -> None:
        click.echo(f'Searching "{search}"... ({loaded}/{total})', err=True)

    return load_all(query, progress=progress)


def prepare_units(units: list[ReviewUnit], dupes: bool) -> list[ReviewUnit]:
    """Apply the duplicate filter, or sort by last update (oldest first)."""
    if dupes:
        click.echo("Only showing duplicate PRs", err=True)
        return filter_duplicate_units(units)
    return sort_by_updated(units)


def run_tui(units: list[ReviewUnit], filter_label: str) -> None:
    from ghdep_core.tui.app import DependabotApp
    DependabotApp(units, filter_label).run()


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option("-o", "--org", default="", envvar="GHDEP_ORG",
              help="Organization to query (e.g. einride)")
@click.option("-t", "--team", default="", envvar="GHDEP_TEAM",
              help="Team to query (e.g. einride/team-transport-execution)")
@click.option("-d", "--dupes", is_flag=True, default=False,
              help="Only show PRs that bump the same package in the same repo")
@click.option("--debug", is_flag=True, default=False,
              help="Write debug-level logs to ~/.ghdep/debug/")
def cli(org: str, team: str, dupes: bool, debug: bool):
    """Manage Dependabot PRs.

    \b
    Examples:
      ghdep --org einride
      ghdep --team einride/team-transport-execution --dupes
    """
    if debug:
        set_debug(True)
    gh_ops._check_gh()

    try:
        click.echo("Resolving current user...", err=True)
        username = gh_ops.current_user()
        query = SearchQuery(username=username, org=org, team=team)
        _log.info("searching %r", query.search_string())
        units = fetch_units(query)
    except (gh_ops.GhCommandError, json.JSONDecodeError, KeyError) as e:
        _log.exception("fetch failed")
        raise click.ClickException(f"Failed to load pull requests: {e}") from e

    units = prepare_units(units, dupes)
    _log.info("showing %d units", len(units))
    run_tui(units, query.filter_label())


def main():
    cli()


if __name__ == "__main__":
    main()
