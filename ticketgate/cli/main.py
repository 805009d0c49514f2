# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Ticketgate CLI - Main entry point

Usage:
    ticketgate check         - Validate the PR of a GitHub event and publish statuses (alias: c)
    ticketgate parse         - Show the ticket and flags parsed from a title/body (alias: p)
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import bittensor as bt
import click
from rich.console import Console
from rich.table import Table

from ticketgate import __version__
from ticketgate.classes import CommitStatus, PullRequest
from ticketgate.utils.parsing import parse_message, parse_pull_request_flags
from ticketgate.validator.status import build_statuses, is_suppressed, publish_statuses
from ticketgate.validator.utils.config import DO_NOT_TOUCH_REPOS, GITHUB_EVENT_PATH
from ticketgate.validator.validation import validate_pull_request

console = Console()


class AliasGroup(click.Group):
    """Click Group that supports command aliases without duplicate help entries."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._aliases = {}  # alias -> canonical name

    def add_alias(self, name, alias):
        """Register an alias for an existing command."""
        self._aliases[alias] = name

    def get_command(self, ctx, cmd_name):
        canonical = self._aliases.get(cmd_name, cmd_name)
        return super().get_command(ctx, canonical)

    def format_commands(self, ctx, formatter):
        """Write the help text, appending aliases to command descriptions."""
        alias_map = {}
        for alias, canonical in self._aliases.items():
            alias_map.setdefault(canonical, []).append(alias)

        commands = []
        for subcommand in self.list_commands(ctx):
            cmd = self.commands.get(subcommand)
            if cmd is None or cmd.hidden:
                continue
            help_text = cmd.get_short_help_str(limit=150)
            aliases = alias_map.get(subcommand)
            if aliases:
                subcommand = f'{subcommand}, {", ".join(sorted(aliases))}'
            commands.append((subcommand, help_text))

        if commands:
            with formatter.section('Commands'):
                formatter.write_dl(commands)


def set_failed(message: str) -> None:
    """Mark the run as failed: a GitHub Actions error annotation, then exit status 1."""
    bt.logging.error(message)
    click.echo(f'::error::{message}')
    raise SystemExit(1)


def load_event(event_path: str) -> Dict[str, Any]:
    """Read the event payload GitHub Actions wrote for this run."""
    return json.loads(Path(event_path).read_text())


def print_statuses(statuses: List[CommitStatus], title: str) -> None:
    table = Table(title=title, show_header=True)
    table.add_column('Check', style='cyan')
    table.add_column('State')
    table.add_column('Description')

    for status in statuses:
        state = f'[green]{status.state}[/green]' if status.passed else f'[red]{status.state}[/red]'
        table.add_row(status.context, state, status.description)

    console.print(table)


async def run_check(pull_request: PullRequest, dry_run: bool, target_url: Optional[str]) -> Optional[str]:
    """Validate the PR and publish its statuses. Returns the failure reason, or None on success."""
    outcome, error = await validate_pull_request(pull_request)
    if error:
        return error

    if dry_run:
        reason = is_suppressed(pull_request, DO_NOT_TOUCH_REPOS)
        if reason:
            console.print(f'[yellow]{reason}[/yellow]')
        print_statuses(build_statuses(outcome, target_url), title=f'PR #{pull_request.number} (dry run)')
        return None

    published = await publish_statuses(pull_request, outcome, target_url=target_url)
    if published:
        print_statuses(published, title=f'PR #{pull_request.number}')
    return None


@click.group(cls=AliasGroup)
@click.version_option(version=__version__, prog_name='ticketgate')
def cli():
    """Ticketgate - Check PR title, commits and Jira ticket consistency"""
    pass


@cli.command('check')
@click.option(
    '--event-path',
    type=click.Path(exists=True, dir_okay=False),
    default=GITHUB_EVENT_PATH,
    help='Path to the pull_request event JSON (defaults to $GITHUB_EVENT_PATH)',
)
@click.option('--dry-run', is_flag=True, help='Validate and show statuses without publishing them')
@click.option('--target-url', default=None, help='Detail link attached to the published statuses')
def check(event_path: Optional[str], dry_run: bool, target_url: Optional[str]):
    """Validate a pull request and publish its status checks.

    \b
    Examples:
        ticketgate check
        ticketgate check --event-path event.json --dry-run
    """
    if not event_path:
        set_failed('No event payload: pass --event-path or set GITHUB_EVENT_PATH')

    try:
        payload = load_event(event_path)
        bt.logging.debug(f'Event payload: {payload}')
        pull_request = PullRequest.from_github_payload(payload)
        error = asyncio.run(run_check(pull_request, dry_run, target_url))
    except Exception as e:
        set_failed(str(e))

    if error:
        set_failed(error)


@cli.command('parse')
@click.option('--title', default='', help='PR title or commit message')
@click.option('--body', default='', help='PR description')
def parse(title: str, body: str):
    """Show the ticket key and override flags parsed from PR text."""
    issue_key = parse_message(title)
    if issue_key:
        console.print(f'[bold]Ticket:[/bold] [green]{issue_key}[/green]')
    else:
        console.print('[bold]Ticket:[/bold] [red]none[/red]')

    flags = parse_pull_request_flags(body)
    if not flags:
        console.print('[dim]No flags found[/dim]')
        return

    table = Table(show_header=True)
    table.add_column('Flag', style='cyan')
    table.add_column('Type')
    table.add_column('Value', style='green')
    for key, value in flags.items():
        table.add_row(key, value.kind.value.lower(), str(value))
    console.print(table)


cli.add_alias('check', 'c')
cli.add_alias('parse', 'p')


def main():
    """Main entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
