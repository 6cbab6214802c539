"""Command line entry point for the skill activation hook."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from skill_triggers.discovery import SourceRoots, discover_sources
from skill_triggers.errors import HookInputError
from skill_triggers.hook import evaluate_prompt, run_hook
from skill_triggers.merger import merge_rules
from skill_triggers.observability import setup_logging
from skill_triggers.settings import HookSettings

logger = logging.getLogger(__name__)


def _load_settings(ctx: click.Context) -> HookSettings:
    settings = ctx.obj
    if settings is None:
        settings = HookSettings()
        ctx.obj = settings
    return settings


def _roots(
    settings: HookSettings,
    home: Path | None,
    project_dir: Path | None,
) -> SourceRoots:
    roots = settings.roots()
    return SourceRoots(
        home=home or roots.home,
        project_dir=project_dir or roots.project_dir,
        plugin_root=roots.plugin_root,
    )


@click.group(invoke_without_command=True)
@click.pass_context
def main(ctx: click.Context) -> None:
    """Match a prompt against skill-rules.json triggers.

    Without a sub-command, runs as a UserPromptSubmit hook.
    """
    try:
        settings = _load_settings(ctx)
        setup_logging(settings.log_level)
    except Exception as exc:
        click.echo(f"Uncaught error: {exc}", err=True)
        ctx.exit(1)

    if ctx.invoked_subcommand is None:
        ctx.invoke(hook)


@main.command()
@click.pass_context
def hook(ctx: click.Context) -> None:
    """Read the hook payload on stdin and print the verdict."""
    settings = _load_settings(ctx)

    try:
        raw = sys.stdin.read()
        payload = run_hook(raw, settings.roots())
    except HookInputError as exc:
        click.echo(f"Error in skill-activation-prompt hook: {exc}", err=True)
        ctx.exit(1)
    except Exception as exc:
        logger.debug("Hook failed", exc_info=True)
        click.echo(f"Uncaught error: {exc}", err=True)
        ctx.exit(1)

    if payload is not None:
        click.echo(payload)


@main.command()
@click.option("--home", type=click.Path(path_type=Path), default=None, help="Home override")
@click.option(
    "--project-dir",
    type=click.Path(path_type=Path),
    default=None,
    help="Project directory override",
)
@click.pass_context
def rules(ctx: click.Context, home: Path | None, project_dir: Path | None) -> None:
    """Show the merged rule set and the source each rule came from."""
    settings = _load_settings(ctx)
    roots = _roots(settings, home, project_dir)
    rule_set = merge_rules(discover_sources(roots))

    console = Console()
    table = Table(title="Skill rules")
    table.add_column("Skill", style="bold")
    table.add_column("Type")
    table.add_column("Enforcement")
    table.add_column("Priority")
    table.add_column("Source", style="dim")

    for name, rule in sorted(rule_set.skills.items()):
        table.add_row(
            name,
            rule.type.value if rule.type else "",
            rule.enforcement.value,
            rule.priority.value,
            rule.source.value if rule.source else "",
        )

    if rule_set.skills:
        console.print(table)
    else:
        console.print("No skill rules found.")

    for skipped in rule_set.skipped:
        console.print(
            f"[yellow]Skipped[/yellow] {skipped.source.tier.value}: {escape(skipped.reason)}",
            soft_wrap=True,
        )


@main.command()
@click.argument("prompt")
@click.option("--home", type=click.Path(path_type=Path), default=None, help="Home override")
@click.option(
    "--project-dir",
    type=click.Path(path_type=Path),
    default=None,
    help="Project directory override",
)
@click.pass_context
def check(
    ctx: click.Context,
    prompt: str,
    home: Path | None,
    project_dir: Path | None,
) -> None:
    """Dry-run the matcher against PROMPT."""
    settings = _load_settings(ctx)
    output = evaluate_prompt(prompt, _roots(settings, home, project_dir)).to_output()

    if output is None:
        click.echo("No skills matched.")
    else:
        click.echo(output.to_json())


if __name__ == "__main__":
    main()
