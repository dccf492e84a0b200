"""
Web3 Bootstrap — CLI entrypoint.

Usage:
    run-bootstrapper                 # same as "run-bootstrapper run"
    run-bootstrapper run --strict
    run-bootstrapper status
    python -m web3bootstrap.main --help
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from web3bootstrap import __version__
from web3bootstrap.core.observability.logging_config import (
    FILE_ENV,
    FILE_LEVEL_ENV,
    level_from_flags,
    setup_logging,
)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="run-bootstrapper")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to bootstrap.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Web3 Bootstrap — install a local Web3 development toolchain."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=level_from_flags(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(FILE_ENV),
        log_file_level=os.environ.get(FILE_LEVEL_ENV),
    )

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


# ── Helpers ─────────────────────────────────────────────────────


def _load_config(ctx: click.Context):
    """Load bootstrap.yml or exit 1 with the error."""
    from web3bootstrap.core.config.loader import load_config
    from web3bootstrap.errors import ConfigError

    try:
        return load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)


def _make_context(ctx: click.Context, config, **overrides):
    """Build the RunContext from config, CLI overrides and injected objects."""
    from web3bootstrap.adapters.shell.command import SubprocessRunner
    from web3bootstrap.core.context import RunContext
    from web3bootstrap.core.services.environment import detect_host

    env = dict(ctx.obj.get("env") or os.environ)
    host = ctx.obj.get("host") or detect_host(env)
    profile = config.profile
    if profile.startswith("~"):
        profile = host.home + profile[1:]

    return RunContext(
        runner=ctx.obj.get("runner") or SubprocessRunner(),
        policy=overrides.get("policy") or config.policy,
        env=env,
        host=host,
        confirm=_confirm,
        assume_yes=overrides.get("assume_yes", config.assume_yes),
        dry_run=overrides.get("dry_run", False),
        refresh=overrides.get("refresh", config.refresh),
        profile_path=Path(profile),
        install_timeout=config.timeout,
    )


def _confirm(prompt: str) -> bool:
    """Interactive yes/no; empty input or no terminal means no."""
    click.echo()
    try:
        return click.confirm(prompt, default=False)
    except click.Abort:
        return False


def _print_result(result) -> None:
    from web3bootstrap.core.services.summary import render_status_line

    colour = "red" if result.failed else "green" if result.installed else None
    click.secho(render_status_line(result), fg=colour)


def _print_failure(result) -> None:
    """Quiet mode: only failures get a status line."""
    if result.failed:
        _print_result(result)


def _print_summary(results) -> None:
    from web3bootstrap.core.services.summary import render_banner, render_summary

    click.echo()
    click.secho(render_banner(), fg="cyan", bold=True)
    for line in render_summary(results):
        click.echo(line)
    click.secho("=" * len(render_banner()), fg="cyan", bold=True)


# ── Run ─────────────────────────────────────────────────────────


@cli.command()
@click.option("--strict", "policy", flag_value="strict", default=None,
              help="Abort on the first failed install.")
@click.option("--lenient", "policy", flag_value="lenient",
              help="Warn on failed installs and continue (default).")
@click.option("--docker/--no-docker", "docker", default=None,
              help="Install Docker without asking / never install it.")
@click.option("--dry-run", is_flag=True, help="Detect only; show what would be installed.")
@click.option("--refresh/--no-refresh", default=None,
              help="Run 'brew update' when Homebrew is already installed.")
@click.option("--only", multiple=True, help="Run only these steps (repeatable).")
@click.option("--skip", multiple=True, help="Leave out these steps (repeatable).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def run(
    ctx: click.Context,
    policy: str | None,
    docker: bool | None,
    dry_run: bool,
    refresh: bool | None,
    only: tuple[str, ...],
    skip: tuple[str, ...],
    as_json: bool,
) -> None:
    """Install every missing tool, then print a version summary."""
    from web3bootstrap.core.data.recipes import default_registry, select_steps
    from web3bootstrap.core.engine.runner import run as run_steps
    from web3bootstrap.core.models.step import RunPolicy
    from web3bootstrap.errors import ConfigError, ProcessLaunchError

    config = _load_config(ctx)

    try:
        steps = select_steps(
            default_registry(),
            only=list(only) or config.only,
            skip=[*config.skip, *skip],
        )
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    overrides: dict = {"dry_run": dry_run}
    if policy:
        overrides["policy"] = RunPolicy(policy)
    if docker is not None:
        overrides["assume_yes"] = docker
    if refresh is not None:
        overrides["refresh"] = refresh
    run_ctx = _make_context(ctx, config, **overrides)

    quiet = ctx.obj.get("quiet", False)
    if not as_json and not quiet:
        mode = "dry run" if dry_run else run_ctx.policy.value
        click.secho(f"\n🔧 Bootstrapping {len(steps)} steps ({mode})\n", fg="cyan", bold=True)

    if as_json:
        on_result = None
    else:
        on_result = _print_failure if quiet else _print_result

    try:
        report = run_steps(steps, run_ctx, on_result=on_result)
    except ProcessLaunchError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.secho("\n⚠️  Interrupted", fg="yellow", err=True)
        sys.exit(130)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        sys.exit(1 if report.aborted else 0)

    if report.aborted:
        click.secho(
            f"\n❌ Aborted: {report.aborted_at} failed ({run_ctx.policy.value} policy)",
            fg="red",
            err=True,
        )
        sys.exit(1)

    _print_summary(report.results)

    if report.failed:
        click.secho(f"⚠️  {report.failed} step(s) failed, see above.", fg="yellow")
    else:
        click.secho("✅ All done. Review the summary above.", fg="green")
    if run_ctx.profile_written and not quiet:
        click.echo(f"   Open a new shell (or source {run_ctx.profile_path}) to pick up PATH changes.")


# ── Observe ─────────────────────────────────────────────────────


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show installed tool versions without installing anything."""
    from web3bootstrap.core.data.recipes import default_registry
    from web3bootstrap.core.engine.runner import probe

    config = _load_config(ctx)
    run_ctx = _make_context(ctx, config, dry_run=True)
    report = probe(default_registry(), run_ctx)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        return

    _print_summary(report.results)


@cli.command("steps")
def list_steps() -> None:
    """List the checklist in execution order."""
    from web3bootstrap.core.data.recipes import default_registry

    for i, step in enumerate(default_registry(), 1):
        flags = []
        if step.foundational:
            flags.append("foundational")
        if step.confirm:
            flags.append("asks first")
        if step.install is None:
            flags.append("detect only")
        extra = f"  [{', '.join(flags)}]" if flags else ""
        cond = f"  (needs {', '.join(step.conditions)})" if step.conditions else ""
        click.echo(f"{i:>3}. {step.name:<10} {step.label}{extra}{cond}")


# ── Config ──────────────────────────────────────────────────────


@cli.group()
def config() -> None:
    """Bootstrap configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate bootstrap.yml and show the effective settings."""
    from web3bootstrap.core.config.loader import find_config_file, load_config
    from web3bootstrap.errors import ConfigError

    path = ctx.obj.get("config_path") or find_config_file()
    try:
        cfg = load_config(path, search=False)
    except ConfigError as e:
        if as_json:
            click.echo(json.dumps({"valid": False, "error": str(e)}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({
            "valid": True,
            "path": str(path) if path else None,
            "config": cfg.model_dump(mode="json"),
        }, indent=2))
        return

    source = str(path) if path else "defaults (no bootstrap.yml found)"
    click.secho(f"✅ Configuration valid: {source}", fg="green")
    click.echo(f"   policy:  {cfg.policy.value}")
    click.echo(f"   docker:  {cfg.docker}")
    click.echo(f"   profile: {cfg.profile}")
    click.echo(f"   refresh: {cfg.refresh}")
    if cfg.only:
        click.echo(f"   only:    {', '.join(cfg.only)}")
    if cfg.skip:
        click.echo(f"   skip:    {', '.join(cfg.skip)}")


if __name__ == "__main__":
    cli()
