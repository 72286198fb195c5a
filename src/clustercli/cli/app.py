# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/clustercli/cli/app.py
from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from clustercli.ansible.cli_runner import AnsibleCliRunner
from clustercli.ansible.errors import ClusterCliError
from clustercli.ansible.playbook import available_playbooks
from clustercli.commands.dispatcher import dispatch
from clustercli.commands.models import (
    ActionRequest,
    CopyDirection,
    CopyFile,
    InventoryList,
    Ping,
    Reboot,
    RunCommand,
    ServiceAction,
    ServiceOp,
    Shutdown,
    Ssh,
    Update,
    Uptime,
)
from clustercli.config.loader import resolve_settings
from clustercli.logging.log import init_logging
from clustercli.observers.dispatcher import EventBus
from clustercli.observers.jsonfile import JsonFileObserver
from clustercli.observers.logger import LoggerObserver
from clustercli.utils.execution import ExecutionContext


# ------------------------------------------------------------------------------
# CLI setup
# ------------------------------------------------------------------------------

app = typer.Typer(help="CLI to manage a cluster of machines with Ansible", no_args_is_help=True)
inventory_app = typer.Typer(help="Inspect the cluster inventory", no_args_is_help=True)
service_app = typer.Typer(help="Deploy or delete services on the cluster", no_args_is_help=True)
app.add_typer(inventory_app, name="inventory")
app.add_typer(service_app, name="service")


@dataclass
class GlobalOptions:
    inventory: Optional[str] = None
    host_pattern: Optional[str] = None
    verbose: int = 0
    config: Optional[Path] = None
    capture: Optional[bool] = None
    dry_run: bool = False
    events_file: Optional[Path] = None
    log_file: bool = True
    ansible_config: Optional[str] = None


@app.callback()
def main(
    ctx: typer.Context,
    inventory: Optional[str] = typer.Option(
        None, "--inventory", "-i", envvar="CLUSTERCLI_INVENTORY", help="Ansible inventory file"
    ),
    host_pattern: Optional[str] = typer.Option(
        None, "--host-pattern", "-p", help="Hosts to target (default: all)"
    ),
    verbose: int = typer.Option(
        0, "--verbose", "-v", count=True, help="Increase verbosity, repeat up to 4 times"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", envvar="CLUSTERCLI_CONFIG", help="YAML settings file"
    ),
    capture: Optional[bool] = typer.Option(
        None, "--capture/--no-capture", help="Capture Ansible output and print it when done"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Log the Ansible commands without running them"),
    events_file: Optional[Path] = typer.Option(
        None, "--events-file", help="Append execution events as JSON lines to this file"
    ),
    log_file: bool = typer.Option(True, "--log-file/--no-log-file", help="Write a full trace under ~/.clustercli/logs"),
    ansible_config: Optional[str] = typer.Option(
        None, "--ansible-config", help="ansible.cfg to use (exported as ANSIBLE_CONFIG)"
    ),
):
    ctx.obj = GlobalOptions(
        inventory=inventory,
        host_pattern=host_pattern,
        verbose=verbose,
        config=config,
        capture=capture,
        dry_run=dry_run,
        events_file=events_file,
        log_file=log_file,
        ansible_config=ansible_config,
    )


def _build_runner(opts: GlobalOptions) -> AnsibleCliRunner:
    try:
        settings = resolve_settings(
            opts.config,
            inventory=opts.inventory,
            host_pattern=opts.host_pattern,
            verbose=opts.verbose or None,
            capture_output=opts.capture,
            ansible_config=opts.ansible_config,
        )
    except ValidationError as exc:
        raise typer.BadParameter(
            f"invalid settings (is --inventory set?):\n{exc}", param_hint="--inventory"
        ) from exc

    logger, run_id, _ = init_logging(verbose=settings.verbose, log_to_file=opts.log_file)

    env = {"ANSIBLE_CONFIG": settings.ansible_config} if settings.ansible_config else {}
    bus = EventBus([LoggerObserver(logger)])
    if opts.events_file:
        bus.subscribe(JsonFileObserver(opts.events_file))

    return AnsibleCliRunner(
        settings,
        ctx=ExecutionContext(dry_run=opts.dry_run, env=env),
        bus=bus,
        run_id=run_id,
    )


def _finish(runner: AnsibleCliRunner, cp: subprocess.CompletedProcess) -> None:
    if runner.settings.capture_output:
        if cp.stdout:
            typer.echo(cp.stdout, nl=False)
        if cp.stderr:
            typer.echo(cp.stderr, err=True, nl=False)
    if cp.returncode != 0:
        raise typer.Exit(code=cp.returncode)


def _execute(ctx: typer.Context, request: ActionRequest) -> None:
    runner = _build_runner(ctx.obj)
    try:
        cp = dispatch(request, runner)
    except ClusterCliError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    _finish(runner, cp)


# ------------------------------------------------------------------------------
# Ad-hoc commands
# ------------------------------------------------------------------------------

@app.command()
def copy(
    ctx: typer.Context,
    src: str = typer.Argument(..., help="Local file to copy"),
    dest: str = typer.Argument(..., help="Destination path on the remote machines"),
):
    """Copy a local file to the remote machines."""
    _execute(ctx, CopyFile(src=src, dest=dest, direction=CopyDirection.TO_REMOTE))


@app.command()
def fetch(
    ctx: typer.Context,
    src: str = typer.Argument(..., help="File on the remote machines"),
    dest: str = typer.Argument(..., help="Local destination directory"),
):
    """Fetch a file from the remote machines."""
    _execute(ctx, CopyFile(src=src, dest=dest, direction=CopyDirection.FROM_REMOTE))


@app.command()
def ping(ctx: typer.Context):
    """Check connectivity to the machines."""
    _execute(ctx, Ping())


@app.command()
def reboot(ctx: typer.Context):
    """Reboot the machines."""
    _execute(ctx, Reboot())


@app.command()
def shutdown(ctx: typer.Context):
    """Shut the machines down."""
    _execute(ctx, Shutdown())


@app.command()
def ssh(ctx: typer.Context):
    """Run the ssh module on the machines."""
    _execute(ctx, Ssh())


@app.command()
def update(ctx: typer.Context):
    """Upgrade packages on the machines."""
    _execute(ctx, Update())


@app.command()
def uptime(ctx: typer.Context):
    """Show how long the machines have been up."""
    _execute(ctx, Uptime())


@app.command()
def run(
    ctx: typer.Context,
    command: str = typer.Argument(..., help="Command line to run on every machine"),
    become: bool = typer.Option(False, "--become", "-b", help="Run with privilege escalation"),
    chdir: Optional[str] = typer.Option(None, "--chdir", "-C", help="Directory to run the command in"),
):
    """Run a command on the machines."""
    _execute(ctx, RunCommand(command=command, needs_become=become, chdir=chdir))


# ------------------------------------------------------------------------------
# Inventory / services
# ------------------------------------------------------------------------------

@inventory_app.command("list")
def inventory_list(ctx: typer.Context):
    """List all hosts and groups in the inventory."""
    _execute(ctx, InventoryList())


@service_app.command("deploy")
def service_deploy(ctx: typer.Context, service: str = typer.Argument(..., help="docker or kubernetes")):
    """Install a service on the cluster."""
    _execute(ctx, ServiceOp(service=service, action=ServiceAction.DEPLOY))


@service_app.command("delete")
def service_delete(ctx: typer.Context, service: str = typer.Argument(..., help="docker or kubernetes")):
    """Remove a service from the cluster."""
    _execute(ctx, ServiceOp(service=service, action=ServiceAction.DELETE))


@app.command("check-playbooks")
def check_playbooks(ctx: typer.Context):
    """Run ansible-playbook --syntax-check on every bundled playbook."""
    runner = _build_runner(ctx.obj)
    failed = []
    for playbook in available_playbooks():
        try:
            cp = runner.check_syntax(playbook)
        except ClusterCliError as exc:
            typer.secho(str(exc), fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
        status = "ok" if cp.returncode == 0 else f"failed (rc={cp.returncode})"
        typer.echo(f"{playbook.name}: {status}")
        if cp.returncode != 0:
            failed.append(cp.returncode)

    if failed:
        raise typer.Exit(code=max(failed))


if __name__ == "__main__":
    app()
