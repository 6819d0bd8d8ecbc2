# SPDX-FileCopyrightText: 2025 - Canonical Ltd
# SPDX-License-Identifier: Apache-2.0

"""Inspection commands for ScaleChamp resources.

These commands only read: they show what a kind accepts, what a plan
resolves to and what an instance looks like. Changing instances is left to
the orchestrating engine driving the provider.
"""

import logging
from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.table import Table

from scalechamp.client import Client
from scalechamp.config import load_config
from scalechamp.errors import ConfigurationException, RemoteException
from scalechamp.log import setup_logging
from scalechamp.models import PlanFindRequest
from scalechamp.provider import Provider
from scalechamp.schema import Kind, instance_schema

LOG = logging.getLogger(__name__)
console = Console()

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
FORMAT_TABLE = "table"
FORMAT_YAML = "yaml"

KIND_CHOICE = click.Choice([kind.value for kind in Kind])


def _provider(ctx: click.Context) -> Provider:
    try:
        config = load_config(ctx.obj.get("config"))
    except ConfigurationException as e:
        raise click.ClickException(str(e)) from e
    return Provider(config)


def _client(ctx: click.Context) -> Client:
    return _provider(ctx).client


@click.group("scalechamp", context_settings=CONTEXT_SETTINGS)
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Provider configuration file.",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logs.")
@click.option(
    "--logfile",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Write debug logs to this file.",
)
@click.pass_context
def cli(
    ctx: click.Context, config: Path | None, verbose: bool, logfile: Path | None
) -> None:
    """Inspect ScaleChamp plans, instances and resource schemas."""
    setup_logging(logfile, verbose)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@cli.command("schema")
@click.argument("kind", type=KIND_CHOICE)
@click.option(
    "-f",
    "--format",
    type=click.Choice([FORMAT_TABLE, FORMAT_YAML]),
    default=FORMAT_TABLE,
    help="Output format.",
)
def schema(kind: str, format: str) -> None:
    """Show the configuration fields accepted by instances of KIND."""
    fields = instance_schema(Kind(kind))
    if format == FORMAT_TABLE:
        table = Table(title=Kind(kind).resource_type)
        table.add_column("Field", justify="left")
        table.add_column("Type", justify="left")
        table.add_column("Required", justify="center")
        table.add_column("Computed", justify="center")
        table.add_column("Default", justify="left")
        table.add_column("Description", justify="left")
        for name, field in fields.items():
            table.add_row(
                name,
                field.type.value,
                "X" if field.required else "",
                "X" if field.computed else "",
                "" if field.default is None else str(field.default),
                field.description,
            )
        console.print(table)
    elif format == FORMAT_YAML:
        click.echo(
            yaml.dump(
                {
                    name: field.model_dump(mode="json", exclude_defaults=True)
                    for name, field in fields.items()
                },
                sort_keys=False,
            )
        )


@cli.command("resources")
@click.pass_context
def resources(ctx: click.Context) -> None:
    """List the resource types served by the provider."""
    provider = _provider(ctx)
    for type_name in sorted(provider.resources()):
        click.echo(type_name)


@cli.group("plan")
def plan() -> None:
    """Query the plan catalog."""


@plan.command("find")
@click.option("--cloud", required=True, help="Name of the cloud.")
@click.option("--region", required=True, help="Name of the cloud region.")
@click.option("--name", required=True, help="Name of the plan.")
@click.option("--kind", required=True, type=KIND_CHOICE, help="Instance kind.")
@click.pass_context
def find_plan(ctx: click.Context, cloud: str, region: str, name: str, kind: str):
    """Resolve a plan name to its identifier."""
    client = _client(ctx)
    request = PlanFindRequest(cloud=cloud, region=region, name=name, kind=kind)
    try:
        found = client.plans.find(request)
    except RemoteException as e:
        raise click.ClickException(str(e)) from e
    click.echo(found.id)


@cli.group("instance")
def instance() -> None:
    """Inspect instances."""


@instance.command("show")
@click.argument("instance_id", type=str)
@click.option(
    "-f",
    "--format",
    type=click.Choice([FORMAT_TABLE, FORMAT_YAML]),
    default=FORMAT_TABLE,
    help="Output format.",
)
@click.pass_context
def show_instance(ctx: click.Context, instance_id: str, format: str) -> None:
    """Show the state and hosts of an instance."""
    client = _client(ctx)
    try:
        found = client.instances.get(instance_id)
    except RemoteException as e:
        raise click.ClickException(str(e)) from e

    details = {
        "id": found.id,
        "name": found.name,
        "state": found.state,
        "master_host": found.connection_info.master_host,
        "replica_host": found.connection_info.replica_host,
    }
    if format == FORMAT_TABLE:
        table = Table(show_header=False)
        table.add_column("Key", justify="left")
        table.add_column("Value", justify="left")
        for key, value in details.items():
            table.add_row(key, value)
        console.print(table)
    elif format == FORMAT_YAML:
        click.echo(yaml.dump(details, sort_keys=False))


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
