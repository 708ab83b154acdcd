"""
Secret is a module that provides a way to manage the secrets of an Azure Key
Vault from the command line.
"""

from datetime import datetime
from typing import Optional

import click
from rich.table import Table

from ..core.polling import PollerState
from ..keyvault.secrets import DeleteSecretPoller, RecoverDeletedSecretPoller
from .util import check, click_group, console, get_secret_client

_vault_url_option = click.option(
    "--vault-url",
    default=None,
    help=(
        "Url of the vault, e.g. https://myvault.vault.azure.net. Defaults to"
        " AZKIT_VAULT_URL, then to the profile."
    ),
)


def _fmt(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S") if value else "-"


@click_group()
def secret():
    """
    Manage the secrets of an Azure Key Vault.

    The vault is given with --vault-url, or taken from AZKIT_VAULT_URL, or from
    the profile set with `azk profile set`. Deleting and recovering secrets are
    long running operations: by default the commands wait until the vault
    completes them, and with --no-wait they print a token that
    `azk secret wait` accepts later.
    """
    pass


@secret.command(name="list")
@_vault_url_option
@click.option("--max-page-size", type=int, default=None, help="Page size hint.")
def list_command(vault_url, max_page_size):
    """
    Lists the secrets of the vault. Values are always hidden.
    """
    client = get_secret_client(vault_url)
    table = Table(title="Secrets", show_lines=True)
    table.add_column("Name")
    table.add_column("Enabled")
    table.add_column("Content type")
    table.add_column("Updated")
    for properties in client.list_properties_of_secrets(max_page_size=max_page_size):
        table.add_row(
            properties.name,
            str(properties.enabled),
            properties.content_type or "-",
            _fmt(properties.updated_on),
        )
    console.print(table)


@secret.command()
@_vault_url_option
@click.option("--name", "-n", help="Secret name", required=True)
def versions(vault_url, name):
    """
    Lists the versions of a secret.
    """
    client = get_secret_client(vault_url)
    table = Table(title=f"Versions of {name}", show_lines=True)
    table.add_column("Version")
    table.add_column("Enabled")
    table.add_column("Created")
    table.add_column("Expires")
    for properties in client.list_properties_of_secret_versions(name):
        table.add_row(
            properties.version or "-",
            str(properties.enabled),
            _fmt(properties.created_on),
            _fmt(properties.expires_on),
        )
    console.print(table)


@secret.command()
@_vault_url_option
@click.option("--name", "-n", help="Secret name", required=True)
@click.option("--version", default=None, help="Version, defaults to the latest.")
def get(vault_url, name, version):
    """
    Prints the value of a secret.
    """
    client = get_secret_client(vault_url)
    result = client.get_secret(name, version)
    console.print(result.value, soft_wrap=True)


@secret.command(name="set")
@_vault_url_option
@click.option("--name", "-n", help="Secret name", required=True)
@click.option("--value", "-v", help="Secret value", required=True)
@click.option("--content-type", default=None, help="Content type of the value.")
@click.option(
    "--tag", "-t", multiple=True, help="Tag in the form key=value. Repeatable."
)
def set_command(vault_url, name, value, content_type, tag):
    """
    Sets a secret. If it already exists, a new version is created, e.g.:
    `azk secret set -n db-password -v s3cr3t -t env=prod`
    """
    tags = {}
    for t in tag:
        check("=" in t, f"Invalid tag [red]{t}[/]: expected key=value.")
        key, value_ = t.split("=", 1)
        tags[key] = value_
    client = get_secret_client(vault_url)
    result = client.set_secret(
        name, value, content_type=content_type, tags=tags or None
    )
    console.print(
        f"Secret [green]{name}[/] set, version [green]{result.properties.version}[/]."
    )


def _finish(poller, no_wait: bool, timeout: Optional[float], verb: str) -> None:
    if no_wait:
        console.print(
            f"{verb} [green]{poller.name}[/] started. Wait for it with:\n"
            f"azk secret wait -n {poller.name} --token '{poller.continuation_token()}'",
            soft_wrap=True,
        )
        return
    poller.result(timeout=timeout)
    console.print(f"{verb} [green]{poller.name}[/] completed.")


@secret.command()
@_vault_url_option
@click.option("--name", "-n", help="Secret name", required=True)
@click.option("--no-wait", is_flag=True, help="Return once the vault accepted it.")
@click.option("--timeout", type=float, default=None, help="Seconds to wait at most.")
def remove(vault_url, name, no_wait, timeout):
    """
    Deletes a secret with all its versions. In vaults with soft delete the
    secret can be recovered with `azk secret recover` until it is purged.
    """
    client = get_secret_client(vault_url)
    poller = client.begin_delete_secret(name)
    _finish(poller, no_wait, timeout, "Deletion of")


@secret.command()
@_vault_url_option
@click.option("--name", "-n", help="Secret name", required=True)
@click.option("--no-wait", is_flag=True, help="Return once the vault accepted it.")
@click.option("--timeout", type=float, default=None, help="Seconds to wait at most.")
def recover(vault_url, name, no_wait, timeout):
    """
    Recovers a deleted secret.
    """
    client = get_secret_client(vault_url)
    poller = client.begin_recover_deleted_secret(name)
    _finish(poller, no_wait, timeout, "Recovery of")


@secret.command()
@_vault_url_option
@click.option("--name", "-n", help="Secret name", required=True)
@click.option("--token", help="Token printed by a --no-wait command.", required=True)
@click.option("--timeout", type=float, default=None, help="Seconds to wait at most.")
def wait(vault_url, name, token, timeout):
    """
    Waits for a delete or recover operation started with --no-wait.
    """
    state = PollerState.model_validate_json(token)
    client = get_secret_client(vault_url)
    if state.operation == DeleteSecretPoller.operation:
        poller = client.begin_delete_secret(name, continuation_token=token)
        verb = "Deletion of"
    elif state.operation == RecoverDeletedSecretPoller.operation:
        poller = client.begin_recover_deleted_secret(name, continuation_token=token)
        verb = "Recovery of"
    else:
        raise ValueError(f"Cannot wait for a {state.operation} operation.")
    _finish(poller, False, timeout, verb)


@secret.command()
@_vault_url_option
@click.option("--name", "-n", help="Secret name", required=True)
def purge(vault_url, name):
    """
    Permanently deletes a deleted secret.
    """
    client = get_secret_client(vault_url)
    client.purge_deleted_secret(name)
    console.print(f"Secret [green]{name}[/] purged.")


@secret.command(name="list-deleted")
@_vault_url_option
def list_deleted(vault_url):
    """
    Lists the deleted secrets of the vault.
    """
    client = get_secret_client(vault_url)
    table = Table(title="Deleted secrets", show_lines=True)
    table.add_column("Name")
    table.add_column("Deleted")
    table.add_column("Scheduled purge")
    for deleted in client.list_deleted_secrets():
        table.add_row(
            deleted.name, _fmt(deleted.deleted_on), _fmt(deleted.scheduled_purge_date)
        )
    console.print(table)


def add_command(cli_group):
    cli_group.add_command(secret)
