"""
Profile is a module that stores the defaults the other commands use, so that
the vault url or the subscription does not have to be passed on every call.
"""

import click
from rich.table import Table

from ..core.credentials import CREDENTIAL_TYPES
from ..profile import ProfileRecord
from .util import check, click_group, console


@click_group()
def profile():
    """
    Manage the local azkit profile.

    The profile lives in the azkit cache directory and holds the default vault
    url, the subscription id and how to obtain a credential. Explicit command
    line options and AZKIT_* environment variables take precedence over it.
    """
    pass


@profile.command(name="set")
@click.option("--vault-url", default=None, help="Default Key Vault url.")
@click.option("--subscription-id", default=None, help="Default subscription id.")
@click.option(
    "--credential-type",
    default=None,
    help=f"How to obtain a token, one of {', '.join(CREDENTIAL_TYPES)}.",
)
@click.option("--tenant-id", default=None, help="Tenant of the service principal.")
@click.option("--client-id", default=None, help="Client id of the identity to use.")
def set_command(vault_url, subscription_id, credential_type, tenant_id, client_id):
    """
    Updates the profile. Options that are not given are left unchanged, and an
    empty string clears a field, e.g. `azk profile set --vault-url ""`.
    """
    check(
        not credential_type or credential_type in CREDENTIAL_TYPES,
        f"Invalid credential type [red]{credential_type}[/]. Valid types:"
        f" {', '.join(CREDENTIAL_TYPES)}.",
    )
    ProfileRecord.set(
        vault_url=vault_url,
        subscription_id=subscription_id,
        credential_type=credential_type,
        tenant_id=tenant_id,
        client_id=client_id,
    )
    console.print("Profile updated.")


@profile.command()
def show():
    """
    Shows the current profile.
    """
    current = ProfileRecord.current()
    table = Table(title="Profile", show_header=False)
    table.add_column("Field")
    table.add_column("Value")
    for field, value in current.model_dump().items():
        table.add_row(field, value or "-")
    console.print(table)


@profile.command()
def clear():
    """
    Removes every field of the profile.
    """
    ProfileRecord.clear()
    console.print("Profile cleared.")


def add_command(cli_group):
    cli_group.add_command(profile)
