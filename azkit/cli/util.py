"""
Helpers shared by the azk commands: the console, the command group with
prefix matching, and client construction from the local profile.
"""

import os
import sys
import traceback
from typing import Any, Optional

import click
from loguru import logger
from rich.console import Console

from ..core.credentials import get_credential
from ..core.exceptions import AzkitError, ClientError, ServerError
from ..keyvault.secrets import SecretClient
from ..profile import ProfileRecord

console = Console(highlight=False)


def _report_http_error(e: ClientError) -> None:
    if e.status_code == 401:
        console.print(
            f"\n[red]401 Unauthorized[/]: {e.message}\n\n[yellow]Hint:[/]"
            " check the credential type of your profile with [dim]azk"
            " profile show[/dim], or log in again with [dim]az login[/dim]."
        )
    elif e.status_code == 403:
        console.print(
            f"\n[red]403 Forbidden[/]: {e.message}\n\n[yellow]Hint:[/] the"
            " identity you are using lacks a permission on the vault."
        )
    elif e.status_code == 404:
        console.print(f"[red]404 Not Found[/]: {e.message}")
    else:
        console.print(f"[red]{e.status_code} Error[/]: {e.message}")


class AzkGroup(click.Group):
    """
    Command group that accepts any unambiguous prefix of a command name, so
    `azk sec list-d` runs `azk secret list-deleted`. Errors raised by the
    clients are printed in red and exit with code 1.
    """

    def get_command(self, ctx, cmd_name):
        command = super().get_command(ctx, cmd_name)
        if command is not None:
            return command
        candidates = sorted(
            name for name in self.list_commands(ctx) if name.startswith(cmd_name)
        )
        if len(candidates) > 1:
            ctx.fail(f"'{cmd_name}' is ambiguous: {', '.join(candidates)}")
        return super().get_command(ctx, candidates[0]) if candidates else None

    def resolve_command(self, ctx, args):
        # report the full name, not the prefix that was typed
        _, command, rest = super().resolve_command(ctx, args)
        return command.name, command, rest

    def group(self, *g_args, **g_kwargs):
        g_kwargs.setdefault("cls", AzkGroup)
        return super().group(*g_args, **g_kwargs)

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except (click.ClickException, click.exceptions.Exit):
            raise
        except ClientError as e:
            _report_http_error(e)
        except ServerError as e:
            console.print(f"[red]{e.status_code} Error[/]: {e.message}")
        except (AzkitError, ValueError) as e:
            console.print(f"[red]Error[/]: {e}")
            logger.trace(traceback.format_exc())
        sys.exit(1)


def click_group(*args, **kwargs):
    return click.group(*args, cls=AzkGroup, **kwargs)


def check(condition: Any, message: str) -> None:
    """Prints the message and exits with code 1 unless the condition holds."""
    if not condition:
        console.print(message)
        sys.exit(1)


def get_secret_client(vault_url: Optional[str] = None) -> SecretClient:
    """
    Creates a secrets client from the explicit vault url, the environment or
    the local profile, with the credential type of the profile.
    """
    vault_url = ProfileRecord.vault_url(vault_url)
    check(
        vault_url,
        "No vault url given. Pass [green]--vault-url[/], set AZKIT_VAULT_URL, or"
        " run [green]azk profile set --vault-url[/].",
    )
    profile = ProfileRecord.current()
    send_chain = os.environ.get("AZURE_CLIENT_SEND_CERTIFICATE_CHAIN", "").lower() in (
        "1",
        "true",
    )
    credential = get_credential(
        profile.credential_type or "default",
        tenant_id=profile.tenant_id,
        client_id=profile.client_id,
        client_secret=os.environ.get("AZURE_CLIENT_SECRET"),
        certificate_path=os.environ.get("AZURE_CLIENT_CERTIFICATE_PATH"),
        send_certificate_chain=send_chain,
    )
    return SecretClient(vault_url, credential)
