import click

from .._internal import logging as internal_logging
from .._version import __version__
from . import profile
from . import secret
from .util import click_group

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


@click.version_option(__version__, "-v", "--version")
@click_group(context_settings=CONTEXT_SETTINGS)
def azk():
    """
    Azk is the main entry point for the azkit commandline interface. It manages
    the secrets of an Azure Key Vault, and keeps a local profile with the
    defaults that the commands use. To install it, run

    `pip install -U azkit`
    """
    # no-op unless AZKIT_ENABLE_INTERNAL_LOG is set
    internal_logging.enable()


# Add subcommands
profile.add_command(azk)
secret.add_command(azk)


if __name__ == "__main__":
    azk()
