import click

from bbctl.cli import console
from bbctl.cli.utils import AliasedGroup, standard_error_handler


def _configuration(install_path, backup_path, service=None):
    from bbctl.configuration import UpdaterConfiguration

    return UpdaterConfiguration(
        install_path=install_path, backup_path=backup_path, service_name=service
    )


@click.group(
    "self",
    cls=AliasedGroup,
    help="Manage this bbctl executable",
)
@click.pass_context
def _self(ctx: click.Context):
    pass


@_self.command(
    "update",
    help="Replace this bbctl executable with the latest build and restart the bridge service",
)
@click.option("--force", "-f", help="Update without prompt", is_flag=True)
@click.option(
    "--service",
    help="Name of the background service to restart (default: bbctl)",
    type=str,
)
@click.option(
    "--install-path",
    help="Where to install the new executable (default: /usr/local/bin/bbctl)",
    type=click.Path(dir_okay=False),
)
@click.option(
    "--backup-path",
    help="Where to keep the current executable (default: ~/bbctl.bak)",
    type=click.Path(dir_okay=False),
)
@click.pass_context
@standard_error_handler
def update(ctx, force, service, install_path, backup_path):
    from alive_progress import alive_bar
    from bbctl import api
    from bbctl.exceptions import (
        InstallError,
        ServiceRestartError,
        VerificationError,
    )

    config = _configuration(install_path, backup_path, service)
    if not force:
        click.confirm(
            f"Do you want to replace {config.INSTALL_PATH} with the latest build?",
            abort=True,
        )
    try:
        with alive_bar(
            total=None,
            length=20,
            title="Updating bbctl",
            bar="smooth",
            spinner="classic",
            stats=False,
            dual_line=True,
        ):
            result = api.update(config)
    except (InstallError, VerificationError, ServiceRestartError):
        console.info(
            f"The previous executable was saved to {config.BACKUP_PATH}; "
            "run 'bbctl self restore' to put it back."
        )
        raise

    for warning in result.warnings:
        console.warning(warning)
    if result.version_output:
        console.info(result.version_output)
    console.success(
        f"bbctl was updated from {result.download_url} and service "
        f"'{result.service_name}' was restarted."
    )


@_self.command(
    "restore",
    help="Restore the bbctl executable that was replaced by the last update",
)
@click.option("--force", "-f", help="Restore without prompt", is_flag=True)
@click.option(
    "--install-path",
    help="Where to restore the executable to (default: /usr/local/bin/bbctl)",
    type=click.Path(dir_okay=False),
)
@click.option(
    "--backup-path",
    help="Where the previous executable was kept (default: ~/bbctl.bak)",
    type=click.Path(dir_okay=False),
)
@click.pass_context
@standard_error_handler
def restore(ctx, force, install_path, backup_path):
    from bbctl import api

    config = _configuration(install_path, backup_path)
    if not force:
        click.confirm(
            f"Do you want to replace {config.INSTALL_PATH} with {config.BACKUP_PATH}?",
            abort=True,
        )
    restored = api.restore(config)
    console.success(f"Restored bbctl at {restored}.")
