import click

from bbctl.cli.utils import AliasedGroup
from bbctl.configuration import BuildInfo


def get_build_info(ctx: click.Context) -> BuildInfo:
    ctx.ensure_object(dict)
    if "build_info" not in ctx.obj:
        ctx.obj["build_info"] = BuildInfo.current()
    return ctx.obj["build_info"]


def print_version(ctx: click.Context, param, value):
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"bbctl version {get_build_info(ctx).version}")
    ctx.exit()


@click.group(cls=AliasedGroup)
@click.option("-d", "--debug", default=False, is_flag=True)
@click.option(
    "--version",
    help="Show the version and exit.",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=print_version,
)
@click.pass_context
def cli(ctx: click.Context, debug):
    import logging

    # Set up logging based on the debug flag
    if debug:
        logger = logging.getLogger()
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(levelname)s %(name)s %(filename)s:%(lineno)d - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logging.getLogger("bbctl").setLevel(logging.DEBUG)
    else:
        logging.getLogger("bbctl").setLevel(logging.ERROR)

    get_build_info(ctx)
    ctx.obj["debug"] = debug
