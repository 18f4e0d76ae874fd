from bbctl.cli.self import _self
from bbctl.cli.version import version

from .context import cli


cli.add_command(cmd=version, name="version")
cli.add_command(cmd=_self, name="self")


def main():
    from bbctl.configuration import BuildInfo

    cli(obj={"build_info": BuildInfo.current()})


if __name__ == "__main__":
    main()
