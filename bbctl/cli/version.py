import click
from bbctl.cli.console import info
from bbctl.cli.utils import standard_error_handler

LATEST_RELEASE_URL = "https://api.github.com/repos/beeper/bridge-manager/releases/latest"


def _latest_release_version() -> str:
    import requests

    try:
        release = requests.get(LATEST_RELEASE_URL, timeout=10)
    except requests.RequestException as e:
        raise RuntimeError(f"failed to check for a newer version: {e}") from e
    if release.status_code == 403:
        return ""
    try:
        return release.json()["tag_name"].lstrip("v")
    except (ValueError, KeyError, TypeError, AttributeError):
        raise RuntimeError(
            "failed to check for a newer version: unexpected response from"
            f" {LATEST_RELEASE_URL} (HTTP {release.status_code})"
        ) from None


@click.command("version", help="Show the version of this bbctl executable")
@click.option(
    "-n",
    "--no-check",
    help="Do not check whether there is a new version",
    is_flag=True,
    default=False,
)
@click.pass_context
@standard_error_handler
def version(ctx, no_check):
    from bbctl.cli.context import get_build_info

    build_info = get_build_info(ctx)
    info(f"bbctl version: {build_info.version}")
    if build_info.commit and build_info.commit != "unknown":
        info(f"Commit: {build_info.commit}")
    if build_info.build_time:
        info(f"Built at: {build_info.build_time}")
    if not no_check:
        latest_release_version = _latest_release_version()
        if not latest_release_version:
            info("Versions cannot be compared, as API rate limit was exceeded")
            return None
        if build_info.tag != latest_release_version:
            info(
                f"You are using bbctl version {build_info.tag}; however, version"
                f" {latest_release_version} is available. Run 'bbctl self update'"
                " to upgrade."
            )
    return True
