import click


def info(text: str):
    click.echo(text)


def success(text: str):
    click.echo(click.style(text, fg="green"))


def warning(text: str):
    click.echo(click.style(f"Warning: {text}", fg="yellow"))
