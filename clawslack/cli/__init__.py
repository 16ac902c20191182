"""Command-line interface"""

import typer

from .send_cmd import register_send_commands

app = typer.Typer(help="Send messages to Slack", no_args_is_help=True)


@app.callback()
def callback():
    """clawslack - Slack outbound messaging"""


register_send_commands(app)


def main():
    app()


__all__ = ["app", "main"]
