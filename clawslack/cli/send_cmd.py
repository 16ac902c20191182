"""Send command"""

import asyncio
import json
import logging

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def register_send_commands(app: typer.Typer):
    """Register the send command to the main app"""

    @app.command("send")
    def send(
        to: str = typer.Argument(..., help="Recipient: user:<id>, <@id>, @id, channel:<id>, #id or a channel id"),
        message: str = typer.Argument("", help="Message text (caption when --media is given)"),
        media: str = typer.Option(None, "--media", help="Attachment path or URL"),
        thread_ts: str = typer.Option(None, "--thread-ts", help="Reply in this thread"),
        token: str = typer.Option(None, "--token", help="Bot token (overrides SLACK_BOT_TOKEN and config)"),
        config_path: str = typer.Option(None, "--config", help="Config file path"),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
        json_output: bool = typer.Option(False, "--json", help="Output JSON"),
    ):
        """Send a message (and optional attachment) to Slack"""
        from ..config.loader import load_config
        from ..slack.errors import SlackSendError
        from ..slack.send import SlackSendOptions, send_message_slack

        load_dotenv()
        _setup_logging(verbose)

        config = load_config(config_path, as_dict=True)
        opts = SlackSendOptions(
            token=token,
            media_url=media,
            thread_ts=thread_ts,
            verbose=verbose,
        )
        try:
            result = asyncio.run(send_message_slack(to, message, opts, config))
        except SlackSendError as e:
            if json_output:
                console.print(json.dumps(e.to_dict(), indent=2))
            else:
                console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)

        if json_output:
            console.print(json.dumps({"messageId": result.message_id, "channelId": result.channel_id}, indent=2))
            return
        console.print(f"[green]✓[/green] Sent to {result.channel_id} (id {result.message_id})")
