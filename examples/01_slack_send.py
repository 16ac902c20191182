"""
Example 01: Send a Slack message

Sends a long message (split into several posts) and then an attachment
with a caption, replying in the thread of the first post.

Prerequisites:
1. Create .env file with:
   - SLACK_BOT_TOKEN=xoxb-...
   - SLACK_TARGET=channel:C0123456789 (or user:U0123456789)

2. The bot needs chat:write, files:write and im:write scopes.

Usage:
    python examples/01_slack_send.py
"""

import asyncio
import logging
import os

from dotenv import load_dotenv

from clawslack.slack import SlackSendOptions, send_message_slack

load_dotenv()

logger = logging.getLogger(__name__)

LOGO_DATA_URL = (
    "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8z8DwHwAFBQIAX8jx0gAAAABJRU5ErkJggg=="
)


async def main() -> None:
    target = os.environ.get("SLACK_TARGET")
    if not target:
        raise SystemExit("Set SLACK_TARGET in .env")

    long_text = "\n\n".join(f"Section {i}: " + "lorem ipsum " * 60 for i in range(12))
    first = await send_message_slack(target, long_text, SlackSendOptions(verbose=True))
    logger.info(f"Long message delivered to {first.channel_id}, last ts {first.message_id}")

    reply = await send_message_slack(
        f"channel:{first.channel_id}",
        "Here is the pixel you asked for",
        SlackSendOptions(media_url=LOGO_DATA_URL, thread_ts=first.message_id, verbose=True),
    )
    logger.info(f"Uploaded file {reply.message_id}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
