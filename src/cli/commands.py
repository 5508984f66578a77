"""CLI commands for the content notifier."""

import asyncio

import httpx
import typer
from rich.console import Console

from src.core.config import get_settings
from src.core.exceptions import ConfigurationException
from src.core.logging import get_logger
from src.feeds.redis_feed import RedisChangeFeed
from src.notifications.dispatcher import NotificationDispatcher
from src.webhooks.sender import WebhookSender

app = typer.Typer(name="content-notifier", help="Forward published content to a chat webhook")
console = Console()
logger = get_logger(__name__)

__version__ = "0.1.0"


@app.command()
def version() -> None:
    """Show version."""
    console.print(f"[bold green]Content Notifier v{__version__}[/bold green]")


async def _listen() -> None:
    settings = get_settings()
    feed = RedisChangeFeed(settings.redis_url, channel_prefix=settings.change_channel_prefix)

    async with WebhookSender(settings.discord_webhook_url, timeout=settings.webhook_timeout) as sender:
        dispatcher = NotificationDispatcher.from_settings(settings, sender.send)
        dispatcher.register(feed)
        try:
            await feed.listen()
        finally:
            await feed.close()


@app.command()
def listen() -> None:
    """Listen for document changes and forward notifications."""
    settings = get_settings()
    if not settings.webhook_enabled:
        console.print("[yellow]DISCORD_WEBHOOK_URL is not set, notifications are disabled[/yellow]")
    console.print(f"[yellow]Listening for changes on {settings.redis_url}[/yellow]")

    try:
        asyncio.run(_listen())
    except KeyboardInterrupt:
        logger.info("listener_stopped")


async def _send(content: str) -> None:
    settings = get_settings()
    if not settings.webhook_enabled:
        raise ConfigurationException("DISCORD_WEBHOOK_URL is not set")

    async with WebhookSender(settings.discord_webhook_url, timeout=settings.webhook_timeout) as sender:
        await sender.send(content)


@app.command()
def send(content: str) -> None:
    """Post a one-off message to the configured webhook.

    Args:
        content: Message text
    """
    try:
        asyncio.run(_send(content))
    except ConfigurationException as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(code=1)
    except httpx.HTTPError as e:
        console.print(f"[red]Webhook delivery failed: {e}[/red]")
        raise typer.Exit(code=1)
    console.print("[green]✓ Sent[/green]")


if __name__ == "__main__":
    app()
