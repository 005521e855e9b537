"""Command-line interface for the world chat relay."""

from __future__ import annotations

import logging
from typing import Any

import click

logger = logging.getLogger(__name__)

SAMPLE_NAMES = [
    "Arthas", "Thrall", "Jaina", "Sylvanas", "Varian",
    "Garrosh", "Tyrande", "Vol'jin", "Anduin", "Baine",
]


@click.group()
@click.option("--log-level", default="INFO", help="Logging level.")
def cli(log_level: str) -> None:
    """World chat -- cross-faction broadcast relay."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


# ------------------------------------------------------------------
# worldchat show-config
# ------------------------------------------------------------------


@cli.command("show-config")
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=False),
    help="Path to world chat config YAML.",
)
def show_config(config_path: str | None) -> None:
    """Print the effective configuration."""
    from worldchat.config.loader import load_config

    config = load_config(config_path)
    click.echo(click.style("=== World Chat Config ===", fg="cyan", bold=True))
    for name, info in type(config).model_fields.items():
        click.echo(f"  {info.alias or name:<14} {getattr(config, name)!r}")


# ------------------------------------------------------------------
# worldchat simulate
# ------------------------------------------------------------------


@cli.command()
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=False),
    help="Path to world chat config YAML.",
)
@click.option("--players", type=int, default=6, help="Number of simulated players.")
@click.option("--cross/--no-cross", default=None, help="Override CrossFactions.")
@click.option("--ticks", type=int, default=12, help="World updates to run (1s each).")
@click.option("--plain", is_flag=True, help="Strip color markup from output.")
def simulate(
    config_path: str | None,
    players: int,
    cross: bool | None,
    ticks: int,
    plain: bool,
) -> None:
    """Run a scripted session against an in-memory world."""
    from worldchat.config.loader import merge_configs
    from worldchat.engine.directory import InMemoryDirectory, Mailbox
    from worldchat.engine.events import AnnouncementFiredEvent, BroadcastEvent
    from worldchat.engine.participant import Affiliation, ClassTag, Participant
    from worldchat.engine.render import strip_markup
    from worldchat.hooks.message import ChatMessage
    from worldchat.session.service import WorldChatService

    classes = [c for c in ClassTag if c is not ClassTag.UNKNOWN]
    roster = [
        Participant(
            identity=f"p{i + 1}",
            affiliation=Affiliation.ALLIANCE if i % 2 == 0 else Affiliation.HORDE,
            display_name=SAMPLE_NAMES[i % len(SAMPLE_NAMES)],
            class_tag=classes[i % len(classes)],
        )
        for i in range(players)
    ]

    events: list[Any] = []
    directory = InMemoryDirectory(roster)
    mailbox = Mailbox()
    service = WorldChatService(
        directory, mailbox, config_path=config_path, event_listeners=[events.append]
    )
    service.start()
    if cross is not None:
        service.store.replace(merge_configs(service.store.snapshot(), {"CrossFactions": cross}))

    config = service.store.snapshot()
    click.echo(click.style("=== World Chat: Simulation ===", fg="cyan", bold=True))
    click.echo(f"  Players: {players}")
    click.echo(f"  Channel: {config.channel_label}")
    click.echo(f"  Cross-faction: {config.cross_affiliation}")
    click.echo()

    for p in roster:
        service.session_listener.on_login(p)

    replies: list[str] = []
    if roster:
        service.command.handle(roster[0], "Hello world!", replies.append)
        service.command.handle(roster[0], "   ", replies.append)
    if len(roster) > 1:
        service.channel_observer.on_chat(
            roster[1], ChatMessage(content="For the Horde!", channel=config.channel_label.lower())
        )
        service.session_listener.on_logout(roster[-1])
        directory.remove(roster[-1].identity)

    for _ in range(ticks):
        service.ticker.on_update(1000)
    service.stop()

    def show(line: str) -> str:
        return strip_markup(line) if plain else line

    click.echo(click.style("Broadcasts:", fg="cyan"))
    for event in events:
        if isinstance(event, BroadcastEvent):
            click.echo(f"  {event.log_line}  -> {len(event.recipients)} recipient(s)")
    click.echo(click.style("Announcements:", fg="cyan"))
    for event in events:
        if isinstance(event, AnnouncementFiredEvent):
            status = "delivered" if event.delivered else "expired"
            click.echo(f"  {event.participant_id}: {status}")
    click.echo(click.style("Replies:", fg="cyan"))
    for line in replies:
        click.echo(f"  {line}")
    click.echo()
    click.echo(click.style("Inboxes:", fg="green", bold=True))
    for p in roster:
        click.echo(f"  {p.display_name} ({p.identity})")
        for line in mailbox.received(p.identity):
            click.echo(f"    {show(line)}")

