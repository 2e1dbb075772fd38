"""Terminal front end for the countdown events app."""
import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

import click

from controller.interaction import InteractionController
from store.client import EventStoreClient
from store.session import EnvironmentSessionProvider
from viewmodel.deriver import ViewModelDeriver
from viewmodel.models import DecoratedEvent

logger = logging.getLogger(__name__)

TRUE_VALUES = ('1', 'true', 'yes', 'on')

# Attributes every LogRecord carries; anything else came in through extra=
RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord('', 0, '', 0, '', None, None))
) | {'message', 'asctime'}


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in RESERVED_ATTRS:
                log_data[key] = value

        return json.dumps(log_data, default=str)


def setup_logging(log_level: str = 'WARNING') -> None:
    """
    Configure logging with JSON formatter.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # stderr, so log lines never mix with the rendered list
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.WARNING))


@dataclass
class AppConfig:
    """Settings read from the environment."""
    api_base: str
    log_level: str
    timeout_seconds: float
    auth_enabled: bool
    stable_colors: bool


def load_config() -> AppConfig:
    """Read configuration from environment variables."""
    return AppConfig(
        api_base=os.environ.get('COUNTDOWN_API_BASE', 'http://localhost:3000'),
        log_level=os.environ.get('LOG_LEVEL', 'WARNING'),
        timeout_seconds=float(os.environ.get('TIMEOUT_SECONDS', '30')),
        auth_enabled=os.environ.get('COUNTDOWN_AUTH', 'false').lower() in TRUE_VALUES,
        stable_colors=os.environ.get('STABLE_COLORS', 'false').lower() in TRUE_VALUES
    )


def build_controller(config: AppConfig) -> InteractionController:
    """Wire the store client, deriver and controller for a session."""
    session_provider = EnvironmentSessionProvider() if config.auth_enabled else None
    client = EventStoreClient(
        base_url=config.api_base,
        timeout=config.timeout_seconds,
        session_provider=session_provider
    )
    deriver = ViewModelDeriver(stable_colors=config.stable_colors)
    return InteractionController(client, deriver=deriver, notify=show_notice)


def show_notice(message: str) -> None:
    click.echo(f"Error: {message}", err=True)


def hex_to_rgb(color: str) -> tuple:
    value = color.lstrip('#')
    return tuple(int(value[i:i + 2], 16) for i in (0, 2, 4))


def render_card(item: DecoratedEvent) -> str:
    """Render one decorated event as a block of terminal lines."""
    rgb = hex_to_rgb(item.color)
    lines = [
        click.style(f"{item.emoji} {item.event.name}", fg=rgb, bold=True),
        f"  {item.formatted_date}",
        f"  {item.days_left} days left",
        click.style(f"  id: {item.event.event_id}", dim=True),
    ]
    return '\n'.join(lines)


def render(controller: InteractionController) -> None:
    """Print the current state of the event list."""
    click.echo('Upcoming Events')
    if controller.state == 'loading':
        click.echo('Loading events...')
        return
    if controller.state == 'empty':
        click.echo('No events yet!')
        return

    cards: List[str] = [render_card(item) for item in controller.view()]
    click.echo('\n\n'.join(cards))


def load_or_exit(ctx: click.Context, controller: InteractionController) -> None:
    if not controller.load():
        render(controller)
        ctx.exit(1)


@click.group()
@click.option('--api-base', default=None, help='Events API base URL')
@click.option('--log-level', default=None, help='DEBUG, INFO, WARNING or ERROR')
@click.pass_context
def cli(ctx: click.Context, api_base: Optional[str], log_level: Optional[str]):
    """Count down the days to your events."""
    config = load_config()
    if api_base:
        config.api_base = api_base
    if log_level:
        config.log_level = log_level

    setup_logging(config.log_level)
    logger.info(
        "Countdown session started",
        extra={'api_base': config.api_base, 'auth_enabled': config.auth_enabled}
    )
    ctx.obj = build_controller(config)


@cli.command('list')
@click.pass_context
def list_command(ctx: click.Context):
    """Show all events."""
    controller = ctx.obj
    load_or_exit(ctx, controller)
    render(controller)


@cli.command('add')
@click.argument('name')
@click.argument('date', type=click.DateTime(formats=['%Y-%m-%d']))
@click.pass_context
def add_command(ctx: click.Context, name: str, date: datetime):
    """Add an event NAME on DATE (YYYY-MM-DD)."""
    controller = ctx.obj
    load_or_exit(ctx, controller)

    controller.event_name = name
    controller.event_date = date.strftime('%Y-%m-%d')
    # Blank input is ignored by the controller and also exits non-zero
    ok = controller.add()
    render(controller)
    if not ok:
        ctx.exit(1)


@cli.command('delete')
@click.argument('event_id')
@click.pass_context
def delete_command(ctx: click.Context, event_id: str):
    """Delete the event with EVENT_ID."""
    controller = ctx.obj
    load_or_exit(ctx, controller)

    ok = controller.delete(event_id)
    render(controller)
    if not ok:
        ctx.exit(1)


def main() -> None:
    cli()


if __name__ == '__main__':
    main()
