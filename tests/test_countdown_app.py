"""Integration tests for the terminal front end."""
import json
import logging
import os
from unittest.mock import Mock, patch

import pytest
from click.testing import CliRunner

from countdown_app import (
    JsonFormatter,
    cli,
    hex_to_rgb,
    load_config,
    setup_logging,
)
from store.exceptions import HttpStatusError, TransportError
from store.session import EnvironmentSessionProvider
from viewmodel.models import Event


@pytest.fixture
def mock_env():
    """Set up environment variables for testing."""
    env_vars = {
        'COUNTDOWN_API_BASE': 'https://api.example.com',
        'LOG_LEVEL': 'INFO',
        'TIMEOUT_SECONDS': '10',
        'COUNTDOWN_AUTH': 'false',
        'STABLE_COLORS': 'true'
    }
    with patch.dict(os.environ, env_vars):
        yield env_vars


@pytest.fixture
def sample_events():
    return [
        Event(event_id='evt-1', name='Christmas', date='2026-12-25', days_left=67),
        Event(event_id='evt-2', name='Dentist', date='2026-10-20', days_left=1)
    ]


@pytest.fixture
def mock_client():
    """Patch the store client class used by the CLI."""
    with patch('countdown_app.EventStoreClient') as mock_client_class, \
            patch('countdown_app.setup_logging'):
        client = Mock()
        mock_client_class.return_value = client
        client.class_mock = mock_client_class
        yield client


class TestCli:
    """Test cases for the click commands."""

    def test_list_renders_cards(self, mock_env, mock_client, sample_events):
        mock_client.list_events.return_value = sample_events

        result = CliRunner().invoke(cli, ['list'])

        assert result.exit_code == 0
        assert 'Upcoming Events' in result.output
        assert 'Christmas' in result.output
        assert 'December 25, 2026' in result.output
        assert '67 days left' in result.output
        assert 'id: evt-2' in result.output
        assert '1 days left' in result.output

    def test_list_empty(self, mock_env, mock_client):
        mock_client.list_events.return_value = []

        result = CliRunner().invoke(cli, ['list'])

        assert result.exit_code == 0
        assert 'No events yet!' in result.output

    def test_list_load_failure_keeps_loading(self, mock_env, mock_client):
        """Test that a failed load shows the loading indicator and exits 1."""
        mock_client.list_events.side_effect = TransportError('list_events', 'down')

        result = CliRunner().invoke(cli, ['list'])

        assert result.exit_code == 1
        assert 'Loading events...' in result.output

    def test_client_built_from_config(self, mock_env, mock_client):
        mock_client.list_events.return_value = []

        CliRunner().invoke(cli, ['list'])

        mock_client.class_mock.assert_called_once_with(
            base_url='https://api.example.com',
            timeout=10.0,
            session_provider=None
        )

    def test_api_base_option_overrides_env(self, mock_env, mock_client):
        mock_client.list_events.return_value = []

        CliRunner().invoke(cli, ['--api-base', 'http://other:8080', 'list'])

        kwargs = mock_client.class_mock.call_args.kwargs
        assert kwargs['base_url'] == 'http://other:8080'

    def test_auth_enabled_uses_environment_provider(self, mock_env, mock_client):
        mock_client.list_events.return_value = []

        with patch.dict(os.environ, {'COUNTDOWN_AUTH': 'true'}):
            CliRunner().invoke(cli, ['list'])

        kwargs = mock_client.class_mock.call_args.kwargs
        assert isinstance(kwargs['session_provider'], EnvironmentSessionProvider)

    def test_add_success(self, mock_env, mock_client, sample_events):
        mock_client.list_events.side_effect = [sample_events[:1], sample_events]

        result = CliRunner().invoke(cli, ['add', 'Dentist', '2026-10-20'])

        assert result.exit_code == 0
        mock_client.create_event.assert_called_once_with('Dentist', '2026-10-20')
        assert 'Dentist' in result.output

    def test_add_failure_shows_notice(self, mock_env, mock_client, sample_events):
        mock_client.list_events.return_value = sample_events[:1]
        mock_client.create_event.side_effect = HttpStatusError('create_event', 500)

        result = CliRunner().invoke(cli, ['add', 'Dentist', '2026-10-20'])

        assert result.exit_code == 1
        assert 'Error: Failed to add event' in result.output
        assert 'Christmas' in result.output

    def test_add_rejects_malformed_date(self, mock_env, mock_client, sample_events):
        """Test that only YYYY-MM-DD dates reach the API."""
        mock_client.list_events.return_value = sample_events

        result = CliRunner().invoke(cli, ['add', 'Party', 'next friday'])

        assert result.exit_code == 2
        assert 'DATE' in result.output
        mock_client.create_event.assert_not_called()

    def test_add_blank_name_is_ignored(self, mock_env, mock_client, sample_events):
        mock_client.list_events.return_value = sample_events

        result = CliRunner().invoke(cli, ['add', '  ', '2026-10-20'])

        assert result.exit_code == 1
        mock_client.create_event.assert_not_called()

    def test_delete_success(self, mock_env, mock_client, sample_events):
        mock_client.list_events.return_value = sample_events

        result = CliRunner().invoke(cli, ['delete', 'evt-1'])

        assert result.exit_code == 0
        mock_client.delete_event.assert_called_once_with('evt-1')
        assert mock_client.list_events.call_count == 1
        assert 'Christmas' not in result.output
        assert 'Dentist' in result.output

    def test_delete_failure_shows_notice(self, mock_env, mock_client, sample_events):
        mock_client.list_events.return_value = sample_events
        mock_client.delete_event.side_effect = HttpStatusError('delete_event', 403)

        result = CliRunner().invoke(cli, ['delete', 'evt-1'])

        assert result.exit_code == 1
        assert 'Error: Failed to delete' in result.output
        assert 'Christmas' in result.output


class TestConfig:
    """Test cases for configuration loading."""

    def test_load_config_from_env(self, mock_env):
        config = load_config()

        assert config.api_base == 'https://api.example.com'
        assert config.log_level == 'INFO'
        assert config.timeout_seconds == 10.0
        assert config.auth_enabled is False
        assert config.stable_colors is True

    def test_load_config_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = load_config()

        assert config.api_base == 'http://localhost:3000'
        assert config.log_level == 'WARNING'
        assert config.timeout_seconds == 30.0
        assert config.auth_enabled is False
        assert config.stable_colors is False

    def test_hex_to_rgb(self):
        assert hex_to_rgb('#007bff') == (0, 123, 255)


class TestSetupLogging:
    """Test cases for logging setup."""

    def test_setup_logging_default_level(self):
        """Test logging setup with default WARNING level."""
        setup_logging()
        assert logging.getLogger().level == logging.WARNING

    def test_setup_logging_debug_level(self):
        setup_logging('DEBUG')
        assert logging.getLogger().level == logging.DEBUG

    def test_setup_logging_unknown_level_falls_back(self):
        setup_logging('chatty')
        assert logging.getLogger().level == logging.WARNING

    def test_json_formatter_includes_extra_fields(self):
        """Test that values passed through extra= are written out."""
        logger = logging.getLogger('countdown_app')
        record = logger.makeRecord(
            'countdown_app', logging.INFO, __file__, 1, 'Countdown session started',
            None, None, extra={'api_base': 'https://api.example.com', 'auth_enabled': True}
        )

        data = json.loads(JsonFormatter().format(record))

        assert data['api_base'] == 'https://api.example.com'
        assert data['auth_enabled'] is True
        assert data['message'] == 'Countdown session started'
        assert 'args' not in data

    def test_json_formatter(self):
        """Test the structured log line."""
        record = logging.LogRecord(
            'store.client', logging.ERROR, __file__, 1, 'list_events failed', None, None
        )

        data = json.loads(JsonFormatter().format(record))

        assert data['level'] == 'ERROR'
        assert data['message'] == 'list_events failed'
        assert data['logger'] == 'store.client'
        assert 'timestamp' in data
