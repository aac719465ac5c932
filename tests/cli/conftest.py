# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Shared fixtures for CLI tests."""

from unittest.mock import Mock, patch

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_root():
    from osscontrib.cli.main import cli

    return cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_file(tmp_path):
    """Point the CLI at a throwaway config file."""
    path = tmp_path / '.osscontrib' / 'config.json'
    with patch('osscontrib.config.CONFIG_FILE', path):
        yield path


@pytest.fixture
def clean_env(monkeypatch, config_file):
    for name in ('GITHUB_TOKEN', 'OSSCONTRIB_BASE_URL', 'OSSCONTRIB_API_URL', 'OSSCONTRIB_TIMEOUT'):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv('GITHUB_TOKEN', 'fake_github_token')
    monkeypatch.setenv('OSSCONTRIB_BASE_URL', 'https://oss.example.com')
    return config_file


@pytest.fixture
def mock_graphql():
    """Patch the GraphQL POST; set ``return_value`` to a payload dict."""
    with patch('osscontrib.utils.github_api_tools.requests.post') as mock_post:

        def respond(payload):
            mock_post.return_value = Mock(status_code=200, headers={}, json=Mock(return_value=payload))
            return mock_post

        yield respond


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep bittensor log lines out of captured CLI output."""
    with patch('bittensor.logging') as mock_logging:
        yield mock_logging
