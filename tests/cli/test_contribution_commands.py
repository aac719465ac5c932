# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
CLI tests for the show / share / config commands (no live network).
"""

import json

import pytest
import requests

from osscontrib.constants import LOOKUP_FAILED_HINT, LOOKUP_FAILED_TITLE, NO_CONTRIBUTIONS_MESSAGE

NOT_FOUND_PAYLOAD = {
    'data': {'user': None},
    'errors': [{'type': 'NOT_FOUND', 'message': "Could not resolve to a User with the login of 'ghost'."}],
}


# =============================================================================
# show
# =============================================================================


class TestShow:
    def test_groups_sorted_by_stars(self, runner, cli_root, clean_env, mock_graphql, user_payload):
        mock_graphql(user_payload)

        result = runner.invoke(cli_root, ['show', 'alice'])

        assert result.exit_code == 0, result.output
        assert 'big/repo' in result.output
        assert 'small/repo' in result.output
        assert result.output.index('big/repo') < result.output.index('small/repo')
        assert '@alice' in result.output

    def test_alias(self, runner, cli_root, clean_env, mock_graphql, user_payload):
        mock_graphql(user_payload)

        result = runner.invoke(cli_root, ['s', 'alice'])

        assert result.exit_code == 0, result.output

    def test_json_output_with_filter(self, runner, cli_root, clean_env, mock_graphql, user_payload):
        mock_graphql(user_payload)

        result = runner.invoke(cli_root, ['show', 'alice', '--state', 'open', '--json'])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload['login'] == 'alice'
        assert payload['total_contributions'] == 3
        assert [repo['repository'] for repo in payload['repositories']] == ['big/repo']
        assert [pr['state'] for pr in payload['repositories'][0]['pull_requests']] == ['OPEN']

    def test_json_sort_oldest(self, runner, cli_root, clean_env, mock_graphql, payload_factory, pr_node):
        mock_graphql(
            payload_factory(
                'alice',
                [
                    pr_node('new/repo', 1, 'OPEN', '2024-05-03T10:00:00Z', 2),
                    pr_node('old/repo', 9000, 'MERGED', '2023-01-01T10:00:00Z', 1),
                ],
            )
        )

        result = runner.invoke(cli_root, ['show', 'alice', '--sort', 'oldest', '--json'])

        assert result.exit_code == 0, result.output
        assert [repo['repository'] for repo in json.loads(result.output)['repositories']] == ['old/repo', 'new/repo']

    def test_not_found(self, runner, cli_root, clean_env, mock_graphql):
        mock_graphql(NOT_FOUND_PAYLOAD)

        result = runner.invoke(cli_root, ['show', 'ghost'])

        assert result.exit_code == 1
        assert LOOKUP_FAILED_TITLE in result.output
        assert LOOKUP_FAILED_HINT in result.output

    def test_transport_failure_looks_the_same(self, runner, cli_root, clean_env, mock_graphql):
        mock_graphql({}).side_effect = requests.exceptions.ConnectionError('Connection refused')

        result = runner.invoke(cli_root, ['show', 'alice'])

        assert result.exit_code == 1
        assert LOOKUP_FAILED_TITLE in result.output
        assert 'Connection refused' not in result.output

    def test_no_contributions(self, runner, cli_root, clean_env, mock_graphql, payload_factory):
        mock_graphql(payload_factory('newbie', []))

        result = runner.invoke(cli_root, ['show', 'newbie'])

        assert result.exit_code == 0, result.output
        assert NO_CONTRIBUTIONS_MESSAGE in result.output
        assert LOOKUP_FAILED_TITLE not in result.output

    def test_filter_leaves_nothing(self, runner, cli_root, clean_env, mock_graphql, user_payload):
        mock_graphql(user_payload)

        result = runner.invoke(cli_root, ['show', 'alice', '--state', 'closed'])

        assert result.exit_code == 0, result.output
        assert 'No closed pull requests found.' in result.output

    def test_json_tells_no_contributions_from_empty_filter(
        self, runner, cli_root, clean_env, mock_graphql, payload_factory, pr_node
    ):
        mock_graphql(payload_factory('newbie', [pr_node('newbie/dotfiles', 0, 'OPEN', '2024-05-01T10:00:00Z', 1)]))
        own_only = json.loads(runner.invoke(cli_root, ['show', 'newbie', '--json']).output)

        mock_graphql(payload_factory('newbie', [pr_node('big/repo', 500, 'OPEN', '2024-05-01T10:00:00Z', 1)]))
        filtered = json.loads(runner.invoke(cli_root, ['show', 'newbie', '--state', 'merged', '--json']).output)

        assert own_only['repositories'] == filtered['repositories'] == []
        assert own_only['empty_contributions'] is True
        assert filtered['empty_contributions'] is False

    def test_json_links(self, runner, cli_root, clean_env, mock_graphql, user_payload):
        mock_graphql(user_payload)

        payload = json.loads(runner.invoke(cli_root, ['show', 'alice', '--json']).output)

        assert payload['html_url'] == 'https://github.com/alice'
        assert payload['repositories'][0]['pull_requests'][0]['repository_url'] == 'https://github.com/big/repo'

    def test_invalid_sort_rejected(self, runner, cli_root, clean_env, mock_graphql, user_payload):
        post = mock_graphql(user_payload)

        result = runner.invoke(cli_root, ['show', 'alice', '--sort', 'forks'])

        assert result.exit_code == 2
        post.assert_not_called()

    def test_blank_username_rejected(self, runner, cli_root, clean_env, mock_graphql, user_payload):
        post = mock_graphql(user_payload)

        result = runner.invoke(cli_root, ['show', '  '])

        assert result.exit_code == 2
        post.assert_not_called()


# =============================================================================
# share
# =============================================================================


class TestShare:
    def test_share_text(self, runner, cli_root, clean_env, mock_graphql, user_payload):
        mock_graphql(user_payload)

        result = runner.invoke(cli_root, ['share', 'alice'])

        assert result.exit_code == 0, result.output
        assert 'I have 3 contributions on open-source projects.' in result.output
        assert 'x.com/intent/tweet' in result.output

    def test_share_not_found(self, runner, cli_root, clean_env, mock_graphql):
        mock_graphql(NOT_FOUND_PAYLOAD)

        result = runner.invoke(cli_root, ['share', 'ghost'])

        assert result.exit_code == 1
        assert LOOKUP_FAILED_TITLE in result.output


# =============================================================================
# config
# =============================================================================


class TestConfigCommands:
    def test_show_empty(self, runner, cli_root, config_file):
        result = runner.invoke(cli_root, ['config'])

        assert result.exit_code == 0
        assert 'No configuration set.' in result.output

    def test_set_and_show_masks_token(self, runner, cli_root, config_file):
        result = runner.invoke(cli_root, ['config', 'set', 'github_token', 'ghp_secret'])
        assert result.exit_code == 0, result.output
        assert 'ghp_secret' not in result.output

        result = runner.invoke(cli_root, ['config'])
        assert result.exit_code == 0
        assert 'github_token' in result.output
        assert 'ghp_secret' not in result.output
        assert json.loads(config_file.read_text()) == {'github_token': 'ghp_secret'}

    def test_set_unknown_key(self, runner, cli_root, config_file):
        result = runner.invoke(cli_root, ['config', 'set', 'wallet', 'alice'])

        assert result.exit_code == 2
        assert not config_file.exists()

    def test_set_invalid_timeout(self, runner, cli_root, config_file):
        result = runner.invoke(cli_root, ['config', 'set', 'timeout', 'never'])

        assert result.exit_code == 2

    @pytest.mark.parametrize('value', ['nan', 'inf', 'Infinity'])
    def test_set_non_finite_timeout(self, runner, cli_root, config_file, value):
        result = runner.invoke(cli_root, ['config', 'set', 'timeout', value])

        assert result.exit_code == 2
        assert not config_file.exists()

    def test_update_existing(self, runner, cli_root, config_file):
        runner.invoke(cli_root, ['config', 'set', 'base_url', 'https://one.example.com'])
        result = runner.invoke(cli_root, ['config', 'set', 'base_url', 'https://two.example.com'])

        assert 'Updated base_url' in result.output
        assert json.loads(config_file.read_text())['base_url'] == 'https://two.example.com'

    def test_clear(self, runner, cli_root, config_file):
        runner.invoke(cli_root, ['config', 'set', 'timeout', '10'])

        result = runner.invoke(cli_root, ['config', 'clear', '--force'])

        assert result.exit_code == 0
        assert not config_file.exists()

    def test_config_used_by_show(self, runner, cli_root, config_file, mock_graphql, user_payload, monkeypatch):
        for name in ('GITHUB_TOKEN', 'OSSCONTRIB_BASE_URL', 'OSSCONTRIB_API_URL', 'OSSCONTRIB_TIMEOUT'):
            monkeypatch.delenv(name, raising=False)
        runner.invoke(cli_root, ['config', 'set', 'api_url', 'https://ghe.example.com/api'])
        runner.invoke(cli_root, ['config', 'set', 'timeout', '7'])
        post = mock_graphql(user_payload)

        result = runner.invoke(cli_root, ['show', 'alice', '--json'])

        assert result.exit_code == 0, result.output
        assert post.call_args.args[0] == 'https://ghe.example.com/api/graphql'
        assert post.call_args.kwargs['timeout'] == 7.0


class TestHelp:
    def test_aliases_listed(self, runner, cli_root):
        result = runner.invoke(cli_root, ['--help'])

        assert result.exit_code == 0
        assert 'show, s' in result.output
        assert 'share' in result.output
        assert 'config' in result.output
