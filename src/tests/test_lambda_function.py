import json
from unittest import mock

import pytest

import lambda_function
from cost_watch.errors import NotificationFailed


def test_handler_reports_accounts_notified(monkeypatch):
    """Handler returns a 200 body with the number of accounts posted"""
    monkeypatch.setenv('PARAMETER_PREFIX', '/Test/CostWatch/')

    with mock.patch.object(lambda_function, 'run', return_value=2) as run:
        result = lambda_function.lambda_handler({}, mock.Mock(aws_request_id='req-1'))

    assert result['statusCode'] == 200
    body = json.loads(result['body'])
    assert body['accounts_notified'] == 2
    assert 'execution_time' in body

    # trailing slash is dropped from the prefix
    settings = run.call_args.args[0]
    assert settings.webhook_parameter == '/Test/CostWatch/SlackWebHookUrl'
    assert settings.targets_path == '/Test/CostWatch/Targets'


def test_handler_reraises_failures():
    """Failures propagate so the invocation is marked as failed"""
    with mock.patch.object(lambda_function, 'run', side_effect=NotificationFailed('reset')):
        with pytest.raises(NotificationFailed):
            lambda_function.lambda_handler({}, None)


def test_settings_reject_non_positive_workers(monkeypatch):
    """MAX_WORKERS must allow at least one thread"""
    from pydantic import ValidationError

    from cost_watch.config import Settings

    monkeypatch.setenv('MAX_WORKERS', '0')
    with pytest.raises(ValidationError):
        Settings.from_env()

    # the handler fails before any AWS call
    with mock.patch.object(lambda_function, 'run') as run:
        with pytest.raises(ValidationError):
            lambda_function.lambda_handler({}, None)
    run.assert_not_called()
