import sys
import os

import boto3
import pytest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from cost_watch.config import Settings  # noqa: E402


@pytest.fixture(autouse=True)
def aws_env(monkeypatch):
    """Dummy credentials so no test can reach a real AWS account"""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', 'us-east-1')
    monkeypatch.delenv('AWS_PROFILE', raising=False)


@pytest.fixture
def settings():
    return Settings(max_workers=4)


def make_client(service):
    return boto3.client(service, region_name='us-east-1')


class FakeSession:
    """Stands in for boto3.Session, handing out pre-stubbed clients."""

    def __init__(self, clients, credentials=None):
        self.clients = clients
        self.key = credentials.access_key_id if credentials else None

    def client(self, service, **kwargs):
        return self.clients[(self.key, service)]


def ce_response(groups, start='2026-10-01', end='2026-10-20'):
    """Cost Explorer GetCostAndUsage response with one MONTHLY bucket"""
    return {
        'ResultsByTime': [{
            'TimePeriod': {'Start': start, 'End': end},
            'Total': {},
            'Groups': [
                {'Keys': [service], 'Metrics': {'UnblendedCost': {'Amount': amount, 'Unit': unit}}}
                for service, amount, unit in groups
            ],
            'Estimated': True,
        }]
    }


def fake_convert(amount, unit, api_url=None):
    return f"JPY[{amount} {unit}]"
