"""Gather every target account's cost in parallel, then post to Slack in order."""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Dict, List, NamedTuple, Optional

import boto3

from .aliases import get_alias_name, get_caller_account
from .billing import get_cost
from .config import Settings
from .errors import ConfigurationMissing
from .models import AccountCredentials, AccountTarget, CostSummary
from .parameters import get_account_secrets, get_webhook_url
from .slack import build_message, notify

logger = logging.getLogger(__name__)


class AccountReport(NamedTuple):
    target: AccountTarget
    alias: Optional[str]
    summary: CostSummary

    @property
    def display_name(self) -> str:
        return self.alias or self.target.name


def build_targets(secrets: Dict[str, AccountCredentials]) -> List[AccountTarget]:
    """Targets sorted by account name; every target needs both keys."""
    targets = []
    for name in sorted(secrets):
        credentials = secrets[name]
        if not credentials.is_complete:
            raise ConfigurationMissing(f"Target {name} needs both AccessKeyId and SecretAccessKey")
        targets.append(AccountTarget(name=name, credentials=credentials))
    return targets


def resolve_targets(ssm, settings: Settings) -> List[AccountTarget]:
    targets = build_targets(get_account_secrets(ssm, settings.targets_path))
    if targets:
        return targets

    account_id = get_caller_account()
    logger.warning(f"No targets under {settings.targets_path}, reporting on own account {account_id}")
    return [AccountTarget(name=account_id)]


def collect_reports(targets: List[AccountTarget], settings: Settings, today: Optional[date] = None) -> List[AccountReport]:
    """Fetch alias and cost for all targets at once.

    Results come back in the order of ``targets``; the first failure is
    raised once every submitted task has finished.
    """
    if not targets:
        return []

    with ThreadPoolExecutor(max_workers=max(1, min(settings.max_workers, 2 * len(targets)))) as executor:
        futures = [
            (
                target,
                executor.submit(get_alias_name, target.credentials),
                executor.submit(get_cost, target.credentials, settings, today),
            )
            for target in targets
        ]

    return [AccountReport(target, alias.result(), cost.result()) for target, alias, cost in futures]


def run(settings: Settings, ssm=None, today: Optional[date] = None) -> int:
    """Post one cost report per target account. Returns the number posted."""
    ssm = ssm or boto3.client('ssm')

    webhook_url = get_webhook_url(ssm, settings.webhook_parameter)
    targets = resolve_targets(ssm, settings)
    logger.info(f"Collecting costs for {len(targets)} account(s): {', '.join(t.name for t in targets)}")

    reports = collect_reports(targets, settings, today)

    for report in reports:
        notify(webhook_url, build_message(report.display_name, report.summary))
    return len(reports)
