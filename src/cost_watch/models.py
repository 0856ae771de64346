"""Request-scoped values passed between the pipeline steps."""

from decimal import Decimal
from typing import List, Optional

import boto3
from pydantic import BaseModel, ConfigDict


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class AccountCredentials(_Frozen):
    """Access key pair of a target account.

    Either field may be missing while the Targets namespace is being read;
    only complete credentials are used to call AWS.
    """
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.access_key_id and self.secret_access_key)


class AccountTarget(_Frozen):
    name: str
    # None means the Lambda execution role's own credentials
    credentials: Optional[AccountCredentials] = None


class LineItem(_Frozen):
    label: str
    amount_formatted: str
    amount_raw: Decimal


class CostSummary(_Frozen):
    period_start: str
    period_end: str
    total_amount: Decimal
    total_amount_formatted: str
    line_items: List[LineItem]


class MessageField(_Frozen):
    title: str
    value: str


class NotificationMessage(_Frozen):
    headline: str
    fields: List[MessageField]


def make_session(credentials: Optional[AccountCredentials] = None) -> boto3.Session:
    """Create a boto3 session for the given account, or the default chain."""
    if credentials is None:
        return boto3.Session()
    return boto3.Session(
        aws_access_key_id=credentials.access_key_id,
        aws_secret_access_key=credentials.secret_access_key,
    )
