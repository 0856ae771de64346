"""Month-to-date unblended cost per service from Cost Explorer."""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel, Field, ValidationError

from .config import Settings
from .currency import convert
from .errors import BillingQueryFailed, NoCostData
from .models import AccountCredentials, CostSummary, LineItem, make_session

logger = logging.getLogger(__name__)

METRIC = 'UnblendedCost'


# Response shapes, narrowed right after the call
class MetricValue(BaseModel):
    amount: Decimal = Field(alias='Amount')
    unit: str = Field(alias='Unit')


class CostGroup(BaseModel):
    keys: List[str] = Field(alias='Keys')
    metrics: Dict[str, MetricValue] = Field(alias='Metrics')

    @property
    def cost(self) -> MetricValue:
        return self.metrics[METRIC]


class TimePeriod(BaseModel):
    start: str = Field(alias='Start')
    end: str = Field(alias='End')


class ResultByTime(BaseModel):
    time_period: TimePeriod = Field(alias='TimePeriod')
    groups: List[CostGroup] = Field(default_factory=list, alias='Groups')


class CostAndUsage(BaseModel):
    results_by_time: List[ResultByTime] = Field(alias='ResultsByTime', min_length=1)


def month_to_date(today: date) -> Dict[str, str]:
    """First of the month through today; Cost Explorer's End is exclusive."""
    return {
        'Start': today.replace(day=1).isoformat(),
        'End': (today + timedelta(days=1)).isoformat(),
    }


def query_cost_and_usage(ce, today: date) -> ResultByTime:
    try:
        response = ce.get_cost_and_usage(
            TimePeriod=month_to_date(today),
            Granularity='MONTHLY',
            Metrics=[METRIC],
            GroupBy=[{'Type': 'DIMENSION', 'Key': 'SERVICE'}],
        )
    except ClientError as e:
        raise BillingQueryFailed(f"Cost Explorer API failed: {e.response['Error']['Code']}") from e
    except BotoCoreError as e:
        raise BillingQueryFailed(f"Failed to get cost data: {e}") from e

    try:
        return CostAndUsage.model_validate(response).results_by_time[0]
    except ValidationError as e:
        raise BillingQueryFailed(f"Unexpected Cost Explorer response: {e}") from e


def summarize(result: ResultByTime, settings: Settings) -> CostSummary:
    """Drop non-positive groups, total the rest and convert everything to yen.

    Each line item and the total are converted by separate calls running in
    a thread pool; the converted items are never summed.
    """
    groups = [group for group in result.groups if METRIC in group.metrics and group.cost.amount > 0]
    if not groups:
        raise NoCostData(f"No positive {METRIC} between {result.time_period.start} and {result.time_period.end}")

    total = sum((group.cost.amount for group in groups), Decimal(0))
    api_url = settings.exchange_rate_api_url

    with ThreadPoolExecutor(max_workers=settings.max_workers) as executor:
        total_future = executor.submit(convert, total, groups[0].cost.unit, api_url)
        item_futures = [executor.submit(convert, group.cost.amount, group.cost.unit, api_url) for group in groups]
        total_formatted = total_future.result()
        line_items = [
            LineItem(label=', '.join(group.keys), amount_formatted=future.result(), amount_raw=group.cost.amount)
            for group, future in zip(groups, item_futures)
        ]

    return CostSummary(
        period_start=result.time_period.start,
        period_end=result.time_period.end,
        total_amount=total,
        total_amount_formatted=total_formatted,
        line_items=line_items,
    )


def get_cost(credentials: Optional[AccountCredentials], settings: Settings, today: Optional[date] = None) -> CostSummary:
    """Fetch and convert the current month's cost for one account."""
    today = today or date.today()
    ce = make_session(credentials).client('ce', region_name=settings.cost_explorer_region)

    result = query_cost_and_usage(ce, today)
    logger.info(f"Retrieved {len(result.groups)} cost group(s) for {result.time_period.start}..{result.time_period.end}")
    return summarize(result, settings)
