"""Convert amounts to yen using a public exchange rate API."""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict

import requests
from pydantic import BaseModel, ValidationError

from .config import DEFAULT_EXCHANGE_RATE_API_URL, TARGET_CURRENCY
from .errors import ConversionFailed

logger = logging.getLogger(__name__)

YEN_SIGN = '￥'


class ExchangeRates(BaseModel):
    result: str
    rates: Dict[str, Decimal] = {}


def format_yen(amount: Decimal) -> str:
    """Format like ja-JP currency output: fullwidth yen sign, no decimals."""
    rounded = amount.quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    return f"{YEN_SIGN}{rounded:,}"


def fetch_rate(unit: str, api_url: str = DEFAULT_EXCHANGE_RATE_API_URL) -> Decimal:
    try:
        response = requests.get(f"{api_url}/{unit}")
        response.raise_for_status()
        rates = ExchangeRates.model_validate(response.json())
    except (requests.RequestException, ValueError, ValidationError) as e:
        raise ConversionFailed(f"Exchange rate lookup for {unit} failed: {e}") from e

    if rates.result != 'success':
        raise ConversionFailed(f"Exchange rate API returned '{rates.result}' for {unit}")
    if TARGET_CURRENCY not in rates.rates:
        raise ConversionFailed(f"No {TARGET_CURRENCY} rate for {unit}")
    return rates.rates[TARGET_CURRENCY]


def convert(amount: Decimal, unit: str, api_url: str = DEFAULT_EXCHANGE_RATE_API_URL) -> str:
    """Convert ``amount`` in ``unit`` to a formatted yen string."""
    rate = fetch_rate(unit, api_url)
    logger.debug(f"{unit}->{TARGET_CURRENCY} rate {rate}")
    return format_yen(Decimal(amount) * rate)
