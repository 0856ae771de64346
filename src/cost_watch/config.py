"""Runtime settings read from the Lambda environment."""

import os

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PARAMETER_PREFIX = '/CreatedByCDK/AwsCostWatch'
DEFAULT_EXCHANGE_RATE_API_URL = 'https://open.er-api.com/v6/latest'

TARGET_CURRENCY = 'JPY'
SLACK_COLOR = '#fd8c1e'


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    parameter_prefix: str = DEFAULT_PARAMETER_PREFIX
    cost_explorer_region: str = 'us-east-1'
    exchange_rate_api_url: str = DEFAULT_EXCHANGE_RATE_API_URL
    max_workers: int = Field(default=8, gt=0)

    @property
    def webhook_parameter(self) -> str:
        return f"{self.parameter_prefix}/SlackWebHookUrl"

    @property
    def targets_path(self) -> str:
        return f"{self.parameter_prefix}/Targets"

    @classmethod
    def from_env(cls) -> 'Settings':
        """Build settings from environment variables, falling back to defaults."""
        return cls(
            parameter_prefix=os.environ.get('PARAMETER_PREFIX', DEFAULT_PARAMETER_PREFIX).rstrip('/'),
            cost_explorer_region=os.environ.get('COST_EXPLORER_REGION', 'us-east-1'),
            exchange_rate_api_url=os.environ.get('EXCHANGE_RATE_API_URL', DEFAULT_EXCHANGE_RATE_API_URL).rstrip('/'),
            max_workers=int(os.environ.get('MAX_WORKERS', '8')),
        )
