"""Read the Slack webhook URL and target account keys from SSM Parameter Store."""

import logging
from typing import Dict

from botocore.exceptions import BotoCoreError, ClientError

from .errors import ConfigurationMissing, ParameterStoreError
from .models import AccountCredentials

logger = logging.getLogger(__name__)

# Parameter name suffix -> AccountCredentials field
CREDENTIAL_FIELDS = {
    'AccessKeyId': 'access_key_id',
    'SecretAccessKey': 'secret_access_key',
}


def get_webhook_url(ssm, name: str) -> str:
    """Return the decrypted webhook URL stored at ``name``."""
    try:
        response = ssm.get_parameter(Name=name, WithDecryption=True)
    except ClientError as e:
        error_code = e.response['Error']['Code']
        if error_code == 'ParameterNotFound':
            raise ConfigurationMissing(f"Parameter {name} not found") from e
        raise ParameterStoreError(f"SSM GetParameter failed: {error_code}") from e
    except BotoCoreError as e:
        raise ParameterStoreError(f"SSM GetParameter failed: {e}") from e

    value = response.get('Parameter', {}).get('Value')
    if not value:
        raise ConfigurationMissing(f"Parameter {name} is empty")
    return value


def get_account_secrets(ssm, path: str) -> Dict[str, AccountCredentials]:
    """Collect every ``<path>/<account>/<field>`` parameter, page by page.

    Pages are merged before anything is returned, so an account whose fields
    are spread across pages comes back as a single entry.
    """
    fields: Dict[str, Dict[str, str]] = {}
    kwargs = {'Path': path, 'Recursive': True, 'WithDecryption': True}
    pages = 0

    while True:
        try:
            response = ssm.get_parameters_by_path(**kwargs)
        except ClientError as e:
            raise ParameterStoreError(f"SSM GetParametersByPath failed: {e.response['Error']['Code']}") from e
        except BotoCoreError as e:
            raise ParameterStoreError(f"SSM GetParametersByPath failed: {e}") from e
        pages += 1

        for parameter in response.get('Parameters', []):
            segments = parameter['Name'].rstrip('/').split('/')
            if len(segments) < 2:
                continue
            account_name, field_key = segments[-2], segments[-1]
            field = CREDENTIAL_FIELDS.get(field_key)
            if field is None:
                logger.debug(f"Ignoring parameter {parameter['Name']}")
                continue
            fields.setdefault(account_name, {})[field] = parameter['Value']

        token = response.get('NextToken')
        if not token:
            break
        kwargs['NextToken'] = token

    logger.info(f"Read {len(fields)} target account(s) from {path} in {pages} page(s)")
    return {name: AccountCredentials(**values) for name, values in fields.items()}
