import logging
from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from .errors import IdentityLookupFailed
from .models import AccountCredentials, make_session

logger = logging.getLogger(__name__)


def get_alias_name(credentials: Optional[AccountCredentials]) -> Optional[str]:
    """Return the account's IAM aliases joined by ', ', or None if it has none."""
    iam = make_session(credentials).client('iam')
    try:
        aliases = iam.list_account_aliases().get('AccountAliases', [])
    except ClientError as e:
        raise IdentityLookupFailed(f"IAM ListAccountAliases failed: {e.response['Error']['Code']}") from e
    except BotoCoreError as e:
        raise IdentityLookupFailed(f"IAM ListAccountAliases failed: {e}") from e

    if not aliases:
        return None
    return ', '.join(aliases)


def get_caller_account(credentials: Optional[AccountCredentials] = None) -> str:
    """Account id the credentials belong to."""
    sts = make_session(credentials).client('sts')
    try:
        return sts.get_caller_identity()['Account']
    except (ClientError, BotoCoreError) as e:
        raise IdentityLookupFailed(f"STS GetCallerIdentity failed: {e}") from e
