# lambda_function.py
"""
AWS Cost Watch Lambda
Posts each target account's month-to-date AWS cost, converted to yen, to Slack.
"""

import json
import logging
import os
import time
from typing import Any, Dict

from cost_watch.config import Settings
from cost_watch.report import run

# Configure logging
logger = logging.getLogger()
logger.setLevel(os.environ.get('LOG_LEVEL', 'INFO'))


def lambda_handler(event: Dict[str, Any], context) -> Dict[str, Any]:
    """Main Lambda handler."""
    start_time = time.time()
    request_id = getattr(context, 'aws_request_id', 'unknown')

    logger.info(f"Starting cost watch execution - Request ID: {request_id}")

    try:
        settings = Settings.from_env()
        notified = run(settings)

        execution_time = time.time() - start_time
        logger.info(f"Cost reports for {notified} account(s) posted in {execution_time:.1f}s")

        return {
            'statusCode': 200,
            'body': json.dumps({
                'message': 'Cost reports posted successfully',
                'accounts_notified': notified,
                'execution_time': round(execution_time, 2)
            })
        }

    except Exception as e:
        execution_time = time.time() - start_time
        logger.error(f"Cost watch failed after {execution_time:.1f}s: {str(e)}")
        raise  # Re-raise so the invocation is reported as failed
