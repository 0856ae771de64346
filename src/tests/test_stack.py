import os
import shutil
import sys

import pytest

# CDK synthesis needs the aws-cdk-lib extra and a node runtime
pytestmark = pytest.mark.skipif(shutil.which('node') is None, reason='node is not installed')

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'infra'))


@pytest.fixture(scope='module')
def template():
    cdk = pytest.importorskip('aws_cdk')
    from aws_cdk.assertions import Template
    from stack import CostWatchStack

    app = cdk.App(context={'aws:cdk:bundling-stacks': []})
    stack = CostWatchStack(
        app,
        'TestStack',
        stack_name='Test-Stack',
        parameter_prefix='/CreatedByCDK/AwsCostWatch',
        schedule='cron(0 1 * * ? *)',
    )
    return Template.from_stack(stack)


def test_function(template):
    template.has_resource_properties('AWS::Lambda::Function', {
        'Handler': 'lambda_function.lambda_handler',
        'Timeout': 300,
        'Environment': {'Variables': {'TZ': 'Asia/Tokyo', 'PARAMETER_PREFIX': '/CreatedByCDK/AwsCostWatch'}},
    })


def test_daily_schedule(template):
    template.has_resource_properties('AWS::Events::Rule', {'ScheduleExpression': 'cron(0 1 * * ? *)'})
