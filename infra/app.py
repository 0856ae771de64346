#!/usr/bin/env python

"""
Synthesise AwsCostWatch-Stack into a CloudFormation template
"""

from aws_cdk import App
from stack import CostWatchStack

app = App()
name = "AwsCostWatch"
# SSM namespace holding SlackWebHookUrl and Targets/<account>/<key>
parameter_prefix = "/CreatedByCDK/AwsCostWatch"
# every day at 10:00 JST (01:00 UTC)
schedule = "cron(0 1 * * ? *)"

CostWatchStack(
    app,
    name,
    stack_name=f"{name}-Stack",
    parameter_prefix=parameter_prefix,
    schedule=schedule,
)

app.synth()
