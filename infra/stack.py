"""
Create AwsCostWatch-Stack
"""

from pathlib import Path

from aws_cdk import BundlingOptions, Duration, Stack
from aws_cdk import aws_events as events
from aws_cdk import aws_events_targets as targets
from aws_cdk import aws_iam as iam
from aws_cdk import aws_lambda as lambda_
from constructs import Construct

SRC_DIR = str(Path(__file__).resolve().parent.parent / "src")


class CostWatchStack(Stack):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        stack_name: str,
        parameter_prefix: str,
        schedule: str,
        **kwargs,
    ) -> None:

        super().__init__(scope, construct_id, stack_name=stack_name, **kwargs)

        role = iam.Role(
            self,
            "IAMRoleForLambda",
            role_name="aws-cost-watch-lambda-role",
            assumed_by=iam.ServicePrincipal("lambda.amazonaws.com"),
            managed_policies=[
                iam.ManagedPolicy.from_aws_managed_policy_name(
                    "service-role/AWSLambdaBasicExecutionRole"
                ),
                # SecureString parameters: webhook URL and target keys
                iam.ManagedPolicy.from_aws_managed_policy_name("AmazonSSMReadOnlyAccess"),
            ],
        )
        role.add_to_policy(
            iam.PolicyStatement(
                actions=[
                    "ce:GetCostAndUsage",
                    "iam:ListAccountAliases",
                    "sts:GetCallerIdentity",
                ],
                resources=["*"],
            )
        )

        function = lambda_.Function(
            self,
            "AwsCostReport",
            runtime=lambda_.Runtime.PYTHON_3_12,
            handler="lambda_function.lambda_handler",
            code=lambda_.Code.from_asset(
                SRC_DIR,
                exclude=["tests"],
                bundling=BundlingOptions(
                    image=lambda_.Runtime.PYTHON_3_12.bundling_image,
                    command=[
                        "bash",
                        "-c",
                        "pip install -r requirements.txt -t /asset-output && cp -au . /asset-output",
                    ],
                ),
            ),
            timeout=Duration.seconds(300),
            role=role,
            environment={
                "TZ": "Asia/Tokyo",
                "PARAMETER_PREFIX": parameter_prefix,
            },
            description="Daily AWS cost report to Slack",
        )

        rule = events.Rule(
            self,
            "TimerRule",
            schedule=events.Schedule.expression(schedule),
        )
        rule.add_target(
            targets.LambdaFunction(function, event=events.RuleTargetInput.from_object({}))
        )
