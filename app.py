#!/usr/bin/env python3
"""
AWS CDK App for the SQS -> Fargate EventBridge Pipe

Infrastructure includes:
- SQS Queue with DLQ
- ECS Cluster and Fargate Task Definition (default VPC)
- IAM Role for the Pipe
- EventBridge Pipe invoking the Fargate task per message
"""

import logging
from typing import Optional

from aws_cdk import (
    App,
    Environment,
    Tags,
)

from config import Settings
from stacks.sqs_fargate_pipe_stack import SqsFargatePipeStack


logger = logging.getLogger(__name__)


def build_app(settings: Settings, app: Optional[App] = None) -> App:
    app = app if app is not None else App()

    env = Environment(account=settings.account, region=settings.region)

    SqsFargatePipeStack(
        app,
        settings.stack_name,
        settings=settings,
        env=env,
        description="SQS queue feeding Fargate tasks through an EventBridge Pipe",
    )

    # Add tags to all resources
    Tags.of(app).add("Project", "SQS-Fargate-Pipe")
    Tags.of(app).add("ManagedBy", "CDK")
    Tags.of(app).add("Environment", app.node.try_get_context("environment") or settings.environment)

    return app


def main() -> None:
    settings = Settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    app = build_app(settings)
    app.synth()
    logger.info("Synthesized %s", settings.stack_name)


if __name__ == "__main__":
    main()
