"""
Pipe Role - Identity the EventBridge Pipe acts as

Grants, in order:
1. Consume messages from the source queue
2. ecs:RunTask on the task definition, only against the pipe's cluster
3. iam:PassRole, only to the ECS tasks service
"""

import logging
from typing import Any, Dict, List, Optional

from aws_cdk import aws_ecs as ecs
from aws_cdk import aws_iam as iam
from aws_cdk import aws_sqs as sqs
from constructs import Construct

from config import PIPE_ROLE_NAME
from stacks.validation import validate_grant


logger = logging.getLogger(__name__)


class PipeRole(Construct):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        queue: sqs.IQueue,
        cluster: ecs.ICluster,
        task_definition: ecs.TaskDefinition,
    ) -> None:
        super().__init__(scope, construct_id)

        self.role = iam.Role(
            self,
            "eventbridgeIAMRole",
            role_name=PIPE_ROLE_NAME,
            description="IAM Role for EventBridge Pipe",
            assumed_by=iam.ServicePrincipal("pipes.amazonaws.com"),
        )

        # Consume permission on SQS
        queue.grant_consume_messages(self.role)

        # RunTask permission on the cluster
        self.add_grant(
            actions=["ecs:RunTask"],
            resources=[task_definition.task_definition_arn],
            conditions={
                "ArnLike": {
                    "ecs:cluster": cluster.cluster_arn
                }
            },
        )

        # PassRole for the task and execution roles
        self.add_grant(
            actions=["iam:PassRole"],
            resources=["*"],
            conditions={
                "StringLike": {
                    "iam:PassedToService": "ecs-tasks.amazonaws.com"
                }
            },
        )

    def add_grant(
        self,
        actions: List[str],
        resources: List[str],
        conditions: Optional[Dict[str, Any]] = None,
    ) -> iam.PolicyStatement:
        validate_grant(actions, resources)

        statement = iam.PolicyStatement(
            effect=iam.Effect.ALLOW,
            actions=actions,
            resources=resources,
            conditions=conditions,
        )
        self.role.add_to_policy(statement)
        logger.debug("Granted %s to %s", ", ".join(actions), PIPE_ROLE_NAME)
        return statement
