"""
SQS Fargate Pipe Stack

Builds, in dependency order:
- SQS queue with DLQ
- Default VPC lookup
- ECS cluster and Fargate task definition
- IAM role for the pipe
- EventBridge Pipe (SQS -> Fargate task)
- Outputs: queue URL and pipe name
"""

import logging
from typing import Optional

from aws_cdk import (
    Stack,
    CfnOutput,
    Token,
)
from aws_cdk import aws_ec2 as ec2
from constructs import Construct

from config import Settings
from stacks.pipe_role import PipeRole
from stacks.queue_pair import QueuePair
from stacks.sqs_fargate_pipe import SqsFargatePipe
from stacks.task_compute import TaskCompute
from stacks.validation import fail


logger = logging.getLogger(__name__)


class SqsFargatePipeStack(Stack):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        settings: Optional[Settings] = None,
        vpc: Optional[ec2.IVpc] = None,
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        settings = settings or Settings()
        logger.info("Building %s (account=%s, region=%s)", construct_id, self.account, self.region)

        # ==================== SQS Queue with DLQ ====================
        self.queues = QueuePair(
            self,
            "QueuePair",
            max_receive_count=settings.max_receive_count,
            visibility_timeout_seconds=settings.queue_visibility_timeout_seconds,
        )

        # ==================== VPC ====================
        self.vpc = vpc if vpc is not None else self._lookup_default_vpc()

        # Tasks get a public IP, so the pipe needs public subnets to launch into
        if not self.vpc.public_subnets:
            fail("VPC has no public subnets for the pipe's network configuration")
        public_subnets = self.vpc.select_subnets(subnet_type=ec2.SubnetType.PUBLIC)

        # ==================== ECS Cluster and Task ====================
        self.compute = TaskCompute(
            self,
            "TaskCompute",
            vpc=self.vpc,
            container_image=settings.container_image,
            cpu=settings.task_cpu,
            memory_limit_mib=settings.task_memory_mib,
        )

        # ==================== IAM Role ====================
        self.pipe_role = PipeRole(
            self,
            "PipeRole",
            queue=self.queues.queue,
            cluster=self.compute.cluster,
            task_definition=self.compute.task_definition,
        )

        # ==================== EventBridge Pipe ====================
        self.pipe = SqsFargatePipe(
            self,
            "Pipe",
            role=self.pipe_role.role,
            queue=self.queues.queue,
            cluster=self.compute.cluster,
            task_definition=self.compute.task_definition,
            container_name=self.compute.container_name,
            subnet_ids=public_subnets.subnet_ids,
        )

        # ==================== Outputs ====================
        CfnOutput(
            self,
            "sqsQueueOutput",
            value=self.queues.queue.queue_url,
            description="SQS Queue Url",
        )

        CfnOutput(
            self,
            "eventbridgePipeOutput",
            value=self.pipe.pipe_name,
            description="EventBridge Pipe",
        )

        logger.info("Built %s", construct_id)

    def _lookup_default_vpc(self) -> ec2.IVpc:
        # Context lookups need a concrete account and region on the stack
        if Token.is_unresolved(self.account) or Token.is_unresolved(self.region):
            fail(
                "Cannot look up the default VPC without an explicit account and region "
                "(set CDK_DEFAULT_ACCOUNT and CDK_DEFAULT_REGION)"
            )

        vpc = ec2.Vpc.from_lookup(self, "vpc", is_default=True)
        logger.info("Resolved default VPC %s", vpc.vpc_id)
        return vpc
