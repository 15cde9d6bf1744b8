"""
Task Compute - ECS cluster and Fargate task definition invoked by the pipe

Creates:
- ECS Cluster with Fargate capacity providers
- Fargate task definition with a single container
- CloudWatch log group for the container
"""

import logging

from aws_cdk import RemovalPolicy
from aws_cdk import aws_ec2 as ec2
from aws_cdk import aws_ecs as ecs
from aws_cdk import aws_logs as logs
from constructs import Construct

from config import CLUSTER_NAME
from stacks.validation import fail, validate_fargate_sizing


logger = logging.getLogger(__name__)


class TaskCompute(Construct):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        vpc: ec2.IVpc,
        container_image: str = "alpine",
        cpu: int = 256,
        memory_limit_mib: int = 512,
    ) -> None:
        super().__init__(scope, construct_id)

        validate_fargate_sizing(cpu, memory_limit_mib)

        # ==================== ECS Cluster ====================
        self.cluster = ecs.Cluster(
            self,
            "ecsCluster",
            cluster_name=CLUSTER_NAME,
            enable_fargate_capacity_providers=True,
            vpc=vpc,
        )

        # ==================== CloudWatch Log Group ====================
        log_group = logs.LogGroup(
            self,
            "TaskLogGroup",
            retention=logs.RetentionDays.ONE_DAY,
            removal_policy=RemovalPolicy.DESTROY,
        )

        # ==================== Task Definition ====================
        self.task_definition = ecs.FargateTaskDefinition(
            self,
            "fargateTaskDefinition",
            cpu=cpu,
            memory_limit_mib=memory_limit_mib,
        )

        self.task_definition.add_container(
            "defaultContainer",
            image=ecs.ContainerImage.from_registry(container_image),
            logging=ecs.LogDriver.aws_logs(
                stream_prefix="/app/",
                log_group=log_group,
            ),
        )

        logger.debug(
            "Declared cluster %s and task definition (%s, cpu=%d, memory=%d)",
            CLUSTER_NAME, container_image, cpu, memory_limit_mib,
        )

    @property
    def container_name(self) -> str:
        """Name of the container the pipe overrides on each launch."""
        container = self.task_definition.default_container
        if container is None:
            fail("Task definition has no default container to override")
        return container.container_name
