"""
SQS Fargate Pipe - EventBridge Pipe from the queue to a Fargate task

Each message is delivered on its own (batch size 1, batching window 120s)
and its body's SQS_PAYLOAD field becomes the container's command argument.
"""

import logging
from typing import List

from aws_cdk import aws_ecs as ecs
from aws_cdk import aws_iam as iam
from aws_cdk import aws_pipes as pipes
from aws_cdk import aws_sqs as sqs
from constructs import Construct

from config import (
    BATCH_SIZE,
    MAX_BATCHING_WINDOW_SECONDS,
    PAYLOAD_PATH,
    PIPE_NAME,
    TASK_COMMAND,
)


logger = logging.getLogger(__name__)


class SqsFargatePipe(Construct):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        role: iam.IRole,
        queue: sqs.IQueue,
        cluster: ecs.ICluster,
        task_definition: ecs.TaskDefinition,
        container_name: str,
        subnet_ids: List[str],
    ) -> None:
        super().__init__(scope, construct_id)

        self.pipe = pipes.CfnPipe(
            self,
            "eventbridgePipe",
            name=PIPE_NAME,
            description="Eventbridge Pipe to invoke Fargate Task",
            role_arn=role.role_arn,
            source=queue.queue_arn,
            target=cluster.cluster_arn,
            source_parameters=pipes.CfnPipe.PipeSourceParametersProperty(
                sqs_queue_parameters=pipes.CfnPipe.PipeSourceSqsQueueParametersProperty(
                    batch_size=BATCH_SIZE,
                    maximum_batching_window_in_seconds=MAX_BATCHING_WINDOW_SECONDS,
                ),
            ),
            target_parameters=pipes.CfnPipe.PipeTargetParametersProperty(
                ecs_task_parameters=pipes.CfnPipe.PipeTargetEcsTaskParametersProperty(
                    # Use either a capacity provider strategy or a launch type
                    capacity_provider_strategy=[
                        pipes.CfnPipe.CapacityProviderStrategyItemProperty(
                            capacity_provider="FARGATE_SPOT",
                            base=1,
                        )
                    ],
                    task_definition_arn=task_definition.task_definition_arn,
                    task_count=1,
                    network_configuration=pipes.CfnPipe.NetworkConfigurationProperty(
                        awsvpc_configuration=pipes.CfnPipe.AwsVpcConfigurationProperty(
                            subnets=subnet_ids,
                            assign_public_ip="ENABLED",
                        ),
                    ),
                    overrides=pipes.CfnPipe.EcsTaskOverrideProperty(
                        container_overrides=[
                            pipes.CfnPipe.EcsContainerOverrideProperty(
                                name=container_name,
                                command=[TASK_COMMAND, PAYLOAD_PATH],
                            )
                        ],
                        # Not used by the task, but the Pipes validator rejects
                        # the overrides block without it
                        ephemeral_storage=pipes.CfnPipe.EcsEphemeralStorageProperty(
                            size_in_gib=21
                        ),
                    ),
                ),
            ),
        )

        # Role policy has to exist before the pipe starts polling
        self.pipe.node.add_dependency(role)

        logger.debug("Declared pipe %s -> container %s", PIPE_NAME, container_name)

    @property
    def pipe_name(self) -> str:
        return PIPE_NAME
