"""
Configuration for the SQS -> Fargate EventBridge Pipe deployment
"""

from typing import Literal, Optional

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings

from stacks.validation import validate_fargate_sizing


# Resource names are part of the deployment contract, keep them stable
QUEUE_NAME = "sqs-event-queue"
DLQ_NAME = f"{QUEUE_NAME}-dlq"
CLUSTER_NAME = "ecs-cluster"
PIPE_NAME = "sqs-fargate-task-pipe"
PIPE_ROLE_NAME = "sqs-fargate-pipe-role"

# Pipe batching and payload mapping
BATCH_SIZE = 1
MAX_BATCHING_WINDOW_SECONDS = 120
PAYLOAD_PATH = "$.body.SQS_PAYLOAD"
TASK_COMMAND = "/bin/echo"


class Settings(BaseSettings):
    """Deployment settings loaded from environment variables"""

    # Target environment
    account: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("account", "CDK_DEFAULT_ACCOUNT", "AWS_ACCOUNT_ID"),
    )
    region: str = Field(
        default="us-east-1",
        validation_alias=AliasChoices("region", "CDK_DEFAULT_REGION"),
    )

    stack_name: str = "sqs-fargate-eventbridge-pipe"
    environment: str = "dev"  # Tag value, CDK context "environment" wins

    # Task template
    container_image: str = "alpine"
    task_cpu: int = 256  # 0.25 vCPU
    task_memory_mib: int = 512

    # Queue behaviour
    max_receive_count: int = Field(default=2, ge=1)  # Deliveries before DLQ
    queue_visibility_timeout_seconds: int = Field(default=300, ge=0, le=43200)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalise_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @model_validator(mode="after")
    def check_task_sizing(self) -> "Settings":
        validate_fargate_sizing(self.task_cpu, self.task_memory_mib)
        return self

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
        populate_by_name = True
