"""
Queue Pair - Source queue for the pipe

Creates:
- Main queue: sqs-event-queue
- Dead Letter Queue (DLQ): sqs-event-queue-dlq
"""

import logging

from aws_cdk import Duration
from aws_cdk import aws_sqs as sqs
from constructs import Construct

from config import DLQ_NAME, QUEUE_NAME
from stacks.validation import validate_max_receive_count


logger = logging.getLogger(__name__)


class QueuePair(Construct):
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        max_receive_count: int = 2,
        visibility_timeout_seconds: int = 300,
    ) -> None:
        super().__init__(scope, construct_id)

        validate_max_receive_count(max_receive_count)

        # Dead Letter Queue for exception handling or failures
        self.dlq = sqs.Queue(
            self,
            "deadLetterQueue",
            queue_name=DLQ_NAME,
        )

        # Main Queue
        self.queue = sqs.Queue(
            self,
            "sqsQueue",
            queue_name=QUEUE_NAME,
            # How long a message stays invisible after the pipe picks it up
            visibility_timeout=Duration.seconds(visibility_timeout_seconds),
            dead_letter_queue=sqs.DeadLetterQueue(
                max_receive_count=max_receive_count,
                queue=self.dlq
            ),
        )

        logger.debug(
            "Declared queue %s with DLQ %s (maxReceiveCount=%d)",
            QUEUE_NAME, DLQ_NAME, max_receive_count,
        )
