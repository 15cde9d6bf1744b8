"""
Validation helpers for the pipe deployment

Everything here runs while the construct tree is being built. A failure
aborts the whole synth with a DescriptorError carrying the reason.
"""

import logging
import re
from typing import Dict, Iterable, List, NoReturn

from aws_cdk import Token


logger = logging.getLogger(__name__)


class DescriptorError(ValueError):
    """Raised when the deployment descriptor cannot be constructed"""


# Accepted Fargate CPU units -> allowed memory sizes (MiB)
FARGATE_SIZING: Dict[int, List[int]] = {
    256: [512, 1024, 2048],
    512: list(range(1024, 4096 + 1, 1024)),
    1024: list(range(2048, 8192 + 1, 1024)),
    2048: list(range(4096, 16384 + 1, 1024)),
    4096: list(range(8192, 30720 + 1, 1024)),
    8192: list(range(16384, 61440 + 1, 4096)),
    16384: list(range(32768, 122880 + 1, 8192)),
}

_ACTION_PATTERN = re.compile(r"^(\*|[a-z0-9-]+:[A-Za-z0-9*]+)$")
_ARN_PATTERN = re.compile(r"^arn:aws[a-z-]*:[a-z0-9-]+:[a-z0-9*-]*:(\d{12}|\*|aws)?:.+$")


def fail(reason: str) -> NoReturn:
    logger.error("Descriptor construction failed: %s", reason)
    raise DescriptorError(reason)


def validate_fargate_sizing(cpu: int, memory_mib: int) -> None:
    """Check that cpu/memory is a combination Fargate accepts."""
    allowed = FARGATE_SIZING.get(cpu)
    if allowed is None:
        fail(f"Unsupported Fargate CPU value {cpu}; expected one of {sorted(FARGATE_SIZING)}")
    if memory_mib not in allowed:
        fail(f"Memory {memory_mib} MiB is not valid for {cpu} CPU units; expected one of {allowed}")


def validate_max_receive_count(max_receive_count: int) -> None:
    if max_receive_count < 1:
        fail(f"maxReceiveCount must be at least 1, got {max_receive_count}")


def validate_grant(actions: Iterable[str], resources: Iterable[str]) -> None:
    """
    Validate the actions and resource patterns of a permission grant.

    Resources that are still unresolved tokens (ARNs of resources declared
    in this app) are only known at deploy time and pass through. Literal
    resources must be "*" or a well-formed ARN.
    """
    actions = list(actions)
    resources = list(resources)

    if not actions:
        fail("Permission grant has no actions")
    for action in actions:
        if not _ACTION_PATTERN.match(action):
            fail(f"Malformed IAM action '{action}'")

    if not resources:
        fail("Permission grant has no resources")
    for resource in resources:
        if Token.is_unresolved(resource) or resource == "*":
            continue
        if not _ARN_PATTERN.match(resource):
            fail(f"Malformed resource pattern '{resource}'")
