import pytest
from aws_cdk import App, Environment
from aws_cdk.assertions import Template

from config import Settings
from stacks.sqs_fargate_pipe_stack import SqsFargatePipeStack


ACCOUNT = "111111111111"
REGION = "us-east-1"

SETTINGS_ENV = [
    "CDK_DEFAULT_ACCOUNT",
    "CDK_DEFAULT_REGION",
    "AWS_ACCOUNT_ID",
    "ACCOUNT",
    "REGION",
    "STACK_NAME",
    "ENVIRONMENT",
    "CONTAINER_IMAGE",
    "TASK_CPU",
    "TASK_MEMORY_MIB",
    "MAX_RECEIVE_COUNT",
    "QUEUE_VISIBILITY_TIMEOUT_SECONDS",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the tests
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def env() -> Environment:
    return Environment(account=ACCOUNT, region=REGION)


@pytest.fixture()
def stack(env: Environment) -> SqsFargatePipeStack:
    app = App()
    return SqsFargatePipeStack(app, "MyTestStack", settings=Settings(), env=env)


@pytest.fixture()
def template(stack: SqsFargatePipeStack) -> Template:
    return Template.from_stack(stack)
