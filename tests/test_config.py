import pytest
from pydantic import ValidationError

from config import Settings


def test_defaults():
    settings = Settings()

    assert settings.account is None
    assert settings.region == "us-east-1"
    assert settings.stack_name == "sqs-fargate-eventbridge-pipe"
    assert settings.task_cpu == 256
    assert settings.task_memory_mib == 512
    assert settings.max_receive_count == 2


def test_cdk_environment_variables(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CDK_DEFAULT_ACCOUNT", "111111111111")
    monkeypatch.setenv("CDK_DEFAULT_REGION", "eu-west-1")
    monkeypatch.setenv("TASK_CPU", "512")
    monkeypatch.setenv("TASK_MEMORY_MIB", "2048")

    settings = Settings()

    assert settings.account == "111111111111"
    assert settings.region == "eu-west-1"
    assert settings.task_cpu == 512
    assert settings.task_memory_mib == 2048


def test_account_falls_back_to_aws_account_id(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("AWS_ACCOUNT_ID", "222222222222")

    assert Settings().account == "222222222222"


def test_reads_dotenv_file(tmp_path):
    (tmp_path / ".env").write_text("CONTAINER_IMAGE=busybox\nSTACK_NAME=pipe-from-dotenv\n")

    settings = Settings()

    assert settings.container_image == "busybox"
    assert settings.stack_name == "pipe-from-dotenv"


@pytest.mark.parametrize("cpu,memory", [(256, 4096), (300, 512), (4096, 4096)])
def test_rejects_invalid_fargate_sizing(cpu: int, memory: int):
    with pytest.raises(ValidationError):
        Settings(task_cpu=cpu, task_memory_mib=memory)


def test_rejects_zero_receive_count():
    with pytest.raises(ValidationError):
        Settings(max_receive_count=0)


def test_log_level_is_case_insensitive(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")

    assert Settings().log_level == "DEBUG"


def test_rejects_unknown_log_level():
    with pytest.raises(ValidationError):
        Settings(log_level="verbose")
