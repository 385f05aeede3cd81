import pytest

from pubsub_kit.config import SubscriptionConfig, get_input, load_env_files


def _base_env() -> dict[str, str]:
    return {
        "INPUT_PROJECT-ID": "test-project",
        "INPUT_SUBSCRIPTION-NAME": "orders-sub",
        "INPUT_TOPIC-NAME": "orders",
    }


def _set_env(monkeypatch: pytest.MonkeyPatch, env: dict[str, str]) -> None:
    for key, value in env.items():
        monkeypatch.setenv(key, value)


def test_missing_required_inputs_raise_value_error(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("INPUT_PROJECT-ID", "test-project")

    with pytest.raises(ValueError) as excinfo:
        SubscriptionConfig.from_env()

    assert "subscription-name" in str(excinfo.value)
    assert "topic-name" in str(excinfo.value)
    assert "project-id" not in str(excinfo.value)


def test_defaults_when_only_required_inputs(monkeypatch: pytest.MonkeyPatch) -> None:
    _set_env(monkeypatch, _base_env())

    cfg = SubscriptionConfig.from_env()

    assert cfg.project_id == "test-project"
    assert cfg.skip_if_exists is False
    assert cfg.retain_acked_messages is False
    assert cfg.ack_deadline_seconds is None
    assert cfg.push_endpoint is None
    assert cfg.labels is None
    assert cfg.subscription_path == "projects/test-project/subscriptions/orders-sub"
    assert cfg.topic_path == "projects/test-project/topics/orders"


def test_optional_inputs_are_parsed(monkeypatch: pytest.MonkeyPatch) -> None:
    env = _base_env()
    env.update(
        {
            "INPUT_SKIP-IF-EXISTS": "TRUE",
            "INPUT_ACK-DEADLINE-SECONDS": "30",
            "INPUT_PUSH-ENDPOINT": "https://example.com/push",
            "INPUT_RETAIN-ACKED-MESSAGES": "yes",
            "INPUT_MESSAGE-RETENTION-DURATION": "7d",
        }
    )
    _set_env(monkeypatch, env)

    cfg = SubscriptionConfig.from_env()

    assert cfg.skip_if_exists is True
    assert cfg.ack_deadline_seconds == 30
    assert cfg.push_endpoint == "https://example.com/push"
    assert cfg.retain_acked_messages is True
    assert cfg.message_retention_duration == "7d"


def test_non_numeric_ack_deadline_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    env = _base_env()
    env["INPUT_ACK-DEADLINE-SECONDS"] = "soon"
    _set_env(monkeypatch, env)

    with pytest.raises(ValueError, match="Invalid ack-deadline-seconds"):
        SubscriptionConfig.from_env()


def test_get_input_falls_back_to_plain_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROJECT_ID", "from-dotenv")
    assert get_input("project-id") == "from-dotenv"

    # 러너가 넘긴 INPUT_* 가 우선한다.
    monkeypatch.setenv("INPUT_PROJECT-ID", "from-runner")
    assert get_input("project-id") == "from-runner"


def test_empty_input_counts_as_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INPUT_FILTER", "   ")
    assert get_input("filter") is None


def test_load_env_files_later_file_overrides(
    tmp_path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (tmp_path / ".env").write_text("PROJECT_ID=first\nTOPIC_NAME=orders\n", encoding="utf-8")
    (tmp_path / ".env.pubsub").write_text("PROJECT_ID=second\n", encoding="utf-8")
    # load_dotenv 는 os.environ 을 직접 바꾸므로 monkeypatch 가 되돌릴 수 있게 먼저 등록한다.
    monkeypatch.setenv("PROJECT_ID", "placeholder")
    monkeypatch.setenv("TOPIC_NAME", "placeholder")

    load_env_files(str(tmp_path))

    assert get_input("project-id") == "second"
    assert get_input("topic-name") == "orders"


@pytest.mark.parametrize("raw", ["3_0", "３０", "30s", "1e2", "30.0"])
def test_ack_deadline_requires_ascii_integer(
    monkeypatch: pytest.MonkeyPatch, raw: str
) -> None:
    env = _base_env()
    env["INPUT_ACK-DEADLINE-SECONDS"] = raw
    _set_env(monkeypatch, env)

    with pytest.raises(ValueError, match="Invalid ack-deadline-seconds"):
        SubscriptionConfig.from_env()


@pytest.mark.parametrize("raw, expected", [("+30", 30), ("-5", -5), ("600", 600)])
def test_ack_deadline_signed_integer(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: int
) -> None:
    env = _base_env()
    env["INPUT_ACK-DEADLINE-SECONDS"] = raw
    _set_env(monkeypatch, env)

    assert SubscriptionConfig.from_env().ack_deadline_seconds == expected
