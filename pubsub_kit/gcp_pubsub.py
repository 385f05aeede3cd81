"""
gcp_pubsub
----------

Pub/Sub 구독 존재 여부 확인 및 생성을 담당하는 모듈.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from google.api_core.exceptions import NotFound
from google.cloud import pubsub_v1
from google.protobuf import duration_pb2

from .config import SubscriptionConfig
from .logging_utils import get_logger
from .validation import (
    parse_duration,
    parse_labels,
    validate_ack_deadline,
    validate_subscription_name,
    validate_topic_name,
)


logger = get_logger(__name__)

# describe_subscription 이 돌려주는 상태값
STATE_EXISTS = "exists"
STATE_MISSING = "missing"
STATE_FAILED = "failed"


@dataclass
class SubscriptionResult:
    subscription_name: str
    created: bool


def make_client() -> pubsub_v1.SubscriberClient:
    # 인증은 ADC, PUBSUB_EMULATOR_HOST 가 있으면 에뮬레이터로 붙는다.
    return pubsub_v1.SubscriberClient()


def check_subscription_exists(client: Any, cfg: SubscriptionConfig) -> Optional[str]:
    """
    구독이 존재하면 전체 이름(projects/.../subscriptions/...)을, 없으면 None 을 반환한다.

    NotFound 이외의 오류는 경고만 남기고 '없음'으로 취급한다.
    실제 문제는 이어지는 create 호출에서 드러난다.
    """
    try:
        subscription = client.get_subscription(
            request={"subscription": cfg.subscription_path}
        )
    except NotFound:
        return None
    except Exception as e:  # noqa: BLE001
        logger.warning("Failed to check if subscription exists: %s", e)
        return None
    return subscription.name


def validate_inputs(cfg: SubscriptionConfig) -> None:
    validate_subscription_name(cfg.subscription_name)
    validate_topic_name(cfg.topic_name)
    if cfg.ack_deadline_seconds is not None:
        validate_ack_deadline(cfg.ack_deadline_seconds)


def build_subscription_request(cfg: SubscriptionConfig) -> Dict[str, Any]:
    """
    create_subscription 요청 본문을 만든다.
    선택 옵션은 값이 있을 때만 포함한다.
    """
    request: Dict[str, Any] = {
        "name": cfg.subscription_path,
        "topic": cfg.topic_path,
    }

    if cfg.ack_deadline_seconds is not None:
        request["ack_deadline_seconds"] = cfg.ack_deadline_seconds
        logger.info("ACK deadline: %s seconds", cfg.ack_deadline_seconds)

    if cfg.push_endpoint:
        request["push_config"] = pubsub_v1.types.PushConfig(
            push_endpoint=cfg.push_endpoint
        )
        logger.info("Push endpoint: %s", cfg.push_endpoint)

    if cfg.filter:
        request["filter"] = cfg.filter
        logger.info("Filter: %s", cfg.filter)

    if cfg.labels:
        labels = parse_labels(cfg.labels)
        request["labels"] = labels
        logger.info("Labels: %d label(s)", len(labels))

    request["retain_acked_messages"] = cfg.retain_acked_messages
    logger.info("Retain acked messages: %s", cfg.retain_acked_messages)

    if cfg.message_retention_duration:
        seconds = parse_duration(cfg.message_retention_duration)
        request["message_retention_duration"] = duration_pb2.Duration(seconds=seconds)
        logger.info("Message retention: %s", cfg.message_retention_duration)

    return request


def create_subscription(client: Any, cfg: SubscriptionConfig) -> SubscriptionResult:
    """
    입력값 검증 -> 존재 확인 -> 옵션 구성 -> 생성 순으로 구독을 준비한다.

    이미 존재하는 경우 skip_if_exists 가 켜져 있으면 created=False 로 성공 처리하고,
    아니면 RuntimeError 를 낸다.
    """
    validate_inputs(cfg)

    logger.info("Subscription name: %s", cfg.subscription_name)
    logger.info("Topic: %s", cfg.topic_name)

    existing = check_subscription_exists(client, cfg)
    if existing:
        if not cfg.skip_if_exists:
            raise RuntimeError(
                f'Subscription "{cfg.subscription_name}" already exists. '
                "Set skip-if-exists=true to succeed when subscription exists."
            )
        logger.info("Subscription already exists: %s", existing)
        logger.info("Skip-if-exists is enabled, treating as success")
        return SubscriptionResult(subscription_name=existing, created=False)

    logger.info("Creating new subscription...")
    request = build_subscription_request(cfg)
    subscription = client.create_subscription(request=request)

    logger.info("Subscription created successfully")
    logger.info("Subscription name: %s", subscription.name)
    return SubscriptionResult(subscription_name=subscription.name, created=True)


def describe_subscription(client: Any, cfg: SubscriptionConfig) -> tuple[str, str]:
    """
    구독 존재 여부를 확인만 하고, 생성하지 않는다.

    Returns:
        state: STATE_EXISTS | STATE_MISSING | STATE_FAILED
        status: 사람이 읽기 좋은 상태 문자열
    """
    path = cfg.subscription_path
    try:
        client.get_subscription(request={"subscription": path})
        return STATE_EXISTS, f"Subscription: 존재함 ({path})"
    except NotFound:
        return STATE_MISSING, f"Subscription: 없음 (생성이 필요함) ({path})"
    except Exception as e:  # noqa: BLE001
        return STATE_FAILED, f"Subscription: 조회 실패 ({path}): {e}"
