from __future__ import annotations

from typing import Any, List, Optional

from .config import SubscriptionConfig
from .logging_utils import get_logger
from . import gcp_pubsub


logger = get_logger(__name__)

SUMMARY_RULE = "=" * 50


def plan(cfg: SubscriptionConfig) -> str:
    """
    현재 설정된 입력값을 요약 텍스트로 리턴한다. 실제 GCP 호출은 하지 않는다.
    """
    lines: List[str] = []
    lines.append("# Subscription plan")
    lines.append(f"- project: {cfg.project_id}")
    lines.append(f"- subscription: {cfg.subscription_path}")
    lines.append(f"- topic: {cfg.topic_path}")
    lines.append("")

    lines.append("## Options")
    lines.append(f"- skip_if_exists: {cfg.skip_if_exists}")
    lines.append(f"- delivery: {'push' if cfg.push_endpoint else 'pull'}")
    lines.append(f"- push_endpoint: {cfg.push_endpoint or '(not set)'}")
    lines.append(f"- ack_deadline_seconds: {cfg.ack_deadline_seconds or '(default)'}")
    lines.append(f"- filter: {cfg.filter or '(not set)'}")
    lines.append(f"- labels: {cfg.labels or '(not set)'}")
    lines.append(f"- retain_acked_messages: {cfg.retain_acked_messages}")
    lines.append(
        f"- message_retention_duration: {cfg.message_retention_duration or '(default)'}"
    )

    return "\n".join(lines)


def _summary(result: gcp_pubsub.SubscriptionResult) -> str:
    lines: List[str] = [SUMMARY_RULE]
    if result.created:
        lines.append("Subscription created successfully")
    else:
        lines.append("Subscription already exists (skip-if-exists enabled)")
    lines.append(f"Subscription: {result.subscription_name}")
    lines.append(SUMMARY_RULE)
    return "\n".join(lines)


def apply(
    cfg: SubscriptionConfig, client: Optional[Any] = None
) -> tuple[gcp_pubsub.SubscriptionResult, str]:
    """
    구독을 생성(또는 확인)한다.

    Returns:
        result: 구독 전체 이름과 새로 생성되었는지 여부
        summary: 사람이 읽기 좋은 텍스트 요약
    """
    logger.info("GCP Pub/Sub Create Subscription")
    logger.info("Project ID: %s", cfg.project_id)
    logger.info("Subscription: %s", cfg.subscription_name)
    logger.info("Topic: %s", cfg.topic_name)

    try:
        # 클라이언트(인증) 생성 전에 입력값부터 검증한다.
        gcp_pubsub.validate_inputs(cfg)
        if client is None:
            client = gcp_pubsub.make_client()
        result = gcp_pubsub.create_subscription(client, cfg)
    except Exception as e:
        logger.error("Failed to create subscription: %s", e)
        raise

    return result, _summary(result)


def check(cfg: SubscriptionConfig, client: Optional[Any] = None) -> tuple[str, bool]:
    """
    실제 생성 없이 구독 상태만 점검한다.

    Returns:
        summary: 사람이 읽기 좋은 텍스트 요약
        has_issues: 상태 확인 자체가 실패했는지 여부
    """
    if client is None:
        client = gcp_pubsub.make_client()

    state, status = gcp_pubsub.describe_subscription(client, cfg)

    lines: List[str] = []
    lines.append("# Subscription pre-check")
    lines.append(f"- project: {cfg.project_id}")
    lines.append(f"- {status}")
    if state == gcp_pubsub.STATE_EXISTS and not cfg.skip_if_exists:
        lines.append(
            "- 주의: 이미 존재하므로 skip-if-exists=true 가 아니면 create 가 실패합니다."
        )
    return "\n".join(lines), state == gcp_pubsub.STATE_FAILED
