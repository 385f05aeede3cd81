from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Optional, List

from dotenv import load_dotenv


ENV_FILES_DEFAULT_ORDER = [".env", ".env.pubsub"]

# 부호 있는 ASCII 10진수만 허용 ("3_0", 전각 숫자 등은 거부)
INT_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)


def load_env_files(base_dir: str = ".",
                   files: Optional[List[str]] = None) -> None:
    """
    주어진 디렉토리에서 .env 계열 파일을 순서대로 로드한다.
    후순위 파일이 같은 키를 덮어쓴다.
    """
    order = files or ENV_FILES_DEFAULT_ORDER
    for name in order:
        path = os.path.join(base_dir, name)
        if os.path.exists(path):
            load_dotenv(path, override=True)


def get_input(name: str) -> Optional[str]:
    """
    파이프라인 입력값을 읽는다.

    러너가 넘겨주는 INPUT_<NAME> (하이픈 유지) 를 먼저 보고,
    없으면 로컬 .env 용 이름(<NAME>, 하이픈은 언더스코어) 을 본다.
    빈 문자열은 입력되지 않은 것으로 취급한다.
    """
    upper = name.upper()
    for key in (f"INPUT_{upper}", upper.replace("-", "_")):
        val = os.getenv(key)
        if val is not None and val.strip():
            return val.strip()
    return None


def _get_bool(name: str, default: bool = False) -> bool:
    raw = get_input(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "y"}


def _get_int(name: str) -> Optional[int]:
    raw = get_input(name)
    if raw is None:
        return None
    if not INT_PATTERN.fullmatch(raw):
        raise ValueError(f'Invalid {name}: "{raw}". Must be a number.')
    return int(raw)


@dataclass
class SubscriptionConfig:
    # 필수
    project_id: str
    subscription_name: str
    topic_name: str

    skip_if_exists: bool = False

    # 선택 설정들 (None 이면 API 기본값 사용)
    ack_deadline_seconds: Optional[int] = None
    push_endpoint: Optional[str] = None
    filter: Optional[str] = None
    labels: Optional[str] = None  # JSON 문자열
    retain_acked_messages: bool = False
    message_retention_duration: Optional[str] = None

    @property
    def subscription_path(self) -> str:
        return f"projects/{self.project_id}/subscriptions/{self.subscription_name}"

    @property
    def topic_path(self) -> str:
        return f"projects/{self.project_id}/topics/{self.topic_name}"

    @classmethod
    def from_env(cls) -> "SubscriptionConfig":
        # 필수값
        missing: List[str] = []
        def req(name: str) -> str:
            val = get_input(name)
            if not val:
                missing.append(name)
            return val or ""

        project_id = req("project-id")
        subscription_name = req("subscription-name")
        topic_name = req("topic-name")

        if missing:
            raise ValueError(
                "필수 입력값이 누락되었습니다: " + ", ".join(sorted(set(missing)))
            )

        return cls(
            project_id=project_id,
            subscription_name=subscription_name,
            topic_name=topic_name,
            skip_if_exists=_get_bool("skip-if-exists", False),
            ack_deadline_seconds=_get_int("ack-deadline-seconds"),
            push_endpoint=get_input("push-endpoint"),
            filter=get_input("filter"),
            labels=get_input("labels"),
            retain_acked_messages=_get_bool("retain-acked-messages", False),
            message_retention_duration=get_input("message-retention-duration"),
        )
