"""
validation
----------

구독/토픽 이름, ack deadline 검증과
labels(JSON), 보존 기간 문자열 파싱을 담당하는 모듈.
"""

from __future__ import annotations

import json
import re
from typing import Dict


# 문자로 시작, 3~255자, 영숫자와 ._~+%- 만 허용
RESOURCE_NAME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9._~+%-]{2,254}$")
DURATION_PATTERN = re.compile(r"^(\d+)([dhms])$", re.ASCII)

ACK_DEADLINE_MIN = 10
ACK_DEADLINE_MAX = 600

_UNIT_SECONDS = {
    "d": 86400,
    "h": 3600,
    "m": 60,
    "s": 1,
}

# JSON 값 타입을 사용자에게 보여줄 이름
_JSON_TYPE_NAMES = {
    bool: "boolean",
    int: "number",
    float: "number",
    list: "array",
    dict: "object",
    type(None): "null",
}


def _validate_resource_name(kind: str, name: str) -> None:
    if not RESOURCE_NAME_PATTERN.fullmatch(name):
        raise ValueError(
            f'Invalid {kind} name: "{name}". '
            f"{kind.capitalize()} names must start with a letter and be 3-255 characters long, "
            "containing only letters, numbers, and ._~+%-"
        )


def validate_subscription_name(subscription_name: str) -> None:
    _validate_resource_name("subscription", subscription_name)


def validate_topic_name(topic_name: str) -> None:
    _validate_resource_name("topic", topic_name)


def validate_ack_deadline(ack_deadline_seconds: int) -> None:
    if not ACK_DEADLINE_MIN <= ack_deadline_seconds <= ACK_DEADLINE_MAX:
        raise ValueError(
            f"Invalid ack-deadline-seconds: {ack_deadline_seconds}. "
            f"Must be between {ACK_DEADLINE_MIN} and {ACK_DEADLINE_MAX} seconds."
        )


def parse_labels(labels_json: str) -> Dict[str, str]:
    """
    labels 입력(JSON 객체 문자열)을 dict 로 변환한다.
    값은 모두 문자열이어야 한다.
    """
    try:
        parsed = json.loads(labels_json)
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse labels: {e}") from e

    if not isinstance(parsed, dict):
        type_name = _JSON_TYPE_NAMES.get(type(parsed), type(parsed).__name__)
        raise ValueError(
            f"Failed to parse labels: expected a JSON object, got {type_name}."
        )

    labels: Dict[str, str] = {}
    for key, value in parsed.items():
        if not isinstance(value, str):
            type_name = _JSON_TYPE_NAMES.get(type(value), type(value).__name__)
            raise ValueError(
                f'Failed to parse labels: Label "{key}" must be a string, got {type_name}. '
                "All labels must be strings."
            )
        labels[key] = value

    return labels


def parse_duration(duration: str) -> int:
    """
    "7d", "1h", "30m", "600s" 형태의 문자열을 초 단위 정수로 변환한다.
    """
    match = DURATION_PATTERN.fullmatch(duration)
    if not match:
        raise ValueError(
            f'Invalid duration format: "{duration}". '
            'Use format like "7d" (days), "600s" (seconds), "1h" (hours), or "30m" (minutes)'
        )

    value = int(match.group(1))
    return value * _UNIT_SECONDS[match.group(2)]
