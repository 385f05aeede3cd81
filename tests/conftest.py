"""
pytest 설정:

로컬 작업 환경에 설치된 다른 버전의 pubsub_kit 패키지가 존재할 때,
`pytest` 실행 시 site-packages 쪽이 먼저 import 되어 테스트가 깨질 수 있다.

테스트는 항상 현재 레포의 소스를 대상으로 해야 하므로, repo root 를 sys.path 최상단에 고정한다.
"""

from __future__ import annotations

import os
import sys
from types import SimpleNamespace

import pytest
from google.api_core.exceptions import NotFound


INPUT_NAMES = [
    "project-id",
    "subscription-name",
    "topic-name",
    "skip-if-exists",
    "ack-deadline-seconds",
    "push-endpoint",
    "filter",
    "labels",
    "retain-acked-messages",
    "message-retention-duration",
]


def pytest_configure() -> None:
    repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    if repo_root not in sys.path:
        sys.path.insert(0, repo_root)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # CI 러너에서 테스트가 돌 때 러너 환경변수가 섞이지 않도록 비운다.
    for name in INPUT_NAMES:
        monkeypatch.delenv(f"INPUT_{name.upper()}", raising=False)
        monkeypatch.delenv(name.upper().replace("-", "_"), raising=False)
    for name in ("GITHUB_ACTIONS", "GITHUB_OUTPUT", "GITHUB_STEP_SUMMARY"):
        monkeypatch.delenv(name, raising=False)


class FakeSubscriberClient:
    """SubscriberClient 의 get_subscription / create_subscription 만 흉내낸다."""

    def __init__(self, existing=(), get_error=None, create_error=None) -> None:
        self.existing = set(existing)
        self.get_error = get_error
        self.create_error = create_error
        self.requests: list[dict] = []

    def get_subscription(self, request):
        if self.get_error is not None:
            raise self.get_error
        name = request["subscription"]
        if name not in self.existing:
            raise NotFound(f"Resource not found (resource={name}).")
        return SimpleNamespace(name=name)

    def create_subscription(self, request):
        if self.create_error is not None:
            raise self.create_error
        self.requests.append(request)
        self.existing.add(request["name"])
        return SimpleNamespace(name=request["name"])


@pytest.fixture
def fake_client_cls():
    return FakeSubscriberClient
