"""
pubsub_kit
----------

CI 파이프라인에서 GCP Pub/Sub 구독(subscription)을 생성/확인하는 패키지.
입력값을 검증하고, 구독 존재 여부를 확인한 뒤 필요하면 새로 생성하여
결과(subscription-name, created)를 파이프라인 출력으로 돌려준다.
"""

__all__ = [
    "config",
    "orchestrator",
]
