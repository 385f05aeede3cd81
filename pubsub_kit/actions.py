"""
actions
-------

GitHub Actions 러너로 결과를 돌려주는 헬퍼 모음.
(step output, step summary, 실패 처리)
"""

from __future__ import annotations

import os
import sys

import click


def is_github_actions() -> bool:
    return os.getenv("GITHUB_ACTIONS") == "true"


def _append(path: str, text: str) -> None:
    with open(path, "a", encoding="utf-8") as f:
        f.write(text)


def set_output(name: str, value: str) -> None:
    """
    GITHUB_OUTPUT 파일에 name=value 를 추가한다.
    러너 밖(로컬 실행)에서는 stdout 으로 출력한다.
    """
    output_file = os.getenv("GITHUB_OUTPUT")
    if output_file:
        _append(output_file, f"{name}={value}\n")
    else:
        click.echo(f"{name}={value}")


def write_step_summary(text: str) -> None:
    summary_file = os.getenv("GITHUB_STEP_SUMMARY")
    if not summary_file:
        return
    _append(summary_file, text.rstrip() + "\n")


def set_failed(message: str) -> None:
    if is_github_actions():
        # annotation 은 한 줄이어야 하므로 개행을 인코딩한다.
        encoded = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        click.echo(f"::error::{encoded}")
    else:
        click.echo(f"[ERROR] {message}", err=True)
    sys.exit(1)
