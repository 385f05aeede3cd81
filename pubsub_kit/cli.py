import sys

import click

from .config import load_env_files, SubscriptionConfig
from .logging_utils import setup_logging, get_logger
from . import actions, orchestrator


logger = get_logger(__name__)


@click.group()
@click.option(
    "-C",
    "--chdir",
    "chdir",
    type=click.Path(file_okay=False, dir_okay=True, exists=True),
    default=".",
    help="작업 디렉토리 (기본: 현재 디렉토리)",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="로그 레벨을 DEBUG로 올립니다.",
)
@click.pass_context
def main(ctx: click.Context, chdir: str, verbose: int) -> None:
    """GCP Pub/Sub 구독 생성용 CLI (CI 파이프라인 step)"""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["chdir"] = chdir
    ctx.obj["verbose"] = verbose


def _load_config_from_ctx(ctx: click.Context) -> SubscriptionConfig:
    base_dir: str = ctx.obj["chdir"]
    load_env_files(base_dir)
    cfg = SubscriptionConfig.from_env()
    logger.debug("Config loaded: %s", cfg)
    return cfg


def _load_or_exit(ctx: click.Context) -> SubscriptionConfig:
    try:
        return _load_config_from_ctx(ctx)
    except Exception as e:  # noqa: BLE001
        click.echo(f"[ERROR] 설정 로드 실패: {e}", err=True)
        sys.exit(1)


@main.command()
@click.pass_context
def plan(ctx: click.Context) -> None:
    """현재 입력값을 요약해서 출력 (GCP 호출 없음)"""
    cfg = _load_or_exit(ctx)
    click.echo(orchestrator.plan(cfg))


@main.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """
    구독 존재 여부만 점검한다.
    (실제 리소스 생성/변경은 하지 않는다)
    """
    cfg = _load_or_exit(ctx)

    try:
        report, has_issues = orchestrator.check(cfg)
    except Exception as e:  # noqa: BLE001
        logger.exception("사전 체크 중 오류 발생")
        click.echo(f"[ERROR] 체크 실패: {e}", err=True)
        sys.exit(1)

    click.echo(report)

    if has_issues:
        sys.exit(1)


@main.command()
@click.pass_context
def create(ctx: click.Context) -> None:
    """구독을 생성하고 subscription-name / created 출력을 설정"""
    try:
        cfg = _load_config_from_ctx(ctx)
        result, summary = orchestrator.apply(cfg)
    except Exception as e:  # noqa: BLE001
        logger.debug("구독 생성 실패", exc_info=True)
        actions.set_failed(str(e))
        return

    actions.set_output("subscription-name", result.subscription_name)
    actions.set_output("created", "true" if result.created else "false")

    click.echo("")
    click.echo(summary)
    actions.write_step_summary(
        "### Pub/Sub subscription\n\n"
        f"- subscription: `{result.subscription_name}`\n"
        f"- created: `{str(result.created).lower()}`\n"
    )
