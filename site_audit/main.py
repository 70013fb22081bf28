"""
CLI interface for the Neon Tetris site audit.

Usage:
    python -m site_audit.main loop                 # Audit loop + local check + commit
    python -m site_audit.main loop --no-commit     # Same, without git
    python -m site_audit.main audit                # Single audit pass + report
    python -m site_audit.main smoke                # Browser smoke test
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console

from site_audit.auditor import PageAuditor
from site_audit.config import AuditConfig, SmokeConfig
from site_audit.orchestrator import DevelopmentLoop
from site_audit.reports.generator import ReportGenerator
from site_audit.testers.smoke_tester import run_smoke_test


# Load .env file if it exists
env_path = Path.cwd() / ".env"
if env_path.exists():
    load_dotenv(env_path)


app = typer.Typer(
    name="site-audit",
    help="Neon Tetris — проверка страницы и smoke-тест",
    no_args_is_help=True,
)
console = Console()

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Настроить логирование."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def build_audit_config(
    url: Optional[str] = None,
    report: Optional[Path] = None,
    max_iterations: Optional[int] = None,
    port: Optional[int] = None,
    serve_dir: Optional[Path] = None,
    commit: bool = True,
) -> AuditConfig:
    """Конфигурация по умолчанию + флаги командной строки."""
    overrides = {
        "site_url": url,
        "report_path": report,
        "max_iterations": max_iterations,
        "server_port": port,
        "serve_dir": serve_dir,
    }
    try:
        return AuditConfig(
            commit_enabled=commit,
            **{key: value for key, value in overrides.items() if value is not None},
        )
    except ValueError as e:
        raise typer.BadParameter(str(e))


@app.command()
def loop(
    url: Optional[str] = typer.Option(None, "--url", help="Адрес задеплоенной страницы"),
    report: Optional[Path] = typer.Option(None, "--report", help="Файл отчёта"),
    max_iterations: Optional[int] = typer.Option(None, "--max-iterations", help="Максимум проходов"),
    port: Optional[int] = typer.Option(None, "--port", help="Порт локального сервера"),
    serve_dir: Optional[Path] = typer.Option(None, "--serve-dir", help="Директория для локального сервера"),
    no_commit: bool = typer.Option(False, "--no-commit", help="Не запускать git"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """🔁 Цикл проверки страницы, локальная проверка и коммит."""
    setup_logging(verbose)

    config = build_audit_config(url, report, max_iterations, port, serve_dir, commit=not no_commit)
    dev_loop = DevelopmentLoop(config)

    result = asyncio.run(dev_loop.run())

    dev_loop.reporter.print_summary(result.issues, result.verification, console=console)


@app.command()
def audit(
    url: Optional[str] = typer.Option(None, "--url", help="Адрес задеплоенной страницы"),
    report: Optional[Path] = typer.Option(None, "--report", help="Файл отчёта"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """🔍 Один проход проверки страницы и отчёт."""
    setup_logging(verbose)

    config = build_audit_config(url, report)
    reporter = ReportGenerator(config)

    issues = asyncio.run(PageAuditor(config).audit(config.site_url))
    healthy = reporter.write_report(issues)
    reporter.print_summary(issues, console=console)

    if not healthy:
        raise typer.Exit(1)


@app.command()
def smoke(
    url: Optional[str] = typer.Option(None, "--url", help="Адрес локальной страницы"),
    headed: bool = typer.Option(False, "--headed", help="Показать окно браузера"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """🧪 Smoke-тест страницы в браузере."""
    setup_logging(verbose)

    config = SmokeConfig()
    if url:
        config.url = url
    if headed:
        config.headless = False

    try:
        result = asyncio.run(run_smoke_test(config))
    except Exception as e:
        logger.error(f"❌ Smoke test crashed: {e}", exc_info=True)
        raise typer.Exit(1)

    raise typer.Exit(result.exit_code)


def cli():
    app()


if __name__ == "__main__":
    cli()
