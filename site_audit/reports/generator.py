"""
Report generator for audit results.

Generates:
- TEST_REPORT.md, overwritten on every audit pass
- Console summary (rich table)
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional, Sequence

from rich.console import Console
from rich.table import Table

from ..config import AuditConfig
from ..core.models import Issue, TestResult


logger = logging.getLogger(__name__)


REPORT_TEMPLATE = """# Neon Tetris - 自动测试报告

## 测试时间
{timestamp}

## 检测到的问题
{issues}

## 游戏状态
- 仓库: {repo_name}
- 访问地址: {site_url}

## 自动化检查项
- [x] 页面可访问性
- [x] HTML 结构完整性
- [x] 移动端适配
- [x] 触摸事件支持
"""

NO_ISSUES_MARKER = "无"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC с миллисекундами: 2026-10-18T09:30:00.000Z."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_issue_list(issues: Sequence[Issue]) -> str:
    if not issues:
        return NO_ISSUES_MARKER
    return "\n".join(f"{n}. {issue}" for n, issue in enumerate(issues, 1))


class ReportGenerator:
    """Генератор отчёта TEST_REPORT.md."""

    def __init__(
        self,
        config: AuditConfig,
        output_path: Optional[Path] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Args:
            config: Конфигурация (repo_name, site_url для раздела состояния)
            output_path: Файл отчёта (по умолчанию config.report_path)
            clock: Источник времени (для тестов)
        """
        self.config = config
        self.output_path = Path(output_path) if output_path else config.report_path
        self.clock = clock

    def render_markdown(self, issues: Sequence[Issue]) -> str:
        return REPORT_TEMPLATE.format(
            timestamp=format_timestamp(self.clock()),
            issues=format_issue_list(issues),
            repo_name=self.config.repo_name,
            site_url=self.config.site_url,
        )

    def write_report(self, issues: Sequence[Issue]) -> bool:
        """
        Записать отчёт поверх предыдущего.

        Args:
            issues: Проблемы текущего прохода

        Returns:
            True, если проблем нет (страница считается исправной)
        """
        logger.info("编写文档...")

        self.output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.output_path, "w", encoding="utf-8") as f:
            f.write(self.render_markdown(issues))

        logger.debug(f"Report written to {self.output_path}")
        return len(issues) == 0

    def print_summary(
        self,
        issues: Sequence[Issue],
        verification: Optional[TestResult] = None,
        console: Optional[Console] = None,
    ):
        """Вывести краткую сводку в консоль."""
        console = console or Console()

        table = Table(title="AUDIT SUMMARY")
        table.add_column("#", justify="right")
        table.add_column("Issue")
        table.add_column("Severity")
        table.add_column("Check")

        for n, issue in enumerate(issues, 1):
            table.add_row(str(n), issue.title, issue.severity.value, issue.check)

        if not issues:
            table.add_row("-", NO_ISSUES_MARKER, "", "")

        console.print(table)
        console.print(f"Report: {self.output_path}")

        if verification is not None:
            status = "[green]✅ PASSED[/]" if verification.passed else "[red]❌ FAILED[/]"
            console.print(f"Local verification: {status}")
            for detail in verification.details:
                console.print(f"  - {detail}")
