"""
Development loop orchestrator.

1. Audit → 2. Report → 3. Fix (log only) → repeat up to max_iterations
4. Local verification → 5. Commit gate
"""

import asyncio
import logging
from typing import List, Optional

import httpx

from .auditor import PageAuditor, format_status_line
from .config import AuditConfig
from .core.models import Issue, LoopResult, TestResult
from .reports.generator import ReportGenerator
from .server import LocalStaticServer
from .vcs import GitCommitter


logger = logging.getLogger(__name__)


def log_pending_fixes(issues: List[Issue]):
    """
    Шаг исправления.

    Только логирует найденные проблемы и ничего не меняет: автоматического
    исправления нет.
    """
    logger.info(f"修复 {len(issues)} 个问题...")
    for issue in issues:
        logger.info(f"  🔧 修复: {issue}")


class DevelopmentLoop:
    """Ограниченный цикл проверки страницы с локальной проверкой и коммитом."""

    def __init__(
        self,
        config: AuditConfig,
        auditor: Optional[PageAuditor] = None,
        reporter: Optional[ReportGenerator] = None,
        committer: Optional[GitCommitter] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            config: Конфигурация аудита
            auditor: Аудитор страницы
            reporter: Генератор отчёта
            committer: Git коммиттер
            client: HTTP клиент для локальной проверки (для тестов)
        """
        self.config = config
        self.auditor = auditor or PageAuditor(config)
        self.reporter = reporter or ReportGenerator(config)
        self.committer = committer or GitCommitter(
            message=config.commit_message,
            cwd=config.repo_dir,
        )
        self.client = client

    async def run(self) -> LoopResult:
        """Запустить цикл целиком."""
        logger.info("=" * 60)
        logger.info("🚀 自动开发循环开始")
        logger.info("=" * 60)

        iterations, issues, healthy = await self.run_audit_loop()

        verification = await self.verify_local()

        committed = False
        if self.config.commit_enabled:
            # git runs blocking subprocesses
            committed = await asyncio.to_thread(self.committer.commit_if_passed, verification.passed)
        else:
            logger.info("⏭️  Commit disabled")

        logger.info("=" * 60)
        logger.info("🏁 循环完成")
        logger.info("=" * 60)

        return LoopResult(
            iterations=iterations,
            issues=issues,
            healthy=healthy,
            verification=verification,
            committed=committed,
        )

    async def run_audit_loop(self):
        """
        Проверять страницу до max_iterations раз.

        Останавливается на первом проходе без проблем.

        Returns:
            (число итераций, проблемы последнего прохода, исправна ли страница)
        """
        issues: List[Issue] = []
        healthy = False
        iteration = 0

        while iteration < self.config.max_iterations:
            iteration += 1
            logger.info(f"📍 第 {iteration} 轮")

            issues = await self.auditor.audit(self.config.site_url)
            healthy = self.reporter.write_report(issues)

            if not issues:
                logger.info("✅ 没有发现新问题!")
                break

            log_pending_fixes(issues)
            logger.info(f"📋 需要修复: {', '.join(str(issue) for issue in issues)}")

            if iteration >= self.config.max_iterations:
                logger.warning("达到最大迭代次数")

        return iteration, issues, healthy

    async def verify_local(self) -> TestResult:
        """
        Поднять локальный сервер и один раз проверить probe_path.

        Pass = строка статуса содержит "200".
        """
        logger.info("运行测试...")
        result = TestResult()

        try:
            with LocalStaticServer(
                self.config.serve_dir,
                host=self.config.server_host,
                port=self.config.server_port,
            ) as server:
                status = await self._probe(server.url + self.config.probe_path)
        except OSError as e:
            logger.error(f"❌ Local server failed to start: {e}")
            result.details.append(f"❌ 测试失败: {e}")
            return result

        result.details.append(f"服务器状态: {status}")

        if "200" in status:
            result.passed = True
            result.details.append("✅ 所有测试通过")
        else:
            logger.warning(f"⚠️  Local probe failed: {status}")

        return result

    async def _probe(self, url: str) -> str:
        try:
            if self.client is not None:
                response = await self.client.head(url)
            else:
                async with httpx.AsyncClient(timeout=self.config.http_timeout_seconds) as client:
                    response = await client.head(url)
            return format_status_line(response)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"❌ Probe {url} failed: {e}")
            return f"{type(e).__name__}: {e}"
