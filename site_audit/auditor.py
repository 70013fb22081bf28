"""
Page auditor: fetch the deployed page and run the markup checks.

Fails soft: a non-200 status or a transport error becomes an Issue,
never an exception.
"""

import logging
from typing import List, Optional, Sequence

import httpx

from .config import AuditConfig
from .checkers.markup_checks import default_checks
from .core.base_checker import BaseChecker
from .core.models import Issue, Category, Severity


logger = logging.getLogger(__name__)


def format_status_line(response: httpx.Response) -> str:
    """Строка статуса в стиле curl -I: 'HTTP/1.1 200 OK'."""
    return f"{response.http_version} {response.status_code} {response.reason_phrase}".strip()


class PageAuditor:
    """Один проход проверки страницы."""

    def __init__(
        self,
        config: AuditConfig,
        checks: Optional[Sequence[BaseChecker]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            config: Конфигурация аудита
            checks: Набор проверок (по умолчанию default_checks())
            client: HTTP клиент (для тестов можно передать клиент с MockTransport)
        """
        self.config = config
        self.checks = list(checks) if checks is not None else default_checks()
        self.client = client

    async def audit(self, url: Optional[str] = None) -> List[Issue]:
        """
        Загрузить страницу и проверить разметку.

        Args:
            url: Адрес страницы (по умолчанию config.site_url)

        Returns:
            Список проблем в порядке проверок
        """
        url = url or self.config.site_url
        logger.info(f"检查现有问题... ({url})")

        issues: List[Issue] = []
        html = ""

        try:
            response = await self._fetch(url)
            status_line = format_status_line(response)
            logger.debug(f"Status: {status_line}")
            if "200" not in status_line:
                issues.append(Issue(
                    title=f"页面返回: {status_line}",
                    category=Category.PAGE,
                    severity=Severity.HIGH,
                    check="PageStatus",
                ))
            html = response.text
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"❌ Failed to fetch {url}: {e}")
            issues.append(Issue(
                title=f"页面返回: {type(e).__name__}: {e}",
                category=Category.PAGE,
                severity=Severity.HIGH,
                check="PageStatus",
            ))

        for check in self.checks:
            issues.extend(check.run(html))

        logger.info(f"Found {len(issues)} issues")
        return issues

    async def _fetch(self, url: str) -> httpx.Response:
        if self.client is not None:
            return await self.client.get(url)

        async with httpx.AsyncClient(timeout=self.config.http_timeout_seconds) as client:
            return await client.get(url)
