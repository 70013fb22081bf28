"""
Base class for markup checks.
"""

import logging
from abc import ABC, abstractmethod
from typing import List

from .models import Issue, Severity, Category

logger = logging.getLogger(__name__)


class BaseChecker(ABC):
    """
    Базовый класс для всех проверок разметки.

    Одна проверка = одно правило. Предоставляет:
    - Шаблон метода run()
    - Error handling
    - Логирование
    """

    def __init__(self, name: str):
        """
        Args:
            name: Имя проверки (для логирования и отчётов)
        """
        self.name = name
        self.logger = logging.getLogger(f"site_audit.{name}")

    def run(self, html: str) -> List[Issue]:
        """
        Запустить проверку с error handling.

        Args:
            html: Тело ответа страницы

        Returns:
            Список найденных проблем (пустой, если правило выполнено)
        """
        try:
            issues = self._check(html)
        except Exception as e:
            self.logger.error(f"{self.name} failed with exception: {e}", exc_info=True)
            return [
                self.create_issue(
                    f"检查失败: {self.name} ({type(e).__name__}: {e})",
                    category=Category.AUDIT_FAILURE,
                    severity=Severity.HIGH,
                )
            ]

        self.logger.debug(f"{self.name}: {len(issues)} issues")
        return issues

    @abstractmethod
    def _check(self, html: str) -> List[Issue]:
        """
        Выполнить проверку (должен быть реализован в подклассах).

        Returns:
            Список найденных проблем
        """
        pass

    def create_issue(
        self,
        title: str,
        category: Category = Category.MARKUP,
        severity: Severity = Severity.MEDIUM,
    ) -> Issue:
        """Удобный метод для создания Issue."""
        return Issue(title=title, category=category, severity=severity, check=self.name)


class SubstringChecker(BaseChecker):
    """Проверка наличия подстроки в разметке."""

    def __init__(
        self,
        name: str,
        needle: str,
        issue_title: str,
        category: Category = Category.MARKUP,
        severity: Severity = Severity.MEDIUM,
    ):
        super().__init__(name)
        self.needle = needle
        self.issue_title = issue_title
        self.category = category
        self.severity = severity

    def _check(self, html: str) -> List[Issue]:
        if self.needle in html:
            return []
        return [self.create_issue(self.issue_title, self.category, self.severity)]
