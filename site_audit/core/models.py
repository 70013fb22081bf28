"""
Core data models for site audit.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional


class Severity(Enum):
    """Уровень серьёзности проблемы."""
    HIGH = "high"          # Страница недоступна или ломает мобильную игру
    MEDIUM = "medium"      # Отсутствует ожидаемая функция
    LOW = "low"            # Незначительная проблема


class Category(Enum):
    """Категория проблемы."""
    PAGE = "page"                      # Доступность страницы
    MARKUP = "markup"                  # Разметка и CSS
    SCRIPT = "script"                  # Встроенный JavaScript
    AUDIT_FAILURE = "audit_failure"    # Сбой самой проверки


@dataclass(frozen=True)
class Issue:
    """Проблема, найденная при проверке страницы.

    Идентичности нет: проблема определяется своим текстом.
    """

    title: str
    category: Category = Category.MARKUP
    severity: Severity = Severity.MEDIUM
    check: str = ""

    def __str__(self) -> str:
        return self.title


@dataclass
class TestResult:
    """Результат локальной проверки перед коммитом."""

    __test__ = False  # not a pytest test class

    passed: bool = False
    details: List[str] = field(default_factory=list)
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class SmokeResult:
    """Результат smoke-теста в браузере."""

    elements: Dict[str, bool] = field(default_factory=dict)
    clicked: bool = False
    score_text: Optional[str] = None
    errors: List[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        # Missing elements never fail the run, only console/page errors do
        return not self.errors

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1

    def missing_elements(self) -> List[str]:
        return [element_id for element_id, found in self.elements.items() if not found]


@dataclass
class LoopResult:
    """Итог цикла разработки."""

    iterations: int
    issues: List[Issue]
    healthy: bool
    verification: TestResult
    committed: bool = False
