"""
Markup checks for the deployed tetris page.

Each check is a plain substring match against the raw response body:
- viewport meta
- apple-mobile-web-app meta (PWA)
- mobile controls marker
- touch-action CSS
- touch handlers in the first inline <script> block
"""

import re
from typing import List

from ..core.base_checker import BaseChecker, SubstringChecker
from ..core.models import Issue, Category, Severity


# Only the first bare <script> tag; <script src=...> and typed scripts are ignored
INLINE_SCRIPT_RE = re.compile(r"<script>([\s\S]*?)</script>")


class ViewportMetaCheck(SubstringChecker):
    """Страница должна объявлять viewport meta."""

    def __init__(self):
        super().__init__(
            name="ViewportMetaCheck",
            needle="viewport",
            issue_title="缺少 viewport meta",
            severity=Severity.HIGH,
        )


class MobileWebAppMetaCheck(SubstringChecker):
    """Страница должна объявлять apple-mobile-web-app meta."""

    def __init__(self):
        super().__init__(
            name="MobileWebAppMetaCheck",
            needle="apple-mobile-web-app",
            issue_title="缺少 PWA meta",
        )


class MobileControlsCheck(SubstringChecker):
    def __init__(self):
        super().__init__(
            name="MobileControlsCheck",
            needle="mobile-controls",
            issue_title="缺少移动端控制按钮",
            severity=Severity.HIGH,
        )


class TouchActionCheck(SubstringChecker):
    def __init__(self):
        super().__init__(
            name="TouchActionCheck",
            needle="touch-action: none",
            issue_title="缺少 touch-action CSS",
        )


class InlineScriptCheck(BaseChecker):
    """
    Проверка обработчиков касаний во встроенном скрипте.

    Смотрит только первый блок <script>...</script>. Если блока нет,
    проверка пропускается целиком.
    """

    REQUIRED_TOKENS = [
        ("touchstart", "缺少触摸事件处理"),
        ("touchend", "缺少触摸结束处理"),
        ("preventDefault", "缺少默认行为阻止"),
    ]

    def __init__(self):
        super().__init__(name="InlineScriptCheck")

    def _check(self, html: str) -> List[Issue]:
        match = INLINE_SCRIPT_RE.search(html)
        if not match:
            self.logger.debug("No inline script block, skipping")
            return []

        script = match.group(1)
        issues = []
        for token, title in self.REQUIRED_TOKENS:
            if token not in script:
                issues.append(self.create_issue(title, category=Category.SCRIPT))
        return issues


def default_checks() -> List[BaseChecker]:
    """Фиксированный набор проверок в порядке отчёта."""
    return [
        ViewportMetaCheck(),
        MobileWebAppMetaCheck(),
        MobileControlsCheck(),
        TouchActionCheck(),
        InlineScriptCheck(),
    ]
