"""
Neon Tetris site audit & smoke test.

Два независимых инструмента для веб-версии тетриса:
- Page Auditor: проверка разметки задеплоенной страницы, отчёт TEST_REPORT.md,
  ограниченный цикл проверок и commit/push после локальной проверки
- Smoke Tester: headless-браузер, наличие ключевых элементов, отсутствие ошибок в консоли

Usage:
    python -m site_audit.main loop
    python -m site_audit.main smoke
"""

__version__ = "1.0.0"
