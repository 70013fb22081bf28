"""
Browser smoke test for the tetris page.

Loads the page in headless Chromium (mobile viewport), checks the key
elements, clicks start and fails iff any console error or uncaught page
exception was observed.
"""

import logging
from typing import List

from playwright.async_api import async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from ..config import SmokeConfig
from ..core.models import SmokeResult


logger = logging.getLogger(__name__)


class SmokeTester:
    """Smoke-тест одной страницы."""

    def __init__(self, config: SmokeConfig):
        self.config = config
        self.errors: List[str] = []

    def attach_listeners(self, page):
        """Подписаться на ошибки до навигации."""
        page.on("console", self._on_console)
        page.on("pageerror", self._on_page_error)

    def _on_console(self, msg):
        if msg.type == "error":
            self.errors.append(msg.text)

    def _on_page_error(self, error):
        self.errors.append(getattr(error, "message", None) or str(error))

    async def _settle(self, page, delay_ms: float):
        # Errors from timers and the game loop arrive without network activity,
        # so the delay is a minimum; network idle only extends it
        await page.wait_for_timeout(delay_ms)
        try:
            await page.wait_for_load_state("networkidle", timeout=self.config.idle_timeout_ms)
        except PlaywrightTimeoutError:
            logger.warning(f"⚠️  Page not idle after {self.config.idle_timeout_ms:.0f}ms, continuing")

    async def probe(self, page) -> SmokeResult:
        """
        Проверить страницу.

        Args:
            page: Playwright Page (или совместимый объект)

        Returns:
            SmokeResult с элементами, кликом, счётом и ошибками
        """
        result = SmokeResult(errors=self.errors)
        self.attach_listeners(page)

        logger.info(f"Loading page {self.config.url}...")
        await page.goto(self.config.url)
        await self._settle(page, self.config.settle_delay_ms)

        handles = {}
        for element_id in self.config.element_ids:
            handle = await page.query_selector(f"#{element_id}")
            handles[element_id] = handle
            result.elements[element_id] = handle is not None
            logger.info(f"{element_id}: {'✓' if handle else '✗'}")

        start_btn = handles.get(self.config.start_button_id)
        if start_btn is not None:
            await start_btn.click()
            result.clicked = True
            logger.info("Clicked start button")
            await self._settle(page, self.config.click_delay_ms)

        score = handles.get(self.config.score_id)
        if score is None:
            score = await page.query_selector(f"#{self.config.score_id}")
        result.score_text = await score.text_content() if score is not None else None
        logger.info(f"Score after start: {result.score_text}")

        logger.info(f"Console errors: {', '.join(self.errors) if self.errors else 'None'}")
        return result


async def run_smoke_test(config: SmokeConfig) -> SmokeResult:
    """
    Запустить браузер, проверить страницу, закрыть браузер.

    Браузер закрывается до вынесения вердикта, даже при исключении.
    """
    tester = SmokeTester(config)

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=config.headless)
        try:
            context = await browser.new_context(viewport=config.viewport)
            page = await context.new_page()
            result = await tester.probe(page)
        finally:
            await browser.close()

    if result.passed:
        logger.info("✅ Test PASSED")
    else:
        logger.error("❌ Test FAILED")

    return result
