"""
Runtime testers.

Contains:
- SmokeTester - browser smoke test (Playwright)
"""
