"""
Core components for site audit.

Contains:
- Base class for markup checks
- Data models (Issue, TestResult, SmokeResult, LoopResult)
"""
