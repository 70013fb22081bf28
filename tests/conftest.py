"""
Pytest configuration and fixtures.

Использование:
    pytest tests/ -v
"""

import sys
from pathlib import Path

import pytest

# Добавить корень проекта в path
sys.path.insert(0, str(Path(__file__).parent.parent))

from site_audit.config import AuditConfig, SmokeConfig


# ═══════════════════════════════════════════════════════
# CONFIGURATION
# ═══════════════════════════════════════════════════════

@pytest.fixture
def audit_config(tmp_path):
    """Конфигурация аудита, изолированная во временной директории"""
    return AuditConfig(
        repo_name="ocean-Go/neon-tetris-v2",
        site_url="https://example.test/neon-tetris-v2/",
        report_path=tmp_path / "TEST_REPORT.md",
        serve_dir=tmp_path,
        server_port=0,
        repo_dir=tmp_path,
    )


@pytest.fixture
def smoke_config():
    """Конфигурация smoke-теста"""
    return SmokeConfig(url="http://localhost:8888/index.html", headless=True)


# ═══════════════════════════════════════════════════════
# SAMPLE PAGES
# ═══════════════════════════════════════════════════════

HEALTHY_PAGE = """<!DOCTYPE html>
<html>
<head>
  <meta name="viewport" content="width=device-width, initial-scale=1, user-scalable=no">
  <meta name="apple-mobile-web-app-capable" content="yes">
  <style>canvas { touch-action: none; }</style>
</head>
<body>
  <canvas id="game-canvas"></canvas>
  <div class="mobile-controls"><button id="start-btn">Start</button></div>
  <script>
    canvas.addEventListener('touchstart', e => { e.preventDefault(); });
    canvas.addEventListener('touchend', e => { e.preventDefault(); });
  </script>
</body>
</html>
"""


@pytest.fixture
def healthy_page():
    return HEALTHY_PAGE
