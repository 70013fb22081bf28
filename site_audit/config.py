"""
Configuration for site audit and smoke test.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Tuple


logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"⚠️  {name}={value!r} is not an integer, using {default}")
        return default


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class AuditConfig:
    """Конфигурация аудита страницы и цикла разработки."""

    # === Target ===
    repo_name: str = field(default_factory=lambda: os.getenv("AUDIT_REPO", "ocean-Go/neon-tetris-v2"))
    site_url: str = field(default_factory=lambda: os.getenv("AUDIT_SITE_URL", "https://ocean-go.github.io/neon-tetris-v2/"))

    # === Report ===
    report_path: Path = field(default_factory=lambda: Path(os.getenv("AUDIT_REPORT_PATH", "TEST_REPORT.md")))

    # === Execution Settings ===
    max_iterations: int = field(default_factory=lambda: _env_int("AUDIT_MAX_ITERATIONS", 3))
    http_timeout_seconds: float = 30.0

    # === Local verification server ===
    serve_dir: Path = field(default_factory=lambda: Path(os.getenv("AUDIT_SERVE_DIR", os.getcwd())))
    server_host: str = "127.0.0.1"
    server_port: int = field(default_factory=lambda: _env_int("AUDIT_SERVER_PORT", 8765))
    probe_path: str = "/index.html"

    # === Source control ===
    repo_dir: Path = field(default_factory=Path.cwd)
    commit_message: str = "🤖 Auto: All tests passed"
    commit_enabled: bool = True

    def __post_init__(self):
        """Validate configuration."""
        self.report_path = Path(self.report_path)
        self.serve_dir = Path(self.serve_dir)
        self.repo_dir = Path(self.repo_dir)

        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")


@dataclass
class SmokeConfig:
    """Конфигурация smoke-теста в браузере."""

    url: str = field(default_factory=lambda: os.getenv("SMOKE_URL", "http://localhost:8888/index.html"))
    headless: bool = field(default_factory=lambda: _env_bool("SMOKE_HEADLESS", True))

    # iPhone 16 Pro Max
    viewport_width: int = 430
    viewport_height: int = 932

    start_button_id: str = "start-btn"
    score_id: str = "score"
    element_ids: Tuple[str, ...] = ("start-btn", "game-canvas", "score", "level", "lines")

    # Minimum waits after navigation and after the click, then up to idle_timeout_ms for network idle
    settle_delay_ms: float = 2000
    click_delay_ms: float = 1000
    idle_timeout_ms: float = 5000

    @property
    def viewport(self) -> Dict[str, int]:
        return {"width": self.viewport_width, "height": self.viewport_height}
