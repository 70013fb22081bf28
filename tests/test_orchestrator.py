"""
Тесты цикла разработки: ограничение итераций, локальная проверка, commit gate.
"""

import threading

import httpx
import pytest

from site_audit.core.models import Issue
from site_audit.orchestrator import DevelopmentLoop, log_pending_fixes
from site_audit.reports.generator import ReportGenerator
from site_audit.vcs import GitCommitter


class ScriptedAuditor:
    """Возвращает заранее заданные списки проблем по очереди"""

    def __init__(self, *passes):
        self.passes = list(passes)
        self.calls = 0

    async def audit(self, url=None):
        result = self.passes[min(self.calls, len(self.passes) - 1)]
        self.calls += 1
        return list(result)


class RecordingRunner:

    def __init__(self):
        self.calls = []

    def __call__(self, args, cwd=None):
        self.calls.append(list(args))
        return ""


def make_loop(config, auditor, runner, client=None):
    return DevelopmentLoop(
        config,
        auditor=auditor,
        reporter=ReportGenerator(config),
        committer=GitCommitter(config.commit_message, cwd=config.repo_dir, runner=runner),
        client=client,
    )


PROBLEMS = [Issue("缺少 viewport meta"), Issue("缺少 PWA meta")]


class TestAuditLoop:

    @pytest.mark.asyncio
    async def test_runs_at_most_max_iterations(self, audit_config):
        auditor = ScriptedAuditor(PROBLEMS)
        loop = make_loop(audit_config, auditor, RecordingRunner())

        iterations, issues, healthy = await loop.run_audit_loop()

        assert iterations == 3
        assert auditor.calls == 3
        assert issues == PROBLEMS
        assert healthy is False

    @pytest.mark.asyncio
    async def test_stops_on_first_clean_pass(self, audit_config):
        auditor = ScriptedAuditor(PROBLEMS, [])
        loop = make_loop(audit_config, auditor, RecordingRunner())

        iterations, issues, healthy = await loop.run_audit_loop()

        assert iterations == 2
        assert auditor.calls == 2
        assert issues == []
        assert healthy is True
        assert "无" in audit_config.report_path.read_text(encoding="utf-8")

    @pytest.mark.asyncio
    async def test_clean_first_pass(self, audit_config):
        auditor = ScriptedAuditor([])
        iterations, _, _ = await make_loop(audit_config, auditor, RecordingRunner()).run_audit_loop()
        assert iterations == 1

    @pytest.mark.asyncio
    async def test_report_reflects_last_pass(self, audit_config):
        auditor = ScriptedAuditor(PROBLEMS)
        await make_loop(audit_config, auditor, RecordingRunner()).run_audit_loop()

        text = audit_config.report_path.read_text(encoding="utf-8")
        assert "1. 缺少 viewport meta\n2. 缺少 PWA meta" in text


def test_fix_step_only_logs(caplog):
    """Шаг исправления ничего не меняет"""
    issues = list(PROBLEMS)
    with caplog.at_level("INFO"):
        log_pending_fixes(issues)

    assert issues == PROBLEMS
    assert "🔧 修复: 缺少 viewport meta" in caplog.text
    assert "🔧 修复: 缺少 PWA meta" in caplog.text


class TestVerificationAndCommitGate:

    @pytest.mark.asyncio
    async def test_passing_probe_commits(self, audit_config):
        (audit_config.serve_dir / "index.html").write_text("<html></html>", encoding="utf-8")
        runner = RecordingRunner()

        result = await make_loop(audit_config, ScriptedAuditor([]), runner).run()

        assert result.verification.passed is True
        assert result.verification.details[0].startswith("服务器状态: HTTP/")
        assert "200" in result.verification.details[0]
        assert result.verification.details[-1] == "✅ 所有测试通过"
        assert result.committed is True
        assert [call[1] for call in runner.calls] == ["add", "commit", "push"]

    @pytest.mark.asyncio
    async def test_failing_probe_never_commits(self, audit_config):
        """Нет index.html → 404 → ни одного вызова git"""
        runner = RecordingRunner()

        result = await make_loop(audit_config, ScriptedAuditor(PROBLEMS), runner).run()

        assert result.verification.passed is False
        assert "404" in result.verification.details[0]
        assert result.committed is False
        assert runner.calls == []

    @pytest.mark.asyncio
    async def test_probe_transport_error_never_commits(self, audit_config):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        runner = RecordingRunner()
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            result = await make_loop(audit_config, ScriptedAuditor([]), runner, client=client).run()

        assert result.verification.passed is False
        assert "ConnectError" in result.verification.details[0]
        assert runner.calls == []

    @pytest.mark.asyncio
    async def test_probe_path(self, audit_config):
        seen = []

        def handler(request):
            seen.append((request.method, request.url.path))
            return httpx.Response(200)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            await make_loop(audit_config, ScriptedAuditor([]), RecordingRunner(), client=client).verify_local()

        assert seen == [("HEAD", "/index.html")]

    @pytest.mark.asyncio
    async def test_invalid_local_url_fails_soft(self, audit_config):
        loop = make_loop(audit_config, ScriptedAuditor([]), RecordingRunner())

        status = await loop._probe("http://[::1")

        assert status.startswith("InvalidURL")

    @pytest.mark.asyncio
    async def test_commit_disabled(self, audit_config):
        (audit_config.serve_dir / "index.html").write_text("<html></html>", encoding="utf-8")
        audit_config.commit_enabled = False
        runner = RecordingRunner()

        result = await make_loop(audit_config, ScriptedAuditor([]), runner).run()

        assert result.verification.passed is True
        assert result.committed is False
        assert runner.calls == []

    @pytest.mark.asyncio
    async def test_git_runs_off_event_loop_thread(self, audit_config):
        (audit_config.serve_dir / "index.html").write_text("<html></html>", encoding="utf-8")
        threads = []

        def runner(args, cwd=None):
            threads.append(threading.get_ident())
            return ""

        await make_loop(audit_config, ScriptedAuditor([]), runner).run()

        assert len(threads) == 3
        assert threading.get_ident() not in threads
