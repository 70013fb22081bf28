"""
Source-control committer.

Runs `git add -A`, `git commit -m <message>`, `git push` in order. Failures
are logged and swallowed: the next step still runs.
"""

import logging
import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Sequence


logger = logging.getLogger(__name__)

CommandRunner = Callable[[Sequence[str], Optional[Path]], str]


def run_command(args: Sequence[str], cwd: Optional[Path] = None) -> str:
    """
    Выполнить команду и вернуть stdout.

    Никогда не выбрасывает исключение: при ошибке возвращает текст ошибки.
    """
    try:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
            check=True,
        )
        return completed.stdout.strip()
    except subprocess.CalledProcessError as e:
        message = (e.stderr or e.stdout or str(e)).strip()
        logger.warning(f"⚠️  {' '.join(args)} exited with {e.returncode}: {message}")
        return message
    except OSError as e:
        logger.warning(f"⚠️  {' '.join(args)} could not run: {e}")
        return str(e)


class GitCommitter:
    """Коммит и push всех изменений рабочего дерева."""

    def __init__(
        self,
        message: str,
        cwd: Optional[Path] = None,
        runner: CommandRunner = run_command,
    ):
        self.message = message
        self.cwd = cwd
        self.runner = runner

    def commands(self) -> List[List[str]]:
        return [
            ["git", "add", "-A"],
            ["git", "commit", "-m", self.message],
            ["git", "push"],
        ]

    def commit_and_push(self) -> List[str]:
        """
        Выполнить add / commit / push.

        Returns:
            Вывод каждой команды (или текст ошибки)
        """
        outputs = []
        for args in self.commands():
            logger.debug(f"$ {' '.join(args)}")
            try:
                outputs.append(self.runner(args, self.cwd))
            except Exception as e:
                logger.warning(f"⚠️  {' '.join(args)} failed: {e}")
                outputs.append(str(e))
        return outputs

    def commit_if_passed(self, passed: bool) -> bool:
        """
        Закоммитить только если локальная проверка прошла.

        Returns:
            True, если команды были запущены
        """
        logger.info("提交代码...")

        if not passed:
            logger.info("⏭️  测试未通过，跳过提交")
            return False

        self.commit_and_push()
        logger.info("✅ 已提交并推送")
        return True
