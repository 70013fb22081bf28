"""
Local static file server with explicit lifecycle.

start() binds synchronously, so the server accepts connections as soon as
it returns; stop() always releases the port.
"""

import logging
import threading
from functools import partial
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Optional


logger = logging.getLogger(__name__)


class _QuietHandler(SimpleHTTPRequestHandler):
    """Request log goes to the module logger instead of stderr."""

    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)


class LocalStaticServer:
    """Статический сервер над локальной директорией."""

    def __init__(self, directory: Path, host: str = "127.0.0.1", port: int = 8765):
        """
        Args:
            directory: Корень, который отдаёт сервер
            host: Адрес привязки
            port: Порт (0 = свободный порт)
        """
        self.directory = Path(directory)
        self.host = host
        self.port = port
        self._httpd: Optional[ThreadingHTTPServer] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._httpd is not None

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def start(self) -> "LocalStaticServer":
        if self._httpd is not None:
            return self

        handler = partial(_QuietHandler, directory=str(self.directory))
        self._httpd = ThreadingHTTPServer((self.host, self.port), handler)
        self.port = self._httpd.server_address[1]

        self._thread = threading.Thread(
            target=self._httpd.serve_forever,
            name=f"static-server-{self.port}",
            daemon=True,
        )
        self._thread.start()

        logger.info(f"Serving {self.directory} on {self.url}")
        return self

    def stop(self):
        if self._httpd is None:
            return

        self._httpd.shutdown()
        self._httpd.server_close()
        if self._thread is not None:
            self._thread.join()

        self._httpd = None
        self._thread = None
        logger.info(f"Stopped server on port {self.port}")

    def __enter__(self) -> "LocalStaticServer":
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()
