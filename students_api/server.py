"""
HTTP server lifecycle: STARTING -> SERVING -> DRAINING -> STOPPED.

The uvicorn server runs on its own thread so the main thread stays free to
block on a shutdown signal. Shutdown lets in-flight requests finish, bounded
by a grace period; when the deadline passes the server is forced down and
ShutdownTimeoutError is raised.
"""

import signal
import threading
import time
from enum import Enum
from typing import Any, Dict, Optional, Tuple

import uvicorn
from fastapi import FastAPI

from students_api.config import Config, parse_address
from students_api.utils.logging import get_logger

logger = get_logger(__name__)

SHUTDOWN_GRACE_PERIOD = 5.0
SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)

# Time allowed for the serving thread to unwind after a forced exit
_FORCE_EXIT_WAIT = 1.0


class ServerState(str, Enum):
    STARTING = "starting"
    SERVING = "serving"
    DRAINING = "draining"
    STOPPED = "stopped"


class ShutdownTimeoutError(RuntimeError):
    """In-flight requests did not finish within the grace period."""


class ServerLifecycle:
    """
    Owns the HTTP listener for the process lifetime.

    Usage:
        >>> lifecycle = ServerLifecycle(config, app)
        >>> lifecycle.listen_for_signals()
        >>> lifecycle.start()
        >>> lifecycle.wait_for_shutdown_signal()
        >>> lifecycle.shutdown()
    """

    def __init__(
        self,
        config: Config,
        app: FastAPI,
        grace_period: float = SHUTDOWN_GRACE_PERIOD,
    ) -> None:
        self.config = config
        self.grace_period = grace_period
        self.state = ServerState.STARTING

        host, port = parse_address(config.http_server_addr)
        # Drain deadline is enforced in shutdown(), so uvicorn waits
        # for connections without its own timeout
        self._server = uvicorn.Server(
            uvicorn.Config(
                app,
                host=host,
                port=port,
                log_level=config.log_level.lower(),
                timeout_graceful_shutdown=None,
            )
        )
        self._thread: Optional[threading.Thread] = None

        # Single-slot shutdown notification: first signal wins
        self._shutdown_requested = threading.Event()
        self._received_signal: Optional[signal.Signals] = None
        self._previous_handlers: Dict[signal.Signals, Any] = {}

    @property
    def bound_address(self) -> Tuple[str, int]:
        """Address the listener is actually bound to (resolves port 0)."""
        if not self._server.started or not self._server.servers:
            raise RuntimeError("server is not listening")
        sockname = self._server.servers[0].sockets[0].getsockname()
        return sockname[0], sockname[1]

    def start(self) -> None:
        """Start serving on a background thread."""
        if self._thread is not None:
            raise RuntimeError("server already started")

        self._thread = threading.Thread(
            target=self._serve, name="http-server", daemon=True
        )
        self.state = ServerState.SERVING
        self._thread.start()

    def _serve(self) -> None:
        logger.info(f"server started on {self.config.http_server_addr}")
        try:
            self._server.run()
        except SystemExit as e:
            # uvicorn exits this way when the listener cannot bind
            logger.error(f"server error: listener exited with status {e.code}")
        except Exception as e:
            logger.error(f"server error: {e}", exc_info=True)

    def wait_until_serving(self, timeout: float = 5.0) -> bool:
        """Block until the listener is bound. Returns False on timeout or failure."""
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if self._server.started:
                return True
            if self._thread is None or not self._thread.is_alive():
                return False
            time.sleep(0.01)
        return bool(self._server.started)

    def request_shutdown(self, signum: int = signal.SIGTERM) -> None:
        """Deliver a shutdown notification; only the first one is kept."""
        if self._received_signal is None:
            self._received_signal = signal.Signals(signum)
            self._shutdown_requested.set()

    def _handle_signal(self, signum: int, frame: Any) -> None:
        # Runs on the main thread between bytecodes: record only, no locks
        if self._received_signal is None:
            self._received_signal = signal.Signals(signum)

    def listen_for_signals(self) -> None:
        """
        Route SIGINT/SIGTERM into the shutdown notification.

        Call before start() so a signal during startup still drains.
        Must be called from the main thread.
        """
        if self._previous_handlers:
            return
        self._previous_handlers = {
            sig: signal.signal(sig, self._handle_signal) for sig in SHUTDOWN_SIGNALS
        }

    def wait_for_shutdown_signal(self) -> signal.Signals:
        """
        Block until SIGINT/SIGTERM arrives (or request_shutdown is called).

        Installs the signal handlers if listen_for_signals() was not called.
        Previous signal handlers are restored before returning.
        """
        self.listen_for_signals()
        try:
            while self._received_signal is None:
                self._shutdown_requested.wait(0.1)
        finally:
            for sig, handler in self._previous_handlers.items():
                signal.signal(sig, handler)
            self._previous_handlers = {}

        return self._received_signal

    def shutdown(self) -> None:
        """
        Stop accepting connections and drain in-flight requests.

        Raises:
            ShutdownTimeoutError: If requests are still running after
                                  grace_period seconds
        """
        self.state = ServerState.DRAINING
        try:
            self._server.should_exit = True
            if self._thread is None:
                return

            self._thread.join(self.grace_period)
            if self._thread.is_alive():
                self._server.force_exit = True
                self._thread.join(_FORCE_EXIT_WAIT)
                raise ShutdownTimeoutError(
                    f"in-flight requests did not finish within {self.grace_period:g}s"
                )
        finally:
            self.state = ServerState.STOPPED
