from __future__ import annotations

import asyncio
import threading
from typing import TYPE_CHECKING, Any, Self

import httpx
from common_libs.network import find_open_port, is_port_in_use
from common_libs.utils import wait_until
from hypercorn.asyncio import serve
from hypercorn.config import Config

from provider_verifier.libraries.common.logging import get_logger

if TYPE_CHECKING:
    from hypercorn.typing import ASGIFramework

logger = get_logger(__name__)


class ProviderServer:
    """Serves a provider app on a background thread

    The main thread stays free to drive the verification while the provider handles the replayed requests.

    Usage:
    >>> from login_provider import create_app
    >>> with ProviderServer(create_app()) as server:
    ...     print(server.base_url)
    """

    healthcheck_path = "/healthcheck"
    setup_path = "/setup"

    def __init__(self, app: ASGIFramework, host: str = "127.0.0.1", port: int | None = None) -> None:
        self.app = app
        self.host = host
        self.port = port or find_open_port()
        self._thread: threading.Thread | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._shutdown_event: asyncio.Event | None = None
        self._loop_ready = threading.Event()

    def __enter__(self) -> Self:
        self.start()
        try:
            self.wait_until_ready()
        except Exception:
            self.stop()
            raise
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.stop()

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def setup_url(self) -> str:
        """URL of the provider state setup endpoint"""
        return f"{self.base_url}{self.setup_path}"

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start serving the app on a daemon thread"""
        if self.is_running:
            raise RuntimeError(f"The server is already running on {self.host}:{self.port}")
        logger.info(f"Starting provider on {self.host}:{self.port}...")
        self._loop_ready.clear()
        self._thread = threading.Thread(target=self._run, name=f"provider-server-{self.port}", daemon=True)
        self._thread.start()
        if not self._loop_ready.wait(timeout=10):
            raise TimeoutError("The provider server thread did not start")

    def stop(self, timeout: float = 10) -> None:
        """Gracefully shut down the server and wait for the thread to exit

        The server is still considered running if the thread does not exit within the timeout.

        :param timeout: Max wait time in seconds
        """
        if not self.is_running:
            return
        if self._loop is None or self._shutdown_event is None:
            raise RuntimeError(f"The server thread on {self.host}:{self.port} has no running event loop")
        logger.info(f"Stopping provider on {self.host}:{self.port}...")
        self._loop.call_soon_threadsafe(self._shutdown_event.set)
        self._thread.join(timeout=timeout)
        if self._thread.is_alive():
            logger.warning(f"The provider server thread did not exit within {timeout} seconds")
            return
        logger.info("Provider has been stopped")
        self._thread = None

    def wait_until_ready(self, timeout: float = 10) -> None:
        """Wait for the port to open and the healthcheck to succeed

        :param timeout: Max wait time in seconds for each step
        """
        logger.info(f"Waiting for the provider to start on {self.host}:{self.port}...")
        wait_until(
            is_port_in_use,
            func_args=(self.port,),
            func_kwargs={"host": self.host},
            stop_condition=lambda x: x is True,
            interval=0.2,
            timeout=timeout,
        )

        def is_app_ready() -> bool:
            try:
                return httpx.get(f"{self.base_url}{self.healthcheck_path}").is_success
            except httpx.TransportError:
                return False

        wait_until(is_app_ready, stop_condition=lambda x: x is True, interval=0.2, timeout=timeout)
        logger.info(f"Provider is ready on {self.base_url}")

    def _run(self) -> None:
        asyncio.run(self._serve())

    async def _serve(self) -> None:
        self._loop = asyncio.get_running_loop()
        self._shutdown_event = asyncio.Event()
        config = Config()
        config.bind = [f"{self.host}:{self.port}"]
        self._loop_ready.set()
        try:
            # hypercorn installs signal handlers (main thread only) unless a shutdown trigger is given
            await serve(self.app, config, shutdown_trigger=self._shutdown_event.wait)
        except Exception:
            logger.exception(f"The provider on {self.host}:{self.port} terminated unexpectedly")
            raise
