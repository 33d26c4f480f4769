"""
Reusable HTTP client with timeout handling and session management,
plus the QThread worker plumbing used for every background call.
"""

import logging
import requests
from typing import Optional, Dict, Any, Callable, Set

from PyQt6.QtCore import QObject, QThread, pyqtSignal

from .errors import CatalogError, NetworkError, RemoteError

logger = logging.getLogger(__name__)


class ApiClient:
    """
    Thin HTTP client shared by every catalog call.
    Failed requests are never retried; they surface as NetworkError/RemoteError.
    """
    def __init__(self, timeout: int = 15):
        self.session = self._create_session()
        self.session.headers.update({"Accept": "application/json"})
        self.timeout = timeout

    def _create_session(self) -> requests.Session:
        return requests.Session()

    def get(self,
            url: str,
            params: Optional[Dict[str, Any]] = None,
            timeout: Optional[int] = None) -> requests.Response:
        """
        Perform a GET request and return the successful response.

        Args:
            url: Full URL to request
            params: Query parameters
            timeout: Custom timeout (overrides default)

        Raises:
            RemoteError: On a non-success HTTP status
            NetworkError: On transport failures
        """
        request_timeout = timeout if timeout is not None else self.timeout

        try:
            logger.debug(f"GET {url} params={_redact(params)}")
            response = self.session.get(url, params=params, timeout=request_timeout)
            response.raise_for_status()
            return response

        except requests.exceptions.HTTPError as err:
            status = err.response.status_code if err.response is not None else 0
            logger.error(f"API Request Failed for GET {url}: {status}")
            if err.response is not None:
                logger.error(f"Response body: {err.response.text[:500]}")
            raise RemoteError(status) from err
        except requests.exceptions.RequestException as e:
            logger.error(f"Network error on GET {url}: {e}")
            raise NetworkError(f"Network error: {e}", cause=e) from e

    def get_json(self,
                 url: str,
                 params: Optional[Dict[str, Any]] = None,
                 timeout: Optional[int] = None) -> Any:
        """
        GET a JSON document.

        Raises:
            RemoteError: On a non-success status or a body that is not JSON
            NetworkError: On transport failures
        """
        response = self.get(url, params=params, timeout=timeout)
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {url}: {e}")
            raise RemoteError(response.status_code, "Invalid JSON in response") from e

    def get_bytes(self, url: str, timeout: Optional[int] = None) -> bytes:
        return self.get(url, timeout=timeout).content

    def close(self):
        """Close the session and cleanup resources."""
        if self.session:
            self.session.close()


def _redact(params: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not params or "api_key" not in params:
        return params
    return {**params, "api_key": "***"}


class ApiWorker(QObject):
    """
    Generic QObject worker for running any function in a separate thread.
    The error half of `finished` is the raised exception object, so callers
    can branch on its type.
    """
    finished = pyqtSignal(object, object)  # Emits (result, error)
    progress = pyqtSignal(str)             # Emits progress updates

    def __init__(self, task_callable: Callable, *args, **kwargs):
        """
        Initialize worker with a callable task.

        Args:
            task_callable: Function to execute in thread
            *args: Positional arguments for task_callable
            **kwargs: Keyword arguments for task_callable
        """
        super().__init__()
        self.task_callable = task_callable
        self.args = args
        self.kwargs = kwargs

    def run(self):
        """
        Main worker task execution.
        Emits finished signal with (result, error) when complete.
        """
        task_name = getattr(self.task_callable, '__name__', 'unknown')
        self.progress.emit(f"Starting task: {task_name}...")

        try:
            result = self.task_callable(*self.args, **self.kwargs)
            self.finished.emit(result, None)
        except CatalogError as e:
            logger.warning(f"Worker task '{task_name}' failed: {e}")
            self.finished.emit(None, e)
        except Exception as e:
            logger.error(f"Error in worker task '{task_name}': {e}", exc_info=True)
            self.finished.emit(None, e)
        finally:
            self.progress.emit(f"Task finished: {task_name}")


class TaskRunner:
    """
    Starts ApiWorkers on their own QThread and keeps them alive until done.
    Any number of tasks may be in flight at once.
    """
    def __init__(self):
        self._active: Set[tuple] = set()

    def run(self, task_function: Callable, on_finished: Callable[[Any, Optional[Exception]], None], *args, **kwargs):
        """
        Run task_function(*args, **kwargs) in a worker thread and call
        on_finished(result, error) on the GUI thread when it settles.
        """
        thread = QThread()
        worker = ApiWorker(task_function, *args, **kwargs)
        entry = (thread, worker)
        self._active.add(entry)

        worker.moveToThread(thread)

        worker.finished.connect(on_finished)
        worker.finished.connect(thread.quit)
        worker.finished.connect(worker.deleteLater)

        thread.finished.connect(lambda: self._active.discard(entry))
        thread.finished.connect(thread.deleteLater)

        worker.progress.connect(logger.debug)
        thread.started.connect(worker.run)
        thread.start()

    @property
    def active_count(self) -> int:
        return len(self._active)

    def shutdown(self, wait_ms: int = 1000) -> int:
        """
        Ask all running threads to stop and wait briefly for each.

        Threads still blocked in a request stay referenced so Qt does not
        destroy them while running; they are released when they finish.
        Returns the number of threads still running.
        """
        for entry in list(self._active):
            thread, _worker = entry
            thread.quit()
            if thread.wait(wait_ms):
                self._active.discard(entry)

        if self._active:
            logger.warning(f"{len(self._active)} background task(s) still running at shutdown")
        return len(self._active)
