"""
External Query Bridge - failure-isolated reads against peer registries.

A peer is any object exposing ``view_land(certificate)``. Whatever the
peer does (raise, hang past the timeout, return garbage) the bridge
answers with an ExternalViewResult and never raises.
"""

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Protocol, runtime_checkable

from land_registry.audit.logger import EventLog
from land_registry.audit.models import external_view_result
from land_registry.core.exceptions import RemoteQueryError
from land_registry.core.models import ExternalViewResult, LandView

logger = logging.getLogger(__name__)


@runtime_checkable
class RegistryPeer(Protocol):
    """Protocol for registries that can be queried by certificate."""

    def view_land(self, certificate: int) -> LandView: ...


class ExternalQueryBridge:
    """
    Query another registry instance without sharing its failures.

    Each query runs on a worker thread and is abandoned after
    ``timeout_seconds``. No retries.
    """

    def __init__(
        self,
        event_log: EventLog | None = None,
        timeout_seconds: float = 5.0,
        max_workers: int = 4,
    ):
        self._event_log = event_log
        self._timeout = timeout_seconds
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="registry_query"
        )

    @property
    def timeout_seconds(self) -> float:
        return self._timeout

    def query_remote(self, target: Any, certificate: int) -> ExternalViewResult:
        """
        Ask ``target`` who owns ``certificate``.

        Returns:
            ExternalViewResult(success=True, owner) on success, otherwise
            ExternalViewResult(success=False, owner=ZERO_ADDRESS)
        """
        try:
            owner = self._fetch_owner(target, certificate)
            result = ExternalViewResult(success=True, owner=owner)
        except RemoteQueryError as e:
            logger.warning(f"Remote query for certificate {certificate} failed: {e}")
            result = ExternalViewResult.failed()
        except Exception as e:
            # Attribute lookup or response parsing blew up on the peer side
            logger.warning(
                f"Remote query for certificate {certificate} failed: "
                f"{e.__class__.__name__}: {e}"
            )
            result = ExternalViewResult.failed()

        if self._event_log is not None:
            self._event_log.emit(external_view_result(result.success, result.owner))
        return result

    def _fetch_owner(self, target: Any, certificate: int) -> str:
        """Run the peer call and validate its response."""
        name = type(target).__name__
        view = getattr(target, "view_land", None)
        if not callable(view):
            raise RemoteQueryError(
                "Target does not expose view_land", target=name, reason="unsupported"
            )

        try:
            future = self._executor.submit(view, certificate)
        except RuntimeError as e:
            raise RemoteQueryError("Query bridge is closed", target=name, reason=str(e)) from e

        try:
            response = future.result(timeout=self._timeout)
        except FutureTimeoutError as e:
            future.cancel()
            raise RemoteQueryError(
                f"No response within {self._timeout}s", target=name, reason="timeout"
            ) from e
        except Exception as e:
            raise RemoteQueryError(
                "Remote registry rejected the query",
                target=name,
                reason=f"{e.__class__.__name__}: {e}",
            ) from e

        return _owner_from_response(response, name)

    def close(self) -> None:
        """Shut down worker threads without waiting on stuck peers."""
        self._executor.shutdown(wait=False, cancel_futures=True)

    def __enter__(self) -> "ExternalQueryBridge":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def _owner_from_response(response: Any, target: str) -> str:
    """Extract the owner from an (owner, size, status) shaped response."""
    if isinstance(response, LandView):
        owner = response.owner
    elif isinstance(response, Sequence) and not isinstance(response, (str, bytes)) and len(response) == 3:
        owner = response[0]
    else:
        raise RemoteQueryError(
            "Malformed response from remote registry", target=target, reason="malformed"
        )

    if not isinstance(owner, str) or not owner:
        raise RemoteQueryError(
            "Malformed owner in remote response", target=target, reason="malformed"
        )
    return owner
