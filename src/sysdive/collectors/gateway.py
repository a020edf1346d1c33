"""Concurrent acquisition of every category into one snapshot."""

import logging
import time
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Any, Optional

from sysdive.errors import AcquisitionError
from sysdive.hardware.models import SystemSnapshot
from sysdive.hardware.provider import InfoProvider

logger = logging.getLogger(__name__)

# (snapshot field, provider method), in report order
CATEGORY_QUERIES: tuple[tuple[str, str], ...] = (
    ("time", "time_info"),
    ("system", "system"),
    ("uuid", "uuid"),
    ("bios", "bios"),
    ("baseboard", "baseboard"),
    ("chassis", "chassis"),
    ("os_info", "os_info"),
    ("cpu", "cpu"),
    ("cpu_cache", "cpu_cache"),
    ("memory", "memory"),
    ("memory_layout", "memory_layout"),
    ("graphics", "graphics"),
    ("disk_layout", "disk_layout"),
    ("fs_size", "fs_size"),
    ("network_interfaces", "network_interfaces"),
    ("audio", "audio"),
    ("usb", "usb"),
    ("bluetooth_devices", "bluetooth_devices"),
    ("battery", "battery"),
)

_EMPTY_SNAPSHOT = SystemSnapshot()


def _normalize(category: str, value: Any) -> Any:
    """Coerce a provider result into the snapshot field's shape.

    Lists become tuples, a missing plural category becomes an empty tuple and
    a missing singular record becomes an all-None record. The battery may
    legitimately be absent.
    """
    expected = getattr(_EMPTY_SNAPSHOT, category)

    if isinstance(expected, tuple):
        return tuple(value) if value is not None else ()
    if value is None and category != "battery":
        return expected
    return value


def _timed(method, category: str):
    def call():
        started = time.perf_counter()
        result = method()
        logger.debug(f"{category} acquired in {time.perf_counter() - started:.2f}s")
        return result

    return call


def acquire_snapshot(provider: InfoProvider, max_workers: Optional[int] = None) -> SystemSnapshot:
    """Query every category concurrently and join the results.

    All queries are dispatched at once and awaited together. A query that
    raises aborts the whole acquisition: once the batch settles, the error of
    the first failing category (in report order) is raised as
    ``AcquisitionError``. Empty or None results are not errors.

    Args:
        provider: Source of category records.
        max_workers: Thread pool size; defaults to one thread per category.

    Returns:
        Immutable snapshot of all categories.

    Raises:
        AcquisitionError: If any query raises, or the provider lacks a query.
    """
    try:
        queries = [
            (category, getattr(provider, method)) for category, method in CATEGORY_QUERIES
        ]
    except AttributeError as e:
        raise AcquisitionError("provider", str(e)) from e

    started = time.perf_counter()
    futures: dict[str, Future] = {}

    with ThreadPoolExecutor(
        max_workers=max_workers or len(queries),
        thread_name_prefix="sysdive-probe",
    ) as pool:
        for category, method in queries:
            futures[category] = pool.submit(_timed(method, category))
        wait(futures.values(), return_when=FIRST_EXCEPTION)

    for category, future in futures.items():
        error = future.exception()
        if error is not None:
            logger.debug(f"{category} query raised {error!r}")
            raise AcquisitionError(category, str(error) or type(error).__name__) from error

    values = {
        category: _normalize(category, future.result()) for category, future in futures.items()
    }
    logger.info(
        f"Acquired {len(values)} categories in {time.perf_counter() - started:.2f}s"
    )
    return SystemSnapshot(**values)
