# util/timing.py
import time
from contextlib import contextmanager
from typing import Iterator, Any
import logging


@contextmanager
def timed(logger: logging.Logger, name: str, **kv: Any) -> Iterator[None]:
    """
    Usage:
      with timed(logger, "airdrop.table.load", path=path):
          ...
    Emits one INFO on exit: "<name>.done ms=<int> ok=<0|1> key=val ..."
    Exceptions still propagate; they are only flagged with ok=0.
    """
    t0 = time.perf_counter()
    ok = 0
    try:
        yield
        ok = 1
    finally:
        dt_ms = int((time.perf_counter() - t0) * 1000)
        suffix = "".join(f" {k}={v}" for k, v in kv.items())
        logger.info("%s.done ms=%d ok=%d%s", name, dt_ms, ok, suffix)
