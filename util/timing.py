# util/timing.py
import time
from contextlib import contextmanager
from typing import Iterator, Dict, Any
import logging


@contextmanager
def timed(logger: logging.Logger, name: str, **kv: Any) -> Iterator[Dict[str, Any]]:
    """
    Time an outbound call and log one DEBUG line when it finishes.

      with timed(logger, "wit.message", chars=42) as fields:
          res = await client.get(...)
          fields["status"] = res.status_code

    Success: "<name>.done ms=<int> chars=42 status=200"
    Failure: "<name>.failed ms=<int> chars=42 err=ConnectError" (the exception still propagates)
    """
    fields: Dict[str, Any] = dict(kv)
    outcome = "done"
    t0 = time.perf_counter()
    try:
        yield fields
    except BaseException as e:
        outcome = "failed"
        fields["err"] = type(e).__name__
        raise
    finally:
        dt_ms = int((time.perf_counter() - t0) * 1000)
        suffix = "".join(f" {k}={v}" for k, v in fields.items())
        logger.debug("%s.%s ms=%d%s", name, outcome, dt_ms, suffix)
