"""Decorators that bound and time provider calls."""
import asyncio
import functools
import time
from typing import Any, Callable, Dict, Optional

from stablecoin_research.utils.logging import get_logger

logger = get_logger(__name__)


def timeout(seconds: float):
    """
    Bound an async callable to `seconds`.

    Expiry surfaces as the builtin TimeoutError so callers need not know
    about asyncio.

    Example:
        bounded = timeout(10.0)(adapter._fetch)
        await bounded(request)
    """
    def decorator(func: Callable):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await asyncio.wait_for(func(*args, **kwargs), timeout=seconds)
            except asyncio.TimeoutError:
                logger.warning(
                    f"{func.__qualname__} gave up after {seconds}s",
                    extra={"timeout": seconds},
                )
                raise TimeoutError(f"{func.__qualname__} exceeded timeout of {seconds}s") from None

        return wrapper

    return decorator


def _call_label(func: Callable, args: tuple) -> str:
    # Adapter methods are labelled by adapter, e.g. "news_search.call"
    owner = getattr(args[0], "NAME", None) if args else None
    return f"{owner}.{func.__name__}" if isinstance(owner, str) else func.__name__


def _outcome(result: Any) -> Dict[str, Any]:
    """Summarise a ProviderResult by status instead of dumping its payload."""
    if hasattr(result, "ok") and hasattr(result, "error_kind"):
        kind = getattr(result.error_kind, "value", None)
        return {"ok": result.ok, "error_kind": kind}
    return {"result": str(result)[:100]}


def log_execution(log_args: bool = True, log_result: bool = False):
    """
    Log start, duration and outcome of a sync or async call.

    Args:
        log_args: Include (truncated) positional and keyword arguments
        log_result: Include the outcome; ProviderResult values are reduced
            to `ok` / `error_kind`

    Example:
        @log_execution(log_args=False, log_result=True)
        async def call(self, request):
            ...
    """
    def decorator(func: Callable):
        def started(args: tuple, kwargs: dict) -> float:
            extra = {"function": _call_label(func, args)}
            if log_args:
                extra["function_args"] = str(args)[:100]
                extra["function_kwargs"] = str(kwargs)[:100]
            logger.debug(f"Starting {extra['function']}", extra=extra)
            return time.perf_counter()

        def finished(args: tuple, start: float, result: Any = None,
                     error: Optional[BaseException] = None) -> None:
            label = _call_label(func, args)
            extra = {"function": label, "execution_time_ms": round((time.perf_counter() - start) * 1000, 2)}
            if error is not None:
                extra["error"] = str(error)
                logger.error(f"Failed {label}", extra=extra)
                return
            if log_result:
                extra.update(_outcome(result))
            logger.info(f"Completed {label}", extra=extra)

        if asyncio.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                start = started(args, kwargs)
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    finished(args, start, error=e)
                    raise
                finished(args, start, result=result)
                return result

            return async_wrapper

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            start = started(args, kwargs)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                finished(args, start, error=e)
                raise
            finished(args, start, result=result)
            return result

        return sync_wrapper

    return decorator
