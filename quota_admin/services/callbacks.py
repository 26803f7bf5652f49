import inspect
from collections.abc import Awaitable, Callable
from typing import Any

# Panel hooks (refresh, close, confirm) may be plain functions or coroutines.
Callback = Callable[..., Any | Awaitable[Any]]


async def invoke(callback: Callback | None, *args: Any) -> Any:
    if callback is None:
        return None
    result = callback(*args)
    if inspect.isawaitable(result):
        result = await result
    return result
