"""Call sync or async handlers uniformly.

Form handlers are plain ``def`` while store-backed handlers are
``async def``; the pipeline awaits whichever it gets.
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's a coroutine."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
