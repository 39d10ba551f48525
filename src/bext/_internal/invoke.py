"""Call sync or async route handlers uniformly.

Route modules may define ``def GET(ctx)`` or ``async def GET(ctx)``.
The sync/async check lives here and nowhere else::

    result = await invoke(handler, ctx)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *handler* and await the result if it is awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
