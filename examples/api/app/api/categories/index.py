"""Category collection, kept in memory for the lifetime of the process."""

import json
import threading
from datetime import UTC, datetime

_items = [
    {"id": "1", "name": "Category 1"},
    {"id": "2", "name": "Category 2"},
]
_lock = threading.Lock()


def GET(ctx):
    with _lock:
        items = list(_items)
    return ctx.json(
        {
            "success": True,
            "data": items,
            "meta": {"count": len(items), "timestamp": datetime.now(UTC).isoformat()},
        }
    )


async def POST(ctx):
    try:
        body = await ctx.request.json()
    except json.JSONDecodeError:
        return ctx.json({"success": False, "error": "Invalid JSON body"}, 400)

    if not isinstance(body, dict):
        return ctx.json({"success": False, "error": "JSON body must be an object"}, 400)

    name = body.get("name")
    if not name:
        return ctx.json({"success": False, "error": "Name is required"}, 400)

    with _lock:
        item = {"id": str(len(_items) + 1), "name": name}
        _items.append(item)
    return ctx.json({"success": True, "data": item}, 201)
