"""Users collection, kept in memory for the lifetime of the process."""

import json
import threading
from datetime import UTC, datetime

_users = [
    {"id": "1", "name": "John Doe", "email": "john@example.com"},
    {"id": "2", "name": "Jane Smith", "email": "jane@example.com"},
]
_lock = threading.Lock()


def GET(ctx):
    with _lock:
        users = list(_users)
    return {
        "success": True,
        "data": users,
        "meta": {"count": len(users), "timestamp": datetime.now(UTC).isoformat()},
    }


async def POST(ctx):
    try:
        body = await ctx.request.json()
    except json.JSONDecodeError:
        return ctx.json({"success": False, "error": "Invalid JSON body"}, 400)

    if not isinstance(body, dict):
        return ctx.json({"success": False, "error": "JSON body must be an object"}, 400)

    name = body.get("name")
    email = body.get("email")
    if not name or not email:
        return ctx.json({"success": False, "error": "Name and email are required"}, 400)

    with _lock:
        user = {"id": str(len(_users) + 1), "name": name, "email": email}
        _users.append(user)
    return ctx.json({"success": True, "data": user}, 201)
