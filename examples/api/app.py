"""API — a JSON REST API served straight from a routes directory.

Every module under ``app/api`` is a route. The tree below maps to::

    GET          /
    GET          /hello
    GET, POST    /users/
    GET          /users/[id]
    GET, POST    /tags/
    GET, POST    /categories/

Run:
    cd examples/api && python app.py
"""

from pathlib import Path

from bext import App, AppConfig

app = App(Path(__file__).parent / "app" / "api", config=AppConfig(port=5002))


if __name__ == "__main__":
    app.run()
