"""Static asset mount with optional directory listing."""

import os
import stat

from fastapi.staticfiles import StaticFiles
from jinja2 import Environment
from starlette.concurrency import run_in_threadpool
from starlette.responses import HTMLResponse, Response
from starlette.types import Scope

_listing_template = Environment(autoescape=True).from_string(
    """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>Index of {{ title }}</title></head>
<body>
<h1>Index of {{ title }}</h1>
<ul>
{% for entry in entries %}  <li><a href="{{ entry.href }}">{{ entry.label }}</a></li>
{% endfor %}</ul>
</body>
</html>
"""
)


class CatdexStaticFiles(StaticFiles):
    """StaticFiles that can render a listing for directory paths.

    Listing is off unless ``directory_listing`` is set. Files are always
    served exactly as StaticFiles would serve them.
    """

    def __init__(self, *args, directory_listing: bool = False, **kwargs):
        super().__init__(*args, **kwargs)
        self.directory_listing = directory_listing

    async def get_response(self, path: str, scope: Scope) -> Response:
        if self.directory_listing and scope["method"] in ("GET", "HEAD"):
            full_path, stat_result = await run_in_threadpool(self.lookup_path, path)
            if stat_result is not None and stat.S_ISDIR(stat_result.st_mode):
                response = await run_in_threadpool(self.directory_response, path, full_path, scope)
                if scope["method"] == "HEAD":
                    return Response(status_code=response.status_code, headers=dict(response.headers))
                return response
        return await super().get_response(path, scope)

    def directory_response(self, path: str, full_path: str, scope: Scope) -> HTMLResponse:
        """Render an HTML index of ``full_path``."""
        prefix = scope.get("root_path", "").rstrip("/")
        relative = "" if path in ("", ".") else path.strip("/")

        entries = []
        if relative:
            parent = relative.rpartition("/")[0]
            entries.append({"href": f"{prefix}/{parent}/" if parent else f"{prefix}/", "label": "../"})

        with os.scandir(full_path) as it:
            for entry in sorted(it, key=lambda e: (not e.is_dir(), e.name)):
                suffix = "/" if entry.is_dir() else ""
                parts = [p for p in (relative, entry.name) if p]
                entries.append({"href": f"{prefix}/{'/'.join(parts)}{suffix}", "label": f"{entry.name}{suffix}"})

        title = f"{prefix}/{relative}" if relative else f"{prefix}/"
        return HTMLResponse(_listing_template.render(title=title, entries=entries))
