from __future__ import annotations

import io
from urllib.parse import parse_qs

from app.postpanel.constants import OVERRIDABLE_METHODS


class MethodOverrideMiddleware:
    """
    WSGI middleware letting HTML forms reach PUT/PATCH/DELETE routes.

    A POST whose `X-HTTP-Method-Override` header or `_method` form field names
    one of OVERRIDABLE_METHODS is rewritten to that method before Flask routes
    it. The body is buffered and put back so the view can still read the form.
    """

    form_field = "_method"

    def __init__(self, app, max_body: int = 1024 * 1024):
        self.app = app
        self.max_body = max_body

    def __call__(self, environ, start_response):
        if environ.get("REQUEST_METHOD", "").upper() == "POST":
            method = self._override(environ)
            if method:
                environ["postpanel.original_method"] = "POST"
                environ["REQUEST_METHOD"] = method
        return self.app(environ, start_response)

    def _override(self, environ) -> str | None:
        header = (environ.get("HTTP_X_HTTP_METHOD_OVERRIDE") or "").strip().upper()
        if header in OVERRIDABLE_METHODS:
            return header

        content_type = (environ.get("CONTENT_TYPE") or "").split(";")[0].strip().lower()
        if content_type != "application/x-www-form-urlencoded":
            return None
        try:
            length = int(environ.get("CONTENT_LENGTH") or 0)
        except ValueError:
            return None
        if length <= 0 or length > self.max_body:
            return None

        body = environ["wsgi.input"].read(length)
        environ["wsgi.input"] = io.BytesIO(body)

        values = parse_qs(body.decode("latin-1"), keep_blank_values=True).get(self.form_field) or []
        method = (values[0] if values else "").strip().upper()
        return method if method in OVERRIDABLE_METHODS else None
