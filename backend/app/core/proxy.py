"""WSGI proxy middleware configuration helper."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Trust ``X-Forwarded-*`` headers from the configured number of proxies.

    ``USE_PROXYFIX`` (default ``True``) switches the middleware on and
    ``PROXY_FIX_HOPS`` (default ``1``) sets how many hops are trusted. The
    rate limiter keys on the remote address, so behind a load balancer this
    must be on or every client shares one bucket.
    """
    if not app.config.get("USE_PROXYFIX", True):
        return
    hops = int(app.config.get("PROXY_FIX_HOPS", 1))
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops, x_host=hops, x_prefix=hops)
