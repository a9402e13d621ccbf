# foreman_modifiers.py - request modifier chain applied before dispatch
"""
A modifier takes a ``requests.Request`` and returns the request to send,
raising a ``ForemanError`` when it cannot. ``ModifierChain`` folds an ordered
sequence of modifiers over a copy of the caller's request, so a failing step
stops the chain and nothing is written back to the caller's object.
"""

import copy
from typing import Callable, Iterable, Tuple
from urllib.parse import urlsplit

from requests import Request
from requests.auth import HTTPBasicAuth

from foreman_errors import AddressError

Modifier = Callable[[Request], Request]

SUPPORTED_SCHEMES = ("http", "https")


class ModifierChain:
    def __init__(self, steps: Iterable[Modifier] = ()):
        self._steps: Tuple[Modifier, ...] = tuple(steps)

    def then(self, step: Modifier) -> "ModifierChain":
        """Return a new chain running ``step`` after the current ones."""
        return ModifierChain(self._steps + (step,))

    def __len__(self):
        return len(self._steps)

    def __call__(self, request: Request) -> Request:
        modified = _copy_request(request)
        for step in self._steps:
            modified = step(modified)
        return modified


def _copy_request(request: Request) -> Request:
    clone = copy.copy(request)
    clone.headers = dict(request.headers or {})
    # str, bytes and tuple params are immutable and go through as given
    if isinstance(request.params, dict):
        clone.params = dict(request.params)
    elif isinstance(request.params, list):
        clone.params = list(request.params)
    return clone


def _check_address(address: str):
    try:
        parts = urlsplit(address)
        parts.port  # bad ports raise here
    except ValueError as exc:
        raise AddressError(f"malformed Foreman address {address!r}: {exc}") from exc
    if not parts.scheme or not parts.netloc:
        raise AddressError(f"missing protocol scheme in Foreman address {address!r}")
    if parts.scheme.lower() not in SUPPORTED_SCHEMES:
        raise AddressError(f"unsupported protocol scheme {parts.scheme!r} in Foreman address {address!r}")


def _split_target(url: str):
    """Path and query of a request URL; only absolute URLs lose scheme and host."""
    if "://" in url:
        target = urlsplit(url)
        return target.path, target.query
    path, _, query = url.partition("?")
    return path, query


def set_base_url(address: str, api_version: str) -> Modifier:
    base = f"{address.rstrip('/')}/api/{api_version}/"

    def modify(request: Request) -> Request:
        # checked per request so a bad address only fails at dispatch
        _check_address(address)
        path, query = _split_target(request.url or "")
        url = base + path.lstrip("/")
        if query:
            url = f"{url}?{query}"
        request.url = url
        return request

    return modify


def add_header(key: str, value: str) -> Modifier:
    def modify(request: Request) -> Request:
        request.headers[key] = value
        return request

    return modify


def set_basic_auth(username: str, password: str) -> Modifier:
    def modify(request: Request) -> Request:
        request.auth = HTTPBasicAuth(username, password)
        return request

    return modify
