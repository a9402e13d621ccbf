# foreman_client.py - Foreman REST API client on top of requests
"""
Usage::

    client = Client(Options(address="https://foreman.acme.io", username="admin", password="secret"))
    resp = client.index("hosts", {"search": ["myhost.local"]})
    resp = client.create("architectures", {"name": "arch"})
    resp = client.update("architectures", "1", {"name": "arch2"})
    resp = client.delete("architectures", "1")

Every call returns the ``requests.Response`` as received; HTTP error statuses
are left to the caller.
"""

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

import requests
from requests import Request, exceptions as req_exceptions

from foreman_errors import SerializationError, ValidationError
from foreman_modifiers import ModifierChain, add_header, set_base_url, set_basic_auth
from foreman_utils.log import DEFAULT_LOGGER, redact_headers

# handlers are left to the application, see foreman_utils.log.get_logger
logger = logging.getLogger(DEFAULT_LOGGER)

DEFAULT_ADDRESS = "http://localhost:3000"
DEFAULT_API_VERSION = "v2"
DEFAULT_TIMEOUT = 30.0
USER_AGENT = "PyForemanAPIClient"

QueryParameters = Union[Mapping[str, Any], Sequence[Tuple[str, Any]]]

# singular forms that are not the plural minus its trailing "s"
IRREGULAR_ROOT_KEYS = {
    "media": "medium",
}


@dataclass(frozen=True)
class Options:
    address: str = DEFAULT_ADDRESS
    api_version: str = DEFAULT_API_VERSION
    # basic auth is only attached when username is set
    username: str = ""
    password: str = ""
    session: Optional[requests.Session] = None
    timeout: Optional[float] = DEFAULT_TIMEOUT
    wrap_root_key: bool = False


@dataclass
class Query:
    """Resource listing request, e.g. ``Query("hosts", {"search": "host1.local.io"})``."""
    resource: str
    parameters: QueryParameters = field(default_factory=dict)


@dataclass
class Resource:
    """A single resource to create, update or delete."""
    name: str
    id: Optional[str] = None
    parameters: Any = None


def root_key(name: str) -> str:
    """Singular JSON root key the Foreman API expects for resource ``name``."""
    if not name:
        raise ValidationError("resource name is mandatory to derive its root key")
    if name in IRREGULAR_ROOT_KEYS:
        return IRREGULAR_ROOT_KEYS[name]
    return name[:-1] if name.endswith("s") else name


def _join_path(*parts) -> str:
    return "/".join(str(p).strip("/") for p in parts)


class Client:
    """Foreman API client. Attributes are fixed at construction."""

    __slots__ = ("_address", "_api_version", "_timeout", "_wrap_root_key", "_owns_session", "_session", "_modifiers")

    def __init__(self, options: Optional[Options] = None):
        options = options or Options()
        self._address = options.address or DEFAULT_ADDRESS
        self._api_version = options.api_version or DEFAULT_API_VERSION
        self._timeout = options.timeout
        self._wrap_root_key = options.wrap_root_key
        self._owns_session = options.session is None
        self._session = options.session if options.session is not None else requests.Session()

        chain = ModifierChain()
        for step in (
            set_base_url(self.address, self.api_version),
            add_header("Accept", "application/json"),
            add_header("Content-Type", "application/json"),
            add_header("User-Agent", USER_AGENT),
        ):
            chain = chain.then(step)
        if options.username:
            chain = chain.then(set_basic_auth(options.username, options.password))
        self._modifiers = chain

    @property
    def address(self) -> str:
        return self._address

    @property
    def api_version(self) -> str:
        return self._api_version

    @property
    def timeout(self) -> Optional[float]:
        return self._timeout

    @property
    def wrap_root_key(self) -> bool:
        return self._wrap_root_key

    @property
    def session(self) -> requests.Session:
        return self._session

    @property
    def modifiers(self) -> ModifierChain:
        return self._modifiers

    def do(self, request: Request) -> requests.Response:
        """Run ``request`` through the modifier chain and send it."""
        modified = self.modifiers(request)
        prepared = self.session.prepare_request(modified)

        logger.info("PREPARED %s %s", prepared.method, prepared.url)
        for k, v in redact_headers(prepared.headers).items():
            logger.debug("REQ-HEADER %s: %s", k, v)
        if prepared.body is not None:
            body_preview = prepared.body
            if isinstance(body_preview, bytes):
                body_preview = body_preview.decode("utf-8", errors="ignore")
            logger.debug("REQ-BODY: %s", body_preview)

        t0 = time.time()
        try:
            resp = self.session.send(prepared, timeout=self.timeout)
        except req_exceptions.RequestException as e:
            logger.warning("%s %s failed: %s", prepared.method, prepared.url, str(e))
            raise
        logger.info("%s %s -> status=%s elapsed=%.2fs",
                    prepared.method, prepared.url, resp.status_code, time.time() - t0)
        return resp

    def index(self, query: Union[Query, str], params: Optional[QueryParameters] = None) -> requests.Response:
        if not isinstance(query, Query):
            query = Query(query, params or {})
        req = Request("GET", query.resource or "", params=query.parameters or {})
        return self.do(req)

    def create(self, resource: Union[Resource, str], params: Any = None) -> requests.Response:
        item = self._resource(resource, None, params)
        self._require_name(item, "create")
        req = Request("POST", _join_path(item.name), data=self._encode(item))
        return self.do(req)

    def update(self, resource: Union[Resource, str], id: Optional[str] = None, params: Any = None) -> requests.Response:
        item = self._resource(resource, id, params)
        self._require_name(item, "update")
        self._require_id(item, "update")
        req = Request("PUT", _join_path(item.name, item.id), data=self._encode(item))
        return self.do(req)

    def delete(self, resource: Union[Resource, str], id: Optional[str] = None) -> requests.Response:
        item = self._resource(resource, id, None)
        self._require_name(item, "delete")
        self._require_id(item, "delete")
        req = Request("DELETE", _join_path(item.name, item.id))
        return self.do(req)

    def close(self):
        """Close the session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *args):
        self.close()

    @staticmethod
    def _resource(resource, id, params) -> Resource:
        if isinstance(resource, Resource):
            return resource
        return Resource(name=resource, id=id, parameters=params)

    @staticmethod
    def _require_name(item: Resource, action: str):
        if not item.name:
            raise ValidationError(f"resource name is mandatory to {action} a resource")

    @staticmethod
    def _require_id(item: Resource, action: str):
        if item.id is None or str(item.id) == "":
            raise ValidationError(f"resource id is mandatory to {action} {item.name!r}")

    def _encode(self, item: Resource) -> bytes:
        payload = item.parameters
        if self.wrap_root_key:
            payload = {root_key(item.name): payload}
        try:
            return json.dumps(payload).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"cannot encode parameters of {item.name!r} as JSON: {exc}") from exc
