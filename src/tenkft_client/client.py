"""Client for the 10,000ft API.

All interactions go through `TenKFTClient`:

```python
from tenkft_client import STAGING, TenKFTClient

client = TenKFTClient(token="insert-your-token-here", env=STAGING, max_retries=3)

projects = client.get_projects({"fields": "tags,summary"})
if projects.paging.has_next():
    more = client.get_projects({"page": str(projects.paging.next_page())})

# or let the client walk every page
everything = client.get_all_projects({"fields": "tags,summary"})
```
"""

import json
import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

import httpx

from tenkft_client.auth.credentials import CredentialResolver
from tenkft_client.config import (
    ASSIGNMENT_PAGE_SIZE,
    AUTH_HEADER,
    DEFAULT_TIMEOUT,
    ENVIRONMENT_ENV_VAR,
    LARGE_PAGE_SIZE,
    REFERENCE_PAGE_SIZE,
    TOKEN_ENV_VAR,
    validate_environment,
)
from tenkft_client.errors.exceptions import ConfigurationError, DecodeError
from tenkft_client.errors.handler import decode_json
from tenkft_client.models.base import Collection, Resource, write_view
from tenkft_client.models.resources import (
    Assignment,
    Assignments,
    BillRates,
    LeaveTypes,
    Phase,
    Phases,
    Project,
    Projects,
    Roles,
    Tags,
    User,
    Users,
)
from tenkft_client.transport.executor import RequestExecutor, RequestSpec
from tenkft_client.transport.pagination import fetch_all

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=Collection)
R = TypeVar("R", bound=Resource)
T = TypeVar("T")


def queryfy(opts: Mapping[str, str] | None) -> str:
    """Join options as `k=v` pairs with `&`. Values are not URL-encoded."""
    if not opts:
        return ""
    return "&".join(f"{key}={value}" for key, value in opts.items())


class BaseClient:
    """Shared request plumbing: configuration, auth header, encode/decode.

    Args:
        token: API token. Falls back to the `TENKFT_TOKEN` environment variable.
        env: Base URL, `PRODUCTION` or `STAGING`. Falls back to `TENKFT_ENV`.
        max_retries: Retry budget given to every request.
        transport: Optional httpx transport, e.g. `httpx.MockTransport` in tests.
        timeout: Per-request timeout in seconds.
        credential_resolver: Resolver used for token and env lookup.

    Raises:
        ConfigurationError: Invalid env or negative retry budget.
        CredentialNotFoundError: No token in any source.
    """

    def __init__(
        self,
        token: str | None = None,
        env: str | None = None,
        max_retries: int = 0,
        *,
        transport: httpx.BaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        credential_resolver: CredentialResolver | None = None,
    ) -> None:
        resolver = credential_resolver or CredentialResolver()

        env = resolver.resolve(value=env, env_var_name=ENVIRONMENT_ENV_VAR, mask_in_logs=False)
        self.env = validate_environment(env)
        self._token = resolver.resolve(value=token, env_var_name=TOKEN_ENV_VAR, required=True)

        if max_retries < 0:
            raise ConfigurationError(f"max_retries must be non-negative (got {max_retries})")
        self.max_retries = max_retries

        self._http = httpx.Client(transport=transport, timeout=timeout)
        self._executor = RequestExecutor(self._http)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self._http.close()

    def _url(self, path: str, opts: Mapping[str, str] | None = None, *, query: bool = True) -> str:
        url = self.env + path
        if query:
            url += "?" + queryfy(opts)
        return url

    def _request(self, method: str, url: str, body: bytes = b"") -> httpx.Response:
        """Execute one logical call and return its successful response."""
        spec = RequestSpec(
            url=url,
            method=method,
            body=body,
            headers={AUTH_HEADER: self._token},
            max_retries=self.max_retries,
        )
        logger.debug(f"{method} {url}")
        return self._executor.execute(spec)

    def _decode(self, response: httpx.Response, decoder: Callable[[Any], T]) -> T:
        """Decode the JSON body with `decoder`, reporting a wrongly shaped body as `DecodeError`."""
        payload = decode_json(response)
        try:
            return decoder(payload)
        except (TypeError, ValueError) as e:
            raise DecodeError(
                f"Unexpected response shape: {e}",
                status_code=response.status_code,
                response=response,
            ) from e

    def _get_collection(self, path: str, collection_type: type[C], opts: Mapping[str, str] | None) -> C:
        return self._decode(self._request("GET", self._url(path, opts)), collection_type.from_wire)

    def _get_into(self, path: str, entity: R, opts: Mapping[str, str] | None) -> R:
        return self._decode(self._request("GET", self._url(path, opts)), entity.update_from_wire)

    def _send_entity(self, method: str, path: str, entity: R) -> R:
        """Send the entity's write view and decode the response into the same instance."""
        body = json.dumps(write_view(entity)).encode()
        response = self._request(method, self._url(path, query=False), body)
        return self._decode(response, entity.update_from_wire)


class TenKFTClient(BaseClient):
    """High-level operations on 10,000ft resources.

    List operations return one page. Their `get_all_*` counterparts walk every
    page. Create and update operations send only writable fields and update
    the passed entity in place with the server's response.
    """

    # Projects

    def get_projects(self, opts: Mapping[str, str] | None = None) -> Projects:
        return self._get_collection("/projects", Projects, opts)

    def get_all_projects(self, opts: Mapping[str, str] | None = None) -> Projects:
        return fetch_all(self.get_projects, opts, LARGE_PAGE_SIZE)

    def get_project_by_id(self, project_id: int, opts: Mapping[str, str] | None = None) -> Project:
        return self._get_into(f"/projects/{project_id}", Project(), opts)

    def create_project(self, project: Project) -> Project:
        return self._send_entity("POST", "/projects", project)

    def update_project(self, project: Project) -> Project:
        return self._send_entity("PUT", f"/projects/{project.id}", project)

    def delete_project(self, project: Project) -> Project:
        """Archive the project. The API exposes no hard delete."""
        project.archived = True
        return self.update_project(project)

    def get_project_users(self, project_id: int, opts: Mapping[str, str] | None = None) -> Users:
        return self._get_collection(f"/projects/{project_id}/users", Users, opts)

    def get_project_assignments(self, project: Project, opts: Mapping[str, str] | None = None) -> Assignments:
        return self._get_collection(f"/projects/{project.id}/assignments", Assignments, opts)

    def get_project_phases(self, project: Project, opts: Mapping[str, str] | None = None) -> Phases:
        return self._get_collection(f"/projects/{project.id}/phases", Phases, opts)

    def create_project_phase(self, project_id: int, phase: Phase) -> Phase:
        return self._send_entity("POST", f"/projects/{project_id}/phases", phase)

    def get_project_bill_rates(self, project_id: int, opts: Mapping[str, str] | None = None) -> BillRates:
        return self._get_collection(f"/projects/{project_id}/bill_rates", BillRates, opts)

    def get_all_project_bill_rates(self, project_id: int, opts: Mapping[str, str] | None = None) -> BillRates:
        return fetch_all(
            lambda page_opts: self.get_project_bill_rates(project_id, page_opts), opts, REFERENCE_PAGE_SIZE
        )

    def create_project_tags(self, project: Project) -> Tags:
        """POST each of the project's tags. See `_create_tags`."""
        return self._create_tags(f"/projects/{project.id}/tags", project.tags)

    # Users

    def get_users(self, opts: Mapping[str, str] | None = None) -> Users:
        return self._get_collection("/users", Users, opts)

    def get_all_users(self, opts: Mapping[str, str] | None = None) -> Users:
        return fetch_all(self.get_users, opts, LARGE_PAGE_SIZE)

    def get_user(self, user: User, opts: Mapping[str, str] | None = None) -> User:
        """Refresh `user` in place from GET /users/<id>."""
        return self._get_into(f"/users/{user.id}", user, opts)

    def create_user(self, user: User) -> User:
        return self._send_entity("POST", "/users", user)

    def update_user(self, user: User) -> User:
        return self._send_entity("PUT", f"/users/{user.id}", user)

    def delete_user(self, user: User) -> User:
        """Archive the user. The API exposes no hard delete."""
        user.archived = True
        return self.update_user(user)

    def get_user_assignments(self, user: User, opts: Mapping[str, str] | None = None) -> Assignments:
        return self._get_collection(f"/users/{user.id}/assignments", Assignments, opts)

    def get_all_user_assignments(self, user: User, opts: Mapping[str, str] | None = None) -> Assignments:
        return fetch_all(lambda page_opts: self.get_user_assignments(user, page_opts), opts, ASSIGNMENT_PAGE_SIZE)

    def create_user_assignment(self, assignment: Assignment) -> Assignment:
        return self._send_entity("POST", f"/users/{assignment.user_id}/assignments", assignment)

    def create_user_tags(self, user: User) -> Tags:
        """POST each of the user's tags. See `_create_tags`."""
        return self._create_tags(f"/users/{user.id}/tags", user.tags)

    # Reference data

    def get_leave_types(self, opts: Mapping[str, str] | None = None) -> LeaveTypes:
        return self._get_collection("/leave_types", LeaveTypes, opts)

    def get_all_leave_types(self, opts: Mapping[str, str] | None = None) -> LeaveTypes:
        return fetch_all(self.get_leave_types, opts, REFERENCE_PAGE_SIZE)

    def get_roles(self, opts: Mapping[str, str] | None = None) -> Roles:
        return self._get_collection("/roles", Roles, opts)

    def get_all_roles(self, opts: Mapping[str, str] | None = None) -> Roles:
        return fetch_all(self.get_roles, opts, REFERENCE_PAGE_SIZE)

    def _create_tags(self, path: str, tags: Tags) -> Tags:
        """Create tags one request at a time.

        There is no bulk endpoint and the batch is not atomic: the first failure
        is raised and tags created before it stay created (and updated in place).
        """
        for tag in tags:
            self._send_entity("POST", path, tag)
        return tags
