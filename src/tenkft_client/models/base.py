"""Declarative wire schema for 10,000ft resources.

Every resource is a dataclass whose fields carry their wire metadata:

- `writable(...)` fields are sent on create/update.
- `server(...)` fields are assigned by the API and only read.

Each writable field has an emit policy. `ALWAYS` fields are sent even when
they hold their default. `OMIT_IF_DEFAULT` fields are dropped from the
request body while they still equal their default.

Example:
    ```python
    @dataclass
    class Tag(Resource):
        value: str = writable(default="")
        id: int = server(default=0)

    tag = Tag(value="design")
    write_view(tag)  # {"value": "design"}
    ```
"""

import dataclasses
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, Self, TypeVar

ALWAYS = "always"
OMIT_IF_DEFAULT = "omit_if_default"

_WIRE_NAME = "wire_name"
_WRITABLE = "writable"
_EMIT = "emit"
_DECODE = "decode"

_MISSING = dataclasses.MISSING


def _wire_field(
    *,
    wire_name: str | None,
    writable: bool,
    emit: str,
    default: Any,
    default_factory: Any,
    decode: Callable[[Any], Any] | None,
) -> Any:
    metadata = {_WIRE_NAME: wire_name, _WRITABLE: writable, _EMIT: emit, _DECODE: decode}
    if default_factory is not _MISSING:
        return dataclasses.field(default_factory=default_factory, metadata=metadata)
    return dataclasses.field(default=default, metadata=metadata)


def writable(
    wire_name: str | None = None,
    *,
    default: Any = None,
    omit_if_default: bool = False,
) -> Any:
    """Declare a caller-writable field."""
    return _wire_field(
        wire_name=wire_name,
        writable=True,
        emit=OMIT_IF_DEFAULT if omit_if_default else ALWAYS,
        default=default,
        default_factory=_MISSING,
        decode=None,
    )


def server(
    wire_name: str | None = None,
    *,
    default: Any = None,
    default_factory: Any = _MISSING,
    decode: Callable[[Any], Any] | None = None,
) -> Any:
    """Declare a read-only, server-assigned field."""
    return _wire_field(
        wire_name=wire_name,
        writable=False,
        emit=ALWAYS,
        default=default,
        default_factory=default_factory,
        decode=decode,
    )


def _wire_name(f: dataclasses.Field) -> str:
    return f.metadata.get(_WIRE_NAME) or f.name


def _default_of(f: dataclasses.Field) -> Any:
    if f.default is not _MISSING:
        return f.default
    if f.default_factory is not _MISSING:
        return f.default_factory()
    return None


def _expect_object(payload: Any, name: str) -> None:
    if not isinstance(payload, dict):
        raise ValueError(f"{name} must be a JSON object, got {type(payload).__name__}")


class Resource:
    """Mixin for resource dataclasses: decode wire payloads, build write views."""

    @classmethod
    def from_wire(cls, payload: dict[str, Any] | None) -> Self:
        """Build a new instance from a decoded JSON object."""
        instance = cls()
        instance.update_from_wire(payload)
        return instance

    def update_from_wire(self, payload: dict[str, Any] | None) -> Self:
        """Overwrite fields in place from a decoded JSON object.

        Unknown keys are ignored. A null value leaves a field untouched unless
        the field's own default is None. A null payload changes nothing.

        Raises:
            ValueError: If `payload` is not a JSON object.
        """
        if payload is None:
            return self
        _expect_object(payload, type(self).__name__)

        for f in dataclasses.fields(self):
            key = _wire_name(f)
            if key not in payload:
                continue

            value = payload[key]
            if value is None and _default_of(f) is not None:
                continue

            decode = f.metadata.get(_DECODE)
            if decode is not None and value is not None:
                value = decode(value)
            setattr(self, f.name, value)

        return self


def write_view(entity: Resource) -> dict[str, Any]:
    """Return the request body for create/update: writable fields only, per their emit policy."""
    view: dict[str, Any] = {}
    for f in dataclasses.fields(entity):
        if not f.metadata.get(_WRITABLE):
            continue

        value = getattr(entity, f.name)
        if f.metadata.get(_EMIT) == OMIT_IF_DEFAULT and value == _default_of(f):
            continue

        view[_wire_name(f)] = value

    return view


@dataclass
class Paging(Resource):
    """Position of a page within a paginated collection."""

    per_page: int = server(default=0)
    page: int = server(default=0)
    previous: str | None = server(default=None)
    self_link: str | None = server("self", default=None)
    next: str | None = server(default=None)

    def has_next(self) -> bool:
        """True when the API advertised a following page."""
        return self.next not in (None, "", "null")

    def next_page(self) -> int:
        """Number of the following page.

        This is always `page + 1`. The `next` link itself is not followed.
        """
        return self.page + 1


T = TypeVar("T", bound=Resource)


@dataclass
class Collection(Generic[T]):
    """The `{data: [...], paging: {...}}` envelope returned by list endpoints."""

    data: list[T] = dataclasses.field(default_factory=list)
    paging: Paging = dataclasses.field(default_factory=Paging)

    # Resource type held in `data`, set by subclasses
    item_type: ClassVar[type[Resource]]

    @classmethod
    def from_wire(cls, payload: dict[str, Any] | None) -> Self:
        """Decode an envelope. Raises ValueError if it is not shaped like one."""
        if payload is None:
            return cls()
        _expect_object(payload, cls.__name__)

        data = payload.get("data") or []
        if not isinstance(data, list):
            raise ValueError(f"{cls.__name__}.data must be a JSON array, got {type(data).__name__}")

        items = [cls.item_type.from_wire(item) for item in data]
        return cls(data=items, paging=Paging.from_wire(payload.get("paging")))

    def extend(self, page: "Collection[T]") -> None:
        """Append a later page's items and take over its paging."""
        self.data.extend(page.data)
        self.paging = page.paging

    def get_by_id(self, item_id: int) -> T | None:
        for item in self.data:
            if getattr(item, "id", None) == item_id:
                return item
        return None

    def find(self, predicate: Callable[[T], bool]) -> T | None:
        for item in self.data:
            if predicate(item):
                return item
        return None

    def __iter__(self) -> Iterator[T]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)
