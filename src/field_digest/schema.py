"""Field schema provider for hashable types.

A type declares which of its fields participate in hashing, and in which
order, through one of the following mechanisms (checked per class, first
match wins):

* explicit registration via :meth:`SchemaRegistry.register`;
* a class attribute ``__hashable_fields__`` mapping field name to order key,
  or a sequence of ``(name, order)`` pairs;
* dataclass fields created with :func:`hashable_field`;
* pydantic model fields created with :func:`HashableField`.

Only a class's *own* declarations are read at each level. The provider walks
the method resolution order from the most derived class to its ancestors and
appends each ancestor's fields after the fields already collected.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final, Protocol, TypeVar

from pydantic import BaseModel, Field

from field_digest.errors import FieldAccessError, SchemaError

__all__ = [
    "HASH_ORDER_KEY",
    "FieldDescriptor",
    "HashableField",
    "SchemaProvider",
    "SchemaRegistry",
    "default_registry",
    "hashable",
    "hashable_field",
]

LOGGER = logging.getLogger(__name__)

HASH_ORDER_KEY: Final[str] = "hash_order"
_CLASS_ATTRIBUTE: Final[str] = "__hashable_fields__"

_T = TypeVar("_T", bound=type)

FieldDeclaration = Mapping[str, int] | Sequence[tuple[str, int]]


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """A single hashable field of a type.

    Attributes:
        name: Attribute name read from instances and emitted in the canonical
            tree.
        order: Order key. Fields of one class are visited in ascending order,
            ties keep declaration order.
        owner: Class that declared the field.
    """

    name: str
    order: int
    owner: type


class SchemaProvider(Protocol):
    """Capability consumed by the canonicalizer."""

    def fields_of(self, cls: type) -> tuple[FieldDescriptor, ...]:
        """Return the ordered hashable fields of ``cls``."""

    def read(self, instance: object, descriptor: FieldDescriptor) -> object | None:
        """Return the current value of ``descriptor`` on ``instance``."""


def hashable_field(*, order: int, **kwargs: Any) -> Any:
    """Declare a hashable dataclass field.

    Args:
        order: Order key of the field within its declaring class.
        **kwargs: Forwarded to :func:`dataclasses.field`.

    Returns:
        A :class:`dataclasses.Field` carrying the order key in its metadata.
    """

    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[HASH_ORDER_KEY] = order
    return dataclasses.field(metadata=metadata, **kwargs)


def HashableField(default: Any = ..., *, order: int, **kwargs: Any) -> Any:  # noqa: N802
    """Declare a hashable pydantic model field.

    Args:
        default: Field default, ``...`` for a required field.
        order: Order key of the field within its declaring model.
        **kwargs: Forwarded to :func:`pydantic.Field`.

    Returns:
        A pydantic ``FieldInfo`` whose ``json_schema_extra`` carries the order.
    """

    extra = dict(kwargs.pop("json_schema_extra", None) or {})
    extra[HASH_ORDER_KEY] = order
    return Field(default, json_schema_extra=extra, **kwargs)


class SchemaRegistry:
    """Default :class:`SchemaProvider` implementation.

    Registration is guarded by a lock; lookups read an immutable snapshot and
    need no synchronisation.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._registered: dict[type, tuple[tuple[str, int], ...]] = {}

    def register(self, cls: _T, fields: FieldDeclaration) -> _T:
        """Register the hashable fields declared by ``cls`` itself.

        Args:
            cls: Class whose own fields are being declared. Ancestors are
                registered separately.
            fields: Mapping of field name to order key, or a sequence of
                ``(name, order)`` pairs.

        Returns:
            ``cls`` unchanged, so the method can back a class decorator.

        Raises:
            SchemaError: If the declaration is malformed.
        """

        pairs = _normalise_declaration(cls, fields)
        with self._lock:
            updated = dict(self._registered)
            updated[cls] = pairs
            self._registered = updated
        LOGGER.debug(
            "Registered hashable fields",
            extra={"value_type": cls.__qualname__, "field_count": len(pairs)},
        )
        return cls

    def unregister(self, cls: type) -> None:
        """Drop an explicit registration for ``cls`` if present."""

        with self._lock:
            if cls not in self._registered:
                return
            updated = dict(self._registered)
            del updated[cls]
            self._registered = updated

    def own_fields(self, cls: type) -> tuple[FieldDescriptor, ...]:
        """Return the fields declared by ``cls`` itself, sorted by order key.

        Raises:
            SchemaError: If a declaration on ``cls`` is malformed.
        """

        pairs = self._declared_pairs(cls)
        descriptors = [FieldDescriptor(name, order, cls) for name, order in pairs]
        # sorted() is stable: equal order keys keep declaration order.
        return tuple(sorted(descriptors, key=lambda descriptor: descriptor.order))

    def fields_of(self, cls: type) -> tuple[FieldDescriptor, ...]:
        """Return every hashable field of ``cls`` including its ancestors.

        The class's own fields come first, followed by each ancestor's fields
        in method resolution order. A name already emitted by a more derived
        class is not repeated.
        """

        seen: set[str] = set()
        collected: list[FieldDescriptor] = []
        for klass in cls.__mro__:
            if klass is object:
                continue
            for descriptor in self.own_fields(klass):
                if descriptor.name in seen:
                    continue
                seen.add(descriptor.name)
                collected.append(descriptor)
        return tuple(collected)

    def read(self, instance: object, descriptor: FieldDescriptor) -> object | None:
        """Read ``descriptor`` from ``instance``.

        Raises:
            FieldAccessError: If the attribute cannot be read.
        """

        try:
            return getattr(instance, descriptor.name)
        except AttributeError as exc:
            raise FieldAccessError(type(instance), descriptor.name, str(exc)) from exc

    def _declared_pairs(self, cls: type) -> tuple[tuple[str, int], ...]:
        registered = self._registered.get(cls)
        if registered is not None:
            return registered
        if _CLASS_ATTRIBUTE in vars(cls):
            return _normalise_declaration(cls, vars(cls)[_CLASS_ATTRIBUTE])
        if dataclasses.is_dataclass(cls):
            return _dataclass_pairs(cls)
        if isinstance(cls, type) and issubclass(cls, BaseModel) and cls is not BaseModel:
            return _pydantic_pairs(cls)
        return ()


def _normalise_declaration(
    cls: type, fields: object
) -> tuple[tuple[str, int], ...]:
    """Validate a declaration and return ``(name, order)`` pairs."""

    items: list[object]
    if isinstance(fields, Mapping):
        items = list(fields.items())
    elif isinstance(fields, Sequence) and not isinstance(fields, (str, bytes)):
        items = list(fields)
    else:
        raise SchemaError(
            f"{cls.__qualname__}: hashable fields must be a mapping or a "
            f"sequence of (name, order) pairs, got {type(fields).__name__}"
        )

    pairs: list[tuple[str, int]] = []
    seen: set[str] = set()
    for item in items:
        if not isinstance(item, tuple) or len(item) != 2:
            raise SchemaError(f"{cls.__qualname__}: malformed field entry {item!r}")
        name, order = item
        if not isinstance(name, str) or not name:
            raise SchemaError(f"{cls.__qualname__}: field name must be text, got {name!r}")
        _check_order(cls, name, order)
        if name in seen:
            raise SchemaError(f"{cls.__qualname__}: duplicate hashable field {name!r}")
        seen.add(name)
        pairs.append((name, order))
    return tuple(pairs)


def _check_order(cls: type, name: str, order: object) -> None:
    if isinstance(order, bool) or not isinstance(order, int):
        raise SchemaError(
            f"{cls.__qualname__}.{name}: order key must be an integer, got {order!r}"
        )


def _dataclass_pairs(cls: type) -> tuple[tuple[str, int], ...]:
    own_names = set(inspect.get_annotations(cls))
    pairs: list[tuple[str, int]] = []
    for field in dataclasses.fields(cls):
        if field.name not in own_names or HASH_ORDER_KEY not in field.metadata:
            continue
        order = field.metadata[HASH_ORDER_KEY]
        _check_order(cls, field.name, order)
        pairs.append((field.name, order))
    return tuple(pairs)


def _pydantic_pairs(cls: type[BaseModel]) -> tuple[tuple[str, int], ...]:
    own_names = set(inspect.get_annotations(cls))
    pairs: list[tuple[str, int]] = []
    for name, info in cls.model_fields.items():
        if name not in own_names:
            continue
        extra = info.json_schema_extra
        if not isinstance(extra, dict) or HASH_ORDER_KEY not in extra:
            continue
        order = extra[HASH_ORDER_KEY]
        _check_order(cls, name, order)
        pairs.append((name, order))  # type: ignore[arg-type]
    return tuple(pairs)


default_registry: Final[SchemaRegistry] = SchemaRegistry()


def hashable(fields: FieldDeclaration) -> Any:
    """Class decorator registering ``fields`` with :data:`default_registry`.

    Example:
        >>> @hashable({"name": 1, "age": 2})
        ... class Person:
        ...     def __init__(self, name, age):
        ...         self.name, self.age = name, age
    """

    def decorator(cls: _T) -> _T:
        return default_registry.register(cls, fields)

    return decorator
