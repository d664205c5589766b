"""
Target descriptors for decodable DTOs.

A DTO becomes decodable by declaring its fields with ``scalar``, ``nested``
or ``listof`` and decorating the dataclass with ``@decodable``::

    @decodable(tag="thread_item", identifier="item_id",
               requirements=("user:user_id", Ancestor("thread", target="parent")))
    @dataclass
    class ThreadItem(BaseDTO):
        item_id: Optional[str] = scalar(ScalarKind.STRING)
        user_id: Optional[int] = scalar(ScalarKind.INT)

The decorator validates everything once, builds a ``TargetDescriptor`` and
records the class in the tag registry. The decoder only ever reads
descriptors; it holds no per-type logic.
"""

from __future__ import annotations

import dataclasses
import re
import weakref
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple, Union

from ..core.errors import ValidationError


_METADATA_KEY = "instagram_sdk.decode"
_DESCRIPTOR_ATTR = "__decode_descriptor__"

_REGISTRY: Dict[str, type] = {}


class FieldKind(str, Enum):
    SCALAR = "scalar"
    OBJECT = "object"
    LIST = "list"


class ScalarKind(str, Enum):
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    STRING = "string"
    RAW = "raw"


# A target is a decodable class, a registered tag, or a callable that
# picks the class from the raw JSON object (polymorphic fields).
TypeSelector = Callable[[Dict[str, Any]], Optional[type]]
TargetRef = Union[type, str, TypeSelector]


@dataclass(frozen=True)
class FieldSpec:
    """
    How one dataclass attribute is filled from JSON.
    """

    name: str
    kind: FieldKind
    source: Optional[str] = None
    scalar: Optional[ScalarKind] = None
    target: Optional[TargetRef] = None
    optional: bool = True

    @property
    def keys(self) -> Tuple[str, ...]:
        """
        JSON keys to try, in order: the attribute name, then the alias.
        """

        if self.source and self.source != self.name:
            return (self.name, self.source)
        return (self.name,)


@dataclass(frozen=True)
class IndexLookup:
    """
    Resolve the object tagged ``registry_key`` whose identifier equals the
    value of ``local_field`` on the object being decoded.
    """

    local_field: str
    registry_key: str
    target: str = ""

    def __post_init__(self) -> None:
        if not self.target:
            object.__setattr__(self, "target", self.registry_key)


@dataclass(frozen=True)
class Ancestor:
    """
    Resolve the nearest enclosing object tagged ``kind`` (any kind if None).
    """

    kind: Optional[str] = None
    target: str = ""

    def __post_init__(self) -> None:
        if not self.target:
            object.__setattr__(self, "target", self.kind or "parent")


Requirement = Union[IndexLookup, Ancestor]


@dataclass(frozen=True)
class TargetDescriptor:
    """
    Decode metadata for one DTO class.
    """

    cls: type
    tag: str
    identifier: Optional[str]
    fields: Tuple[FieldSpec, ...]
    requirements: Tuple[Requirement, ...] = ()

    def field(self, name: str) -> Optional[FieldSpec]:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    @property
    def identifier_field(self) -> Optional[FieldSpec]:
        if self.identifier is None:
            return None
        return self.field(self.identifier)


class BackReference:
    """
    Non-owning attribute holding a weak reference to an enclosing object.

    Declared as a plain class attribute (no annotation) so dataclasses do
    not treat it as a field: ``parent = BackReference()``.
    """

    def __set_name__(self, owner: type, name: str) -> None:
        self._slot = f"_{name}_ref"

    def __get__(self, obj: Any, objtype: Optional[type] = None) -> Any:
        if obj is None:
            return self
        ref = obj.__dict__.get(self._slot)
        return ref() if ref is not None else None

    def __set__(self, obj: Any, value: Any) -> None:
        obj.__dict__[self._slot] = weakref.ref(value) if value is not None else None


# Field declaration helpers


def scalar(
    kind: ScalarKind = ScalarKind.STRING,
    source: Optional[str] = None,
    default: Any = None,
    optional: bool = True,
) -> Any:
    """
    Declare a scalar field coerced to ``kind``.
    """

    spec = {"kind": FieldKind.SCALAR, "scalar": kind, "source": source, "optional": optional}
    return dataclasses.field(default=default, metadata={_METADATA_KEY: spec})


def nested(
    target: TargetRef,
    source: Optional[str] = None,
    optional: bool = True,
) -> Any:
    """
    Declare a field holding one nested decodable object.
    """

    spec = {"kind": FieldKind.OBJECT, "target": target, "source": source, "optional": optional}
    return dataclasses.field(default=None, metadata={_METADATA_KEY: spec})


def listof(
    target: TargetRef,
    source: Optional[str] = None,
    optional: bool = True,
) -> Any:
    """
    Declare a field holding an ordered list of decodable objects.
    """

    spec = {"kind": FieldKind.LIST, "target": target, "source": source, "optional": optional}
    return dataclasses.field(default_factory=list, metadata={_METADATA_KEY: spec})


# Requirements

_REQUIREMENT_RE = re.compile(r"^(?:(?P<key>[A-Za-z_][\w]*):)?(?P<name>[A-Za-z_][\w]*)$")


def parse_requirement(value: Union[str, Requirement]) -> Requirement:
    """
    Convert a requirement declaration into its tagged form.

    ``"user:user_id"`` becomes ``IndexLookup("user_id", "user")``,
    ``"parent"`` the nearest ancestor of any kind and any other bare word
    the nearest ancestor with that tag.
    """

    if isinstance(value, (IndexLookup, Ancestor)):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"Unsupported requirement declaration: {value!r}")

    match = _REQUIREMENT_RE.match(value.strip())
    if not match:
        raise ValidationError(f"Malformed requirement declaration: {value!r}")

    key, name = match.group("key"), match.group("name")
    if key:
        return IndexLookup(local_field=name, registry_key=key)
    if name == "parent":
        return Ancestor(kind=None, target="parent")
    return Ancestor(kind=name, target=name)


# Registration


def _snake_case(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def _collect_fields(cls: type) -> Tuple[FieldSpec, ...]:
    specs = []
    for f in dataclasses.fields(cls):
        meta = f.metadata.get(_METADATA_KEY)
        if meta is None:
            continue
        if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:  # type: ignore[misc]
            raise ValidationError(
                f"{cls.__name__}.{f.name} is decoded but has no default value"
            )
        target = meta.get("target")
        if meta["kind"] is not FieldKind.SCALAR and target is None:
            raise ValidationError(f"{cls.__name__}.{f.name} has no target type")
        specs.append(
            FieldSpec(
                name=f.name,
                kind=meta["kind"],
                source=meta.get("source"),
                scalar=meta.get("scalar"),
                target=target,
                optional=meta.get("optional", True),
            )
        )
    return tuple(specs)


def decodable(
    tag: Optional[str] = None,
    identifier: Optional[str] = None,
    requirements: Tuple[Union[str, Requirement], ...] = (),
) -> Callable[[type], type]:
    """
    Class decorator registering a dataclass as a decode target.

    A subclass of a decodable class inherits its tag, identifier and
    requirements unless it declares its own. Only the class that first
    claims a tag is recorded in the registry.
    """

    def wrap(cls: type) -> type:
        if not dataclasses.is_dataclass(cls):
            raise ValidationError(f"{cls.__name__} must be a dataclass to be decodable")

        inherited: Optional[TargetDescriptor] = None
        for base in cls.__mro__[1:]:
            inherited = base.__dict__.get(_DESCRIPTOR_ATTR)
            if inherited is not None:
                break

        fields = _collect_fields(cls)
        names = {spec.name for spec in fields}

        type_tag = tag or (inherited.tag if inherited else _snake_case(cls.__name__))
        ident = identifier if identifier is not None else (inherited.identifier if inherited else None)
        if ident is not None and ident not in names:
            raise ValidationError(
                f"{cls.__name__}: identifier {ident!r} is not a decoded field"
            )

        if requirements:
            reqs = tuple(parse_requirement(r) for r in requirements)
        else:
            reqs = inherited.requirements if inherited else ()
        for req in reqs:
            if isinstance(req, IndexLookup) and req.local_field not in names:
                raise ValidationError(
                    f"{cls.__name__}: requirement field {req.local_field!r} is not a decoded field"
                )
            if req.target in names:
                raise ValidationError(
                    f"{cls.__name__}: requirement target {req.target!r} collides with a decoded field"
                )

        existing = _REGISTRY.get(type_tag)
        if existing is not None and existing is not cls and not issubclass(cls, existing):
            raise ValidationError(
                f"Tag {type_tag!r} is already registered by {existing.__name__}"
            )
        _REGISTRY.setdefault(type_tag, cls)

        setattr(
            cls,
            _DESCRIPTOR_ATTR,
            TargetDescriptor(
                cls=cls,
                tag=type_tag,
                identifier=ident,
                fields=fields,
                requirements=reqs,
            ),
        )
        return cls

    return wrap


def descriptor_for(cls: type) -> TargetDescriptor:
    """
    Return the descriptor declared directly on ``cls``.
    """

    descriptor = cls.__dict__.get(_DESCRIPTOR_ATTR) if isinstance(cls, type) else None
    if descriptor is None:
        name = getattr(cls, "__name__", repr(cls))
        raise ValidationError(f"{name} is not decodable (missing @decodable)")
    return descriptor


def lookup_type(tag: str) -> type:
    try:
        return _REGISTRY[tag]
    except KeyError:
        raise ValidationError(f"No decodable type registered for tag {tag!r}") from None


def resolve_target(target: TargetRef, raw: Dict[str, Any]) -> Optional[type]:
    """
    Turn a field's target reference into the class to instantiate.

    Returns None when a type selector declines the raw object.
    """

    if isinstance(target, type):
        return target
    if isinstance(target, str):
        return lookup_type(target)
    return target(raw)
