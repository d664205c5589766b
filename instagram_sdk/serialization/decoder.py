"""
Object graph decoder.

Walks a JSON document alongside the target descriptors and builds the DTO
graph. Every object goes through the same sequence:

1. instantiate the target class (or reuse the instance already indexed
   under the same ``(tag, id)``)
2. assign the declared fields, recursing into nested objects and lists
3. register the object in the per-call index
4. resolve its requirements
5. run its ``on_decode(raw, requirements)`` hook, if any

A ``DecodeError`` anywhere aborts the whole call.

An object is only indexed once its own fields are assigned. A copy of an
object nested inside itself is therefore decoded as a separate instance,
and that inner copy is the one later lookups find.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Type, TypeVar, Union

from ..core.errors import DecodeError
from ..core.logging import get_logger
from .coercion import ABSENT, coerce_field, coerce_scalar, json_kind
from .context import DecodeContext
from .descriptor import ScalarKind, TargetDescriptor, TargetRef, descriptor_for, resolve_target
from .requirements import resolve_requirements


logger = get_logger("instagram_sdk.serialization.decoder")

T = TypeVar("T")

ROOT_PATH = "$"

Payload = Union[str, bytes, bytearray, Dict[str, Any]]


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def load_payload(payload: Payload) -> Dict[str, Any]:
    """
    Parse raw JSON text or bytes into a JSON object.
    """

    if isinstance(payload, (bytes, bytearray)):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError:
            raise DecodeError(ROOT_PATH, "object", "invalid utf-8") from None

    if isinstance(payload, str):
        try:
            document = json.loads(payload)
        except ValueError:
            raise DecodeError(ROOT_PATH, "object", "invalid json") from None
    else:
        document = payload

    if not isinstance(document, dict):
        raise DecodeError(ROOT_PATH, "object", json_kind(document))
    return document


class ObjectGraphDecoder:
    """
    Descriptor-driven decoder.

    The decoder itself is stateless; each ``decode`` call owns a fresh
    ``DecodeContext``, so one instance can serve many threads.
    """

    def decode(self, payload: Payload, target: Union[Type[T], T]) -> T:
        """
        Decode ``payload`` into ``target``.

        ``target`` is either a decodable class or an empty instance of one
        (envelopes are decoded in place).
        """

        document = load_payload(payload)
        context = DecodeContext()

        if isinstance(target, type):
            cls, instance = target, None
        else:
            cls, instance = type(target), target

        result = self._decode_object(document, descriptor_for(cls), context, "", instance)
        logger.debug(
            "Decoded %s (%d indexed objects)", cls.__name__, len(context)
        )
        return result

    def _decode_nested(
        self,
        raw: Dict[str, Any],
        target: TargetRef,
        context: DecodeContext,
        path: str,
    ) -> Any:
        cls = resolve_target(target, raw)
        if cls is None:
            logger.debug("No decodable type selected at %s", path)
            return ABSENT
        return self._decode_object(raw, descriptor_for(cls), context, path)

    def _peek_identifier(
        self,
        raw: Dict[str, Any],
        descriptor: TargetDescriptor,
        path: str,
    ) -> Any:
        spec = descriptor.identifier_field
        if spec is None:
            return None
        for key in spec.keys:
            if key in raw:
                value = coerce_scalar(raw[key], spec.scalar or ScalarKind.RAW, _join(path, key))
                return None if value is ABSENT else value
        return None

    def _decode_object(
        self,
        raw: Dict[str, Any],
        descriptor: TargetDescriptor,
        context: DecodeContext,
        path: str,
        instance: Any = None,
    ) -> Any:
        identifier = self._peek_identifier(raw, descriptor, path)
        if identifier is not None:
            existing = context.lookup(descriptor.tag, identifier)
            if existing is not None:
                logger.debug("Reusing %s %r at %s", descriptor.tag, identifier, path or ROOT_PATH)
                return existing

        obj = instance if instance is not None else descriptor.cls()

        def decode_nested(value: Dict[str, Any], target: TargetRef, child_path: str) -> Any:
            return self._decode_nested(value, target, context, child_path)

        with context.within(descriptor.tag, obj):
            for spec in descriptor.fields:
                key = next((k for k in spec.keys if k in raw), None)
                if key is None:
                    continue
                value = coerce_field(raw[key], spec, _join(path, key), decode_nested)
                if value is not ABSENT:
                    setattr(obj, spec.name, value)

        if identifier is not None:
            context.register(descriptor.tag, identifier, obj)

        resolved = resolve_requirements(obj, descriptor, context)

        hook = getattr(obj, "on_decode", None)
        if callable(hook):
            hook(raw, resolved)

        return obj


_default_decoder = ObjectGraphDecoder()


def decode(payload: Payload, target: Union[Type[T], T]) -> T:
    """
    Decode ``payload`` into ``target`` with the shared stateless decoder.
    """

    return _default_decoder.decode(payload, target)
