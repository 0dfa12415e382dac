"""Variant registry — discriminator string <-> concrete pydantic model, per family."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Mapping, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    SerializerFunctionWrapHandler,
    ValidationError,
    model_serializer,
)

from tensorzero_client.types.errors import (
    MalformedContentError,
    TensorZeroInternalError,
    UnknownVariantError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)
M = TypeVar("M", bound=type)

TagFunc = Callable[[Mapping[str, Any]], "str | None"]
Predicate = Callable[[Mapping[str, Any]], bool]


class WireModel(BaseModel):
    """Base for every wire entity: immutable, tolerant of unmodelled keys."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    @model_serializer(mode="wrap")
    def _omit_unset_optionals(self, handler: SerializerFunctionWrapHandler) -> Any:
        # Only declared optional fields holding None are dropped; required
        # fields and extras keep an explicit null.
        data = handler(self)
        if isinstance(data, dict):
            for name, field in type(self).model_fields.items():
                if not field.is_required() and getattr(self, name) is None:
                    data.pop(name, None)
        return data

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict; optional fields are omitted rather than sent as null."""
        return self.model_dump(mode="json")


def read_type_field(payload: Mapping[str, Any]) -> str | None:
    tag = payload.get("type")
    return tag if isinstance(tag, str) else None


def discriminator_of_model(model: type[BaseModel]) -> str:
    """Tag declared by a variant class: a ``type`` field default or a ``type`` ClassVar."""
    field = model.model_fields.get("type")
    if field is not None and isinstance(field.default, str):
        return field.default
    tag = getattr(model, "type", None)
    if isinstance(tag, str):
        return tag
    raise TensorZeroInternalError(f"{model.__name__} declares no discriminator")


@dataclass
class VariantDef:
    """Registration record for one concrete variant."""

    discriminator: str
    model: type[BaseModel]
    when: Predicate | None = None


class VariantRegistry(Generic[T]):
    """Closed (or, with ``fallback``, semi-open) set of variants for one family.

    ``tag_of`` reads the discriminator out of a raw payload; it defaults to the
    ``type`` field. Families whose wire form carries no tag (responses,
    chunks) pass a shape-based function instead.
    """

    def __init__(
        self,
        family: str,
        *,
        tag_of: TagFunc | None = None,
        fallback: Callable[[Mapping[str, Any]], T] | None = None,
    ) -> None:
        self.family = family
        self._tag_of = tag_of or read_type_field
        self._fallback = fallback
        self._variants: dict[str, list[VariantDef]] = {}

    # -- registration -------------------------------------------------------

    def register(self, model: M | None = None, *, when: Predicate | None = None) -> Any:
        """Register *model*; works bare (``@reg.register``) or with a predicate."""

        def _add(cls: M) -> M:
            tag = discriminator_of_model(cls)
            self._variants.setdefault(tag, []).append(VariantDef(tag, cls, when))
            logger.debug("Registered %s variant %s -> %s", self.family, tag, cls.__name__)
            return cls

        if model is not None:
            return _add(model)
        return _add

    def get(self, discriminator: str) -> list[VariantDef]:
        return list(self._variants.get(discriminator, []))

    @property
    def discriminators(self) -> list[str]:
        return list(self._variants)

    def __contains__(self, discriminator: object) -> bool:
        return discriminator in self._variants

    # -- codec --------------------------------------------------------------

    def decode(self, payload: Any) -> T:
        if isinstance(payload, BaseModel) and self._is_registered(payload):
            return payload  # type: ignore[return-value]
        if not isinstance(payload, Mapping):
            raise MalformedContentError(
                self.family, None, f"expected an object, got {type(payload).__name__}"
            )

        tag = self._tag_of(payload)
        candidates = self._variants.get(tag) if tag is not None else None
        if not candidates:
            if self._fallback is not None:
                logger.debug("Unrecognised %s type %r, keeping raw payload", self.family, tag)
                return self._fallback(payload)
            raise UnknownVariantError(self.family, tag)

        for variant in candidates:
            if variant.when is not None and not variant.when(payload):
                continue
            try:
                return variant.model.model_validate(payload)  # type: ignore[return-value]
            except ValidationError as exc:
                raise MalformedContentError(self.family, tag, _summarise(exc)) from exc

        raise MalformedContentError(self.family, tag, "payload matches no known shape")

    def decode_many(self, payloads: Any) -> list[T]:
        if not isinstance(payloads, (list, tuple)):
            raise MalformedContentError(
                self.family, None, f"expected a list, got {type(payloads).__name__}"
            )
        return [self.decode(p) for p in payloads]

    def encode(self, value: BaseModel) -> dict[str, Any]:
        if not self._is_registered(value):
            raise TensorZeroInternalError(
                f"{type(value).__name__} is not a registered {self.family} variant"
            )
        return value.model_dump(mode="json")

    def discriminator(self, value: BaseModel) -> str:
        if not self._is_registered(value):
            raise TensorZeroInternalError(
                f"{type(value).__name__} is not a registered {self.family} variant"
            )
        return discriminator_of_model(type(value))

    def _is_registered(self, value: BaseModel) -> bool:
        return any(
            type(value) is variant.model
            for variants in self._variants.values()
            for variant in variants
        )


def _summarise(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)
