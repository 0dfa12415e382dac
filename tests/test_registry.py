"""Tests for VariantRegistry dispatch and its error classes."""

from __future__ import annotations

from typing import ClassVar, Literal

import pytest

from tensorzero_client.types.errors import (
    MalformedContentError,
    TensorZeroInternalError,
    UnknownVariantError,
)
from tensorzero_client.types.registry import VariantRegistry, WireModel, discriminator_of_model


def _make_registry() -> VariantRegistry:
    registry = VariantRegistry("widget")

    @registry.register
    class Knob(WireModel):
        type: Literal["knob"] = "knob"
        turns: int

    @registry.register(when=lambda p: "width" in p)
    class WideSlider(WireModel):
        type: Literal["slider"] = "slider"
        width: int

    @registry.register(when=lambda p: "height" in p)
    class TallSlider(WireModel):
        type: Literal["slider"] = "slider"
        height: int

    return registry


class TestRegistration:
    def test_discriminators_listed_once(self):
        registry = _make_registry()
        assert sorted(registry.discriminators) == ["knob", "slider"]
        assert "knob" in registry
        assert "dial" not in registry
        assert len(registry.get("slider")) == 2

    def test_classvar_discriminator(self):
        class Shaped(WireModel):
            type: ClassVar[str] = "shaped"
            x: int

        assert discriminator_of_model(Shaped) == "shaped"

    def test_model_without_discriminator_is_a_bug(self):
        class Untagged(WireModel):
            x: int

        with pytest.raises(TensorZeroInternalError):
            VariantRegistry("widget").register(Untagged)


class TestDecode:
    def test_dispatch_on_type(self):
        knob = _make_registry().decode({"type": "knob", "turns": 3})
        assert type(knob).__name__ == "Knob"
        assert knob.turns == 3

    def test_predicate_picks_shape(self):
        registry = _make_registry()
        assert type(registry.decode({"type": "slider", "width": 4})).__name__ == "WideSlider"
        assert type(registry.decode({"type": "slider", "height": 9})).__name__ == "TallSlider"

    def test_no_shape_matches(self):
        with pytest.raises(MalformedContentError, match="matches no known shape"):
            _make_registry().decode({"type": "slider", "depth": 1})

    def test_unknown_type(self):
        with pytest.raises(UnknownVariantError) as exc_info:
            _make_registry().decode({"type": "dial"})
        assert exc_info.value.discriminator == "dial"
        assert exc_info.value.family == "widget"

    def test_missing_type(self):
        with pytest.raises(UnknownVariantError, match="no discriminator"):
            _make_registry().decode({"turns": 1})

    def test_missing_required_field(self):
        with pytest.raises(MalformedContentError) as exc_info:
            _make_registry().decode({"type": "knob"})
        assert exc_info.value.discriminator == "knob"
        assert "turns" in exc_info.value.reason

    def test_non_mapping_payload(self):
        with pytest.raises(MalformedContentError):
            _make_registry().decode(["knob"])

    def test_decode_many_requires_list(self):
        with pytest.raises(MalformedContentError):
            _make_registry().decode_many({"type": "knob", "turns": 1})

    def test_already_decoded_value_passes_through(self):
        registry = _make_registry()
        knob = registry.decode({"type": "knob", "turns": 1})
        assert registry.decode(knob) is knob

    def test_fallback_keeps_unknown(self):
        registry = VariantRegistry("widget", fallback=lambda p: dict(p))
        assert registry.decode({"type": "dial", "x": 1}) == {"type": "dial", "x": 1}


class TestEncode:
    def test_encode_includes_discriminator_and_drops_none(self):
        registry = VariantRegistry("widget")

        @registry.register
        class Lamp(WireModel):
            type: Literal["lamp"] = "lamp"
            watts: int
            colour: str | None = None

        assert registry.encode(Lamp(watts=40)) == {"type": "lamp", "watts": 40}
        assert registry.discriminator(Lamp(watts=40)) == "lamp"

    def test_encode_unregistered_is_a_bug(self):
        class Stray(WireModel):
            type: Literal["stray"] = "stray"

        with pytest.raises(TensorZeroInternalError):
            _make_registry().encode(Stray())
