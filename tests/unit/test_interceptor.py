"""Unit tests for AccessorInterceptor."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any
from unittest.mock import MagicMock

import pytest

from live_object.adapters.memory import MemoryStore
from live_object.core.client import StoreClient
from live_object.core.codec import CodecRegistry, JsonCodec, PickleCodec
from live_object.core.enums import MaterializationPolicy, TransformationMode
from live_object.core.exceptions import CodecConstructionError, NamingSchemeConstructionError
from live_object.core.factory import ObjectFactory
from live_object.core.interceptor import AccessorInterceptor
from live_object.core.naming import DefaultNamingScheme
from live_object.core.reference import RemoteReference
from live_object.mapping.builder import entity
from live_object.mapping.descriptor import EntityDescriptor
from live_object.remote import RemoteList, RemoteMap, RemoteSet


@dataclass
class Account:
    id: str
    name: str = ""
    tags: list[str] = field(default_factory=list)
    settings: dict[str, Any] = field(default_factory=dict)


class _Instance:
    """Stand-in for a live object: only the identity accessors are needed."""

    def __init__(self, identity: Any = "acc-1") -> None:
        self.identity = identity

    def get_live_object_id(self) -> Any:
        return self.identity

    def set_live_object_id(self, value: Any) -> None:
        self.identity = value


class ArgCodec(PickleCodec):
    def __init__(self, level: int) -> None:
        self.level = level


class CodecFreeScheme(DefaultNamingScheme):
    def __init__(self) -> None:
        super().__init__(None)


def _descriptor(**options: Any) -> EntityDescriptor:
    builder = entity(Account).key("id").auto_fields()
    if "transformation" in options:
        builder.transformation(options["transformation"])
    if "naming_scheme" in options:
        builder.naming_scheme(options["naming_scheme"])
    for name, codec_type in options.get("field_codecs", {}).items():
        builder.field_codec(name, codec_type)
    return builder.build()


def _interceptor(
    client: Any = None,
    descriptor: EntityDescriptor | None = None,
    materialization: MaterializationPolicy = MaterializationPolicy.LAST_WRITE_WINS,
) -> AccessorInterceptor:
    registry = CodecRegistry()
    return AccessorInterceptor(
        client if client is not None else MagicMock(),
        descriptor or _descriptor(),
        registry,
        ObjectFactory(registry),
        materialization,
    )


class TestIdentity:
    def test_identity_round_trip_skips_live_map(self) -> None:
        interceptor = _interceptor()
        instance = _Instance()
        live_map = MagicMock()

        assert interceptor.intercept("set_id", None, ("acc-9",), instance, live_map) is None
        assert interceptor.intercept("get_id", None, (), instance, live_map) == "acc-9"
        assert live_map.method_calls == []

    def test_method_object_accepted(self) -> None:
        interceptor = _interceptor()

        def get_id() -> None:
            pass

        assert interceptor.intercept(get_id, None, (), _Instance("x"), MagicMock()) == "x"


class TestPassthrough:
    def test_calls_original(self) -> None:
        interceptor = _interceptor()
        live_map = MagicMock()
        original = MagicMock(return_value="hello")

        result = interceptor.intercept("greet", original, ("!",), _Instance(), live_map)

        assert result == "hello"
        original.assert_called_once_with("!")
        assert live_map.method_calls == []

    def test_undeclared_accessor_calls_original(self) -> None:
        interceptor = _interceptor()
        original = MagicMock(return_value=3)
        assert interceptor.intercept("get_age", original, (), _Instance(), MagicMock()) == 3

    def test_missing_original(self) -> None:
        interceptor = _interceptor()
        with pytest.raises(AttributeError, match="get_age"):
            interceptor.intercept("get_age", None, (), _Instance(), MagicMock())


class TestReadPath:
    def test_plain_value(self) -> None:
        interceptor = _interceptor()
        live_map = MagicMock()
        live_map.get.return_value = "Alice"

        assert interceptor.intercept("get_name", None, (), _Instance(), live_map) == "Alice"
        live_map.get.assert_called_once_with("name")

    def test_absent_plain_field(self) -> None:
        interceptor = _interceptor()
        live_map = MagicMock()
        live_map.get.return_value = None

        assert interceptor.intercept("get_name", None, (), _Instance(), live_map) is None
        live_map.fast_put.assert_not_called()
        live_map.fast_put_if_absent.assert_not_called()

    def test_reference_is_dereferenced(self) -> None:
        interceptor = _interceptor()
        live_map = MagicMock()
        live_map.get.return_value = RemoteReference(RemoteSet, "some:set", PickleCodec)

        result = interceptor.intercept("get_tags", None, (), _Instance(), live_map)

        assert isinstance(result, RemoteSet)
        assert result.name == "some:set"

    def test_lazy_materialization(self) -> None:
        interceptor = _interceptor()
        live_map = MagicMock()
        live_map.get.return_value = None

        result = interceptor.intercept("get_tags", None, (), _Instance(), live_map)

        assert isinstance(result, RemoteList)
        assert isinstance(result.codec, PickleCodec)
        live_map.fast_put.assert_called_once_with(
            "tags", RemoteReference(RemoteList, result.name, PickleCodec)
        )

    def test_materialized_name_is_stable(self) -> None:
        interceptor = _interceptor()
        live_map = MagicMock()
        live_map.get.return_value = None

        first = interceptor.intercept("get_tags", None, (), _Instance(), live_map)
        second = interceptor.intercept("get_tags", None, (), _Instance(), live_map)

        assert first.name == second.name

    def test_materialization_uses_field_codec(self) -> None:
        descriptor = _descriptor(field_codecs={"settings": JsonCodec})
        interceptor = _interceptor(descriptor=descriptor)
        live_map = MagicMock()
        live_map.get.return_value = None

        result = interceptor.intercept("get_settings", None, (), _Instance(), live_map)

        assert isinstance(result, RemoteMap)
        assert isinstance(result.codec, JsonCodec)

    def test_materialization_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        interceptor = _interceptor()
        live_map = MagicMock()
        live_map.get.return_value = None

        with caplog.at_level(logging.DEBUG, logger="live_object.core.interceptor"):
            interceptor.intercept("get_tags", None, (), _Instance(), live_map)

        assert "Materialized Account.tags as RemoteList" in caplog.text


class TestMaterializationPolicy:
    def test_last_write_wins_overwrites(self) -> None:
        interceptor = _interceptor(materialization=MaterializationPolicy.LAST_WRITE_WINS)
        live_map = MagicMock()
        live_map.get.return_value = None

        interceptor.intercept("get_tags", None, (), _Instance(), live_map)
        interceptor.intercept("get_tags", None, (), _Instance(), live_map)

        assert live_map.fast_put.call_count == 2
        live_map.fast_put_if_absent.assert_not_called()

    def test_first_write_wins_stores_once(self) -> None:
        interceptor = _interceptor(materialization=MaterializationPolicy.FIRST_WRITE_WINS)
        live_map = MagicMock()
        live_map.get.return_value = None
        live_map.fast_put_if_absent.return_value = True

        result = interceptor.intercept("get_tags", None, (), _Instance(), live_map)

        live_map.fast_put_if_absent.assert_called_once_with(
            "tags", RemoteReference(RemoteList, result.name, PickleCodec)
        )
        live_map.fast_put.assert_not_called()

    def test_first_write_wins_loser_returns_winner(self) -> None:
        interceptor = _interceptor(materialization=MaterializationPolicy.FIRST_WRITE_WINS)
        live_map = MagicMock()
        winner = RemoteReference(RemoteList, "winner:list", PickleCodec)
        live_map.get.side_effect = [None, winner]
        live_map.fast_put_if_absent.return_value = False

        result = interceptor.intercept("get_tags", None, (), _Instance(), live_map)

        assert isinstance(result, RemoteList)
        assert result.name == "winner:list"
        live_map.fast_put.assert_not_called()


class TestWritePath:
    def test_plain_value(self) -> None:
        interceptor = _interceptor()
        instance = _Instance()
        live_map = MagicMock()

        result = interceptor.intercept("set_name", None, ("Bob",), instance, live_map)

        assert result is instance
        live_map.fast_put.assert_called_once_with("name", "Bob")

    def test_none_value_stored_verbatim(self) -> None:
        interceptor = _interceptor()
        live_map = MagicMock()
        interceptor.intercept("set_name", None, (None,), _Instance(), live_map)
        live_map.fast_put.assert_called_once_with("name", None)

    def test_raw_mode_stores_collections_verbatim(self) -> None:
        descriptor = _descriptor(transformation=TransformationMode.RAW)
        interceptor = _interceptor(descriptor=descriptor)
        live_map = MagicMock()

        interceptor.intercept("set_tags", None, (["a", "b"],), _Instance(), live_map)

        live_map.fast_put.assert_called_once_with("tags", ["a", "b"])

    def test_annotation_mode_converts_list(self, client: StoreClient) -> None:
        interceptor = _interceptor(client=client)
        live_map = MagicMock()

        interceptor.intercept("set_tags", None, (["a", "b"],), _Instance(), live_map)

        (field_name, reference), _ = live_map.fast_put.call_args
        assert field_name == "tags"
        assert reference.type is RemoteList
        assert reference.codec_type is PickleCodec
        assert list(RemoteList(client, reference.name, PickleCodec())) == ["a", "b"]

    def test_annotation_mode_converts_mapping(self, client: StoreClient) -> None:
        interceptor = _interceptor(client=client)
        live_map = MagicMock()

        interceptor.intercept("set_settings", None, ({"theme": "dark"},), _Instance(), live_map)

        (_, reference), _ = live_map.fast_put.call_args
        assert reference.type is RemoteMap
        assert RemoteMap(client, reference.name, PickleCodec()).read_all() == {"theme": "dark"}

    def test_reassignment_replaces_contents(self, client: StoreClient) -> None:
        interceptor = _interceptor(client=client)
        live_map = MagicMock()
        instance = _Instance()

        interceptor.intercept("set_tags", None, (["a", "b", "c"],), instance, live_map)
        interceptor.intercept("set_tags", None, (["z"],), instance, live_map)

        (_, reference), _ = live_map.fast_put.call_args
        assert list(RemoteList(client, reference.name, PickleCodec())) == ["z"]

    def test_runtime_type_decides_remote_type(self, client: StoreClient) -> None:
        interceptor = _interceptor(client=client)
        live_map = MagicMock()

        interceptor.intercept("set_tags", None, ({"x", "y"},), _Instance(), live_map)

        (_, reference), _ = live_map.fast_put.call_args
        assert reference.type is RemoteSet

    def test_remote_object_stored_as_reference(self) -> None:
        interceptor = _interceptor()
        live_map = MagicMock()
        existing = RemoteList(MagicMock(), "shared:list", JsonCodec())

        interceptor.intercept("set_tags", None, (existing,), _Instance(), live_map)

        live_map.fast_put.assert_called_once_with(
            "tags", RemoteReference(RemoteList, "shared:list", JsonCodec)
        )

    def test_codec_failure_leaves_live_map_untouched(self) -> None:
        descriptor = _descriptor(field_codecs={"tags": ArgCodec})
        interceptor = _interceptor(descriptor=descriptor)
        live_map = MagicMock()

        with pytest.raises(CodecConstructionError):
            interceptor.intercept("set_tags", None, (["a"],), _Instance(), live_map)
        live_map.fast_put.assert_not_called()

    def test_naming_failure_leaves_live_map_untouched(self) -> None:
        descriptor = _descriptor(naming_scheme=CodecFreeScheme)
        interceptor = _interceptor(descriptor=descriptor)
        live_map = MagicMock()

        with pytest.raises(NamingSchemeConstructionError):
            interceptor.intercept("set_tags", None, (["a"],), _Instance(), live_map)
        live_map.fast_put.assert_not_called()

    def test_failed_conversion_keeps_previous_contents(
        self, client: StoreClient, store: MemoryStore
    ) -> None:
        interceptor = _interceptor(client=client)
        live_map = MagicMock()
        instance = _Instance()
        interceptor.intercept("set_tags", None, (["a", "b"],), instance, live_map)
        (_, reference), _ = live_map.fast_put.call_args

        with pytest.raises(TypeError):
            interceptor.intercept(
                "set_tags", None, (["c", threading.Lock()],), instance, live_map
            )

        assert live_map.fast_put.call_count == 1
        assert list(RemoteList(client, reference.name, PickleCodec())) == ["a", "b"]
        assert list(store.data) == [reference.name]

    def test_failed_mapping_conversion_keeps_previous_entries(self, client: StoreClient) -> None:
        interceptor = _interceptor(client=client)
        live_map = MagicMock()
        instance = _Instance()
        interceptor.intercept("set_settings", None, ({"theme": "dark"},), instance, live_map)
        (_, reference), _ = live_map.fast_put.call_args

        with pytest.raises(TypeError):
            interceptor.intercept(
                "set_settings", None, ({"lock": threading.Lock()},), instance, live_map
            )

        assert RemoteMap(client, reference.name, PickleCodec()).read_all() == {"theme": "dark"}

    def test_empty_collection_clears_previous_contents(
        self, client: StoreClient, store: MemoryStore
    ) -> None:
        interceptor = _interceptor(client=client)
        live_map = MagicMock()
        instance = _Instance()
        interceptor.intercept("set_tags", None, (["a"],), instance, live_map)
        interceptor.intercept("set_tags", None, ([],), instance, live_map)

        (_, reference), _ = live_map.fast_put.call_args
        assert list(RemoteList(client, reference.name, PickleCodec())) == []
        assert store.data == {}
