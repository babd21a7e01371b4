"""Unit tests for ObjectFactory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest

from live_object.core.codec import CodecRegistry, JsonCodec, PickleCodec
from live_object.core.exceptions import ReferenceResolutionError, RemoteObjectConstructionError
from live_object.core.factory import ObjectFactory
from live_object.core.reference import RemoteReference
from live_object.remote import RemoteList, RemoteSet


@dataclass
class Owner:
    id: str


class TestCreate:
    def test_create(self) -> None:
        codec = PickleCodec()
        obj = ObjectFactory(CodecRegistry()).create(MagicMock(), RemoteList, "l", codec)
        assert isinstance(obj, RemoteList)
        assert obj.name == "l"
        assert obj.codec is codec

    def test_not_a_remote_type(self) -> None:
        with pytest.raises(RemoteObjectConstructionError, match="not a RemoteObject type"):
            ObjectFactory(CodecRegistry()).create(MagicMock(), dict, "d", PickleCodec())


class TestFromReference:
    def test_uses_shared_codec_instance(self) -> None:
        registry = CodecRegistry()
        factory = ObjectFactory(registry)

        obj = factory.from_reference(MagicMock(), RemoteReference(RemoteList, "l", JsonCodec))

        assert obj.codec is registry.get_codec(JsonCodec)

    def test_reference_without_codec(self) -> None:
        factory = ObjectFactory(CodecRegistry())
        with pytest.raises(ReferenceResolutionError, match="carries no codec"):
            factory.from_reference(MagicMock(), RemoteReference(RemoteList, "l"))

    @pytest.mark.parametrize("expected_type", [list[str], Optional[list], Any, None])
    def test_matching_declared_type_is_quiet(
        self, expected_type: Any, caplog: pytest.LogCaptureFixture
    ) -> None:
        factory = ObjectFactory(CodecRegistry())
        reference = RemoteReference(RemoteList, "l", PickleCodec)

        with caplog.at_level(logging.DEBUG, logger="live_object.core.factory"):
            obj = factory.from_reference(MagicMock(), reference, expected_type)

        assert isinstance(obj, RemoteList)
        assert "Reference" not in caplog.text

    def test_mismatched_declared_type_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        factory = ObjectFactory(CodecRegistry())
        reference = RemoteReference(RemoteSet, "s", PickleCodec)

        with caplog.at_level(logging.DEBUG, logger="live_object.core.factory"):
            obj = factory.from_reference(MagicMock(), reference, list[str])

        assert isinstance(obj, RemoteSet)
        assert "Reference 's' is a RemoteSet" in caplog.text

    def test_entity_reference_uses_resolver(self) -> None:
        resolved = object()
        resolver = MagicMock(return_value=resolved)
        factory = ObjectFactory(CodecRegistry(), entity_resolver=resolver)
        reference = RemoteReference(Owner, "live_object:{aa}:Owner", PickleCodec)

        assert factory.from_reference(MagicMock(), reference, Optional[Owner]) is resolved
        resolver.assert_called_once_with(reference)

    def test_entity_reference_without_resolver(self) -> None:
        factory = ObjectFactory(CodecRegistry())
        reference = RemoteReference(Owner, "live_object:{aa}:Owner", PickleCodec)
        with pytest.raises(ReferenceResolutionError, match="no resolver for entity type Owner"):
            factory.from_reference(MagicMock(), reference, Owner)
