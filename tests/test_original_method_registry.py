from __future__ import annotations

import dataclasses

import pytest

from anystub.interception import (
    OriginalMethodRegistry,
    VisibilityMismatch,
)
from anystub.interception.markers import FORWARDER_ATTRIBUTE
from anystub.types import Visibility


def _forwarder():
    def forward(receiver, *args, **kwargs):
        return "forwarded"

    setattr(forward, FORWARDER_ATTRIBUTE, True)
    return forward


class TestCapture:

    def test_own_method_is_snapshotted(self, account_class):
        record = OriginalMethodRegistry().capture(
            account_class, "balance"
        )
        assert record.existed_before is True
        assert (
            record.implementation
            is account_class.__dict__["balance"]
        )
        assert record.visibility == Visibility.PUBLIC
        assert record.owner is account_class

    def test_inherited_method_has_no_snapshot(self, hierarchy):
        _, Sub = hierarchy
        record = OriginalMethodRegistry().capture(Sub, "name")
        assert record.existed_before is False
        assert record.implementation is None
        assert record.visibility == Visibility.PUBLIC

    def test_undefined_method_still_yields_record(
        self, account_class
    ):
        record = OriginalMethodRegistry().capture(
            account_class, "missing"
        )
        assert record.existed_before is False
        assert record.visibility == Visibility.UNDEFINED

    def test_private_name_captured_mangled(self, account_class):
        record = OriginalMethodRegistry().capture(
            account_class, "__secret"
        )
        assert record.method_name == "_Account__secret"
        assert record.visibility == Visibility.PRIVATE
        assert record.existed_before is True

    def test_record_is_immutable(self, account_class):
        record = OriginalMethodRegistry().capture(
            account_class, "balance"
        )
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.method_name = "other"


class TestRestore:

    def test_restores_overwritten_own_method(
        self, account_class
    ):
        registry = OriginalMethodRegistry()
        original = account_class.__dict__["balance"]
        record = registry.capture(account_class, "balance")

        account_class.balance = _forwarder()
        registry.restore(record)

        assert account_class.__dict__["balance"] is original
        assert account_class().balance() == 100

    def test_restores_static_method_descriptor(self):
        class Util:
            @staticmethod
            def double(x):
                return 2 * x

        registry = OriginalMethodRegistry()
        original = Util.__dict__["double"]
        record = registry.capture(Util, "double")

        Util.double = _forwarder()
        registry.restore(record)

        assert Util.__dict__["double"] is original
        assert Util().double(4) == 8

    def test_removes_forwarder_for_inherited_method(
        self, hierarchy
    ):
        Base, Sub = hierarchy
        registry = OriginalMethodRegistry()
        record = registry.capture(Sub, "name")

        Sub.name = _forwarder()
        registry.restore(record)

        assert "name" not in Sub.__dict__
        assert Sub().name() == "base"

    def test_leaves_foreign_definition_of_inherited_name(
        self, hierarchy
    ):
        _, Sub = hierarchy
        registry = OriginalMethodRegistry()
        record = registry.capture(Sub, "name")

        Sub.name = lambda self: "user-defined"
        registry.restore(record)

        assert Sub().name() == "user-defined"

    def test_untouched_method_is_left_alone(
        self, account_class
    ):
        registry = OriginalMethodRegistry()
        original = account_class.__dict__["balance"]
        record = registry.capture(account_class, "balance")

        registry.restore(record)

        assert account_class.__dict__["balance"] is original

    def test_visibility_drift_is_fatal(self, account_class):
        registry = OriginalMethodRegistry()
        record = registry.capture(account_class, "balance")
        corrupted = dataclasses.replace(
            record, visibility=Visibility.PRIVATE
        )

        with pytest.raises(VisibilityMismatch) as excinfo:
            registry.restore(corrupted)

        assert excinfo.value.expected == Visibility.PRIVATE
        assert excinfo.value.actual == Visibility.PUBLIC

    def test_visibility_check_can_be_disabled(
        self, account_class
    ):
        registry = OriginalMethodRegistry(
            verify_visibility=False
        )
        record = registry.capture(account_class, "balance")
        corrupted = dataclasses.replace(
            record, visibility=Visibility.PRIVATE
        )

        registry.restore(corrupted)
