# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tests for per-guest batch snapshot operations."""
from __future__ import annotations

import pytest

from fakes.fake_endpoint import FakeEndpoint
from fakes.fake_logger import FakeLogger
from vsnapctl.console.models import EndpointSession, GuestBatch, GuestHandle
from vsnapctl.console.operations import SnapshotOperations
from vsnapctl.core.exceptions import OperationError


def _ops(endpoint, *names):
    batch = GuestBatch(tuple(GuestHandle(n, ref=n) for n in names))
    return SnapshotOperations(endpoint, EndpointSession(host="vc"), batch, FakeLogger())


@pytest.mark.unit
class TestListOperations:
    def test_list_all_returns_every_snapshot_per_guest(self):
        ep = FakeEndpoint({"vm1": ["a", "b"], "vm2": []})
        results = list(_ops(ep, "vm1", "vm2").list_all())

        assert [r.guest.name for r in results] == ["vm1", "vm2"]
        assert [s.name for s in results[0].value] == ["a", "b"]
        assert results[1].ok and results[1].value == []

    def test_list_last_picks_newest_and_skips_empty(self):
        ep = FakeEndpoint({"vm1": ["a", "b"], "vm2": []})
        first, second = list(_ops(ep, "vm1", "vm2").list_last())

        assert first.ok and first.value.name == "b"
        assert second.skipped and not second.ok
        assert "no snapshots" in second.note

    def test_failure_on_one_guest_does_not_stop_the_rest(self):
        ep = FakeEndpoint({"vm1": ["a"], "vm2": ["b"]}, fail_list={"vm1"})
        first, second = list(_ops(ep, "vm1", "vm2").list_all())

        assert isinstance(first.error, OperationError)
        assert second.ok


@pytest.mark.unit
class TestCreate:
    def test_same_name_on_every_guest(self):
        ep = FakeEndpoint({"vm1": [], "vm2": ["old"]})
        results = list(_ops(ep, "vm1", "vm2").create("pre-patch"))

        assert all(r.ok for r in results)
        assert ep.called("create") == [("create", "vm1", "pre-patch"), ("create", "vm2", "pre-patch")]
        assert ep.snapshots == {"vm1": ["pre-patch"], "vm2": ["old", "pre-patch"]}

    def test_results_stream_before_later_guests_run(self):
        ep = FakeEndpoint({"vm1": [], "vm2": []})
        it = _ops(ep, "vm1", "vm2").create("s1")
        next(it)
        assert ep.called("create") == [("create", "vm1", "s1")]

    def test_partial_failure(self):
        ep = FakeEndpoint({"vm1": [], "vm2": []}, fail_create={"vm1"})
        first, second = list(_ops(ep, "vm1", "vm2").create("s1"))

        assert first.error is not None and "disk locked" in str(first.error)
        assert second.ok and second.value.name == "s1"


@pytest.mark.unit
class TestDeleteLast:
    def test_deletes_only_most_recent(self):
        ep = FakeEndpoint({"vm1": ["a", "b"], "vm2": ["c"]})
        results = list(_ops(ep, "vm1", "vm2").delete_last())

        assert [r.value.name for r in results] == ["b", "c"]
        assert ep.snapshots == {"vm1": ["a"], "vm2": []}

    def test_guest_without_snapshots_is_skipped(self):
        ep = FakeEndpoint({"vm1": [], "vm2": ["c"]})
        first, second = list(_ops(ep, "vm1", "vm2").delete_last())

        assert first.skipped
        assert ep.called("delete") == [("delete", "vm2", "c")]
        assert second.ok

    def test_unexpected_error_is_wrapped(self):
        ep = FakeEndpoint({"vm1": ["a"], "vm2": ["b"]}, fail_delete={"vm1"})
        first, second = list(_ops(ep, "vm1", "vm2").delete_last())

        assert isinstance(first.error, OperationError)
        assert isinstance(first.error.cause, RuntimeError)
        assert ep.snapshots["vm1"] == ["a"]
        assert second.ok and ep.snapshots["vm2"] == []
