# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tests for guest list splitting and batch resolution."""
from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from fakes.fake_endpoint import FakeEndpoint
from fakes.fake_logger import FakeLogger
from vsnapctl.console.batch import GuestBatchResolver, split_guest_list
from vsnapctl.console.models import EndpointSession
from vsnapctl.core.exceptions import Fatal, NotFoundError, VMwareError
from vsnapctl.vmware.errors import ExitCode


@pytest.mark.unit
class TestSplitGuestList:
    def test_trims_and_keeps_order(self):
        assert split_guest_list(" vm2 , vm1,vm3 ") == ["vm2", "vm1", "vm3"]

    def test_single_guest(self):
        assert split_guest_list("web01") == ["web01"]

    @pytest.mark.parametrize("text", ["", "vm1,", ",vm1", "vm1,,vm2", "vm1, ,vm2"])
    def test_empty_entry_is_usage_error(self, text):
        with pytest.raises(Fatal) as ei:
            split_guest_list(text)
        assert ei.value.code == ExitCode.USAGE

    def test_duplicates_kept_once_with_warning(self):
        log = FakeLogger()
        assert split_guest_list("vm1,vm2,vm1", log) == ["vm1", "vm2"]
        assert any("vm1" in m for m in log.messages("warning"))


@pytest.mark.unit
class TestGuestBatchResolver:
    def _resolver(self, endpoint, *, strict=False):
        renderer = MagicMock()
        session = EndpointSession(host="vc.example.com", user="admin")
        return GuestBatchResolver(endpoint, session, renderer, FakeLogger(), strict=strict), renderer

    def test_all_resolve_in_order(self):
        ep = FakeEndpoint({"vm1": [], "vm2": []})
        resolver, renderer = self._resolver(ep)
        report = resolver.resolve(["vm2", "vm1"])
        assert report.batch.names() == ("vm2", "vm1")
        assert report.failures == []
        renderer.error.assert_not_called()
        renderer.warn.assert_not_called()

    def test_missing_guest_dropped_and_reported(self):
        ep = FakeEndpoint({"vm1": [], "vm3": []})
        resolver, renderer = self._resolver(ep)
        report = resolver.resolve(["vm1", "vm2", "vm3"])

        assert report.batch.names() == ("vm1", "vm3")
        assert [n for n, _ in report.failures] == ["vm2"]
        assert isinstance(report.failures[0][1], NotFoundError)
        assert "vm2" in renderer.error.call_args[0][0]
        assert "2 of 3" in renderer.warn.call_args[0][0]

    def test_strict_aborts_after_attempting_every_guest(self):
        ep = FakeEndpoint({"vm1": []})
        resolver, renderer = self._resolver(ep, strict=True)
        with pytest.raises(Fatal) as ei:
            resolver.resolve(["vm2", "vm1", "vm3"])

        assert ei.value.code == ExitCode.NOT_FOUND
        assert "vm2" in ei.value.msg and "vm3" in ei.value.msg
        assert [c[1] for c in ep.called("resolve")] == ["vm2", "vm1", "vm3"]
        assert renderer.error.call_count == 2

    def test_empty_batch_aborts_even_when_not_strict(self):
        ep = FakeEndpoint({})
        resolver, _renderer = self._resolver(ep)
        with pytest.raises(Fatal) as ei:
            resolver.resolve(["vm1", "vm2"])
        assert ei.value.code == ExitCode.NOT_FOUND

    def test_unexpected_lookup_error_is_wrapped(self):
        ep = FakeEndpoint({"vm1": []})
        ep.resolve_guest = MagicMock(side_effect=[RuntimeError("view exploded"), ep.resolve_guest(None, "vm1")])
        resolver, _renderer = self._resolver(ep)
        report = resolver.resolve(["bad", "vm1"])

        assert report.batch.names() == ("vm1",)
        err = report.failures[0][1]
        assert isinstance(err, VMwareError)
        assert isinstance(err.cause, RuntimeError)
