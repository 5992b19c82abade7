# SPDX-License-Identifier: LGPL-3.0-or-later
"""End-to-end console sessions against an in-memory endpoint."""
from __future__ import annotations

import unittest
from unittest.mock import MagicMock

from fakes.fake_endpoint import FakeEndpoint
from fakes.fake_logger import FakeLogger
from fakes.scripted_prompter import ScriptedPrompter
from vsnapctl.console.session import SessionController
from vsnapctl.vmware.errors import ExitCode

HOST = "vc.example.com"


class _InterruptingPrompter(ScriptedPrompter):
    def ask(self, prompt, *, default=None):
        if prompt == "vsnapctl":
            raise KeyboardInterrupt
        return super().ask(prompt, default=default)


class SessionTestBase(unittest.TestCase):
    def run_session(self, endpoint, specs, answers, *, prompter_cls=ScriptedPrompter, **kw):
        self.prompter = prompter_cls(answers)
        self.renderer = MagicMock()
        self.logger = FakeLogger()
        ctl = SessionController(
            endpoint,
            HOST,
            specs,
            prompter=self.prompter,
            renderer=self.renderer,
            logger=self.logger,
            **kw,
        )
        return ctl.run()

    def rendered(self, method):
        return [c[0][0] for c in getattr(self.renderer, method).call_args_list]


class TestHappyPath(SessionTestBase):
    def test_create_on_two_guests(self):
        ep = FakeEndpoint({"vm1": [], "vm2": []})
        rc = self.run_session(ep, ["vm1", "vm2"], ["Y", "admin", "secret", "CREATE", "pre-patch", "EXIT"])

        self.assertEqual(rc, ExitCode.OK)
        self.assertEqual(ep.calls[0], ("connect", HOST, "admin"))
        self.assertEqual(ep.called("create"), [("create", "vm1", "pre-patch"), ("create", "vm2", "pre-patch")])
        self.assertEqual(ep.called("disconnect"), [("disconnect", HOST)])
        self.assertEqual(ep.calls[-1][0], "disconnect")
        self.assertIn("Disconnecting. Goodbye.", self.rendered("info"))

    def test_prompt_order(self):
        ep = FakeEndpoint({"vm1": []})
        self.run_session(ep, ["vm1"], ["yes", "admin", "secret", "EXIT"])
        self.assertEqual(
            self.prompter.asked,
            [f"Attempt connection to {HOST}? (Y/N)", "Username", f"Password for admin@{HOST}", "vsnapctl"],
        )

    def test_default_user_used_on_blank_answer(self):
        ep = FakeEndpoint({"vm1": []})
        rc = self.run_session(ep, ["vm1"], ["y", "", "secret", "EXIT"], user="svc-snap")
        self.assertEqual(rc, ExitCode.OK)
        self.assertEqual(ep.calls[0], ("connect", HOST, "svc-snap"))

    def test_closed_input_in_loop_disconnects(self):
        ep = FakeEndpoint({"vm1": []})
        rc = self.run_session(ep, ["vm1"], ["Y", "admin", "secret"])
        self.assertEqual(rc, ExitCode.OK)
        self.assertEqual(len(ep.called("disconnect")), 1)

    def test_host_comparison_ignores_case_and_port(self):
        ep = FakeEndpoint({"vm1": []}, session_host="VC.Example.com:443")
        rc = self.run_session(ep, ["vm1"], ["Y", "admin", "secret", "EXIT"])
        self.assertEqual(rc, ExitCode.OK)


class TestConnectGate(SessionTestBase):
    def test_no_means_no_connection(self):
        ep = FakeEndpoint({"vm1": []})
        rc = self.run_session(ep, ["vm1"], ["N"])
        self.assertEqual(rc, ExitCode.DECLINED)
        self.assertEqual(ep.calls, [])

    def test_unrecognized_answer_declines(self):
        ep = FakeEndpoint({"vm1": []})
        rc = self.run_session(ep, ["vm1"], ["sure"])
        self.assertEqual(rc, ExitCode.DECLINED)
        self.assertEqual(len(self.prompter.asked), 1)
        self.assertEqual(ep.calls, [])

    def test_closed_input_declines(self):
        ep = FakeEndpoint({"vm1": []})
        rc = self.run_session(ep, ["vm1"], [])
        self.assertEqual(rc, ExitCode.DECLINED)
        self.assertEqual(ep.calls, [])

    def test_missing_client_library(self):
        ep = FakeEndpoint({"vm1": []}, available=False)
        rc = self.run_session(ep, ["vm1"], ["Y"])
        self.assertEqual(rc, ExitCode.TOOL_MISSING)
        self.assertEqual(self.prompter.asked, [])


class TestAuthentication(SessionTestBase):
    def test_bad_password(self):
        ep = FakeEndpoint({"vm1": []})
        rc = self.run_session(ep, ["vm1"], ["Y", "admin", "wrong"])
        self.assertEqual(rc, ExitCode.AUTH)
        self.assertEqual(ep.called("resolve"), [])
        self.assertEqual(ep.called("disconnect"), [])
        self.assertFalse(any("wrong" in m for m in self.logger.messages()))

    def test_empty_password(self):
        ep = FakeEndpoint({"vm1": []})
        rc = self.run_session(ep, ["vm1"], ["Y", "admin", ""])
        self.assertEqual(rc, ExitCode.AUTH)
        self.assertEqual(ep.called("connect"), [])

    def test_session_for_other_host_is_closed(self):
        ep = FakeEndpoint({"vm1": []}, session_host="other.example.com")
        rc = self.run_session(ep, ["vm1"], ["Y", "admin", "secret", "LIST ALL", "EXIT"])
        self.assertEqual(rc, ExitCode.AUTH)
        self.assertEqual(ep.called("resolve"), [])
        self.assertEqual(ep.called("disconnect"), [("disconnect", "other.example.com")])
        self.assertTrue(any("other.example.com" in m for m in self.rendered("error")))
        detail = [m for m in self.logger.messages("debug") if m.startswith("Fatal detail")]
        self.assertEqual(len(detail), 1)
        self.assertIn('"requested": "vc.example.com"', detail[0])
        self.assertIn('"code": 10', detail[0])


class TestGuestResolution(SessionTestBase):
    def test_unknown_guest_dropped_by_default(self):
        ep = FakeEndpoint({"vm1": []})
        rc = self.run_session(ep, ["vm1", "ghost"], ["Y", "admin", "secret", "CREATE", "s1", "EXIT"])
        self.assertEqual(rc, ExitCode.OK)
        self.assertEqual(ep.called("create"), [("create", "vm1", "s1")])
        self.assertTrue(any("ghost" in m for m in self.rendered("error")))

    def test_unknown_guest_aborts_when_strict(self):
        ep = FakeEndpoint({"vm1": []})
        rc = self.run_session(ep, ["vm1", "ghost"], ["Y", "admin", "secret", "EXIT"], strict_guests=True)
        self.assertEqual(rc, ExitCode.NOT_FOUND)
        self.assertEqual(ep.called("create"), [])
        self.assertEqual(len(ep.called("disconnect")), 1)
        self.assertNotIn("vsnapctl", self.prompter.asked)

    def test_no_guest_resolves(self):
        ep = FakeEndpoint({})
        rc = self.run_session(ep, ["a", "b"], ["Y", "admin", "secret"])
        self.assertEqual(rc, ExitCode.NOT_FOUND)
        self.assertEqual(len(ep.called("disconnect")), 1)


class TestInterrupt(SessionTestBase):
    def test_ctrl_c_in_loop_still_disconnects(self):
        ep = FakeEndpoint({"vm1": []})
        rc = self.run_session(ep, ["vm1"], ["Y", "admin", "secret"], prompter_cls=_InterruptingPrompter)
        self.assertEqual(rc, ExitCode.INTERRUPTED)
        self.assertEqual(len(ep.called("disconnect")), 1)


if __name__ == "__main__":
    unittest.main()
