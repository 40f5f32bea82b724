"""
Tests for the SelectionDispatcher routing.
"""

from unittest.mock import MagicMock

import pytest

from promptdeck.search.dispatcher import (
    NOTIFY_DURATION_MS,
    UNSUPPORTED_MESSAGE,
    WORKSPACE_VIEW,
    SelectionDispatcher,
)
from promptdeck.search.prefixes import PREFIXES
from promptdeck.search.results import GeneratedContentResult, TemplateResult


@pytest.fixture
def calls():
    """Single mock so call order across collaborators is recorded."""
    return MagicMock()


@pytest.fixture
def dispatcher(calls):
    return SelectionDispatcher(
        reset=calls.reset,
        set_current_template=calls.set_current_template,
        go_to=calls.go_to,
        notify=calls.notify,
    )


class TestTemplateSelection:
    def test_reset_then_handoff_then_navigation(self, dispatcher, calls):
        item = TemplateResult(name="Cold email", role="Sales")
        dispatcher.on_select("template", item)
        assert [c[0] for c in calls.mock_calls] == ["reset", "set_current_template", "go_to"]
        calls.set_current_template.assert_called_once_with(item)
        calls.go_to.assert_called_once_with(WORKSPACE_VIEW)

    def test_no_notification(self, dispatcher, calls):
        dispatcher.on_select("template", TemplateResult(name="t"))
        calls.notify.assert_not_called()


class TestUnsupportedSelection:
    @pytest.mark.parametrize("prefix", [p for p in PREFIXES if p != "template"])
    def test_only_notifies(self, dispatcher, calls, prefix):
        dispatcher.on_select(prefix, GeneratedContentResult(name="x"))
        calls.notify.assert_called_once_with("info", UNSUPPORTED_MESSAGE, NOTIFY_DURATION_MS)
        calls.reset.assert_not_called()
        calls.set_current_template.assert_not_called()
        calls.go_to.assert_not_called()

    def test_fixed_duration(self):
        assert NOTIFY_DURATION_MS == 6000

    def test_custom_duration(self, calls):
        dispatcher = SelectionDispatcher(
            reset=calls.reset,
            set_current_template=calls.set_current_template,
            go_to=calls.go_to,
            notify=calls.notify,
            duration_ms=3000,
        )
        dispatcher.on_select("vault", GeneratedContentResult(name="x"))
        calls.notify.assert_called_once_with("info", UNSUPPORTED_MESSAGE, 3000)
