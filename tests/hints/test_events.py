"""Tests for popup lifecycle subscriptions."""

from unittest.mock import Mock

from lsprotocol.types import Position

from codehints.hints.results import HintResult, HintResults


def pos(line, character):
    return Position(line=line, character=character)


def test_shown_close_update_have_no_payload(hints, host):
    """Test that shown, close and update handlers get no arguments."""
    results = HintResults.from_strings(["foo"], pos(0, 0), pos(0, 3))
    shown, close, update = Mock(), Mock(), Mock()

    hints.events.on_shown(results, shown)
    hints.events.on_close(results, close)
    hints.events.on_update(results, update)

    bag = results.to_bag()
    host.emit(bag, "shown")
    host.emit(bag, "update")
    host.emit(bag, "close")

    shown.assert_called_once_with()
    update.assert_called_once_with()
    close.assert_called_once_with()


def test_subscribe_before_first_marshal(hints, host):
    """Test that subscribing before the set is shown still works."""
    results = HintResults.from_strings(["foo"], pos(0, 0), pos(0, 3))
    shown = Mock()

    hints.events.on_shown(results, shown)
    host.emit(results.to_bag(), "shown")

    shown.assert_called_once_with()


def test_events_are_scoped_to_their_set(hints, host):
    """Test that events for one set do not reach another set's handlers."""
    first = HintResults.from_strings(["foo"], pos(0, 0), pos(0, 3))
    second = HintResults.from_strings(["foo"], pos(0, 0), pos(0, 3))
    shown = Mock()

    hints.events.on_shown(first, shown)
    host.emit(second.to_bag(), "shown")

    shown.assert_not_called()


def test_pick_decodes_original_hint(hints, host):
    """Test that pick handlers receive the original HintResult."""
    hint = HintResult("foo", display_text="Foo")
    results = HintResults.from_hints([hint], pos(0, 0), pos(0, 3))
    picked = Mock()

    hints.events.on_pick(results, picked)
    bag = results.to_bag()
    host.emit(bag, "pick", bag.results[0])

    picked.assert_called_once()
    assert picked.call_args[0][0] is hint


def test_pick_of_plain_text(hints, host):
    """Test that picking a string candidate passes a text-only hint."""
    results = HintResults.from_strings(["foo", "bar"], pos(0, 0), pos(0, 3))
    picked = Mock()

    hints.events.on_pick(results, picked)
    bag = results.to_bag()
    host.emit(bag, "pick", bag.results[1])

    picked.assert_called_once_with(HintResult("bar"))


def test_select_passes_hint_and_element(hints, host):
    """Test that select handlers get the hint and the row element."""
    hint = HintResult("foo")
    results = HintResults.from_hints([hint], pos(0, 0), pos(0, 3))
    selected = Mock()
    element = object()

    hints.events.on_select(results, selected)
    bag = results.to_bag()
    host.emit(bag, "select", bag.results[0], element)

    selected.assert_called_once_with(hint, element)


def test_subscription_can_be_removed(hints, host):
    """Test that a removed handler is no longer called."""
    results = HintResults.from_strings(["foo"], pos(0, 0), pos(0, 3))
    shown = Mock()

    subscription = hints.events.on_shown(results, shown)
    subscription.remove()
    host.emit(results.to_bag(), "shown")

    shown.assert_not_called()


def test_pick_runs_applier_instead_of_default_insert(hints, host, make_editor):
    """Test that a picked hint with an applier skips default insertion."""
    applier = Mock()
    hint = HintResult("foo()", applier=applier)
    results = HintResults.from_hints([hint], pos(0, 0), pos(0, 3))
    hints.register_provider("javascript", lambda editor, options: results)
    picked = Mock()
    hints.events.on_pick(results, picked)
    editor = make_editor()

    bag = hints.dispatcher.trigger(editor)
    host.pick(editor, bag, bag.results[0])

    applier.assert_called_once_with(editor, hint, pos(0, 0), pos(0, 3))
    host.default_insert.assert_not_called()
    picked.assert_called_once_with(hint)


def test_pick_without_applier_uses_default_insert(hints, host, make_editor):
    """Test that a picked hint without an applier is inserted by the host."""
    results = HintResults.from_strings(["foo"], pos(0, 0), pos(0, 3))
    hints.register_provider("javascript", lambda editor, options: results)
    editor = make_editor()

    bag = hints.dispatcher.trigger(editor)
    host.pick(editor, bag, bag.results[0])

    host.default_insert.assert_called_once_with(editor, "foo")
