"""Tests for module reconciliation."""

import pytest

from transmission_relay.rendering import is_renderable, reconcile


def ids(modules):
    return [m["id"] for m in modules]


@pytest.fixture
def modules():
    return [{"id": "a"}, {"id": "b"}, {"id": "c"}]


class TestReconcile:
    """Tests for reconcile()."""

    def test_explicit_order_then_orphans(self, modules):
        """Ordered ids come first, then orphans in document order."""
        assert ids(reconcile(modules, ["c", "a"])) == ["c", "a", "b"]

    @pytest.mark.parametrize("order", [None, []])
    def test_absent_order_is_identity(self, modules, order):
        """Without an order the modules are returned unchanged."""
        assert reconcile(modules, order) is modules

    def test_non_list_order_is_identity(self, modules):
        """An order that is not a list is ignored."""
        assert reconcile(modules, "c,a") is modules

    def test_unknown_ids_fall_back_to_modules(self, modules):
        """An order naming no existing module yields document order."""
        assert ids(reconcile(modules, ["x", "y"])) == ["a", "b", "c"]

    def test_stale_ids_dropped(self, modules):
        """Ids without a module are skipped silently."""
        assert ids(reconcile(modules, ["x", "b", "y"])) == ["b", "a", "c"]

    def test_orphans_never_dropped(self):
        """Every module not named in the order is appended in order."""
        modules = [{"id": i} for i in "abcdef"]

        result = reconcile(modules, ["e", "b"])

        assert ids(result) == ["e", "b", "a", "c", "d", "f"]

    def test_idempotent(self, modules):
        """Re-applying the same order changes nothing."""
        once = reconcile(modules, ["c", "x", "a"])

        assert reconcile(once, ["c", "x", "a"]) == once

    def test_duplicate_ids_in_order_placed_once(self, modules):
        """An id repeated in the order appears once."""
        assert ids(reconcile(modules, ["b", "b", "a"])) == ["b", "a", "c"]

    def test_last_duplicate_module_wins(self):
        """Repeated module ids resolve to the last occurrence."""
        first = {"id": "a", "title": "first"}
        second = {"id": "a", "title": "second"}

        result = reconcile([first, {"id": "b"}, second], ["a"])

        assert result == [second, {"id": "b"}]

    def test_empty_modules_with_order(self):
        """An empty module list stays empty."""
        assert reconcile([], ["a"]) == []

    def test_non_list_modules(self):
        """Modules that are not a list produce no modules."""
        assert reconcile(None, ["a"]) == []
        assert reconcile({"id": "a"}, None) == []

    def test_invalid_entries_carried_as_orphans(self, modules):
        """Entries without ids stay in place for the render gate."""
        mixed = [None, *modules, {"type": "article"}]

        result = reconcile(mixed, ["c"])

        assert result == [{"id": "c"}, None, {"id": "a"}, {"id": "b"}, {"type": "article"}]

    def test_unhashable_ids_tolerated(self, modules):
        """Unusable ids in the order or the modules do not raise."""
        odd = {"id": ["x"], "type": "article"}

        result = reconcile([*modules, odd], [["x"], "b"])

        assert result == [{"id": "b"}, {"id": "a"}, {"id": "c"}, odd]

    def test_does_not_mutate_inputs(self, modules):
        """Reconciliation never mutates the document's lists."""
        order = ["c", "a"]
        reconcile(modules, order)

        assert ids(modules) == ["a", "b", "c"]
        assert order == ["c", "a"]


class TestIsRenderable:
    """Tests for the per-item render gate."""

    def test_complete_module(self):
        """A module with id and type is renderable."""
        assert is_renderable({"id": "a", "type": "article"})

    @pytest.mark.parametrize(
        "item",
        [
            None,
            "article",
            42,
            {"id": "a"},
            {"type": "article"},
            {"id": "", "type": "article"},
            {"id": "a", "type": ""},
        ],
    )
    def test_incomplete_items(self, item):
        """Non-objects and modules missing id or type are skipped."""
        assert not is_renderable(item)
