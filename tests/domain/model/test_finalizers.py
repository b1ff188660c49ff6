from __future__ import annotations

from projclaim.domain.model import finalizers


def test_with_finalizer_appends_once() -> None:
    current = ("other.io/guard",)

    added = finalizers.with_finalizer(current, "mine")
    again = finalizers.with_finalizer(added, "mine")

    assert added == ("other.io/guard", "mine")
    assert again == added


def test_without_keeps_foreign_markers_in_order() -> None:
    current = ("a", "mine", "b", "mine")

    assert finalizers.without(current, "mine") == ("a", "b")
    assert finalizers.without(current, "missing") == current


def test_contains_accepts_any_iterable() -> None:
    assert finalizers.contains(["a", "b"], "b")
    assert not finalizers.contains((), "b")
