"""
Unit tests for the decode context and requirement resolution.
"""

from types import SimpleNamespace

from instagram_sdk.serialization.context import DecodeContext
from instagram_sdk.serialization.descriptor import Ancestor, IndexLookup, TargetDescriptor
from instagram_sdk.serialization.requirements import (
    deliver,
    resolve_requirement,
    resolve_requirements,
)


class TestDecodeContext:
    """Test the per-decode index and ancestor chain."""

    def test_register_and_lookup(self):
        context = DecodeContext()
        user = object()
        context.register("user", 5, user)

        assert context.lookup("user", 5) is user
        assert context.lookup("user", "5") is user
        assert context.lookup("media", 5) is None
        assert len(context) == 1

    def test_first_registration_wins(self):
        context = DecodeContext()
        first, second = object(), object()
        context.register("user", 1, first)
        context.register("user", 1, second)
        assert context.lookup("user", 1) is first

    def test_none_identifier_is_ignored(self):
        context = DecodeContext()
        context.register("user", None, object())
        assert len(context) == 0
        assert context.lookup("user", None) is None

    def test_ancestors_innermost_first(self):
        context = DecodeContext()
        outer, inner = object(), object()
        with context.within("inbox", outer):
            with context.within("thread", inner):
                assert [tag for tag, _ in context.ancestors()] == ["thread", "inbox"]
            assert [obj for _, obj in context.ancestors()] == [outer]
        assert list(context.ancestors()) == []

    def test_within_pops_on_error(self):
        context = DecodeContext()
        try:
            with context.within("thread", object()):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert list(context.ancestors()) == []


class TestResolveRequirement:
    """Test single requirement resolution."""

    def test_index_lookup_found(self):
        context = DecodeContext()
        user = object()
        context.register("user", 5, user)
        obj = SimpleNamespace(user_id=5)

        assert resolve_requirement(IndexLookup("user_id", "user"), obj, context) is user

    def test_index_lookup_missing(self):
        obj = SimpleNamespace(user_id=404)
        assert resolve_requirement(IndexLookup("user_id", "user"), obj, DecodeContext()) is None

    def test_index_lookup_unset_field(self):
        obj = SimpleNamespace(user_id=None)
        assert resolve_requirement(IndexLookup("user_id", "user"), obj, DecodeContext()) is None

    def test_ancestor_by_kind_skips_inner(self):
        context = DecodeContext()
        thread, media = object(), object()
        obj = SimpleNamespace()
        with context.within("thread", thread):
            with context.within("thread_media_item", media):
                assert resolve_requirement(Ancestor("thread"), obj, context) is thread

    def test_ancestor_nearest_of_any_kind(self):
        context = DecodeContext()
        thread, media = object(), object()
        with context.within("thread", thread):
            with context.within("thread_media_item", media):
                assert resolve_requirement(Ancestor(), SimpleNamespace(), context) is media

    def test_ancestor_missing(self):
        context = DecodeContext()
        with context.within("inbox", object()):
            assert resolve_requirement(Ancestor("thread"), SimpleNamespace(), context) is None


class TestDeliver:
    """Test delivery of resolved values."""

    def test_setattr_fallback(self):
        obj = SimpleNamespace()
        deliver(obj, IndexLookup("user_id", "user"), "value")
        assert obj.user == "value"

    def test_hook_is_preferred(self):
        calls = []

        class WithHook:
            def on_requirement(self, requirement, value):
                calls.append((requirement.target, value))

        obj = WithHook()
        deliver(obj, Ancestor("thread", target="parent"), "t")
        assert calls == [("parent", "t")]
        assert not hasattr(obj, "parent")


class TestResolveRequirements:
    """Test resolving every declared requirement."""

    def test_declaration_order_and_result(self):
        order = []

        class Item:
            user_id = 1

            def on_requirement(self, requirement, value):
                order.append(requirement.target)

        context = DecodeContext()
        user, thread = object(), object()
        context.register("user", 1, user)
        descriptor = TargetDescriptor(
            cls=Item,
            tag="item",
            identifier=None,
            fields=(),
            requirements=(Ancestor("thread", target="parent"), IndexLookup("user_id", "user")),
        )

        with context.within("thread", thread):
            resolved = resolve_requirements(Item(), descriptor, context)

        assert order == ["parent", "user"]
        assert resolved == {"parent": thread, "user": user}
