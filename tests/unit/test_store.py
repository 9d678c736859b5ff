"""Tests for RequirementStore and merge_requirements."""

import sys

import pytest
from structlog.testing import capture_logs

from formcheck.errors import ErrorCode
from formcheck.validation import (
    Group,
    Leaf,
    RequirementStore,
    RequirementTreeError,
    merge_requirements,
)


class TestMergeRequirements:
    """Test the pure merge function."""

    def test_leaf_concatenation_preserves_order(self, r):
        r1, r2 = r.required(), r.min_character(2)
        merged = merge_requirements({"name": [r1]}, {"name": [r2]})
        assert merged["name"].requirements == (r1, r2)

    def test_requirements_appended_by_reference(self, r):
        r1, r2 = r.required(), r.required()
        merged = merge_requirements({"name": [r1]}, {"name": [r2]})
        assert merged["name"].requirements[0] is r1
        assert merged["name"].requirements[1] is r2

    def test_new_keys_created(self, r):
        r3 = r.required()
        merged = merge_requirements({"name": [r.required()]}, {"address": {"city": [r3]}})
        assert set(merged) == {"name", "address"}
        assert merged["address"]["city"].requirements == (r3,)

    def test_nested_groups_merge_recursively(self, r):
        r1, r2, r3 = r.required(), r.max_character(20), r.required()
        merged = merge_requirements(
            {"address": {"city": [r1]}},
            {"address": {"city": [r2], "street": [r3]}},
        )
        assert merged["address"]["city"].requirements == (r1, r2)
        assert merged["address"]["street"].requirements == (r3,)

    def test_inputs_not_modified(self, r):
        base = Group({"name": Leaf((r.required(),))})
        incoming = Group({"name": Leaf((r.email(),)), "age": Leaf((r.min_value(18),))})
        merged = merge_requirements(base, incoming)
        assert merged is not base
        assert len(base["name"]) == 1
        assert "age" not in base
        assert len(incoming["name"]) == 1

    def test_leaf_onto_group_conflict(self, r):
        with pytest.raises(RequirementTreeError) as exc_info:
            merge_requirements({"address": {"city": [r.required()]}}, {"address": [r.required()]})
        assert exc_info.value.code == ErrorCode.E2102_MERGE_CONFLICT
        assert exc_info.value.path == "address"

    def test_group_onto_leaf_conflict(self, r):
        with pytest.raises(RequirementTreeError) as exc_info:
            merge_requirements({"a": {"b": [r.required()]}}, {"a": {"b": {"c": [r.required()]}}})
        assert exc_info.value.path == "a.b"

    def test_existing_keys_keep_position(self, r):
        merged = merge_requirements({"a": [], "b": {"x": []}}, {"c": [], "b": {"y": []}, "a": []})
        assert list(merged) == ["a", "b", "c"]
        assert list(merged["b"]) == ["x", "y"]

    def test_nesting_deeper_than_recursion_limit(self, r):
        depth = sys.getrecursionlimit() + 500
        r1, r2, r3 = r.required(), r.min_character(2), r.required()
        base, incoming = {"leaf": [r1]}, {"leaf": [r2], "extra": [r3]}
        for _ in range(depth):
            base, incoming = {"n": base}, {"n": incoming}

        node = merge_requirements(base, incoming)
        for _ in range(depth):
            node = node["n"]
        assert node["leaf"].requirements == (r1, r2)
        assert node["extra"].requirements == (r3,)

    def test_deep_conflict_reports_full_path(self, r):
        depth = sys.getrecursionlimit() + 500
        base, incoming = {"leaf": [r.required()]}, {"leaf": {"inner": [r.required()]}}
        for _ in range(depth):
            base, incoming = {"n": base}, {"n": incoming}

        with pytest.raises(RequirementTreeError) as exc_info:
            merge_requirements(base, incoming)
        assert exc_info.value.path == ".".join(["n"] * depth + ["leaf"])


class TestRequirementStore:
    """Test store get/set/add."""

    def test_initially_empty(self):
        assert RequirementStore().get_requirements() is None

    def test_initial_tree_is_parsed(self, form_requirements):
        store = RequirementStore(form_requirements)
        assert isinstance(store.get_requirements(), Group)
        assert isinstance(store.get_requirements()["address"], Group)

    def test_set_replaces(self, r):
        store = RequirementStore({"name": [r.required()]})
        store.set_requirements({"age": [r.min_value(18)]})
        assert list(store.get_requirements()) == ["age"]

    def test_set_none_clears(self, form_requirements):
        store = RequirementStore(form_requirements)
        store.set_requirements(None)
        assert store.get_requirements() is None

    def test_add_appends_to_existing_leaf(self, r):
        r1, r2 = r.required(), r.min_character(3)
        store = RequirementStore({"name": [r1]})
        store.add_requirements({"name": [r2]})
        assert store.get_requirements()["name"].requirements == (r1, r2)

    def test_add_builds_new_tree(self, r):
        store = RequirementStore({"name": [r.required()]})
        before = store.get_requirements()
        store.add_requirements({"address": {"city": [r.required()]}})
        after = store.get_requirements()
        assert after is not before
        assert "address" not in before
        assert "address" in after

    def test_conflict_leaves_store_untouched(self, r):
        store = RequirementStore({"address": {"city": [r.required()]}})
        before = store.get_requirements()
        with pytest.raises(RequirementTreeError):
            store.add_requirements({"address": [r.required()]})
        assert store.get_requirements() is before

    def test_add_to_empty_store_is_noop_by_default(self, r):
        store = RequirementStore()
        with capture_logs() as logs:
            store.add_requirements({"address": {"city": [r.required()]}})
        assert store.get_requirements() is None
        assert any(entry["event"] == "requirements_add_ignored" for entry in logs)

    def test_add_to_empty_store_initializes_when_enabled(self, r):
        r3 = r.required()
        store = RequirementStore(initialize_on_add=True)
        store.add_requirements({"address": {"city": [r3]}})
        assert store.get_requirements()["address"]["city"].requirements == (r3,)

    def test_add_to_empty_mapping_store_merges(self, r):
        store = RequirementStore({})
        store.add_requirements({"name": [r.required()]})
        assert "name" in store.get_requirements()

    def test_policy_from_settings(self, r, monkeypatch, fresh_settings):
        monkeypatch.setenv("FORMCHECK_ADD_INITIALIZES_EMPTY", "true")
        store = RequirementStore()
        assert store.initialize_on_add is True
        store.add_requirements({"name": [r.required()]})
        assert "name" in store.get_requirements()

    def test_explicit_policy_overrides_settings(self, monkeypatch, fresh_settings):
        monkeypatch.setenv("FORMCHECK_ADD_INITIALIZES_EMPTY", "true")
        assert RequirementStore(initialize_on_add=False).initialize_on_add is False
