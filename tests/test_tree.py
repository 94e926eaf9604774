"""
Tests for the KeyValues tree wrapper.

Tests cover:
- parse_tree() / load_tree() - parsing manifests and library indexes
- ObjectNode lookups - exact, case-insensitive, wrong variant
- build_tree() - conversion of nested mappings
"""

import pytest

from steam_update_check.manifest.tree import (
    ObjectNode,
    ScalarNode,
    TreeParseError,
    build_tree,
    load_tree,
    parse_tree,
)


# ═══════════════════════════════════════════════════════════════════════════════
# Test parse_tree() and load_tree()
# ═══════════════════════════════════════════════════════════════════════════════


class TestParseTree:
    """Tests for parse_tree() and load_tree()."""

    def test_returns_root_object(self, apps_dir):
        """The root is the AppState object, not the document."""
        root = load_tree(apps_dir / "appmanifest_228980.acf")

        assert isinstance(root, ObjectNode)
        assert root.get_scalar("appid") == ScalarNode("228980")
        assert root.get_scalar("LastUpdated").value == "1709764850"

    def test_nested_objects(self, apps_dir):
        """Nested objects are ObjectNodes."""
        root = load_tree(apps_dir / "appmanifest_228980.acf")

        user_config = root.get_object("UserConfig")
        assert user_config is not None
        assert user_config.get_scalar("BetaKey").value == "beta"

    def test_empty_document_has_no_root(self):
        """An empty document has no root object."""
        assert parse_tree("") is None

    def test_scalar_only_document_has_no_root(self):
        """A document holding only a scalar has no root object."""
        assert parse_tree('"AppState"\t"nothing"\n') is None

    def test_unclosed_object_raises(self):
        """Unbalanced brackets raise TreeParseError."""
        with pytest.raises(TreeParseError):
            parse_tree('"AppState"\n{\n\t"LastUpdated"\t"1"\n')

    def test_missing_file_raises_oserror(self, tmp_path):
        """Missing files raise OSError for the caller to classify."""
        with pytest.raises(OSError):
            load_tree(tmp_path / "missing.acf")

    def test_binary_file_raises_parse_error(self, tmp_path):
        """Files that are not UTF-8 text raise TreeParseError."""
        path = tmp_path / "binary.acf"
        path.write_bytes(b"\xff\xfe\x00\x81garbage")

        with pytest.raises(TreeParseError):
            load_tree(path)


# ═══════════════════════════════════════════════════════════════════════════════
# Test ObjectNode lookups
# ═══════════════════════════════════════════════════════════════════════════════


class TestObjectNode:
    """Tests for ObjectNode child lookups."""

    @pytest.fixture
    def node(self):
        return ObjectNode(
            {
                "LastUpdated": ScalarNode("100"),
                "UserConfig": ObjectNode({"BetaKey": ScalarNode("beta")}),
            }
        )

    def test_get_missing_returns_none(self, node):
        """Missing children return None instead of raising."""
        assert node.get("Missing") is None

    def test_get_is_case_insensitive(self, node):
        """Keys match regardless of case."""
        assert node.get("lastupdated") == ScalarNode("100")
        assert node.get_object("USERCONFIG") is not None

    def test_exact_match_preferred(self):
        """An exact key wins over a case-insensitive one."""
        node = ObjectNode({"key": ScalarNode("lower"), "Key": ScalarNode("exact")})

        assert node.get("Key") == ScalarNode("exact")

    def test_wrong_variant_returns_none(self, node):
        """get_object/get_scalar return None for the other variant."""
        assert node.get_object("LastUpdated") is None
        assert node.get_scalar("UserConfig") is None

    def test_iteration_keeps_order(self, node):
        """Iteration yields (name, node) pairs in order."""
        assert [name for name, _ in node] == ["LastUpdated", "UserConfig"]
        assert node.names() == ["LastUpdated", "UserConfig"]
        assert len(node) == 2


# ═══════════════════════════════════════════════════════════════════════════════
# Test build_tree()
# ═══════════════════════════════════════════════════════════════════════════════


class TestBuildTree:
    """Tests for build_tree() function."""

    def test_converts_nested_mappings(self):
        """Nested dicts become ObjectNodes, leaves become ScalarNodes."""
        tree = build_tree({"apps": {"440": "123"}, "path": "/games"})

        assert tree == ObjectNode(
            {
                "apps": ObjectNode({"440": ScalarNode("123")}),
                "path": ScalarNode("/games"),
            }
        )

    def test_non_string_leaves_are_stringified(self):
        """Non-string leaf values are stored as strings."""
        tree = build_tree({"size": 42})

        assert tree.get_scalar("size").value == "42"
