"""Tests for navroute.tree: ancestry, liveness and visibility."""

from collections.abc import Sequence

import pytest

from navroute.memory import MemoryNode, MemorySplit, MemoryStack, MemoryTabs
from navroute.nodes import PresentationNode, SplitNode, StackNode, TabNode
from navroute.tree import (
    ancestors,
    direct_container,
    dismiss_if_needed,
    has_ancestor,
    is_live,
    lowest_common_ancestor,
    switch_tab_if_needed,
    tab_for,
    top_node,
    visible_presenter,
)

from tests.support import AppTree


class StubNode(PresentationNode):
    """Node with every relation set explicitly."""

    def __init__(self, **relations: PresentationNode | None) -> None:
        self.relations = relations

    @property
    def stack_container(self) -> StackNode | None:
        return self.relations.get("stack")  # type: ignore[return-value]

    @property
    def split_container(self) -> SplitNode | None:
        return self.relations.get("split")  # type: ignore[return-value]

    @property
    def tab_container(self) -> TabNode | None:
        return self.relations.get("tab")  # type: ignore[return-value]

    @property
    def presenting_node(self) -> PresentationNode | None:
        return self.relations.get("presenting")

    @property
    def presented_node(self) -> PresentationNode | None:
        return None

    async def present(self, node: PresentationNode, animated: bool = True) -> None: ...

    async def dismiss(self, animated: bool = True) -> None: ...


class TestDirectContainer:
    def test_priority_order(self) -> None:
        stack, split, tab, presenter = StubNode(), StubNode(), StubNode(), StubNode()
        assert direct_container(StubNode(stack=stack, split=split, tab=tab, presenting=presenter)) is stack
        assert direct_container(StubNode(split=split, tab=tab, presenting=presenter)) is split
        assert direct_container(StubNode(tab=tab, presenting=presenter)) is tab
        assert direct_container(StubNode(presenting=presenter)) is presenter
        assert direct_container(StubNode()) is None

    def test_split_container(self) -> None:
        master, detail = MemoryNode("master"), MemoryNode("detail")
        split = MemorySplit("split", [master, detail])
        assert direct_container(detail) is split
        assert ancestors(detail) == [detail, split]


class TestAncestors:
    def test_chain_ends_at_root(self, tree: AppTree) -> None:
        assert ancestors(tree.detail) == [tree.detail, tree.home_stack, tree.tabs]

    def test_root_chain(self, tree: AppTree) -> None:
        assert ancestors(tree.tabs) == [tree.tabs]

    @pytest.mark.asyncio
    async def test_presented_node_chain(self, tree: AppTree) -> None:
        modal = MemoryNode("modal")
        await tree.home_stack.present(modal, animated=False)
        assert ancestors(modal) == [modal, tree.home_stack, tree.tabs]


class TestLowestCommonAncestor:
    def test_same_stack(self, tree: AppTree) -> None:
        assert lowest_common_ancestor(tree.detail, tree.home) is tree.home_stack

    def test_different_tabs(self, tree: AppTree) -> None:
        assert lowest_common_ancestor(tree.detail, tree.feed) is tree.tabs

    def test_node_is_its_own_ancestor(self, tree: AppTree) -> None:
        assert lowest_common_ancestor(tree.detail, tree.home_stack) is tree.home_stack

    def test_unrelated_nodes(self, tree: AppTree) -> None:
        assert lowest_common_ancestor(tree.detail, MemoryNode("loose")) is None

    def test_consistent_with_has_ancestor(self, tree: AppTree) -> None:
        nodes = [tree.tabs, tree.home_stack, tree.feed_stack, tree.home, tree.detail, tree.feed]
        for a in nodes:
            for b in nodes:
                common = lowest_common_ancestor(a, b)
                assert common is not None
                assert has_ancestor(a, common)


class TestHasAncestor:
    def test_container_in_chain(self, tree: AppTree) -> None:
        assert has_ancestor(tree.detail, tree.home_stack)
        assert has_ancestor(tree.detail, tree.tabs)

    def test_sibling_in_same_container(self, tree: AppTree) -> None:
        assert has_ancestor(tree.detail, tree.home)

    def test_sibling_tab(self, tree: AppTree) -> None:
        assert has_ancestor(tree.detail, tree.feed_stack)

    def test_node_inside_other_branch(self, tree: AppTree) -> None:
        assert not has_ancestor(tree.detail, tree.feed)

    def test_descendant_is_not_ancestor(self, tree: AppTree) -> None:
        assert not has_ancestor(tree.tabs, tree.detail)


class TestIsLive:
    def test_nodes_in_tree(self, tree: AppTree) -> None:
        assert is_live(tree.detail, tree.tabs)
        assert is_live(tree.feed, tree.tabs)
        assert is_live(tree.tabs, tree.tabs)

    def test_detached_node(self, tree: AppTree) -> None:
        assert not is_live(MemoryNode("loose"), tree.tabs)

    def test_missing_root(self, tree: AppTree) -> None:
        assert not is_live(tree.detail, None)

    @pytest.mark.asyncio
    async def test_popped_node_is_not_live(self, tree: AppTree) -> None:
        await tree.home_stack.set_nodes([tree.home], animated=False)
        assert not is_live(tree.detail, tree.tabs)


class TestTopNode:
    def test_selected_tab_top(self, tree: AppTree) -> None:
        assert top_node(tree.tabs) is tree.detail

    def test_other_tab(self, tree: AppTree) -> None:
        tree.tabs.select(tree.feed_stack)
        assert top_node(tree.tabs) is tree.feed

    @pytest.mark.asyncio
    async def test_presented_takes_priority(self, tree: AppTree) -> None:
        modal = MemoryStack("modal-stack", [MemoryNode("modal")])
        await tree.tabs.present(modal, animated=False)
        assert top_node(tree.tabs) is modal.nodes[0]

    def test_empty_stack(self) -> None:
        stack = MemoryStack("empty")
        assert top_node(stack) is stack

    def test_leaf(self) -> None:
        leaf = MemoryNode("leaf")
        assert top_node(leaf) is leaf


class TestDismissal:
    @pytest.mark.asyncio
    async def test_visible_presenter(self, tree: AppTree) -> None:
        assert visible_presenter(tree.tabs) is None
        modal = MemoryNode("modal")
        await tree.detail.present(modal, animated=False)
        assert visible_presenter(tree.tabs) is tree.detail
        assert visible_presenter(tree.home_stack) is tree.detail

    @pytest.mark.asyncio
    async def test_dismiss_if_needed(self, tree: AppTree) -> None:
        modal = MemoryNode("modal")
        await tree.home_stack.present(modal, animated=False)
        assert await dismiss_if_needed(tree.tabs, animated=False)
        assert tree.home_stack.presented_node is None
        assert modal.presenting_node is None
        assert not await dismiss_if_needed(tree.tabs, animated=False)


class TestTabSwitching:
    def test_tab_for(self, tree: AppTree) -> None:
        assert tab_for(tree.tabs, tree.feed) is tree.feed_stack
        assert tab_for(tree.tabs, tree.feed_stack) is tree.feed_stack
        assert tab_for(tree.tabs, MemoryNode("loose")) is None

    def test_switches(self, tree: AppTree) -> None:
        assert switch_tab_if_needed(tree.tabs, tree.feed)
        assert tree.tabs.selected is tree.feed_stack

    def test_already_selected(self, tree: AppTree) -> None:
        assert not switch_tab_if_needed(tree.tabs, tree.detail)
        assert tree.tabs.operations == []

    def test_vetoed(self) -> None:
        first, second = MemoryStack("first"), MemoryStack("second")
        tabs = MemoryTabs("tabs", [first, second], locked=[second])
        assert not switch_tab_if_needed(tabs, second)
        assert tabs.selected is first
