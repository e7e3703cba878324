"""
Relations over the presentation tree.

Ancestry follows each node's direct container (stack, split, tab, then
presenting node). All comparisons use identity.
"""

from collections.abc import Sequence

from navroute.nodes import PresentationNode, StackNode, TabNode


def direct_container(node: PresentationNode) -> PresentationNode | None:
    """The node's direct container: stack, split, tab, then presenting node."""
    for container in (
        node.stack_container,
        node.split_container,
        node.tab_container,
        node.presenting_node,
    ):
        if container is not None:
            return container
    return None


def ancestors(node: PresentationNode) -> list[PresentationNode]:
    """
    The ancestor chain of ``node``, starting with the node itself and
    ending at the outermost node reachable through direct containers.
    """
    chain = [node]
    seen = {id(node)}
    current = direct_container(node)
    
    while current is not None and id(current) not in seen:
        chain.append(current)
        seen.add(id(current))
        current = direct_container(current)
    
    return chain


def contains(nodes: Sequence[PresentationNode], node: PresentationNode) -> bool:
    return any(n is node for n in nodes)


def index_of(nodes: Sequence[PresentationNode], node: PresentationNode) -> int | None:
    for index, candidate in enumerate(nodes):
        if candidate is node:
            return index
    return None


def children(node: PresentationNode) -> list[PresentationNode]:
    """Container children plus the presented node, if any."""
    result = list(node.child_nodes)
    presented = node.presented_node
    if presented is not None:
        result.append(presented)
    return result


def lowest_common_ancestor(
    a: PresentationNode,
    b: PresentationNode,
) -> PresentationNode | None:
    """
    The first node in ``a``'s ancestor chain that is also in ``b``'s.
    Returns None if the two nodes share no ancestor.
    """
    b_chain = ancestors(b)
    for candidate in ancestors(a):
        if contains(b_chain, candidate):
            return candidate
    return None


def has_ancestor(node: PresentationNode, candidate: PresentationNode) -> bool:
    """
    True if ``candidate`` is in ``node``'s ancestor chain, or is a direct
    child of one of the nodes in that chain.
    """
    for ancestor in ancestors(node):
        if ancestor is candidate or contains(children(ancestor), candidate):
            return True
    return False


def is_live(node: PresentationNode, root: PresentationNode | None) -> bool:
    """True if ``node`` is reachable from ``root`` through direct containers."""
    if root is None:
        return False
    return contains(ancestors(node), root)


def top_node(node: PresentationNode) -> PresentationNode:
    """
    The deepest currently visible descendant of ``node``.
    
    Descends into, in order: the presented node, the selected tab, the
    top of a stack. Stops at a leaf.
    """
    current = node
    seen = {id(current)}
    
    while True:
        if current.presented_node is not None:
            nxt = current.presented_node
        elif isinstance(current, TabNode) and current.selected is not None:
            nxt = current.selected
        elif isinstance(current, StackNode) and current.top is not None:
            nxt = current.top
        else:
            return current
        
        if id(nxt) in seen:
            return current
        seen.add(id(nxt))
        current = nxt


def visible_presenter(node: PresentationNode) -> PresentationNode | None:
    """
    The first node on the visible path below ``node`` (inclusive) that is
    presenting a modal.
    """
    current = node
    seen = {id(current)}
    
    while True:
        if current.presented_node is not None:
            return current
        if isinstance(current, TabNode) and current.selected is not None:
            nxt = current.selected
        elif isinstance(current, StackNode) and current.top is not None:
            nxt = current.top
        else:
            return None
        
        if id(nxt) in seen:
            return None
        seen.add(id(nxt))
        current = nxt


async def dismiss_if_needed(node: PresentationNode, animated: bool = True) -> bool:
    """
    Dismiss any modal presented on the visible path below ``node``.
    Returns True if something was dismissed.
    """
    presenter = visible_presenter(node)
    if presenter is None:
        return False
    await presenter.dismiss(animated)
    return True


def tab_for(tabs: TabNode, descendant: PresentationNode) -> PresentationNode | None:
    """The tab of ``tabs`` whose branch contains ``descendant``."""
    chain = ancestors(descendant)
    for tab in tabs.nodes:
        if contains(chain, tab):
            return tab
    return None


def switch_tab_if_needed(tabs: TabNode, descendant: PresentationNode) -> bool:
    """
    Select the tab containing ``descendant`` unless it is already selected
    or the tab container vetoes it. Returns True if the selection changed.
    """
    tab = tab_for(tabs, descendant)
    if tab is None or tab is tabs.selected or not tabs.should_select(tab):
        return False
    tabs.select(tab)
    return True


async def transition_to_descendant(
    ancestor: PresentationNode,
    descendant: PresentationNode,
    animated: bool = True,
) -> None:
    """Dismiss modals above ``ancestor``, then switch tabs toward ``descendant``."""
    await dismiss_if_needed(ancestor, animated)
    if isinstance(ancestor, TabNode):
        switch_tab_if_needed(ancestor, descendant)
