"""
Presentation node abstraction.

The UI toolkit owns the navigation tree. NavRoute only sees it through
these abstract classes: relation lookups computed on demand, and
primitive operations that return once the visual transition finishes.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence


class PresentationNode(ABC):
    """
    A node in the UI navigation tree.
    
    Relations are non-owning lookups. A node has at most one direct
    container, checked in this order: stack, split, tab, presenting node.
    """
    
    @property
    @abstractmethod
    def stack_container(self) -> "StackNode | None":
        """The stack container this node is an element of."""
        ...
    
    @property
    @abstractmethod
    def split_container(self) -> "SplitNode | None":
        """The split container this node is a child of."""
        ...
    
    @property
    @abstractmethod
    def tab_container(self) -> "TabNode | None":
        """The tab container this node is a tab of."""
        ...
    
    @property
    @abstractmethod
    def presenting_node(self) -> "PresentationNode | None":
        """The node that modally presented this node."""
        ...
    
    @property
    @abstractmethod
    def presented_node(self) -> "PresentationNode | None":
        """The node this node is currently presenting modally."""
        ...
    
    @property
    def is_being_presented(self) -> bool:
        """True while this node's own presentation is still animating."""
        return False
    
    @property
    def child_nodes(self) -> Sequence["PresentationNode"]:
        """Container children (empty for leaf nodes)."""
        return ()
    
    @abstractmethod
    async def present(self, node: "PresentationNode", animated: bool = True) -> None:
        """Present ``node`` modally over this node."""
        ...
    
    @abstractmethod
    async def dismiss(self, animated: bool = True) -> None:
        """Dismiss the node presented by this node (and anything above it)."""
        ...


class StackNode(PresentationNode):
    """An ordered stack container. The last element is on top."""
    
    @property
    @abstractmethod
    def nodes(self) -> Sequence[PresentationNode]:
        ...
    
    @property
    def top(self) -> PresentationNode | None:
        nodes = self.nodes
        return nodes[-1] if nodes else None
    
    @property
    def child_nodes(self) -> Sequence[PresentationNode]:
        return self.nodes
    
    @abstractmethod
    async def push(self, node: PresentationNode, animated: bool = True) -> None:
        """Push ``node`` on top of the stack."""
        ...
    
    @abstractmethod
    async def set_nodes(
        self,
        nodes: Sequence[PresentationNode],
        animated: bool = True,
    ) -> None:
        """Replace the entire stack content."""
        ...


class TabNode(PresentationNode):
    """A tab container with one selected child."""
    
    @property
    @abstractmethod
    def nodes(self) -> Sequence[PresentationNode]:
        ...
    
    @property
    @abstractmethod
    def selected(self) -> PresentationNode | None:
        ...
    
    @property
    def child_nodes(self) -> Sequence[PresentationNode]:
        return self.nodes
    
    @abstractmethod
    def select(self, node: PresentationNode) -> None:
        """Select the tab ``node``."""
        ...
    
    def should_select(self, node: PresentationNode) -> bool:
        """Veto hook consulted before switching tabs."""
        return True


class SplitNode(PresentationNode):
    """A split container (e.g. master/detail)."""
    
    @property
    @abstractmethod
    def nodes(self) -> Sequence[PresentationNode]:
        ...
    
    @property
    def child_nodes(self) -> Sequence[PresentationNode]:
        return self.nodes
