"""
In-memory presentation tree.

A headless implementation of the presentation node toolkit. Containers
own their children; children and presented nodes only hold weak
references back to their container or presenter. Every primitive
operation is recorded in ``operations`` on the node it was called on.
"""

import asyncio
import weakref
from collections.abc import Iterable, Sequence
from typing import Any

from navroute.exceptions import NavigationError
from navroute.nodes import PresentationNode, SplitNode, StackNode, TabNode


def _memory(node: PresentationNode) -> "MemoryNode":
    if not isinstance(node, MemoryNode):
        raise TypeError(f"Expected a MemoryNode, got {type(node).__name__}")
    return node


async def _animate(animated: bool) -> None:
    # Yield to the event loop the way a real animation completion would.
    if animated:
        await asyncio.sleep(0)


class MemoryNode(PresentationNode):
    """A leaf node."""
    
    def __init__(self, name: str = "") -> None:
        self.name = name or type(self).__name__
        self.operations: list[tuple[Any, ...]] = []
        self._container: "weakref.ref[MemoryNode] | None" = None
        self._presenting: "weakref.ref[MemoryNode] | None" = None
        self._presented: MemoryNode | None = None
        self._being_presented = False
    
    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
    
    # ------------------------------------------------------------------
    # Relations
    # ------------------------------------------------------------------
    
    @property
    def container(self) -> "MemoryNode | None":
        return self._container() if self._container is not None else None
    
    @property
    def stack_container(self) -> StackNode | None:
        container = self.container
        return container if isinstance(container, StackNode) else None
    
    @property
    def split_container(self) -> SplitNode | None:
        container = self.container
        return container if isinstance(container, SplitNode) else None
    
    @property
    def tab_container(self) -> TabNode | None:
        container = self.container
        return container if isinstance(container, TabNode) else None
    
    @property
    def presenting_node(self) -> PresentationNode | None:
        return self._presenting() if self._presenting is not None else None
    
    @property
    def presented_node(self) -> PresentationNode | None:
        return self._presented
    
    @property
    def is_being_presented(self) -> bool:
        return self._being_presented
    
    # ------------------------------------------------------------------
    # Primitive operations
    # ------------------------------------------------------------------
    
    async def present(self, node: PresentationNode, animated: bool = True) -> None:
        child = _memory(node)
        if self._presented is not None:
            raise NavigationError(f"{self!r} is already presenting {self._presented!r}")
        
        child._presenting = weakref.ref(self)
        child._being_presented = True
        self._presented = child
        self.operations.append(("present", child))
        try:
            await _animate(animated)
        finally:
            child._being_presented = False
    
    async def dismiss(self, animated: bool = True) -> None:
        presenter: MemoryNode = self
        if self._presented is None:
            # A presented node dismisses itself through its presenter
            parent = self.presenting_node
            if parent is None:
                return
            presenter = _memory(parent)
        
        presented = presenter._presented
        if presented is None:
            return
        presented._presenting = None
        presenter._presented = None
        presenter.operations.append(("dismiss", presented))
        await _animate(animated)
    
    # ------------------------------------------------------------------
    # Ownership
    # ------------------------------------------------------------------
    
    def _adopt(self, node: PresentationNode) -> "MemoryNode":
        child = _memory(node)
        child._container = weakref.ref(self)
        return child
    
    def _release(self, node: "MemoryNode") -> None:
        if node.container is self:
            node._container = None


class MemoryStack(MemoryNode, StackNode):
    """A stack container."""
    
    def __init__(self, name: str = "", nodes: Iterable[PresentationNode] = ()) -> None:
        super().__init__(name)
        self._nodes: list[MemoryNode] = [self._adopt(n) for n in nodes]
    
    @property
    def nodes(self) -> Sequence[PresentationNode]:
        return tuple(self._nodes)
    
    async def push(self, node: PresentationNode, animated: bool = True) -> None:
        self._nodes.append(self._adopt(node))
        self.operations.append(("push", node))
        await _animate(animated)
    
    async def set_nodes(
        self,
        nodes: Sequence[PresentationNode],
        animated: bool = True,
    ) -> None:
        keep = [_memory(n) for n in nodes]
        for old in self._nodes:
            if not any(old is n for n in keep):
                self._release(old)
        self._nodes = [self._adopt(n) for n in keep]
        self.operations.append(("set_nodes", tuple(keep)))
        await _animate(animated)


class MemoryTabs(MemoryNode, TabNode):
    """A tab container. Tabs listed in ``locked`` refuse selection."""
    
    def __init__(
        self,
        name: str = "",
        nodes: Iterable[PresentationNode] = (),
        selected: int = 0,
        locked: Iterable[PresentationNode] = (),
    ) -> None:
        super().__init__(name)
        self._nodes: list[MemoryNode] = [self._adopt(n) for n in nodes]
        self._selected: MemoryNode | None = self._nodes[selected] if self._nodes else None
        self._locked = list(locked)
    
    @property
    def nodes(self) -> Sequence[PresentationNode]:
        return tuple(self._nodes)
    
    @property
    def selected(self) -> PresentationNode | None:
        return self._selected
    
    def select(self, node: PresentationNode) -> None:
        if not any(node is n for n in self._nodes):
            raise ValueError(f"{node!r} is not a tab of {self!r}")
        self._selected = _memory(node)
        self.operations.append(("select", node))
    
    def should_select(self, node: PresentationNode) -> bool:
        return not any(node is n for n in self._locked)


class MemorySplit(MemoryNode, SplitNode):
    """A split container."""
    
    def __init__(self, name: str = "", nodes: Iterable[PresentationNode] = ()) -> None:
        super().__init__(name)
        self._nodes: list[MemoryNode] = [self._adopt(n) for n in nodes]
    
    @property
    def nodes(self) -> Sequence[PresentationNode]:
        return tuple(self._nodes)
