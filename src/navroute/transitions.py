"""
Route transitions.

A transition moves from a source node to a destination node. Built-in
transitions are singletons and compare by identity::

    RouteTransition.push
    RouteTransition.replace     # also available as RouteTransition.set
    RouteTransition.modal
    RouteTransition.inferred
    RouteTransition.custom

Custom strategies can be built from any coroutine function::

    async def fade(source, destination, animated):
        await source.present(destination, animated=False)

    FADE = RouteTransition("fade", fade)
"""

from typing import ClassVar

from navroute.exceptions import MissingCustomTransitionDelegate, MissingRequiredContainer
from navroute.nodes import PresentationNode, StackNode
from navroute.tree import index_of
from navroute.types import TransitionStep


class RouteTransition:
    """A named strategy for moving from a source node to a destination node."""
    
    __slots__ = ("name", "_step")
    
    push: ClassVar["RouteTransition"]
    replace: ClassVar["RouteTransition"]
    set: ClassVar["RouteTransition"]
    modal: ClassVar["RouteTransition"]
    inferred: ClassVar["RouteTransition"]
    custom: ClassVar["RouteTransition"]
    
    def __init__(self, name: str, step: TransitionStep) -> None:
        self.name = name
        self._step = step
    
    async def execute(
        self,
        source: PresentationNode,
        destination: PresentationNode,
        animated: bool = True,
    ) -> None:
        """Run the transition. Returns when it has finished, raises on failure."""
        await self._step(source, destination, animated)
    
    def __repr__(self) -> str:
        return f"RouteTransition({self.name!r})"


# ---------------------------------------------------------------------------
# Built-in strategies
# ---------------------------------------------------------------------------


async def _pop_to(stack: StackNode, index: int, animated: bool) -> None:
    nodes = stack.nodes
    if index == len(nodes) - 1:
        # Already on top
        return
    await stack.set_nodes(list(nodes[: index + 1]), animated)


async def _push(
    source: PresentationNode,
    destination: PresentationNode,
    animated: bool,
) -> None:
    if not isinstance(source, StackNode):
        raise MissingRequiredContainer(RouteTransition.push)
    
    index = index_of(source.nodes, destination)
    if index is None:
        await source.push(destination, animated)
    else:
        await _pop_to(source, index, animated)


async def _replace(
    source: PresentationNode,
    destination: PresentationNode,
    animated: bool,
) -> None:
    if not isinstance(source, StackNode):
        raise MissingRequiredContainer(RouteTransition.replace)
    
    index = index_of(source.nodes, destination)
    if index is None:
        await source.set_nodes([destination], animated)
    else:
        await _pop_to(source, index, animated)


async def _modal(
    source: PresentationNode,
    destination: PresentationNode,
    animated: bool,
) -> None:
    await source.present(destination, animated)


def infer_transition(
    source: PresentationNode,
    destination: PresentationNode,
) -> RouteTransition:
    """Pick the built-in transition that fits two nodes."""
    # A modal is needed without a stack to push onto, or to show a new stack.
    if not isinstance(source, StackNode) or isinstance(destination, StackNode):
        return RouteTransition.modal
    if destination.stack_container is source:
        return RouteTransition.replace
    return RouteTransition.push


async def _inferred(
    source: PresentationNode,
    destination: PresentationNode,
    animated: bool,
) -> None:
    await infer_transition(source, destination).execute(source, destination, animated)


async def _custom(
    source: PresentationNode,
    destination: PresentationNode,
    animated: bool,
) -> None:
    # The navigator hands custom transitions to its delegate; reaching
    # this step means there is none.
    raise MissingCustomTransitionDelegate()


RouteTransition.push = RouteTransition("push", _push)
RouteTransition.replace = RouteTransition("replace", _replace)
RouteTransition.set = RouteTransition.replace
RouteTransition.modal = RouteTransition("modal", _modal)
RouteTransition.inferred = RouteTransition("inferred", _inferred)
RouteTransition.custom = RouteTransition("custom", _custom)
