"""
The navigation reconciliation engine.

Brings a route's destination node to the front of the presentation tree:

1. Resolve the source (the deepest visible node) and the destination
   (from the route handler).
2. Reconcile the destination against the live tree. A destination that
   already exists is reached by dismissing modals and switching tabs.
3. Execute the route's transition.
"""

import inspect
import logging
from typing import Any

from navroute.exceptions import (
    MissingCustomTransitionDelegate,
    MissingSourceNode,
    UnableToFindRouteToNode,
)
from navroute.nodes import PresentationNode
from navroute.routes import Route
from navroute.transitions import RouteTransition
from navroute.tree import (
    has_ancestor,
    is_live,
    lowest_common_ancestor,
    top_node,
    transition_to_descendant,
)
from navroute.types import CustomTransitionDelegate, RouteHandler


def _is_already_showing(source: PresentationNode, destination: PresentationNode) -> bool:
    return destination is source or destination is source.stack_container


class Navigator:
    """
    Computes and drives the presentation operations for one navigation.
    
    Holds no tree state between calls; the root node and collaborators
    are passed to :meth:`navigate` every time.
    """
    
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("navroute.navigation")
    
    async def navigate(
        self,
        route: Route,
        handler: RouteHandler,
        root: PresentationNode | None,
        custom_transition_delegate: CustomTransitionDelegate | None = None,
        animated: bool = True,
    ) -> None:
        """
        Navigate to ``route``.
        
        Returns once the transition has finished. Raises on failure,
        including any error raised by the route handler.
        """
        prepared = await self.prepare(route, handler, root, animated)
        if prepared is None:
            self._logger.debug("route=%s already showing, nothing to do", route)
            return
        
        source, destination = prepared
        transition = handler.transition_for(route)
        await self.perform_transition(
            source,
            destination,
            transition,
            custom_transition_delegate,
            animated,
        )
        self._logger.info(
            "route=%s transition=%s source=%r destination=%r",
            route,
            transition.name,
            source,
            destination,
        )
    
    # ------------------------------------------------------------------
    # Phase 1 + 2: resolve and reconcile
    # ------------------------------------------------------------------
    
    async def prepare(
        self,
        route: Route,
        handler: RouteHandler,
        root: PresentationNode | None,
        animated: bool = True,
    ) -> tuple[PresentationNode, PresentationNode] | None:
        """
        Find the source and destination nodes for ``route``.
        
        Returns None when the destination is already showing. A live
        destination is brought forward first by dismissing modals and
        switching tabs, which may change the source.
        """
        if root is None:
            raise MissingSourceNode()
        source = top_node(root)
        
        destination: Any = handler.resolve(route, source)
        if inspect.isawaitable(destination):
            destination = await destination
        
        self._logger.debug("route=%s source=%r destination=%r", route, source, destination)
        
        if _is_already_showing(source, destination):
            return None
        
        if not is_live(destination, root):
            # Not in the tree yet
            return source, destination
        
        if not has_ancestor(source, destination):
            raise UnableToFindRouteToNode()
        
        stack = source.stack_container
        if (
            stack is not None
            and stack is destination.stack_container
            and not stack.is_being_presented
        ):
            return source, destination
        
        ancestor = lowest_common_ancestor(source, destination)
        if ancestor is None:
            return source, destination
        
        self._logger.debug("Clearing toward %r via common ancestor %r", destination, ancestor)
        await transition_to_descendant(ancestor, destination, animated)
        return top_node(ancestor), destination
    
    # ------------------------------------------------------------------
    # Phase 3: execute
    # ------------------------------------------------------------------
    
    async def perform_transition(
        self,
        source: PresentationNode,
        destination: PresentationNode,
        transition: RouteTransition,
        custom_transition_delegate: CustomTransitionDelegate | None = None,
        animated: bool = True,
    ) -> None:
        """Run ``transition`` from ``source`` (or its stack) to ``destination``."""
        if _is_already_showing(source, destination):
            return
        
        # Transitions start from the stack where there is one; otherwise
        # from the node itself (e.g. for modals).
        stack = source.stack_container
        if stack is not None:
            source = stack
        
        if transition is RouteTransition.custom:
            if custom_transition_delegate is None:
                raise MissingCustomTransitionDelegate()
            await custom_transition_delegate.perform_transition(
                destination,
                source,
                transition,
                animated,
            )
            return
        
        await transition.execute(source, destination, animated)
