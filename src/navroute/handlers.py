"""
Route handlers.

A route handler turns a route into the node to show and picks the
transition used to show it. Any object with ``resolve`` and
``transition_for`` methods works; this module provides ready-made ones.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from navroute.exceptions import RouteNotConfigured
from navroute.nodes import PresentationNode
from navroute.routes import Route
from navroute.transitions import RouteTransition

NodeResolver = Callable[[Route, PresentationNode], PresentationNode | Awaitable[PresentationNode]]


class UnconfiguredRouteHandler:
    """Default handler: every route is unconfigured."""
    
    def resolve(self, route: Route, current: PresentationNode) -> PresentationNode:
        raise RouteNotConfigured(route)
    
    def transition_for(self, route: Route) -> RouteTransition:
        return RouteTransition.inferred


@dataclass(slots=True)
class FunctionRouteHandler:
    """A route handler assembled from plain callables."""
    
    resolver: NodeResolver
    transition: Callable[[Route], RouteTransition] | None = None
    
    def resolve(
        self,
        route: Route,
        current: PresentationNode,
    ) -> PresentationNode | Awaitable[PresentationNode]:
        return self.resolver(route, current)
    
    def transition_for(self, route: Route) -> RouteTransition:
        if self.transition is None:
            return RouteTransition.inferred
        return self.transition(route)


@dataclass(slots=True)
class _Entry:
    resolver: NodeResolver
    transition: RouteTransition


@dataclass
class RouteMap:
    """
    Route handler keyed by route variant.
    
    Lookup walks the route's class hierarchy, so registering a route
    family covers all of its variants.
    
    Usage::
    
        routes = RouteMap()
        
        @routes.register(Profile, transition=RouteTransition.push)
        def profile(route, current):
            return ProfileNode(route.user_id)
    """
    
    default_transition: RouteTransition = field(default_factory=lambda: RouteTransition.inferred)
    _entries: dict[type[Route], _Entry] = field(default_factory=dict, init=False, repr=False)
    
    def add(
        self,
        route_type: type[Route],
        resolver: NodeResolver,
        transition: RouteTransition | None = None,
    ) -> None:
        """Map a route variant to a resolver."""
        self._entries[route_type] = _Entry(resolver, transition or self.default_transition)
    
    def register(
        self,
        route_type: type[Route],
        transition: RouteTransition | None = None,
    ) -> Callable[[NodeResolver], NodeResolver]:
        """Decorator form of :meth:`add`."""
        def decorator(resolver: NodeResolver) -> NodeResolver:
            self.add(route_type, resolver, transition)
            return resolver
        return decorator
    
    def _lookup(self, route: Route) -> _Entry | None:
        for klass in type(route).__mro__:
            entry = self._entries.get(klass)
            if entry is not None:
                return entry
        return None
    
    def resolve(
        self,
        route: Route,
        current: PresentationNode,
    ) -> PresentationNode | Awaitable[PresentationNode]:
        entry = self._lookup(route)
        if entry is None:
            raise RouteNotConfigured(route)
        return entry.resolver(route, current)
    
    def transition_for(self, route: Route) -> RouteTransition:
        entry = self._lookup(route)
        return entry.transition if entry is not None else self.default_transition
