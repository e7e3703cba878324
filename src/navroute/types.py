"""
Type definitions for NavRoute.
Collaborators supplied by the embedding application are described as
protocols so any object with the right methods can be plugged in.
"""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias

if TYPE_CHECKING:
    from navroute.matching import MatchedURL
    from navroute.nodes import PresentationNode
    from navroute.routes import Route
    from navroute.transitions import RouteTransition

# Callback Types
Completion: TypeAlias = Callable[[BaseException | None], None]
ErrorSink: TypeAlias = Callable[[BaseException], None]
RootProvider: TypeAlias = Callable[[], "PresentationNode | None"]

# URL mapping Types
StaticRouteFactory: TypeAlias = Callable[[], "Route"]
DynamicRouteFactory: TypeAlias = Callable[["MatchedURL"], "Route"]
RouteFactory: TypeAlias = StaticRouteFactory | DynamicRouteFactory

# Transition Types
TransitionStep: TypeAlias = Callable[
    ["PresentationNode", "PresentationNode", bool], Awaitable[None]
]


class RouteHandler(Protocol):
    """Resolves routes into presentation nodes."""
    
    def resolve(
        self,
        route: "Route",
        current: "PresentationNode",
    ) -> "PresentationNode | Awaitable[PresentationNode]": ...
    
    def transition_for(self, route: "Route") -> "RouteTransition": ...


class CustomTransitionDelegate(Protocol):
    """Performs transitions built with ``RouteTransition.custom``."""
    
    async def perform_transition(
        self,
        destination: "PresentationNode",
        source: "PresentationNode",
        transition: "RouteTransition",
        animated: bool,
    ) -> None: ...


class Activity(Protocol):
    """A user activity handed over by the platform (universal links)."""
    
    @property
    def activity_type(self) -> str: ...
    
    @property
    def webpage_url(self) -> Any: ...
