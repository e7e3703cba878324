"""
NavRoute - route and URL resolution for tree-shaped UI navigation.

Maps URLs to typed routes, and brings a route's destination node to the
front of a presentation tree with the fewest presentation operations.
"""

from navroute.exceptions import (
    MissingCustomTransitionDelegate,
    MissingRequiredContainer,
    MissingRequiredPathParameter,
    MissingSourceNode,
    NavigationError,
    NavRouteException,
    RequiredIntegerParameterNotAnInteger,
    RouteNotConfigured,
    RoutingError,
    UnableToFindRouteToNode,
    URLMatchingError,
)
from navroute.handlers import FunctionRouteHandler, RouteMap, UnconfiguredRouteHandler
from navroute.matching import (
    MatchedURL,
    PathPattern,
    StringMatcher,
    URLMatcher,
    URLMatcherGroup,
    URLPathMapper,
)
from navroute.navigator import Navigator
from navroute.nodes import PresentationNode, SplitNode, StackNode, TabNode
from navroute.router import ACTIVITY_TYPE_BROWSING_WEB, Router, UserActivity
from navroute.routes import Route, variant
from navroute.transitions import RouteTransition

__version__ = "0.1.0"
__all__ = [
    "Router",
    "Navigator",
    "Route",
    "variant",
    "RouteTransition",
    "RouteMap",
    "FunctionRouteHandler",
    "UnconfiguredRouteHandler",
    "PresentationNode",
    "StackNode",
    "TabNode",
    "SplitNode",
    "StringMatcher",
    "PathPattern",
    "MatchedURL",
    "URLPathMapper",
    "URLMatcher",
    "URLMatcherGroup",
    "UserActivity",
    "ACTIVITY_TYPE_BROWSING_WEB",
    "NavRouteException",
    "NavigationError",
    "URLMatchingError",
    "RoutingError",
    "MissingSourceNode",
    "MissingRequiredContainer",
    "UnableToFindRouteToNode",
    "MissingCustomTransitionDelegate",
    "RouteNotConfigured",
    "MissingRequiredPathParameter",
    "RequiredIntegerParameterNotAnInteger",
]
