"""
NavRoute exceptions.
Each exception describes one way a navigation or URL match can fail.
"""

from typing import Any


class NavRouteException(Exception):
    """Base exception for all NavRoute errors."""
    
    recovery_suggestion: str = ""
    
    def __init__(self, message: str = "An error occurred") -> None:
        self.message = message
        super().__init__(self.message)


class RoutingError(NavRouteException):
    """Invalid route table configuration (e.g. a malformed path template)."""
    pass


# ---------------------------------------------------------------------------
# Navigation errors
# ---------------------------------------------------------------------------


class NavigationError(NavRouteException):
    """Errors raised while reconciling or transitioning the navigation tree."""
    pass


class MissingSourceNode(NavigationError):
    """There is no live node to navigate from."""
    
    recovery_suggestion = (
        "Provide a root node to the Router, or make sure the root "
        "callable returns the current root node."
    )
    
    def __init__(
        self,
        detail: str = "The source node (the current top node) could not be found",
    ) -> None:
        super().__init__(detail)


class MissingRequiredContainer(NavigationError):
    """A push/replace transition was attempted without a stack container."""
    
    recovery_suggestion = "Nest the source node inside a stack container."
    
    def __init__(self, transition: Any = None) -> None:
        self.transition = transition
        name = getattr(transition, "name", transition)
        super().__init__(
            f"Transition {name!r} requires the source node to be a stack container"
        )


class UnableToFindRouteToNode(NavigationError):
    """The destination is live, but not reachable by closing containers."""
    
    recovery_suggestion = (
        "Return a new node from the route handler, or navigate to a "
        "container that encloses the current node."
    )
    
    def __init__(
        self,
        detail: str = "Destination is already in the tree but is not an ancestor of the source",
    ) -> None:
        super().__init__(detail)


class MissingCustomTransitionDelegate(NavigationError):
    """A custom transition was requested but no delegate is registered."""
    
    recovery_suggestion = "Pass custom_transition_delegate to the Router."
    
    def __init__(
        self,
        detail: str = "Custom transition requested without a custom transition delegate",
    ) -> None:
        super().__init__(detail)


class RouteNotConfigured(NavigationError):
    """The route handler has no node configured for the route."""
    
    recovery_suggestion = (
        "Configure nodes for your routes by supplying a route handler "
        "to the Router."
    )
    
    def __init__(self, route: Any = None) -> None:
        self.route = route
        if route is None:
            super().__init__("Attempted to navigate to a route, but no route was configured")
        else:
            super().__init__(f"No node has been configured for route {route!r}")


# ---------------------------------------------------------------------------
# URL matching errors
# ---------------------------------------------------------------------------


class URLMatchingError(NavRouteException):
    """Errors raised while extracting parameters from a matched URL."""
    pass


class MissingRequiredPathParameter(URLMatchingError):
    """A path parameter was requested that the pattern never captured."""
    
    def __init__(self, parameter: str) -> None:
        self.parameter = parameter
        self.recovery_suggestion = (
            f"Declare {{{parameter}}} in the path pattern, or remove it from the mapping."
        )
        super().__init__(
            f"Missing required path parameter {parameter!r} while unwrapping URL route"
        )


class RequiredIntegerParameterNotAnInteger(URLMatchingError):
    """A captured path parameter could not be parsed as an integer."""
    
    def __init__(self, parameter: str, raw_value: str) -> None:
        self.parameter = parameter
        self.raw_value = raw_value
        self.recovery_suggestion = (
            f"The value received was {raw_value!r}, which could not be cast to int."
        )
        super().__init__(
            f"Required integer parameter {parameter!r} existed, but was not an "
            f"integer. Instead {raw_value!r} was received"
        )
