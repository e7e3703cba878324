"""
Main NavRoute router.
The entry point that ties URL matching and navigation together.
"""

import asyncio
import contextlib
import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import SplitResult

from navroute.handlers import UnconfiguredRouteHandler
from navroute.matching import URLMatcherGroup
from navroute.navigator import Navigator
from navroute.nodes import PresentationNode
from navroute.routes import Route
from navroute.tree import top_node
from navroute.types import (
    Activity,
    Completion,
    CustomTransitionDelegate,
    ErrorSink,
    RootProvider,
    RouteHandler,
)

# Activity type tag for web-browsing handoff (universal links)
ACTIVITY_TYPE_BROWSING_WEB: str = "NSUserActivityTypeBrowsingWeb"


@dataclass(frozen=True, slots=True)
class UserActivity:
    """An activity handed over by the platform."""

    activity_type: str
    webpage_url: str | None = None


class Router:
    """
    Resolves routes and URLs into navigation on a presentation tree.
    
    Implements the Facade pattern over the URL matchers and the
    :class:`Navigator`.
    
    Usage:
        router = Router(root=window.root, handler=routes, route_type=AppRoute)
        
        await router.navigate(Profile(user_id=7))
        await router.open_url("https://example.com/users/7")
    
    Errors are reported to ``completion`` when one is given. Otherwise
    they go to :meth:`received_unhandled_error`, which re-raises them.
    """
    
    def __init__(
        self,
        root: PresentationNode | RootProvider | None = None,
        handler: RouteHandler | None = None,
        *,
        route_type: type[Route] | None = None,
        url_matchers: URLMatcherGroup | None = None,
        custom_transition_delegate: CustomTransitionDelegate | None = None,
        serialize: bool = True,
        debug: bool = False,
        logger: logging.Logger | None = None,
        on_unhandled_error: ErrorSink | None = None,
    ) -> None:
        if route_type is not None and not (
            isinstance(route_type, type) and issubclass(route_type, Route)
        ):
            raise ValueError(f"route_type must be a Route subclass, got {route_type!r}")
        if url_matchers is not None and not isinstance(url_matchers, URLMatcherGroup):
            raise ValueError("url_matchers must be a URLMatcherGroup")
        
        self._root = root
        self.handler: RouteHandler = handler if handler is not None else UnconfiguredRouteHandler()
        self.route_type = route_type
        self.custom_transition_delegate = custom_transition_delegate
        self.debug = debug
        
        self._url_matchers = url_matchers
        self._url_matchers_loaded = url_matchers is not None
        
        self._logger = logger or logging.getLogger("navroute.navigation")
        self._url_logger = logging.getLogger("navroute.urls")
        self._error_logger = logging.getLogger("navroute.errors")
        self._on_unhandled_error = on_unhandled_error
        
        self._navigator = Navigator(self._logger)
        self._lock: asyncio.Lock | None = asyncio.Lock() if serialize else None
    
    # ------------------------------------------------------------------
    # Tree access
    # ------------------------------------------------------------------
    
    @property
    def root(self) -> PresentationNode | None:
        """The current root node."""
        if isinstance(self._root, PresentationNode) or self._root is None:
            return self._root
        return self._root()
    
    @root.setter
    def root(self, value: PresentationNode | RootProvider | None) -> None:
        self._root = value
    
    @property
    def current_top_node(self) -> PresentationNode | None:
        """The deepest currently visible node."""
        root = self.root
        return top_node(root) if root is not None else None
    
    @property
    def url_matchers(self) -> URLMatcherGroup | None:
        """URL matchers, registered by ``route_type.register_urls()`` on first use."""
        if not self._url_matchers_loaded:
            if self.route_type is not None:
                self._url_matchers = self.route_type.register_urls()
            self._url_matchers_loaded = True
        return self._url_matchers
    
    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    
    async def navigate(
        self,
        route: Route,
        animated: bool = True,
        completion: Completion | None = None,
    ) -> None:
        """
        Navigate to a route.
        
        Has no visible effect if the route's node (or its stack) is already
        on top, although the route handler is still consulted.
        """
        try:
            async with self._serialized():
                await self._navigator.navigate(
                    route,
                    self.handler,
                    self.root,
                    self.custom_transition_delegate,
                    animated,
                )
        except asyncio.CancelledError as exc:
            if completion is not None:
                completion(exc)
            raise
        except Exception as exc:
            self._finish(completion, exc)
            return
        
        self._finish(completion, None)
    
    def match_url(self, url: str | SplitResult) -> Route | None:
        """
        Find the route registered for ``url``.
        Returns None if nothing matches.
        """
        matchers = self.url_matchers
        if matchers is None:
            return None
        
        route = matchers.find_match(url)
        if route is None:
            self._url_logger.debug("No route for url=%s", url)
        else:
            self._url_logger.info("url=%s route=%s", url, route)
        return route
    
    async def open_url(
        self,
        url: str | SplitResult,
        animated: bool = True,
        completion: Completion | None = None,
    ) -> bool:
        """
        Open a URL by navigating to its route.
        
        Returns True if the URL matched a route. An unmatched URL is not
        an error: the completion receives None.
        """
        try:
            route = self.match_url(url)
        except Exception as exc:
            self._finish(completion, exc)
            return False
        
        if route is None:
            self._finish(completion, None)
            return False
        
        await self.navigate(route, animated=animated, completion=completion)
        return True
    
    async def continue_activity(
        self,
        activity: Activity,
        animated: bool = True,
        completion: Completion | None = None,
    ) -> bool:
        """
        Handle a universal link.
        
        Only web-browsing activities with a URL are accepted.
        Anything else is not handled: the completion receives None.
        """
        if activity.activity_type != ACTIVITY_TYPE_BROWSING_WEB:
            self._finish(completion, None)
            return False
        url = activity.webpage_url
        if url is None:
            self._finish(completion, None)
            return False
        return await self.open_url(str(url), animated=animated, completion=completion)
    
    # ------------------------------------------------------------------
    # Error reporting
    # ------------------------------------------------------------------
    
    def received_unhandled_error(self, error: BaseException) -> None:
        """
        An error occurred and no completion was given to report it to.
        
        Calls ``on_unhandled_error`` if one was configured; otherwise logs
        the error and re-raises it to the caller.
        """
        if self._on_unhandled_error is not None:
            self._on_unhandled_error(error)
            return
        
        self._error_logger.error(
            "Unhandled navigation error: %s",
            error,
            exc_info=error if self.debug else None,
        )
        raise error
    
    # ------------------------------------------------------------------
    # Implementation
    # ------------------------------------------------------------------
    
    def _serialized(self) -> Any:
        if self._lock is None:
            return contextlib.nullcontext()
        return self._lock
    
    def _finish(self, completion: Completion | None, error: BaseException | None) -> None:
        if completion is not None:
            completion(error)
        elif error is not None:
            self.received_unhandled_error(error)
