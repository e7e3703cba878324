"""
Shared route types, URL tables and trees for the test suite.
"""

from dataclasses import dataclass, field
from typing import Any

from navroute import (
    RouteNotConfigured,
    RouteTransition,
    URLMatcherGroup,
    URLPathMapper,
    variant,
)
from navroute.memory import MemoryNode, MemoryStack, MemoryTabs
from navroute.nodes import PresentationNode
from navroute.routes import Route


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


def _map_example(mapper: URLPathMapper) -> None:
    mapper.map("home", lambda: Home())
    mapper.map("users/{id}", lambda url: Profile(url.path_int("id")))
    mapper.map("users/me", lambda: Settings())
    mapper.map("products/{category}", lambda url: Product(url.path("category")))
    mapper.map("user/*/logout", lambda: Logout())


def _map_app_scheme(mapper: URLPathMapper) -> None:
    mapper.map("settings", lambda: Settings())


class AppRoute(Route):
    @classmethod
    def register_urls(cls) -> URLMatcherGroup:
        return URLMatcherGroup.host("example.com", _map_example) + URLMatcherGroup.scheme(
            "myapp", _map_app_scheme
        )


class Home(AppRoute):
    pass


class Settings(AppRoute):
    pass


class Logout(AppRoute):
    pass


@variant
class Profile(AppRoute):
    user_id: int
    unique_on_parameters = True


@variant
class Product(AppRoute):
    category: str


class OtherRoute(Route):
    pass


class Home2(OtherRoute):
    pass


# ---------------------------------------------------------------------------
# Trees
# ---------------------------------------------------------------------------


@dataclass
class AppTree:
    """tabs[home_stack[home, detail], feed_stack[feed]] with home_stack selected."""
    
    tabs: MemoryTabs
    home_stack: MemoryStack
    feed_stack: MemoryStack
    home: MemoryNode
    detail: MemoryNode
    feed: MemoryNode
    
    def operations(self) -> list[tuple[Any, ...]]:
        """Every primitive operation recorded anywhere in the tree."""
        ops: list[tuple[Any, ...]] = []
        for node in (self.tabs, self.home_stack, self.feed_stack, self.home, self.detail, self.feed):
            ops.extend(node.operations)
        return ops


def build_app_tree() -> AppTree:
    home = MemoryNode("home")
    detail = MemoryNode("detail")
    feed = MemoryNode("feed")
    home_stack = MemoryStack("home-stack", [home, detail])
    feed_stack = MemoryStack("feed-stack", [feed])
    tabs = MemoryTabs("tabs", [home_stack, feed_stack])
    return AppTree(tabs, home_stack, feed_stack, home, detail, feed)


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------


@dataclass
class StubHandler:
    """Route handler that maps route names to fixed nodes and records calls."""
    
    nodes: dict[str, PresentationNode] = field(default_factory=dict)
    transitions: dict[str, RouteTransition] = field(default_factory=dict)
    resolved: list[tuple[Route, PresentationNode]] = field(default_factory=list)
    
    def resolve(self, route: Route, current: PresentationNode) -> PresentationNode:
        self.resolved.append((route, current))
        try:
            return self.nodes[route.name]
        except KeyError:
            raise RouteNotConfigured(route) from None
    
    def transition_for(self, route: Route) -> RouteTransition:
        return self.transitions.get(route.name, RouteTransition.inferred)


@dataclass
class RecordingDelegate:
    """Custom transition delegate that presents the destination modally."""
    
    calls: list[tuple[Any, ...]] = field(default_factory=list)
    
    async def perform_transition(
        self,
        destination: PresentationNode,
        source: PresentationNode,
        transition: RouteTransition,
        animated: bool,
    ) -> None:
        self.calls.append((destination, source, transition, animated))
        await source.present(destination, animated)


class CompletionRecorder:
    """Completion callback that records every call."""
    
    def __init__(self) -> None:
        self.calls: list[BaseException | None] = []
    
    def __call__(self, error: BaseException | None) -> None:
        self.calls.append(error)
    
    @property
    def error(self) -> BaseException | None:
        assert len(self.calls) == 1, f"completion called {len(self.calls)} times"
        return self.calls[0]
