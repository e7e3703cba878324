"""
URL matching for NavRoute.
Maps incoming URLs to routes.

A :class:`URLMatcherGroup` holds an ordered list of :class:`URLMatcher`
objects. Each matcher filters on scheme and host, then hands the URL's
path to its :class:`URLPathMapper`, which tries static patterns before
dynamic ones. The first match anywhere wins.
"""

import inspect
import logging
import re
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Pattern
from urllib.parse import SplitResult, parse_qsl, urlsplit

from navroute.exceptions import (
    MissingRequiredPathParameter,
    RequiredIntegerParameterNotAnInteger,
    RoutingError,
)
from navroute.routes import Route
from navroute.types import DynamicRouteFactory, RouteFactory, StaticRouteFactory

logger = logging.getLogger("navroute.urls")

# Path parameter syntax: {name} or :name
PATH_PARAM_PATTERN: Pattern[str] = re.compile(r"\{(\w*)\}|:(\w*)")

WILDCARD: str = "*"


def split_path(path: str) -> list[str]:
    """Split a path into non-empty segments."""
    return [s for s in path.split("/") if s]


# ---------------------------------------------------------------------------
# String matching (scheme / host filters)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class StringMatcher:
    """
    Predicate over an optional string.
    
    ``values=None`` matches anything, including a missing value.
    Otherwise the input must equal one of ``values``, ignoring case.
    """
    
    values: tuple[str, ...] | None = None
    
    @classmethod
    def any(cls) -> "StringMatcher":
        return cls(None)
    
    @classmethod
    def one(cls, value: str) -> "StringMatcher":
        return cls((value,))
    
    @classmethod
    def many(cls, values: Iterable[str]) -> "StringMatcher":
        return cls(tuple(values))
    
    @classmethod
    def coerce(cls, value: "StringMatcher | str | Iterable[str] | None") -> "StringMatcher":
        """Build a matcher from a string, a collection of strings, or None."""
        if isinstance(value, StringMatcher):
            return value
        if value is None:
            return cls.any()
        if isinstance(value, str):
            return cls.one(value)
        return cls.many(value)
    
    def matches(self, value: str | None) -> bool:
        if self.values is None:
            return True
        if value is None:
            return False
        folded = value.casefold()
        return any(candidate.casefold() == folded for candidate in self.values)


# ---------------------------------------------------------------------------
# Path patterns
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Literal:
    """Matches exactly one fixed path component."""
    
    value: str
    
    def matches(self, component: str) -> bool:
        return component == self.value


@dataclass(frozen=True, slots=True)
class Wildcard:
    """Matches any single path component."""
    
    def matches(self, component: str) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Parameter:
    """Matches any single path component and captures it under ``name``."""
    
    name: str
    
    def matches(self, component: str) -> bool:
        return True


SegmentMatcher = Literal | Wildcard | Parameter


@dataclass(frozen=True, slots=True)
class PathPattern:
    """
    An ordered sequence of segment matchers compiled from a template.
    
    ``"users/{id}/posts/*"`` compiles to
    ``(Literal("users"), Parameter("id"), Literal("posts"), Wildcard())``.
    Leading and trailing slashes are ignored. A pattern only matches a path
    with the same number of components.
    """
    
    template: str
    segments: tuple[SegmentMatcher, ...] = field(init=False, repr=False)
    
    def __post_init__(self) -> None:
        object.__setattr__(self, "segments", self._compile(self.template))
    
    @staticmethod
    def _compile(template: str) -> tuple[SegmentMatcher, ...]:
        segments: list[SegmentMatcher] = []
        
        for seg in split_path(template):
            if seg == WILDCARD:
                segments.append(Wildcard())
                continue
            
            param = PATH_PARAM_PATTERN.fullmatch(seg)
            if param:
                name = param.group(1) if param.group(1) is not None else param.group(2)
                if not name:
                    raise RoutingError(f"Empty parameter name in path pattern: {template!r}")
                segments.append(Parameter(name))
            else:
                segments.append(Literal(seg))
        
        return tuple(segments)
    
    @property
    def parameter_names(self) -> tuple[str, ...]:
        return tuple(s.name for s in self.segments if isinstance(s, Parameter))
    
    def __len__(self) -> int:
        return len(self.segments)
    
    def match(self, components: Sequence[str]) -> dict[str, str] | None:
        """
        Match path components positionally.
        Returns captured parameters if matched, None otherwise.
        """
        if len(components) != len(self.segments):
            return None
        
        params: dict[str, str] = {}
        for matcher, component in zip(self.segments, components):
            if not matcher.matches(component):
                return None
            if isinstance(matcher, Parameter):
                params[matcher.name] = component
        
        return params


# ---------------------------------------------------------------------------
# Matched URL
# ---------------------------------------------------------------------------


class MatchedURL:
    """
    A URL that has been matched to a registered dynamic pattern.
    
    Provides typed accessors for path and query parameters::
    
        name = matched.path("name")
        page_id = matched.path_int("id")
        offset = matched.query("offset")
        page = matched.query_int("page") or 0
    """
    
    def __init__(
        self,
        url: str | SplitResult,
        path_parameters: Mapping[str, str] | None = None,
    ) -> None:
        self._parts = url if isinstance(url, SplitResult) else urlsplit(url)
        self._path_parameters: dict[str, str] = dict(path_parameters or {})
    
    @property
    def raw_url(self) -> str:
        """The URL as received."""
        return self._parts.geturl()
    
    @property
    def path_parameters(self) -> Mapping[str, str]:
        """Captured path parameters, as raw path components."""
        return dict(self._path_parameters)
    
    @cached_property
    def query_parameters(self) -> Mapping[str, str]:
        """Parsed query parameters. The last value wins on duplicate keys."""
        return dict(parse_qsl(self._parts.query, keep_blank_values=True))
    
    @cached_property
    def scheme(self) -> str | None:
        """URL scheme (e.g. ``https``)."""
        return self._parts.scheme or None
    
    @cached_property
    def host(self) -> str | None:
        """URL host (e.g. ``example.com``)."""
        return self._parts.hostname
    
    def path(self, name: str) -> str:
        """Retrieve a path parameter as a string."""
        try:
            return self._path_parameters[name]
        except KeyError:
            raise MissingRequiredPathParameter(name) from None
    
    def path_int(self, name: str) -> int:
        """Retrieve a path parameter as an integer."""
        value = self.path(name)
        try:
            return int(value)
        except ValueError:
            raise RequiredIntegerParameterNotAnInteger(name, value) from None
    
    def query(self, name: str) -> str | None:
        """Retrieve a query string parameter, if present."""
        return self.query_parameters.get(name)
    
    def query_int(self, name: str) -> int | None:
        """Retrieve a query string parameter as an integer, if it is one."""
        value = self.query(name)
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None
    
    def __repr__(self) -> str:
        return f"MatchedURL({self.raw_url!r}, {self._path_parameters!r})"


# ---------------------------------------------------------------------------
# Path mapper
# ---------------------------------------------------------------------------


def _takes_no_arguments(factory: Callable[..., Any]) -> bool:
    """True if ``factory`` can be called without arguments."""
    try:
        signature = inspect.signature(factory)
    except (TypeError, ValueError):
        return False
    
    for param in signature.parameters.values():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        if param.default is param.empty:
            return False
    return True


class URLPathMapper:
    """
    Per-matcher registry of path patterns to route factories.
    
    Static factories take no arguments; dynamic factories receive a
    :class:`MatchedURL`. All static patterns are tried before any dynamic
    pattern, each group in registration order.
    
    Usage::
    
        mapper.map("users", lambda: AllUsers())
        mapper.map("users/{id}/profile", lambda url: Profile(url.path_int("id")))
    """
    
    def __init__(self) -> None:
        self._static: list[tuple[PathPattern, StaticRouteFactory]] = []
        self._dynamic: list[tuple[PathPattern, DynamicRouteFactory]] = []
    
    @property
    def static_patterns(self) -> list[PathPattern]:
        return [pattern for pattern, _ in self._static]
    
    @property
    def dynamic_patterns(self) -> list[PathPattern]:
        return [pattern for pattern, _ in self._dynamic]
    
    def map(
        self,
        pattern: str | PathPattern,
        factory: RouteFactory,
        static: bool | None = None,
    ) -> PathPattern:
        """
        Map a path pattern to a route factory.
        
        ``static`` defaults to whether ``factory`` takes no arguments.
        """
        if not isinstance(pattern, PathPattern):
            pattern = PathPattern(pattern)
        
        if static is None:
            static = _takes_no_arguments(factory)
        
        if static:
            # pyrefly: ignore [bad-argument-type]
            self._static.append((pattern, factory))
        else:
            # pyrefly: ignore [bad-argument-type]
            self._dynamic.append((pattern, factory))
        return pattern
    
    def route(
        self,
        pattern: str | PathPattern,
        static: bool | None = None,
    ) -> Callable[[RouteFactory], RouteFactory]:
        """Decorator form of :meth:`map`."""
        def decorator(factory: RouteFactory) -> RouteFactory:
            self.map(pattern, factory, static=static)
            return factory
        return decorator
    
    def match(self, url: str | SplitResult) -> Route | None:
        """
        Find the route for a URL's path.
        
        Returns None if no pattern matches. Errors raised by a matching
        factory propagate.
        """
        parts = url if isinstance(url, SplitResult) else urlsplit(url)
        components = split_path(parts.path)
        
        for pattern, make_static_route in self._static:
            if pattern.match(components) is not None:
                logger.debug("Matched static pattern %r", pattern.template)
                return make_static_route()
        
        for pattern, make_dynamic_route in self._dynamic:
            params = pattern.match(components)
            if params is not None:
                logger.debug("Matched dynamic pattern %r params=%s", pattern.template, params)
                return make_dynamic_route(MatchedURL(parts, params))
        
        return None


# ---------------------------------------------------------------------------
# URL matchers
# ---------------------------------------------------------------------------


MapPaths = Callable[[URLPathMapper], Any]


class URLMatcher:
    """
    A set of path mappings for some host(s) and scheme(s).
    
    The ``map_paths`` callable receives the matcher's :class:`URLPathMapper`
    and registers patterns on it.
    """
    
    def __init__(
        self,
        map_paths: MapPaths | None = None,
        hosts: StringMatcher | str | Iterable[str] | None = None,
        schemes: StringMatcher | str | Iterable[str] | None = None,
    ) -> None:
        self.hosts = StringMatcher.coerce(hosts)
        self.schemes = StringMatcher.coerce(schemes)
        self.path_mapper = URLPathMapper()
        
        if map_paths is not None:
            map_paths(self.path_mapper)
    
    @classmethod
    def host(cls, host: str, map_paths: MapPaths | None = None) -> "URLMatcher":
        """Match a single host, any scheme."""
        return cls(map_paths, hosts=StringMatcher.one(host))
    
    @classmethod
    def scheme(cls, scheme: str, map_paths: MapPaths | None = None) -> "URLMatcher":
        """Match a single scheme, any host."""
        return cls(map_paths, schemes=StringMatcher.one(scheme))
    
    @classmethod
    def group(
        cls,
        map_paths: MapPaths | None = None,
        hosts: StringMatcher | str | Iterable[str] | None = None,
        schemes: StringMatcher | str | Iterable[str] | None = None,
    ) -> "URLMatcher":
        """Match some hosts and schemes."""
        return cls(map_paths, hosts=hosts, schemes=schemes)
    
    def accepts(self, url: str | SplitResult) -> bool:
        """Check the scheme and host filters."""
        parts = url if isinstance(url, SplitResult) else urlsplit(url)
        return self.schemes.matches(parts.scheme or None) and self.hosts.matches(parts.hostname)
    
    def match(self, url: str | SplitResult) -> Route | None:
        """Match a URL to one of the paths for this matcher's hosts/schemes."""
        parts = url if isinstance(url, SplitResult) else urlsplit(url)
        if not self.accepts(parts):
            return None
        return self.path_mapper.match(parts)
    
    def __repr__(self) -> str:
        return f"URLMatcher(hosts={self.hosts.values!r}, schemes={self.schemes.values!r})"


class URLMatcherGroup:
    """
    Ordered collection of URL matchers. The first successful match wins.
    
    Usage::
    
        URLMatcherGroup.host("example.com", lambda m: (
            m.map("products", lambda: AllProducts()),
            m.map("products/{category}", lambda u: Showcase(u.path("category"))),
            m.map("user/*/logout", lambda: Logout()),
        ))
    """
    
    def __init__(self, matchers: Iterable[URLMatcher] = ()) -> None:
        self._matchers: tuple[URLMatcher, ...] = tuple(matchers)
    
    @classmethod
    def host(cls, host: str, map_paths: MapPaths | None = None) -> "URLMatcherGroup":
        """Group with a single matcher for one host."""
        return cls([URLMatcher.host(host, map_paths)])
    
    @classmethod
    def scheme(cls, scheme: str, map_paths: MapPaths | None = None) -> "URLMatcherGroup":
        """Group with a single matcher for one scheme."""
        return cls([URLMatcher.scheme(scheme, map_paths)])
    
    @classmethod
    def group(
        cls,
        map_paths: MapPaths | None = None,
        hosts: StringMatcher | str | Iterable[str] | None = None,
        schemes: StringMatcher | str | Iterable[str] | None = None,
    ) -> "URLMatcherGroup":
        """Group with a single matcher for some hosts and schemes."""
        return cls([URLMatcher.group(map_paths, hosts=hosts, schemes=schemes)])
    
    @property
    def matchers(self) -> tuple[URLMatcher, ...]:
        return self._matchers
    
    def __iter__(self) -> Iterator[URLMatcher]:
        return iter(self._matchers)
    
    def __len__(self) -> int:
        return len(self._matchers)
    
    def __add__(self, other: "URLMatcherGroup") -> "URLMatcherGroup":
        if not isinstance(other, URLMatcherGroup):
            return NotImplemented
        return URLMatcherGroup(self._matchers + other._matchers)
    
    def find_match(self, url: str | SplitResult) -> Route | None:
        """
        Find the route for a URL.
        
        Returns None when no matcher accepts the URL or no pattern matches;
        errors raised by a matching dynamic factory propagate.
        """
        parts = url if isinstance(url, SplitResult) else urlsplit(url)
        
        for matcher in self._matchers:
            if not matcher.accepts(parts):
                logger.debug("%r rejected url=%s", matcher, parts.geturl())
                continue
            logger.debug("Trying %r path=%s", matcher, parts.path)
            route = matcher.path_mapper.match(parts)
            if route is not None:
                return route
        
        return None
