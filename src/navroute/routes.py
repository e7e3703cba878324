"""
Route base type.

A route names a destination in the application. Variants are declared as
subclasses of an application route family; parameterized variants are
frozen dataclasses declared with :func:`variant`::

    class AppRoute(Route):
        @classmethod
        def register_urls(cls):
            return URLMatcherGroup.host("example.com", lambda m: ...)

    class Home(AppRoute):
        pass

    @variant
    class Profile(AppRoute):
        user_id: int
        unique_on_parameters = True
"""

from collections.abc import Callable
from dataclasses import dataclass, fields, is_dataclass
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

if TYPE_CHECKING:
    from navroute.matching import URLMatcherGroup

T = TypeVar("T", bound=type)


class Route:
    """
    Base class for route variants.
    
    Equality compares the route family and ``name``. When the variant sets
    ``unique_on_parameters``, the associated parameters must match too.
    """
    
    unique_on_parameters: ClassVar[bool] = False
    
    @property
    def base_name(self) -> str:
        """Variant tag, e.g. ``Profile`` for ``Profile(user_id=3)``."""
        return type(self).__name__
    
    @property
    def name(self) -> str:
        """Route identifier (default: ``base_name``)."""
        return self.base_name
    
    @property
    def parameters(self) -> tuple[Any, ...]:
        """Associated parameter values, in declaration order."""
        if is_dataclass(self):
            return tuple(getattr(self, f.name) for f in fields(self))
        return ()
    
    @classmethod
    def family(cls) -> type["Route"]:
        """The route type this variant belongs to (the direct subclass of Route)."""
        for klass in cls.__mro__:
            if Route in klass.__bases__:
                return klass
        return cls
    
    @classmethod
    def register_urls(cls) -> "URLMatcherGroup | None":
        """Register the URL matchers for this route type (default: none)."""
        return None
    
    def _identity(self) -> tuple[Any, ...]:
        if self.unique_on_parameters:
            return (self.family(), self.name, self.parameters)
        return (self.family(), self.name)
    
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Route):
            return NotImplemented
        return self._identity() == other._identity()
    
    def __hash__(self) -> int:
        return hash(self._identity())
    
    def __repr__(self) -> str:
        if self.parameters:
            return f"{self.base_name}{self.parameters!r}"
        return self.base_name


def variant(cls: T | None = None, /, **options: Any) -> T | Callable[[T], T]:
    """
    Declare a parameterized route variant.
    
    Wraps :func:`dataclasses.dataclass` with ``frozen=True`` and
    ``eq=False`` so the generated class keeps Route equality.
    """
    options.setdefault("frozen", True)
    options["eq"] = False
    
    def wrap(klass: T) -> T:
        return dataclass(klass, **options)
    
    if cls is None:
        return wrap
    return wrap(cls)
