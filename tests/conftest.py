"""
Fixtures for building presentation trees and routers in tests.
"""

import pytest

from navroute import Router
from tests.support import AppRoute, AppTree, CompletionRecorder, StubHandler, build_app_tree


@pytest.fixture
def tree() -> AppTree:
    return build_app_tree()


@pytest.fixture
def handler() -> StubHandler:
    return StubHandler()


@pytest.fixture
def router(tree: AppTree, handler: StubHandler) -> Router:
    return Router(root=tree.tabs, handler=handler, route_type=AppRoute)


@pytest.fixture
def completion() -> CompletionRecorder:
    return CompletionRecorder()
