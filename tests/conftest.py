"""
Pytest configuration and shared fixtures for all rs2zig tests.

This conftest.py provides session-scoped fixtures to speed up tests by
reusing the parser (building the LALR tables is the expensive part).
"""

import sys
import pytest
from typing import Callable, List
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from rs2zig.frontend.parser import Parser
from rs2zig.compiler.driver import TranslationDriver, TranslationResult
from rs2zig.utils.config import DEFAULT_LINK_NAME


# =============================================================================
# Session-scoped fixtures (shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def session_parser():
    """
    Session-scoped parser instance shared across ALL tests.

    - Grammar is loaded once with Lark native caching
    - Safe to share: the transformer only keeps the current file name and text
    """
    return Parser()


@pytest.fixture(scope="session")
def parse(session_parser) -> Callable:
    """parse(source) -> Program, with the file name fixed to test.rs"""
    def _parse(source: str):
        return session_parser.parse(source, "test.rs")
    return _parse


@pytest.fixture
def driver(session_parser):
    """Fresh driver (and so fresh TranslationContext) per test"""
    return TranslationDriver(parser=session_parser)


# =============================================================================
# Helper fixtures
# =============================================================================

@pytest.fixture(scope="session")
def translate_factory(session_parser):
    """
    Factory fixture that provides a translate function.
    Every call runs with a fresh driver, so module imports are never shared
    between calls.
    """
    def _translate(source: str, link_name: str = DEFAULT_LINK_NAME) -> TranslationResult:
        driver = TranslationDriver(link_name=link_name, parser=session_parser)
        return driver.translate_source(source, "test.rs")

    return _translate


@pytest.fixture
def translate(translate_factory):
    """translate(source, link_name=...) -> TranslationResult"""
    return translate_factory


@pytest.fixture
def translate_lines(translate_factory) -> Callable[..., List[str]]:
    """translate_lines(source, link_name=...) -> emitted lines"""
    def _translate_lines(source: str, link_name: str = DEFAULT_LINK_NAME) -> List[str]:
        return translate_factory(source, link_name).lines
    return _translate_lines


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers for test organization."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
