from unittest.mock import MagicMock

import pytest

from pomframework.page_factory import PageConstructionError, PageFactory
from pomframework.sync_bridge import EventLoopThread, SyncBridgeError


class FourArgPage:
    def __init__(self, page, config, logger, page_factory):
        self.page = page
        self.config = config
        self.logger = logger
        self.page_factory = page_factory


class ThreeArgPage:
    def __init__(self, page, config, logger):
        self.page = page
        self.logger = logger


class DefaultedFactoryPage:
    def __init__(self, page, config, logger, page_factory=None):
        self.page_factory = page_factory


class TwoArgPage:
    def __init__(self, page, config):
        self.page = page


@pytest.fixture
def factory(config):
    return PageFactory(MagicMock(name="page"), config)


def test_same_type_returns_identical_instance(factory):
    first = factory.get_page(FourArgPage)

    assert factory.get_page(FourArgPage) is first
    assert factory.is_cached(FourArgPage)


def test_four_argument_constructor_receives_factory(factory, config):
    page = factory.get_page(FourArgPage)

    assert page.page_factory is factory
    assert page.page is factory.page
    assert page.config is config
    assert page.logger is not None


def test_four_argument_shape_is_preferred(factory):
    assert factory.get_page(DefaultedFactoryPage).page_factory is factory


def test_three_argument_constructor(factory):
    page = factory.get_page(ThreeArgPage)
    assert page.page is factory.page


def test_unsupported_constructor_names_expected_shapes(factory):
    with pytest.raises(PageConstructionError) as exc_info:
        factory.get_page(TwoArgPage)

    message = str(exc_info.value)
    assert "TwoArgPage" in message
    assert "TwoArgPage(page, config, logger, page_factory)" in message
    assert not factory.is_cached(TwoArgPage)


def test_construction_error_is_type_error(factory):
    with pytest.raises(TypeError):
        factory.get_page(TwoArgPage)


def test_clear_drops_cached_pages(factory):
    first = factory.get_page(ThreeArgPage)
    factory.clear()

    assert not factory.is_cached(ThreeArgPage)
    assert factory.get_page(ThreeArgPage) is not first


def test_factory_requires_page_and_config(config):
    with pytest.raises(ValueError):
        PageFactory(None, config)
    with pytest.raises(ValueError):
        PageFactory(MagicMock(), None)


def test_run_without_runner_fails(factory):
    async def noop():
        return None

    with pytest.raises(SyncBridgeError, match="no event loop runner"):
        factory.run(noop())


def test_run_uses_runner(config):
    async def answer():
        return 42

    with EventLoopThread() as runner:
        factory = PageFactory(MagicMock(), config, runner)
        assert factory.run(answer()) == 42
