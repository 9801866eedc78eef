"""
Fluent (sync) page objects over the event-loop bridge with a real browser.
"""

import pytest
from playwright.async_api import Error as PlaywrightError

from pomframework.browser_manager import BrowserManager
from pomframework.fluent_page import FluentBasePage
from pomframework.page_factory import PageFactory
from pomframework.sync_bridge import EventLoopThread, SyncBridgeError


FORM = """
<html><head><title>Sign in</title></head><body>
  <input id="user"><button id="go" onclick="document.title = 'Welcome ' + user.value">Go</button>
</body></html>
"""


class WelcomePage(FluentBasePage):

    def title_text(self) -> str:
        return self.get_title()


class SignInPage(FluentBasePage):

    async def sign_in_async(self, name: str) -> None:
        await self.fill_async("#user", name)
        await self.click_async("#go")

    def sign_in(self, name: str) -> WelcomePage:
        self.run(self.sign_in_async(name))
        return self.get_page(WelcomePage)


@pytest.fixture
def bridged(config, log):
    runner = EventLoopThread(name="integration-loop")
    runner.start()
    manager = BrowserManager(config, logger=log)
    try:
        runner.run(manager.initialize())
    except PlaywrightError as e:
        runner.stop()
        pytest.skip(f"Chromium not available: {e}")
    page = runner.run(manager.create_page())
    runner.run(page.set_content(FORM))
    yield runner, PageFactory(page, config, runner)
    runner.run(manager.dispose())
    runner.stop()


def test_sync_chain_returns_next_page(bridged):
    _, factory = bridged

    sign_in = factory.get_page(SignInPage)
    assert sign_in.get_title() == "Sign in"

    welcome = sign_in.sign_in("Ada")

    assert isinstance(welcome, WelcomePage)
    assert welcome.title_text() == "Welcome Ada"


def test_sync_wrapper_inside_loop_is_rejected(bridged):
    runner, factory = bridged
    sign_in = factory.get_page(SignInPage)

    async def nested():
        return sign_in.get_title()

    with pytest.raises(SyncBridgeError):
        runner.run(nested())
