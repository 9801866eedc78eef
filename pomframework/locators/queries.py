"""
Logged read-only locator queries.
"""

from typing import Dict, List, Optional

from playwright.async_api import Locator

from .context import current_logger
from .interactions import describe


async def get_text(locator: Locator) -> str:
    text = await locator.text_content() or ""
    current_logger().debug(f"Text of {describe(locator)}: {text!r}")
    return text


async def get_inner_text(locator: Locator) -> str:
    return await locator.inner_text()


async def get_inner_html(locator: Locator) -> str:
    return await locator.inner_html()


async def get_attribute(locator: Locator, name: str) -> Optional[str]:
    value = await locator.get_attribute(name)
    current_logger().debug(f"Attribute {name} of {describe(locator)}: {value!r}")
    return value


async def is_visible(locator: Locator) -> bool:
    return await locator.is_visible()


async def is_hidden(locator: Locator) -> bool:
    return await locator.is_hidden()


async def is_enabled(locator: Locator) -> bool:
    return await locator.is_enabled()


async def is_disabled(locator: Locator) -> bool:
    return await locator.is_disabled()


async def is_checked(locator: Locator) -> bool:
    return await locator.is_checked()


async def is_editable(locator: Locator) -> bool:
    return await locator.is_editable()


async def count(locator: Locator) -> int:
    return await locator.count()


async def get_value(locator: Locator) -> str:
    """Current value of an input, textarea or select."""
    return await locator.input_value()


async def get_placeholder(locator: Locator) -> Optional[str]:
    return await locator.get_attribute("placeholder")


async def get_class(locator: Locator) -> Optional[str]:
    return await locator.get_attribute("class")


async def get_id(locator: Locator) -> Optional[str]:
    return await locator.get_attribute("id")


async def get_name(locator: Locator) -> Optional[str]:
    return await locator.get_attribute("name")


async def get_type(locator: Locator) -> Optional[str]:
    return await locator.get_attribute("type")


async def get_all_texts(locator: Locator) -> List[str]:
    """Text of every match, skipping empty and whitespace-only entries."""
    texts = await locator.all_text_contents()
    return [text.strip() for text in texts if text and text.strip()]


async def get_all_attributes(locator: Locator, name: str) -> List[Optional[str]]:
    total = await locator.count()
    return [await locator.nth(i).get_attribute(name) for i in range(total)]


async def get_attributes(locator: Locator, names: List[str]) -> Dict[str, Optional[str]]:
    return {name: await locator.get_attribute(name) for name in names}


__all__ = [
    "count",
    "get_all_attributes",
    "get_all_texts",
    "get_attribute",
    "get_attributes",
    "get_class",
    "get_id",
    "get_inner_html",
    "get_inner_text",
    "get_name",
    "get_placeholder",
    "get_text",
    "get_type",
    "get_value",
    "is_checked",
    "is_disabled",
    "is_editable",
    "is_enabled",
    "is_hidden",
    "is_visible",
]
