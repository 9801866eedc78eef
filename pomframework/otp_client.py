"""
================================================================================
SMS One-Time Password Client
================================================================================

Retrieves a one-time passcode delivered by SMS, for login flows with
SMS-based multi-factor authentication.

The client polls the Twilio Messages REST API for the newest message sent to
the configured phone number and extracts the first code matching
``otp.code_pattern``. Credentials come only from configuration (typically
the TEST_CONFIGURATION__OTP__* environment variables).

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
import re
from typing import Any, Dict, List, Optional

import httpx

from .config import OtpConfiguration
from .logging_setup import get_logger


DEFAULT_HTTP_TIMEOUT = 15.0


class OtpRetrievalError(Exception):
    """Raised when no one-time passcode could be obtained."""
    pass


class SmsOtpClient:
    """
    Async client for fetching SMS passcodes.

    Usage:
        async with SmsOtpClient(config.otp) as client:
            code = await client.fetch_code()
    """

    def __init__(
        self,
        otp_config: OtpConfiguration,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        logger=None,
    ) -> None:
        """
        Args:
            otp_config: OTP section of the test configuration
            transport: Custom httpx transport (used by tests)
            logger: Loguru logger; defaults to an "SmsOtpClient" component logger
        """
        self.config = otp_config
        self.logger = logger or get_logger("SmsOtpClient")
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._pattern = re.compile(otp_config.code_pattern)

    async def __aenter__(self) -> "SmsOtpClient":
        self._client = self._build_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.config.api_base_url,
            auth=(self.config.account_sid, self.config.auth_token),
            timeout=httpx.Timeout(DEFAULT_HTTP_TIMEOUT),
            transport=self._transport,
        )

    @property
    def messages_path(self) -> str:
        return f"/2010-04-01/Accounts/{self.config.account_sid}/Messages.json"

    def extract_code(self, body: str) -> Optional[str]:
        match = self._pattern.search(body or "")
        return match.group(0) if match else None

    async def _latest_messages(self, client: httpx.AsyncClient) -> List[Dict[str, Any]]:
        response = await client.get(
            self.messages_path,
            params={"To": self.config.phone_number, "PageSize": 1},
        )
        response.raise_for_status()
        return response.json().get("messages", [])

    async def fetch_code(self) -> str:
        """
        Poll for the newest SMS and return its passcode.

        Raises:
            OtpRetrievalError: Not configured, or no code after all attempts
        """
        if not self.config.is_configured:
            raise OtpRetrievalError(
                "SMS OTP retrieval is not configured "
                "(otp.account_sid, otp.auth_token and otp.phone_number are required)"
            )

        owns_client = self._client is None
        client = self._client or self._build_client()
        last_problem = "no message received"
        try:
            if self.config.initial_delay_ms > 0:
                await asyncio.sleep(self.config.initial_delay_ms / 1000)

            for attempt in range(1, self.config.poll_attempts + 1):
                try:
                    messages = await self._latest_messages(client)
                except httpx.HTTPError as e:
                    last_problem = f"HTTP error: {e}"
                    self.logger.warning(f"OTP poll {attempt}/{self.config.poll_attempts} failed: {e}")
                else:
                    if messages:
                        code = self.extract_code(messages[0].get("body", ""))
                        if code:
                            self.logger.info("OTP code retrieved")
                            return code
                        last_problem = "latest message contains no code"
                    self.logger.debug(f"OTP poll {attempt}/{self.config.poll_attempts}: {last_problem}")

                if attempt < self.config.poll_attempts and self.config.poll_interval_ms > 0:
                    await asyncio.sleep(self.config.poll_interval_ms / 1000)
        finally:
            if owns_client:
                await client.aclose()

        raise OtpRetrievalError(
            f"No OTP code after {self.config.poll_attempts} attempt(s): {last_problem}"
        )


__all__ = [
    "OtpRetrievalError",
    "SmsOtpClient",
]
