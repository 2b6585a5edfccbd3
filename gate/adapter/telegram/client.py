"""Telegram Bot API gateway implementation.

Creates and revokes chat invite links through the Bot API. Each call is a
single POST bounded by the configured timeout and is never retried.
"""

from datetime import datetime, timezone
from itertools import count
from typing import Any

import httpx
import logfire

from gate.adapter.error import ProviderError, ProviderRejectedError
from gate.domain.service.gateway import (
    GatewayError,
    GatewayLink,
    GatewayRevokeResult,
    MessagingGateway,
)
from gate.domain.value import RemoteOutcome

# Telegram caps invite link names at 32 characters
MAX_LINK_NAME_LENGTH = 32
MAX_MEMBER_LIMIT = 99999

# Rejections that mean the link is already unusable
ALREADY_GONE_MARKERS = ("expired", "revoked", "invite_hash_invalid")


class TelegramGateway(MessagingGateway):
    """Base class for Telegram gateways.

    Provides type distinction for dependency injection.
    """

    pass


class RealTelegramGateway(TelegramGateway):
    """Telegram Bot API gateway over httpx."""

    def __init__(
        self,
        bot_token: str,
        api_base_url: str = "https://api.telegram.org",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Telegram gateway.

        Args:
            bot_token: Bot API token
            api_base_url: Bot API base URL
            timeout_seconds: Timeout applied to every call
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.bot_token = bot_token
        self.api_base_url = api_base_url.rstrip("/")
        self.timeout = httpx.Timeout(timeout_seconds)
        self.transport = transport

    async def create_invite_link(
        self,
        group_id: str,
        member_limit: int,
        label: str,
        expires_at: datetime | None = None,
    ) -> GatewayLink:
        """Create a chat invite link.

        Args:
            group_id: Telegram chat id
            member_limit: Members allowed through the link (1-99999)
            label: Link name, truncated to 32 characters
            expires_at: Optional expiry

        Returns:
            Created link

        Raises:
            GatewayError: If Telegram rejected the call or was unreachable
        """
        payload: dict[str, Any] = {
            "chat_id": group_id,
            "member_limit": max(1, min(member_limit, MAX_MEMBER_LIMIT)),
            "creates_join_request": False,
            "name": label[:MAX_LINK_NAME_LENGTH],
        }
        if expires_at is not None:
            payload["expire_date"] = int(expires_at.timestamp())

        try:
            result = await self._call("createChatInviteLink", payload)
        except ProviderRejectedError as e:
            raise GatewayError(e.description, outcome=RemoteOutcome.WARNING)
        except ProviderError as e:
            raise GatewayError(str(e), outcome=RemoteOutcome.UNKNOWN)

        invite_url = result.get("invite_link") if isinstance(result, dict) else None
        if not invite_url:
            logfire.error("Telegram returned no invite link", group_id=group_id)
            raise GatewayError("Telegram returned no invite link")

        expire_date = result.get("expire_date")
        logfire.info("Telegram invite link created", group_id=group_id)
        return GatewayLink(
            url=invite_url,
            expires_at=(
                datetime.fromtimestamp(expire_date, tz=timezone.utc)
                if expire_date
                else expires_at
            ),
        )

    async def revoke_invite_link(
        self, group_id: str, invite_url: str
    ) -> GatewayRevokeResult:
        """Revoke a chat invite link.

        Args:
            group_id: Telegram chat id
            invite_url: Link to revoke

        Returns:
            OK when revoked or already unusable, WARNING when Telegram
            refused, UNKNOWN when Telegram could not be reached
        """
        try:
            await self._call(
                "revokeChatInviteLink",
                {"chat_id": group_id, "invite_link": invite_url},
            )
        except ProviderRejectedError as e:
            description = e.description.lower()
            if any(marker in description for marker in ALREADY_GONE_MARKERS):
                logfire.info(
                    "Telegram link already unusable",
                    group_id=group_id,
                    detail=e.description,
                )
                return GatewayRevokeResult(outcome=RemoteOutcome.OK, detail=e.description)
            return GatewayRevokeResult(
                outcome=RemoteOutcome.WARNING, detail=e.description
            )
        except ProviderError as e:
            return GatewayRevokeResult(outcome=RemoteOutcome.UNKNOWN, detail=str(e))

        logfire.info("Telegram invite link revoked", group_id=group_id)
        return GatewayRevokeResult(outcome=RemoteOutcome.OK)

    async def _call(self, method: str, payload: dict[str, Any]) -> Any:
        """Invoke a Bot API method.

        Args:
            method: Bot API method name
            payload: JSON body

        Returns:
            The ``result`` field of the response

        Raises:
            ProviderRejectedError: If Telegram answered with ok=false
            ProviderError: On transport errors, 5xx or unparsable responses
        """
        url = f"{self.api_base_url}/bot{self.bot_token}/{method}"

        try:
            async with httpx.AsyncClient(
                transport=self.transport, timeout=self.timeout
            ) as client:
                response = await client.post(url, json=payload)
        except httpx.HTTPError as e:
            # str(e) can carry the request URL, which embeds the token
            logfire.error(
                "Telegram API HTTP error", method=method, error=type(e).__name__
            )
            raise ProviderError(f"HTTP error calling {method}: {type(e).__name__}")

        if response.status_code >= 500:
            logfire.error(
                "Telegram API server error",
                method=method,
                status_code=response.status_code,
            )
            raise ProviderError(f"{method} failed: HTTP {response.status_code}")

        try:
            body = response.json()
        except ValueError:
            logfire.error(
                "Telegram API returned invalid JSON",
                method=method,
                status_code=response.status_code,
            )
            raise ProviderError(f"{method} returned invalid JSON")

        if not body.get("ok"):
            description = body.get("description") or f"HTTP {response.status_code}"
            logfire.warn(
                "Telegram API rejected request",
                method=method,
                error_code=body.get("error_code"),
                description=description,
            )
            raise ProviderRejectedError(description, body.get("error_code"))

        return body.get("result")


class MockTelegramGateway(TelegramGateway):
    """Mock Telegram gateway for testing.

    Returns deterministic links without making real API calls and records
    every call. Failure modes are switched on through attributes.
    """

    def __init__(self) -> None:
        """Initialize mock gateway without real Telegram configuration."""
        self.created: list[dict[str, Any]] = []
        self.revoked: list[tuple[str, str]] = []
        self.fail_create = False
        self.revoke_outcome = RemoteOutcome.OK
        self._counter = count(1)

    async def create_invite_link(
        self,
        group_id: str,
        member_limit: int,
        label: str,
        expires_at: datetime | None = None,
    ) -> GatewayLink:
        """Return a fresh mock invite link."""
        if self.fail_create:
            raise GatewayError("Mock Telegram is unavailable")

        url = f"https://t.me/+mock{next(self._counter):06d}"
        self.created.append(
            {
                "group_id": group_id,
                "member_limit": member_limit,
                "label": label,
                "url": url,
            }
        )
        return GatewayLink(url=url, expires_at=expires_at)

    async def revoke_invite_link(
        self, group_id: str, invite_url: str
    ) -> GatewayRevokeResult:
        """Record the revoke and answer with the configured outcome."""
        self.revoked.append((group_id, invite_url))
        if self.revoke_outcome == RemoteOutcome.OK:
            return GatewayRevokeResult(outcome=RemoteOutcome.OK)
        return GatewayRevokeResult(
            outcome=self.revoke_outcome, detail="Mock Telegram revoke failure"
        )
