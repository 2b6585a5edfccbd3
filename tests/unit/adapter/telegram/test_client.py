"""Tests for the Telegram Bot API gateway."""

import json
from datetime import datetime, timezone

import httpx
import pytest

from gate.adapter.telegram.client import RealTelegramGateway
from gate.domain.service import GatewayError
from gate.domain.value import RemoteOutcome

TOKEN = "123456:TEST-TOKEN"


def make_gateway(handler) -> RealTelegramGateway:
    return RealTelegramGateway(
        bot_token=TOKEN,
        api_base_url="https://api.telegram.test/",
        timeout_seconds=2.0,
        transport=httpx.MockTransport(handler),
    )


class TestCreateInviteLink:
    """Tests for create_invite_link."""

    @pytest.mark.asyncio
    async def test_posts_single_use_link_request(self):
        """The request carries the limit, a truncated name and the expiry."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "ok": True,
                    "result": {"invite_link": "https://t.me/+abcdef", "member_limit": 1},
                },
            )

        gateway = make_gateway(handler)
        expires_at = datetime(2030, 1, 1, tzinfo=timezone.utc)

        link = await gateway.create_invite_link(
            "-1001", member_limit=1, label="[ABC12345] " + "x" * 40, expires_at=expires_at
        )

        assert link.url == "https://t.me/+abcdef"
        assert link.expires_at == expires_at
        assert seen["url"] == f"https://api.telegram.test/bot{TOKEN}/createChatInviteLink"
        assert seen["body"]["chat_id"] == "-1001"
        assert seen["body"]["member_limit"] == 1
        assert seen["body"]["creates_join_request"] is False
        assert len(seen["body"]["name"]) == 32
        assert seen["body"]["expire_date"] == int(expires_at.timestamp())

    @pytest.mark.asyncio
    async def test_member_limit_is_clamped(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200, json={"ok": True, "result": {"invite_link": "https://t.me/+x"}}
            )

        await make_gateway(handler).create_invite_link("-1001", 500000, "label")

        assert seen["body"]["member_limit"] == 99999
        assert "expire_date" not in seen["body"]

    @pytest.mark.asyncio
    async def test_rejection_raises_warning(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400,
                json={
                    "ok": False,
                    "error_code": 400,
                    "description": "Bad Request: not enough rights",
                },
            )

        with pytest.raises(GatewayError) as exc_info:
            await make_gateway(handler).create_invite_link("-1001", 1, "label")

        assert exc_info.value.outcome == RemoteOutcome.WARNING
        assert "not enough rights" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_transport_error_raises_unknown_without_token(self):
        """Transport failures never echo the request URL, which holds the token."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(GatewayError) as exc_info:
            await make_gateway(handler).create_invite_link("-1001", 1, "label")

        assert exc_info.value.outcome == RemoteOutcome.UNKNOWN
        assert TOKEN not in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_server_error_raises_unknown(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad Gateway")

        with pytest.raises(GatewayError) as exc_info:
            await make_gateway(handler).create_invite_link("-1001", 1, "label")

        assert exc_info.value.outcome == RemoteOutcome.UNKNOWN


class TestRevokeInviteLink:
    """Tests for revoke_invite_link."""

    @pytest.mark.asyncio
    async def test_revoke_ok(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200, json={"ok": True, "result": {"invite_link": "https://t.me/+x"}}
            )

        result = await make_gateway(handler).revoke_invite_link(
            "-1001", "https://t.me/+x"
        )

        assert result.ok
        assert seen["url"].endswith("/revokeChatInviteLink")
        assert seen["body"] == {"chat_id": "-1001", "invite_link": "https://t.me/+x"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "description",
        ["Bad Request: INVITE_HASH_EXPIRED", "Bad Request: invite link revoked"],
    )
    async def test_already_unusable_link_counts_as_revoked(self, description):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400, json={"ok": False, "error_code": 400, "description": description}
            )

        result = await make_gateway(handler).revoke_invite_link(
            "-1001", "https://t.me/+x"
        )

        assert result.outcome == RemoteOutcome.OK

    @pytest.mark.asyncio
    async def test_other_rejection_is_warning(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                403,
                json={
                    "ok": False,
                    "error_code": 403,
                    "description": "Forbidden: bot was kicked from the supergroup chat",
                },
            )

        result = await make_gateway(handler).revoke_invite_link(
            "-1001", "https://t.me/+x"
        )

        assert result.outcome == RemoteOutcome.WARNING
        assert "kicked" in result.detail

    @pytest.mark.asyncio
    async def test_timeout_is_unknown(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        result = await make_gateway(handler).revoke_invite_link(
            "-1001", "https://t.me/+x"
        )

        assert result.outcome == RemoteOutcome.UNKNOWN
        assert not result.ok
