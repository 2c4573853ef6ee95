"""Tests for studio session lifecycle."""

import asyncio

import pytest
from conftest import make_auth_session

from culinary_studio.domain.messages import DirectMessage
from culinary_studio.domain.models import PlanTier, PromoCode
from culinary_studio.domain.prices import PriceEntry
from culinary_studio.errors import InvalidRequestError, NotAuthenticatedError
from culinary_studio.services.auth import AuthEvent
from culinary_studio.services.sessions import Theme


def _sign_up(session_manager, **overrides):  # type: ignore[no-untyped-def]
    payload = {
        "email": "ana@example.com",
        "password": "secret-pass",
        "confirm_password": "secret-pass",
        "username": "ana",
        "full_name": "Ana Lopez",
        "plan": PlanTier.FREE,
    }
    payload.update(overrides)
    return session_manager.sign_up(**payload)


def test_sign_up_with_promo_code_grants_its_plan(
    session_manager, promo_repository, auth_provider
) -> None:
    promo_repository.codes["CHEF2026"] = PromoCode(
        code="CHEF2026",
        plan_to_grant=PlanTier.PLATINUM,
        current_uses=0,
        max_uses=10,
    )

    result = _sign_up(session_manager, promo_code=" chef2026 ")

    assert result.tier == PlanTier.PLATINUM
    assert result.verification_pending is False
    assert result.session is not None
    assert result.session.profile.chef_name == "Chef Ana Lopez"
    assert promo_repository.redeemed == ["CHEF2026"]
    _, user = auth_provider.users["ana@example.com"]
    assert user.metadata["tier"] == "platinum"


def test_sign_up_rejects_password_mismatch(session_manager, auth_provider) -> None:
    with pytest.raises(InvalidRequestError):
        _sign_up(session_manager, confirm_password="other")

    assert auth_provider.users == {}


def test_sign_up_rejects_exhausted_promo(
    session_manager, promo_repository, auth_provider
) -> None:
    promo_repository.codes["USED"] = PromoCode(
        code="USED", plan_to_grant=PlanTier.PLATINUM, current_uses=5, max_uses=5
    )

    with pytest.raises(InvalidRequestError, match="Invalid or expired code"):
        _sign_up(session_manager, promo_code="used")

    assert auth_provider.users == {}
    assert promo_repository.redeemed == []


def test_sign_up_waits_for_email_verification(
    session_manager, auth_provider
) -> None:
    auth_provider.auto_confirm = False

    result = _sign_up(session_manager, plan=PlanTier.PLATINUM_PRIME)

    assert result.verification_pending is True
    assert result.session is None
    assert result.tier == PlanTier.PLATINUM_PRIME
    assert session_manager.open_sessions() == []


def test_resolve_reuses_sessions_and_rejects_unknown_tokens(
    session_manager, auth_provider
) -> None:
    _sign_up(session_manager)
    session = session_manager.sign_in("ana@example.com", "secret-pass")

    assert session_manager.resolve(session.access_token) is session
    with pytest.raises(NotAuthenticatedError):
        session_manager.resolve("bogus")


def test_sign_out_closes_the_realtime_inbox(
    session_manager, auth_provider, realtime_gateway
) -> None:
    async def scenario() -> None:
        _sign_up(session_manager)
        session = session_manager.sign_in("ana@example.com", "secret-pass")
        inbox = await session_manager.inbox(session)
        subscription = inbox.subscribe()

        await session_manager.sign_out(session.access_token)

        assert realtime_gateway.unsubscribed
        assert subscription.closed
        assert session_manager.find(session.access_token) is None
        assert auth_provider.signed_out == [session.access_token]

    asyncio.run(scenario())


def test_inbox_is_opened_once_per_session(session_manager, realtime_gateway) -> None:
    async def scenario() -> None:
        _sign_up(session_manager)
        session = session_manager.sign_in("ana@example.com", "secret-pass")
        first = await session_manager.inbox(session)
        second = await session_manager.inbox(session)
        subscription = first.subscribe()

        realtime_gateway.push(
            DirectMessage(
                id="m1", sender_id="chef-2", receiver_id=session.user_id, text="Hola"
            )
        )

        assert first is second
        assert len(realtime_gateway.callbacks) == 1
        assert (await subscription.get()).text == "Hola"

    asyncio.run(scenario())


def test_refreshed_token_takes_over_the_provider_session(
    session_manager, auth_provider
) -> None:
    session_manager.start()
    auth_provider.emit(AuthEvent.SIGNED_IN, make_auth_session(token="old"))
    original = session_manager.find("old")

    auth_provider.emit(AuthEvent.TOKEN_REFRESHED, make_auth_session(token="new"))

    assert session_manager.find("old") is None
    assert session_manager.find("new") is original
    assert original is not None
    assert original.access_token == "new"


def test_refresh_does_not_touch_other_sessions_of_the_user(
    session_manager, auth_provider
) -> None:
    session_manager.start()
    auth_provider.emit(AuthEvent.SIGNED_IN, make_auth_session(token="desktop"))
    auth_provider.tokens["phone"] = make_auth_session().user
    phone = session_manager.resolve("phone")

    auth_provider.emit(AuthEvent.TOKEN_REFRESHED, make_auth_session(token="desktop-2"))

    assert session_manager.find("phone") is phone
    assert session_manager.find("desktop") is None


def test_start_adopts_current_session_and_signed_out_discards_it(
    session_manager, auth_provider
) -> None:
    auth_provider.current = make_auth_session(token="restored")

    session_manager.start()
    assert session_manager.find("restored") is not None

    auth_provider.emit(AuthEvent.SIGNED_OUT, None)
    assert session_manager.find("restored") is None

    asyncio.run(session_manager.stop())
    assert auth_provider.listeners == []


def test_session_preferences(session_manager, auth_provider) -> None:
    auth_provider.tokens["token-1"] = make_auth_session().user
    session = session_manager.resolve("token-1")

    assert session.toggle_theme() == Theme.DARK
    session.set_language("ja")
    assert session.language == "ja"
    with pytest.raises(InvalidRequestError):
        session.set_language("xx")


def test_clipboard_transfer_empties_the_clipboard(
    session_manager, auth_provider
) -> None:
    auth_provider.tokens["token-1"] = make_auth_session().user
    session = session_manager.resolve("token-1")
    entry = PriceEntry(
        id="pe-1",
        ingredient_id="rice",
        name="Rice",
        category="Grain",
        country="Spain",
        country_code="ES",
        supplier="Mercasa",
        unit="kg",
        price=1.5,
        currency="€",
        last_updated="1h ago",
        trend="up",
        trend_value="1.0%",
    )
    session.clipboard.toggle(entry)

    rows = session.transfer_clipboard()

    assert [row.name for row in rows] == ["Rice"]
    assert session.clipboard.items == []
    assert session.worksheet.rows == rows


def test_logins_of_the_same_user_have_separate_inboxes(
    session_manager, auth_provider, realtime_gateway
) -> None:
    async def scenario() -> None:
        user = make_auth_session().user
        auth_provider.tokens["phone"] = user
        auth_provider.tokens["laptop"] = user
        phone = session_manager.resolve("phone")
        laptop = session_manager.resolve("laptop")
        phone_inbox = await session_manager.inbox(phone)
        laptop_inbox = await session_manager.inbox(laptop)
        phone_subscription = phone_inbox.subscribe()
        laptop_subscription = laptop_inbox.subscribe()

        realtime_gateway.push(
            DirectMessage(id="m1", sender_id="chef-2", receiver_id=user.id, text="Hi")
        )
        assert phone_subscription.queue.qsize() == 1
        assert laptop_subscription.queue.qsize() == 1

        await session_manager.sign_out("laptop")

        assert laptop_subscription.closed
        assert not laptop_inbox.is_open
        assert not phone_subscription.closed
        assert phone_inbox.is_open
        assert len(realtime_gateway.callbacks) == 1

    asyncio.run(scenario())


def test_signed_out_inbox_outside_a_loop_is_closed_on_stop(
    session_manager, auth_provider, realtime_gateway
) -> None:
    session_manager.start()
    auth_provider.emit(AuthEvent.SIGNED_IN, make_auth_session(token="restored"))
    session = session_manager.find("restored")
    assert session is not None
    inbox = asyncio.run(session_manager.inbox(session))

    auth_provider.emit(AuthEvent.SIGNED_OUT, None)
    assert inbox.is_open

    asyncio.run(session_manager.stop())

    assert not inbox.is_open
    assert realtime_gateway.callbacks == {}
