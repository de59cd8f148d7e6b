"""
Socket relay: presence, activity broadcast and direct messages.

Connection lifecycle is Unauthenticated -> Registered -> Disconnected.
Delivery is at-most-once and best-effort; nothing here retries, and only two
failures are ever reported to a client (rejected handshake, message that
could not be stored).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import socketio
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from app.auth.identity import IdentityResolver, InvalidTokenError
from app.realtime.gateway import MessageGateway
from app.realtime.presence import DEFAULT_ACTIVITY, PresenceRegistry
from app.realtime.protocol import (
    HANDSHAKE_REJECTED,
    INVALID_TOKEN,
    MALFORMED_MESSAGE,
    MESSAGE_NOT_SENT,
    ActivityUpdated,
    HandshakeAuth,
    RelayEvent,
    SendMessagePayload,
    UpdateActivityPayload,
)

logger = logging.getLogger(__name__)


class RelayServer:
    """
    Event handlers for the socket server.

    The registry and the gateway are injected so each app (and each test)
    gets its own state.
    """

    def __init__(
        self,
        sio: socketio.AsyncServer,
        registry: PresenceRegistry,
        gateway: MessageGateway,
        identity_resolver: Optional[IdentityResolver] = None,
        hardened_identity: bool = False,
        strict_payload_errors: bool = False,
    ) -> None:
        if hardened_identity and identity_resolver is None:
            raise ValueError("hardened_identity requires an identity_resolver")
        self.sio = sio
        self.registry = registry
        self.gateway = gateway
        self.identity_resolver = identity_resolver
        self.hardened_identity = hardened_identity
        self.strict_payload_errors = strict_payload_errors
        # socket id -> external id, for every socket that completed the handshake
        self._sockets: Dict[str, str] = {}

    def attach(self) -> None:
        """Register the handlers on the socket server."""
        self.sio.on("connect", self.on_connect)
        self.sio.on("disconnect", self.on_disconnect)
        self.sio.on(RelayEvent.UPDATE_ACTIVITY.value, self.on_update_activity)
        self.sio.on(RelayEvent.SEND_MESSAGE.value, self.on_send_message)

    def external_id_for(self, sid: str) -> Optional[str]:
        """
        The user this socket acts for, or None.

        A socket replaced by a newer connection of the same user no longer
        acts for anyone, even while the transport keeps it open.
        """
        external_id = self._sockets.get(sid)
        if external_id is None or self.registry.get_connection(external_id) != sid:
            return None
        return external_id

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def on_connect(self, sid: str, environ: dict, auth: Any = None) -> bool:
        external_id, reason = await self._authenticate(auth)
        if external_id is None:
            logger.info("Rejected socket %s: %s", sid, reason)
            await self._emit(RelayEvent.ERROR, reason, to=sid)
            return False

        self._sockets[sid] = external_id
        self.registry.register(external_id, sid)
        logger.info("User %s connected (socket %s)", external_id, sid)

        online, activities = self.registry.snapshot()
        await self._emit(RelayEvent.USERS_ONLINE, online)
        await self._emit(RelayEvent.ACTIVITIES, [list(pair) for pair in activities])
        return True

    async def on_disconnect(self, sid: str, reason: Any = None) -> None:
        external_id = self._sockets.pop(sid, None)
        if external_id is None:
            return
        if self.registry.get_connection(external_id) != sid:
            # A newer socket for the same user owns the registry entry
            logger.debug("Superseded socket %s for %s closed", sid, external_id)
            return
        self.registry.unregister(external_id)
        logger.info("User %s disconnected (socket %s)", external_id, sid)
        await self._emit(RelayEvent.USERS_ONLINE, self.registry.online_ids())

    async def _authenticate(self, auth: Any) -> tuple[Optional[str], str]:
        """(external id, rejection reason). The id is None when the handshake is refused."""
        if not isinstance(auth, dict):
            return None, HANDSHAKE_REJECTED
        try:
            handshake = HandshakeAuth.model_validate(auth)
        except ValidationError:
            return None, HANDSHAKE_REJECTED

        if not self.hardened_identity:
            if not handshake.user_id:
                return None, HANDSHAKE_REJECTED
            return handshake.user_id, ""

        try:
            external_id = await run_in_threadpool(
                self.identity_resolver.resolve_token, handshake.token
            )
        except InvalidTokenError:
            return None, INVALID_TOKEN
        if handshake.user_id and handshake.user_id != external_id:
            logger.warning(
                "Handshake userId %s does not match token subject %s",
                handshake.user_id,
                external_id,
            )
            return None, INVALID_TOKEN
        return external_id, ""

    # ------------------------------------------------------------------
    # Activity
    # ------------------------------------------------------------------

    async def on_update_activity(self, sid: str, data: Any = None) -> None:
        external_id = self.external_id_for(sid)
        if external_id is None:
            return
        try:
            payload = UpdateActivityPayload.model_validate(
                data if isinstance(data, dict) else {}
            )
        except ValidationError as e:
            logger.debug("Dropped update_activity from %s: %s", external_id, e)
            return
        label = payload.activity or DEFAULT_ACTIVITY
        if not self.registry.set_activity(external_id, label):
            return
        update = ActivityUpdated(user_id=external_id, activity=label)
        await self._emit(RelayEvent.ACTIVITY_UPDATED, update.to_wire(), skip_sid=sid)

    # ------------------------------------------------------------------
    # Direct messages
    # ------------------------------------------------------------------

    async def on_send_message(self, sid: str, data: Any = None) -> None:
        external_id = self.external_id_for(sid)
        if external_id is None:
            return
        try:
            payload = SendMessagePayload.model_validate(
                data if isinstance(data, dict) else {}
            )
        except ValidationError as e:
            await self._reject_payload(sid, external_id, str(e))
            return

        sender_id = payload.sender_id
        if self.hardened_identity:
            try:
                sender = await self.gateway.find_user_by_external_id(external_id)
            except Exception:
                logger.exception("Sender lookup failed for %s", external_id)
                return
            if sender is None:
                logger.info("No user record for connected user %s", external_id)
                return
            sender_id = sender.id
        elif sender_id is None:
            await self._reject_payload(sid, external_id, "senderId missing")
            return

        try:
            receiver = await self.gateway.find_user(payload.receiver_id)
        except Exception:
            logger.exception("Receiver lookup failed for %s", payload.receiver_id)
            return
        if receiver is None:
            logger.info("Dropped message to unknown user %s", payload.receiver_id)
            return

        try:
            message = await self.gateway.create_message(
                sender_id, receiver.id, payload.content
            )
        except Exception:
            logger.exception("Message error: could not store message from %s", sender_id)
            await self._emit(RelayEvent.ERROR, MESSAGE_NOT_SENT, to=sid)
            return

        wire = message.to_wire()
        # Presence may have changed while the message was being stored
        receiver_sid = self.registry.get_connection(receiver.external_id)
        if receiver_sid is not None:
            await self._emit(RelayEvent.RECEIVE_MESSAGE, wire, to=receiver_sid)
        await self._emit(RelayEvent.MESSAGE_SENT, wire, to=sid)

    async def _reject_payload(self, sid: str, external_id: str, detail: str) -> None:
        logger.debug("Dropped send_message from %s: %s", external_id, detail)
        if self.strict_payload_errors:
            await self._emit(RelayEvent.ERROR, MALFORMED_MESSAGE, to=sid)

    # ------------------------------------------------------------------
    # Broadcasts used by the REST API
    # ------------------------------------------------------------------

    async def broadcast_new_activity(self, activity: dict) -> None:
        await self._emit(RelayEvent.NEW_ACTIVITY, activity)

    async def _emit(self, event: RelayEvent, data: Any, **kwargs: Any) -> None:
        try:
            await self.sio.emit(event.value, data, **kwargs)
        except Exception as e:
            logger.warning("Emit of %s failed: %s", event.value, e)
