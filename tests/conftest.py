"""Shared fixtures: a fresh registry per test and a fake Socket.IO server."""
from collections import defaultdict

import pytest
from fastapi.testclient import TestClient

from lobby.main import create_app
from lobby.services.membership_service import MembershipService
from lobby.services.room_registry import RoomRegistry
from lobby.services.session_binding import SessionBinding
from lobby.websocket.gateway import RealtimeGateway


class FakeSocketServer:
    """Records handlers and delivers emits the way Socket.IO rooms would."""

    def __init__(self):
        self.handlers = {}
        self.groups = defaultdict(set)
        self.inbox = defaultdict(list)
        self.calls = []

    def on(self, event, handler=None, namespace=None):
        self.handlers[event] = handler

    async def enter_room(self, sid, room, namespace=None):
        self.calls.append(("enter_room", sid, room))
        self.groups[room].add(sid)

    async def leave_room(self, sid, room, namespace=None):
        self.calls.append(("leave_room", sid, room))
        self.groups[room].discard(sid)

    async def emit(self, event, data=None, to=None, room=None, namespace=None):
        target = to or room
        self.calls.append(("emit", event, target))
        recipients = self.groups[target] if target in self.groups else {target}
        for sid in recipients:
            self.inbox[sid].append((event, data))

    def drop(self, sid):
        for members in self.groups.values():
            members.discard(sid)

    def events_for(self, sid, event=None):
        return [(e, d) for e, d in self.inbox[sid] if event is None or e == event]


@pytest.fixture
def registry():
    return RoomRegistry()


@pytest.fixture
def membership(registry):
    return MembershipService(registry)


@pytest.fixture
def bindings():
    return SessionBinding()


@pytest.fixture
def gateway(membership, bindings):
    return RealtimeGateway(membership, bindings)


@pytest.fixture
def fake_sio():
    return FakeSocketServer()


@pytest.fixture
def app(registry):
    return create_app(registry=registry, debug_routes=True)


@pytest.fixture
def api_client(app):
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
