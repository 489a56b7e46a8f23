"""
Pytest configuration and fixtures

The store and the messaging API are replaced by an httpx.MockTransport, so the
app runs its real clients against in-memory fakes.
"""
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from roster.config import Settings
from roster.main import create_app

STORE_URL = "http://store.test"
WHATSAPP_URL = "http://graph.test/v19.0/123456/messages"
ANON_KEY = "anon-test-key"
WHATSAPP_TOKEN = "whatsapp-test-token"


class FakePostgrest:
    """Just enough of PostgREST for one table with equality filters"""

    def __init__(self, table="students"):
        self.table = table
        self.rows = []
        self.requests = []
        self.fail_with = None  # (status, body) answered to every request
        self.raise_error = None  # exception raised instead of answering

    def _matches(self, request, row):
        for column, condition in request.url.params.items():
            if column == "select":
                continue
            op, _, value = condition.partition(".")
            if op != "eq" or str(row.get(column)) != value:
                return False
        return True

    def __call__(self, request):
        self.requests.append(request)
        if self.raise_error is not None:
            raise self.raise_error
        if self.fail_with is not None:
            status, body = self.fail_with
            return httpx.Response(status, json=body)
        if request.url.path != f"/rest/v1/{self.table}":
            return httpx.Response(404, json={"code": "42P01", "message": "relation does not exist"})

        if request.method == "GET":
            return httpx.Response(200, json=list(self.rows))

        if request.method == "POST":
            new_rows = json.loads(request.content)
            for row in new_rows:
                if any(existing["roll"] == row["roll"] for existing in self.rows):
                    return httpx.Response(409, json={
                        "code": "23505",
                        "message": 'duplicate key value violates unique constraint "students_roll_key"',
                        "details": None,
                        "hint": None,
                    })
            self.rows.extend(new_rows)
            return httpx.Response(201, json=new_rows)

        if request.method == "PATCH":
            changes = json.loads(request.content)
            updated = []
            for row in self.rows:
                if self._matches(request, row):
                    row.update(changes)
                    updated.append(row)
            return httpx.Response(200, json=updated)

        if request.method == "DELETE":
            deleted = [row for row in self.rows if self._matches(request, row)]
            self.rows = [row for row in self.rows if row not in deleted]
            return httpx.Response(200, json=deleted)

        return httpx.Response(405, json={"message": "method not allowed"})


class FakeWhatsApp:
    """Scripted WhatsApp Cloud API: answers per recipient, 200 by default"""

    def __init__(self):
        self.sent = []
        self.responses = {}  # to -> (status, body)
        self.raise_for = {}  # to -> exception

    def __call__(self, request):
        payload = json.loads(request.content)
        self.sent.append((request, payload))
        to = payload.get("to")
        if to in self.raise_for:
            raise self.raise_for[to]
        status, body = self.responses.get(to, (200, {
            "messaging_product": "whatsapp",
            "contacts": [{"input": to, "wa_id": to}],
            "messages": [{"id": f"wamid.{len(self.sent)}"}],
        }))
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)


@pytest.fixture
def settings():
    return Settings(
        supabase_url=STORE_URL,
        supabase_anon_key=ANON_KEY,
        whatsapp_api_url=WHATSAPP_URL,
        whatsapp_api_token=WHATSAPP_TOKEN,
    )


@pytest.fixture
def store():
    return FakePostgrest()


@pytest.fixture
def whatsapp():
    return FakeWhatsApp()


@pytest.fixture
def transport(store, whatsapp):
    def handler(request):
        if request.url.host == "store.test":
            return store(request)
        return whatsapp(request)

    return httpx.MockTransport(handler)


@pytest.fixture
def client(settings, transport):
    """Test client with the lifespan running, so the app context exists"""
    app = create_app(settings, transport=transport)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def student():
    return {
        "name": "Asha Verma",
        "roll": "12",
        "parentPhone": "+919800000012",
        "section": "B",
        "key": "k-12",
        "fees": {"paid": 12000, "due": 3000},
        "performance": {"math": 91, "science": 88},
    }
