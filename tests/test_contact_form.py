import json

import httpx
import pytest
import pytest_asyncio

from app.dependencies import get_contact_form_service
from app.main import app
from app.services.captcha_service import CaptchaService
from app.services.contact_form_service import ContactFormService
from app.services.crm_service import PipedriveClient

VERIFY_URL = "https://recaptcha.test/siteverify"
CRM_URL = "https://crm.test/api/v1"
LEAD_FIELD = "message_field_key"

FORM = {
    "name": "Ada Lovelace",
    "email": "ada@example.com",
    "phone": "+441234567",
    "message": "Please call me back",
    "token": "captcha-token",
}


class FakeUpstream:
    """Stands in for reCAPTCHA and Pipedrive, recording every request"""

    def __init__(self, captcha_success=True, failures=None):
        self.captcha_success = captcha_success
        self.failures = failures or {}
        self.requests = []

    def resources(self):
        return [r.url.path.rsplit("/", 1)[-1] for r in self.requests if r.url.host == "crm.test"]

    def body(self, resource):
        for r in self.requests:
            if r.url.path.endswith(f"/{resource}"):
                return json.loads(r.content)
        raise AssertionError(f"no request to {resource}")

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "recaptcha.test":
            return httpx.Response(200, json={"success": self.captcha_success})

        resource = request.url.path.rsplit("/", 1)[-1]
        if resource in self.failures:
            return httpx.Response(400, json={"success": False, "error": self.failures[resource]})

        ids = {"persons": 11, "leads": "lead-uuid", "deals": 22, "notes": 33}
        return httpx.Response(201, json={"success": True, "data": {"id": ids[resource]}})


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def capture_mode():
    return "deal"


@pytest_asyncio.fixture
async def contact_client(api, upstream, capture_mode):
    async with httpx.AsyncClient(transport=httpx.MockTransport(upstream)) as outbound:
        service = ContactFormService(
            captcha=CaptchaService(outbound, "secret", VERIFY_URL),
            crm=PipedriveClient(outbound, CRM_URL, "token"),
            capture_mode=capture_mode,
            lead_message_field=LEAD_FIELD,
        )

        async def provide():
            yield service

        app.dependency_overrides[get_contact_form_service] = provide
        yield api


def assert_cors(response):
    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["access-control-allow-methods"]


async def test_preflight(contact_client):
    response = await contact_client.options("/api/contact-form")

    assert response.status_code == 204
    assert_cors(response)


async def test_deal_flow(contact_client, upstream):
    response = await contact_client.post("/api/contact-form", json=FORM)

    assert response.status_code == 200
    assert_cors(response)
    assert response.json() == {"success": True, "person": {"id": 11}, "deal": {"id": 22}}
    assert upstream.resources() == ["persons", "deals", "notes"]

    assert upstream.body("persons") == {"name": "Ada Lovelace", "email": "ada@example.com", "phone": "+441234567"}
    assert upstream.body("deals") == {
        "title": "Deal from Website - Ada Lovelace",
        "person_id": 11,
        "value": 0,
        "currency": "USD",
    }
    assert upstream.body("notes") == {"content": "Please call me back", "person_id": 11, "deal_id": 22}
    assert all(r.url.params["api_token"] == "token" for r in upstream.requests if r.url.host == "crm.test")


async def test_captcha_token_is_form_encoded(contact_client, upstream):
    await contact_client.post("/api/contact-form", json=FORM)

    verify = upstream.requests[0]
    assert verify.url.host == "recaptcha.test"
    assert verify.content == b"secret=secret&response=captcha-token"


@pytest.mark.parametrize("capture_mode", ["lead"])
async def test_lead_flow(contact_client, upstream):
    response = await contact_client.post("/api/contact-form", json=FORM)

    assert response.status_code == 200
    assert response.json() == {"success": True, "person": {"id": 11}, "lead": {"id": "lead-uuid"}}
    assert upstream.resources() == ["persons", "leads"]
    assert upstream.body("leads") == {
        "title": "Lead from Website - Ada Lovelace",
        "person_id": 11,
        LEAD_FIELD: "Please call me back",
    }


async def test_failed_captcha_never_reaches_crm(contact_client, upstream):
    upstream.captcha_success = False

    response = await contact_client.post("/api/contact-form", json=FORM)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "reCAPTCHA failed"}
    assert upstream.resources() == []
    assert_cors(response)


async def test_missing_name_or_email(contact_client, upstream):
    response = await contact_client.post("/api/contact-form", json={**FORM, "email": ""})

    assert response.status_code == 400
    assert response.json()["error"] == "Name and email are required"
    assert upstream.resources() == []


@pytest.mark.parametrize("upstream", [FakeUpstream(failures={"persons": "Email is invalid"})])
async def test_person_failure_stops_pipeline(contact_client, upstream):
    response = await contact_client.post("/api/contact-form", json=FORM)

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Email is invalid"}
    assert upstream.resources() == ["persons"]
    assert_cors(response)


@pytest.mark.parametrize("upstream", [FakeUpstream(failures={"deals": "Deal title too long"})])
async def test_deal_failure_returns_remote_error(contact_client, upstream):
    response = await contact_client.post("/api/contact-form", json=FORM)

    assert response.status_code == 500
    assert response.json()["error"] == "Deal title too long"
    assert upstream.resources() == ["persons", "deals"]


@pytest.mark.parametrize("upstream", [FakeUpstream(failures={"notes": "Content is required"})])
async def test_note_failure_is_not_fatal(contact_client, upstream):
    response = await contact_client.post("/api/contact-form", json=FORM)

    assert response.status_code == 200
    assert response.json()["deal"] == {"id": 22}


async def test_note_skipped_without_message(contact_client, upstream):
    response = await contact_client.post("/api/contact-form", json={**FORM, "message": None})

    assert response.status_code == 200
    assert upstream.resources() == ["persons", "deals"]


async def test_crm_error_without_body_uses_generic_message(api):
    def handler(request):
        if request.url.host == "recaptcha.test":
            return httpx.Response(200, json={"success": True})
        return httpx.Response(502, text="Bad Gateway")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as outbound:
        service = ContactFormService(
            captcha=CaptchaService(outbound, "secret", VERIFY_URL),
            crm=PipedriveClient(outbound, CRM_URL, "token"),
        )

        async def provide():
            yield service

        app.dependency_overrides[get_contact_form_service] = provide
        response = await api.post("/api/contact-form", json=FORM)

    assert response.status_code == 500
    assert response.json()["error"] == "Failed to create person"


async def test_captcha_service_unreachable(api):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as outbound:
        service = ContactFormService(
            captcha=CaptchaService(outbound, "secret", VERIFY_URL),
            crm=PipedriveClient(outbound, CRM_URL, "token"),
        )

        async def provide():
            yield service

        app.dependency_overrides[get_contact_form_service] = provide
        response = await api.post("/api/contact-form", json=FORM)

    assert response.status_code == 500
    assert response.json()["error"] == "CAPTCHA verification failed"


async def test_numeric_phone_is_sent_as_text(contact_client, upstream):
    response = await contact_client.post("/api/contact-form", json={**FORM, "phone": 5551234})

    assert response.status_code == 200
    assert upstream.body("persons")["phone"] == "5551234"
