"""Pytest configuration and fixtures for gcloud-inventory tests."""

import json
from urllib.parse import parse_qs

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from gcloud_inventory.transport import HttpTransport

TOKEN_URI = "https://oauth2.googleapis.com/token"


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(rsa_key):
    return rsa_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()


@pytest.fixture(scope="session")
def public_key_pem(rsa_key):
    return (
        rsa_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode()
    )


@pytest.fixture
def credentials_data(private_key_pem):
    return {
        "type": "service_account",
        "project_id": "bolt",
        "private_key_id": "abc123",
        "private_key": private_key_pem,
        "client_email": "inventory@bolt.iam.gserviceaccount.com",
        "client_id": "1234567890",
        "token_uri": TOKEN_URI,
    }


@pytest.fixture
def credentials_file(tmp_path, credentials_data):
    path = tmp_path / "credentials.json"
    path.write_text(json.dumps(credentials_data))
    return path


@pytest.fixture
def instances():
    """Two instances shaped like a Compute API instances.list response."""
    return [
        {
            "kind": "compute#instance",
            "id": "1111",
            "name": "instance-1",
            "status": "RUNNING",
            "zone": "https://www.googleapis.com/compute/v1/projects/bolt/zones/us-west1-b",
            "networkInterfaces": [
                {
                    "networkIP": "10.138.0.2",
                    "accessConfigs": [{"name": "External NAT", "natIP": "35.0.0.0"}],
                }
            ],
            "labels": {"role": "web"},
        },
        {
            "kind": "compute#instance",
            "id": "2222",
            "name": "instance-2",
            "status": "RUNNING",
            "zone": "https://www.googleapis.com/compute/v1/projects/bolt/zones/us-west1-b",
            "networkInterfaces": [
                {
                    "networkIP": "10.138.0.3",
                    "accessConfigs": [{"name": "External NAT", "natIP": "34.0.0.0"}],
                }
            ],
        },
    ]


class FakeGoogle:
    """Scripted token + compute endpoints for httpx.MockTransport."""

    def __init__(self, pages=None, token=None):
        self.pages = pages or {}
        self.token = token or {"access_token": "ya29.test", "token_type": "Bearer"}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        if url == TOKEN_URI:
            form = parse_qs(request.content.decode())
            if "assertion" not in form:
                return httpx.Response(400, json={"error": {"message": "missing assertion"}})
            return httpx.Response(200, json=self.token)
        if url in self.pages:
            return httpx.Response(200, json=self.pages[url])
        return httpx.Response(404, json={"error": {"message": f"unknown url {url}"}})

    def transport(self) -> HttpTransport:
        return HttpTransport(client=httpx.Client(transport=httpx.MockTransport(self)))


@pytest.fixture
def fake_google():
    return FakeGoogle()
