import base64
import json
import time
from pathlib import Path

import jwt
import pytest
from fastapi.testclient import TestClient

from foxauth.common.crypto import CryptoUtils
from foxauth.common.exceptions import SigningError
from foxauth.common.models import Identity
from foxauth.server.core import AuthlibServer
from foxauth.server.persistence import InMemoryIdentityStore

SECRET = base64.b64encode(b"test-secret-with-enough-length-for-hs256").decode()
ALICE_UUID = "8667ba71b85a4004af54457a9734eed7"
BOB_UUID = "069a79f444e94726a5befca90e38aaf5"
JOIN_PATH = "/authlib/sessionserver/session/minecraft/join"
HAS_JOINED_PATH = "/authlib/sessionserver/session/minecraft/hasJoined"


@pytest.fixture(scope="module")
def keys_dir(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return tmp_path_factory.mktemp("data") / "authlib"


@pytest.fixture
def server(keys_dir: Path) -> AuthlibServer:
    identities = [
        Identity(
            uuid=ALICE_UUID,
            username="alice",
            skin_url="/api/cabinet/skin/alice.png",
            cape_url="/api/cabinet/cape/alice.png",
        ),
        Identity(uuid=BOB_UUID, username="bob"),
    ]
    return AuthlibServer(
        keys_dir=keys_dir,
        identity_store=InMemoryIdentityStore(identities),
        jwt_secret=SECRET,
    )


@pytest.fixture
def client(server: AuthlibServer) -> TestClient:
    return TestClient(server.app, base_url="https://game.example.com")


def bearer(server: AuthlibServer, uuid: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {server.authenticator.issue(uuid)}"}


def textures_of(profile: dict) -> dict:
    [prop] = profile["properties"]
    assert prop["name"] == "textures"
    return json.loads(base64.b64decode(prop["value"]))


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_boot_creates_key_files(tmp_path: Path) -> None:
    keys_dir = tmp_path / "data" / "authlib"

    first = AuthlibServer(keys_dir=keys_dir, identity_store=InMemoryIdentityStore())
    second = AuthlibServer(keys_dir=keys_dir, identity_store=InMemoryIdentityStore())

    assert sorted(p.name for p in keys_dir.iterdir()) == ["private.pem", "public.pem"]
    assert first.signer.export_public_key_pem() == second.signer.export_public_key_pem()


def test_server_info(server: AuthlibServer, client: TestClient) -> None:
    response = client.get("/authlib")

    assert response.status_code == 200
    assert (
        response.headers["X-Authlib-Injector-API-Location"]
        == "https://game.example.com/authlib"
    )
    data = response.json()
    assert data["meta"] == {
        "serverName": "FoxLauncher Authlib",
        "implementationName": "fox-launcher-authserver",
        "implementationVersion": "1.0.0",
    }
    assert data["skinDomains"] == ["game.example.com"]
    assert "\n" not in data["signaturePublickey"]
    assert data["signaturePublickey"] == CryptoUtils.strip_pem_newlines(
        server.signer.export_public_key_pem()
    )


def test_profile_lookup(client: TestClient) -> None:
    response = client.get(f"/authlib/session/minecraft/profile/{ALICE_UUID}")

    assert response.status_code == 200
    profile = response.json()
    assert profile["id"] == ALICE_UUID
    assert profile["name"] == "alice"
    assert "signature" not in profile
    assert textures_of(profile)["textures"] == {
        "SKIN": {"url": "https://game.example.com/api/cabinet/skin/alice.png"},
        "CAPE": {"url": "https://game.example.com/api/cabinet/cape/alice.png"},
    }


def test_profile_lookup_without_textures(client: TestClient) -> None:
    response = client.get(f"/authlib/session/minecraft/profile/{BOB_UUID}")

    assert response.status_code == 200
    assert response.json()["properties"] == []


def test_profile_lookup_unknown_uuid(client: TestClient) -> None:
    response = client.get("/authlib/session/minecraft/profile/00000000000000000000000000000000")
    assert response.status_code == 404


def test_has_joined_requires_username(client: TestClient) -> None:
    assert client.get(HAS_JOINED_PATH).status_code == 400
    assert client.get(HAS_JOINED_PATH, params={"username": ""}).status_code == 400


def test_has_joined_unknown_username(client: TestClient) -> None:
    response = client.get(HAS_JOINED_PATH, params={"username": "mallory"})

    assert response.status_code == 204
    assert response.content == b""


def test_has_joined_unknown_username_with_server_id(client: TestClient) -> None:
    response = client.get(HAS_JOINED_PATH, params={"username": "mallory", "serverId": "abc"})
    assert response.status_code == 204


def test_has_joined_profile_mismatch_is_soft(client: TestClient) -> None:
    response = client.get(
        HAS_JOINED_PATH,
        params={"username": "alice", "serverId": "abc", "selectedProfile": BOB_UUID},
    )
    assert response.status_code == 204


def test_has_joined_client_side_is_unsigned(client: TestClient) -> None:
    response = client.get(
        HAS_JOINED_PATH, params={"username": "alice", "selectedProfile": ALICE_UUID}
    )

    assert response.status_code == 200
    profile = response.json()
    assert profile["id"] == ALICE_UUID
    assert "signature" not in profile
    assert "signature" not in profile["properties"][0]
    assert textures_of(profile)["profileName"] == "alice"


def test_has_joined_server_side_is_signed(server: AuthlibServer, client: TestClient) -> None:
    response = client.get(
        HAS_JOINED_PATH, params={"username": "alice", "serverId": "abc", "ip": "10.0.0.1"}
    )

    assert response.status_code == 200
    profile = response.json()
    public_key = CryptoUtils.load_public_key_pem(client.get("/authlib").json()["signaturePublickey"])
    data = ("abc" + ALICE_UUID).encode()
    assert CryptoUtils.verify_signature(public_key, profile["signature"], data)
    assert profile["properties"][0]["signature"] == profile["signature"]
    assert profile["signature"] == server.signer.sign(data)
    assert not CryptoUtils.verify_signature(
        public_key, profile["signature"], ("abd" + ALICE_UUID).encode()
    )


def test_has_joined_server_side_without_textures_still_signed(client: TestClient) -> None:
    response = client.get(HAS_JOINED_PATH, params={"username": "bob", "serverId": "abc"})

    assert response.status_code == 200
    profile = response.json()
    assert profile["signature"]
    assert textures_of(profile)["textures"] == {}


def test_join_success_with_bearer_header(server: AuthlibServer, client: TestClient) -> None:
    response = client.post(
        JOIN_PATH,
        json={"accessToken": "launcher-token", "selectedProfile": ALICE_UUID, "serverId": "abc"},
        headers=bearer(server, ALICE_UUID),
    )

    assert response.status_code == 204
    assert response.content == b""


def test_join_success_with_body_token(server: AuthlibServer, client: TestClient) -> None:
    token = server.authenticator.issue(ALICE_UUID)

    response = client.post(
        JOIN_PATH,
        json={"accessToken": token, "selectedProfile": ALICE_UUID, "serverId": "abc"},
    )

    assert response.status_code == 204


def test_join_with_login_service_token(client: TestClient) -> None:
    token = jwt.encode(
        {
            "unique_name": "alice",
            "user_uuid": ALICE_UUID,
            "role": "User",
            "exp": int(time.time()) + 600,
        },
        base64.b64decode(SECRET),
        algorithm="HS256",
    )

    response = client.post(
        JOIN_PATH,
        json={"accessToken": token, "selectedProfile": ALICE_UUID, "serverId": "abc"},
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 204


def test_join_rejects_token_keyed_with_raw_secret(client: TestClient) -> None:
    token = jwt.encode({"user_uuid": ALICE_UUID}, SECRET, algorithm="HS256")

    response = client.post(
        JOIN_PATH,
        json={"accessToken": token, "selectedProfile": ALICE_UUID, "serverId": "abc"},
    )

    assert response.status_code == 401


def test_join_accepts_dashed_profile(server: AuthlibServer, client: TestClient) -> None:
    dashed = "8667ba71-b85a-4004-af54-457a9734eed7"

    response = client.post(
        JOIN_PATH,
        json={"accessToken": "t", "selectedProfile": dashed, "serverId": "abc"},
        headers=bearer(server, ALICE_UUID),
    )

    assert response.status_code == 204


def test_join_profile_mismatch(server: AuthlibServer, client: TestClient) -> None:
    response = client.post(
        JOIN_PATH,
        json={"accessToken": "t", "selectedProfile": BOB_UUID, "serverId": "abc"},
        headers=bearer(server, ALICE_UUID),
    )

    assert response.status_code == 400


@pytest.mark.parametrize(
    "body",
    [
        {"selectedProfile": ALICE_UUID, "serverId": "abc"},
        {"accessToken": "t", "serverId": "abc"},
        {"accessToken": "t", "selectedProfile": ALICE_UUID},
        {"accessToken": "", "selectedProfile": ALICE_UUID, "serverId": "abc"},
    ],
)
def test_join_missing_fields(server: AuthlibServer, client: TestClient, body: dict) -> None:
    response = client.post(JOIN_PATH, json=body, headers=bearer(server, ALICE_UUID))
    assert response.status_code == 400


def test_join_missing_fields_checked_before_authentication(client: TestClient) -> None:
    response = client.post(JOIN_PATH, json={"serverId": "abc"})
    assert response.status_code == 400


def test_join_malformed_json(server: AuthlibServer, client: TestClient) -> None:
    response = client.post(
        JOIN_PATH,
        content=b"{not json",
        headers={**bearer(server, ALICE_UUID), "Content-Type": "application/json"},
    )
    assert response.status_code == 400


def test_join_unauthenticated(client: TestClient) -> None:
    response = client.post(
        JOIN_PATH,
        json={"accessToken": "not-a-jwt", "selectedProfile": ALICE_UUID, "serverId": "abc"},
    )
    assert response.status_code == 401


def test_join_invalid_bearer_header(client: TestClient) -> None:
    response = client.post(
        JOIN_PATH,
        json={"accessToken": "not-a-jwt", "selectedProfile": ALICE_UUID, "serverId": "abc"},
        headers={"Authorization": "Bearer forged"},
    )
    assert response.status_code == 401


def test_join_without_configured_secret(keys_dir: Path) -> None:
    server = AuthlibServer(keys_dir=keys_dir, identity_store=InMemoryIdentityStore())
    server.authenticator.key = None
    client = TestClient(server.app)

    response = client.post(
        JOIN_PATH,
        json={"accessToken": "t", "selectedProfile": ALICE_UUID, "serverId": "abc"},
    )

    assert response.status_code == 401


def test_signing_failure_is_internal_error(
    server: AuthlibServer, client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    def broken_sign(data: bytes) -> str:
        raise SigningError("key exploded")

    monkeypatch.setattr(server.signer, "sign", broken_sign)

    response = client.get(HAS_JOINED_PATH, params={"username": "alice", "serverId": "abc"})

    assert response.status_code == 500
    assert "exploded" not in response.text
