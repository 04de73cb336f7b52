"""Shared fixtures: settings rooted in tmp_path and a fake launcher/asset host."""

from __future__ import annotations

import hashlib
import io
import json
import zipfile
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from mclocale.config import LocaleSettings

MANIFEST_URL = "https://launchermeta.mojang.com/mc/game/version_manifest.json"
RESOURCES_URL = "https://resources.download.minecraft.net"
VERSION_ID = "1.21.4"
VERSION_URL = f"https://piston-meta.mojang.com/v1/packages/aaaa/{VERSION_ID}.json"
ASSET_INDEX_URL = "https://piston-meta.mojang.com/v1/packages/bbbb/19.json"
CLIENT_URL = "https://piston-data.mojang.com/v1/objects/cccc/client.jar"


def sha1(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()


def lang_bytes(strings: dict[str, Any]) -> bytes:
    return json.dumps(strings).encode("utf-8")


def build_client_jar(en_us: dict[str, str] | None) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as jar:
        jar.writestr("META-INF/MANIFEST.MF", "Manifest-Version: 1.0\n")
        if en_us is not None:
            jar.writestr("assets/minecraft/lang/en_us.json", lang_bytes(en_us))
    return buffer.getvalue()


class FakeUpstream:
    """Serves canned bytes per URL and records every request."""

    def __init__(self) -> None:
        self.routes: dict[str, bytes | int | Callable[[], httpx.Response]] = {}
        self.calls: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls.append(url)
        route = self.routes.get(url)
        if route is None:
            return httpx.Response(404, content=b"not found")
        if isinstance(route, int):
            return httpx.Response(route)
        if callable(route):
            return route()
        return httpx.Response(200, content=route)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def count(self, url: str) -> int:
        return self.calls.count(url)

    def asset_url(self, data: bytes) -> str:
        digest = sha1(data)
        return f"{RESOURCES_URL}/{digest[:2]}/{digest}"

    def publish(
        self,
        locales: dict[str, dict[str, Any]] | None = None,
        *,
        en_us: dict[str, str] | None = None,
        include_client: bool = True,
        version_id: str = VERSION_ID,
    ) -> bytes:
        """Register manifest, version detail, asset index, assets and client jar."""

        self.routes[MANIFEST_URL] = json.dumps(
            {
                "latest": {"release": version_id, "snapshot": "25w01a"},
                "versions": [
                    {"id": "25w01a", "type": "snapshot", "url": "https://example.invalid/snapshot.json"},
                    {"id": version_id, "type": "release", "url": VERSION_URL},
                ],
            }
        ).encode()

        jar = build_client_jar(en_us)
        detail: dict[str, Any] = {
            "id": version_id,
            "assetIndex": {"id": "19", "sha1": "ffff", "size": 1, "totalSize": 1, "url": ASSET_INDEX_URL},
            "downloads": {},
        }
        if include_client:
            detail["downloads"]["client"] = {"sha1": sha1(jar), "size": len(jar), "url": CLIENT_URL}
            self.routes[CLIENT_URL] = jar
        self.routes[VERSION_URL] = json.dumps(detail).encode()

        objects: dict[str, Any] = {
            "minecraft/sounds/ambient/cave/cave1.ogg": {"hash": "0" * 40, "size": 10},
        }
        for code, strings in (locales or {}).items():
            data = lang_bytes(strings)
            objects[f"minecraft/lang/{code}.json"] = {"hash": sha1(data), "size": len(data)}
            self.routes[self.asset_url(data)] = data
        self.routes[ASSET_INDEX_URL] = json.dumps({"objects": objects}).encode()
        return jar


@pytest.fixture
def settings(tmp_path: Path) -> LocaleSettings:
    return LocaleSettings(
        data_dir=tmp_path,
        game_version=VERSION_ID,
        default_locale="en_us",
        retry_base_delay=0,
        manifest_max_attempts=2,
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def locales_dir(tmp_path: Path) -> Path:
    path = tmp_path / "locales"
    path.mkdir()
    return path
