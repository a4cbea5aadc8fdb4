"""Shared registry payloads for the test suite.

Shapes follow what registry.npmjs.org actually returns, trimmed to the
fields the tests look at.
"""

from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture
def taita_packument() -> dict[str, Any]:
    version_base = {
        "name": "taita",
        "description": "command palette library",
        "main": "index.js",
        "repository": {"type": "git", "url": "git+https://github.com/EthanJustice/taita.git"},
        "keywords": ["command-palette", "palette"],
        "author": {"name": "Ethan Justice"},
        "license": "MIT",
        "bugs": {"url": "https://github.com/EthanJustice/taita/issues"},
        "homepage": "https://github.com/EthanJustice/taita#readme",
        "_npmVersion": "6.14.4",
        "_nodeVersion": "12.16.3",
        "_npmUser": {"name": "ethanjustice", "email": "ethan@example.com"},
        "maintainers": [{"name": "ethanjustice", "email": "ethan@example.com"}],
        "_hasShrinkwrap": False,
    }
    return {
        "_id": "taita",
        "_rev": "4-5c2d1a0e9f8b7a6c5d4e3f2a1b0c9d8e",
        "name": "taita",
        "dist-tags": {"latest": "0.2.0"},
        "versions": {
            "0.1.0": {
                **version_base,
                "version": "0.1.0",
                "_id": "taita@0.1.0",
                "gitHead": "1111111111111111111111111111111111111111",
                "dist": {
                    "integrity": "sha512-AAAA",
                    "shasum": "aaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa",
                    "tarball": "https://registry.npmjs.org/taita/-/taita-0.1.0.tgz",
                    "fileCount": 4,
                    "unpackedSize": 10240,
                    "npm-signature": "-----BEGIN PGP SIGNATURE-----",
                },
            },
            "0.2.0": {
                **version_base,
                "version": "0.2.0",
                "_id": "taita@0.2.0",
                "gitHead": "2222222222222222222222222222222222222222",
                "dependencies": {"fuzzysort": "^1.1.4"},
                "devDependencies": {"esbuild": "^0.8.0"},
                "dist": {
                    "integrity": "sha512-BBBB",
                    "shasum": "bbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbbb",
                    "tarball": "https://registry.npmjs.org/taita/-/taita-0.2.0.tgz",
                    "fileCount": 5,
                    "unpackedSize": 12288,
                    "signatures": [{"keyid": "SHA256:jl3bwswu80PjjokCgh0o2w5c2U4LhQAE57gj9cz1kzA", "sig": "MEUCIQ"}],
                },
            },
        },
        "time": {
            "created": "2020-07-20T18:01:02.000Z",
            "modified": "2020-08-02T09:30:00.000Z",
            "0.1.0": "2020-07-20T18:01:02.500Z",
            "0.2.0": "2020-08-02T09:29:59.000Z",
        },
        "maintainers": [{"name": "ethanjustice", "email": "ethan@example.com"}],
        "description": "command palette library",
        "homepage": "https://github.com/EthanJustice/taita#readme",
        "keywords": ["command-palette", "palette"],
        "repository": {"type": "git", "url": "git+https://github.com/EthanJustice/taita.git"},
        "author": {"name": "Ethan Justice"},
        "bugs": {"url": "https://github.com/EthanJustice/taita/issues"},
        "license": "MIT",
        "readme": "# taita\n\nA tiny command palette library.\n",
        "readmeFilename": "README.md",
        "users": {"someone": True},
    }


@pytest.fixture
def search_payload() -> dict[str, Any]:
    return {
        "objects": [
            {
                "package": {
                    "name": "taita",
                    "scope": "unscoped",
                    "version": "0.2.0",
                    "description": "command palette library",
                    "keywords": ["command-palette", "palette"],
                    "date": "2020-08-02T09:29:59.000Z",
                    "links": {
                        "npm": "https://www.npmjs.com/package/taita",
                        "homepage": "https://github.com/EthanJustice/taita#readme",
                        "repository": "https://github.com/EthanJustice/taita",
                        "bugs": "https://github.com/EthanJustice/taita/issues",
                    },
                    "author": {"name": "Ethan Justice"},
                    "publisher": {"username": "ethanjustice", "email": "ethan@example.com"},
                    "maintainers": [{"username": "ethanjustice", "email": "ethan@example.com"}],
                },
                "flags": {"unstable": True},
                "score": {
                    "final": 0.31,
                    "detail": {"quality": 0.52, "popularity": 0.01, "maintenance": 0.33},
                },
                "searchScore": 0.000123,
            },
            {
                "package": {
                    "name": "@cmdk/palette",
                    "scope": "cmdk",
                    "version": "1.0.0",
                    "links": {"npm": "https://www.npmjs.com/package/%40cmdk%2Fpalette"},
                    "publisher": {"username": "cmdk", "email": "cmdk@example.com"},
                    "maintainers": [],
                },
                "flags": {},
                "score": {"final": 0.2, "detail": {"quality": 0.4, "popularity": 0.02, "maintenance": 0.1}},
                "searchScore": 0.0000456,
            },
        ],
        "total": 42,
        "time": "Mon Oct 19 2026 10:00:00 GMT+0000 (Coordinated Universal Time)",
    }
