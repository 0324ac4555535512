"""Seed script: creates sample documents with a version history via the REST API.

Usage:
    python scripts/seed.py              # uses http://localhost:8000
    python scripts/seed.py http://host  # custom base URL

Tokens are signed with JWT_SECRET (defaults to the development secret).
"""

import os
import sys
from datetime import datetime, timedelta, timezone

import httpx
import jwt

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000"
JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret")

ACTORS = [
    {"sub": "alice", "name": "Alice Smith"},
    {"sub": "bob", "name": "Bob Jones"},
]

DOCUMENTS = [
    {
        "kind": "page",
        "owner": "alice",
        "edits": [
            {"title": "Getting Started Guide", "content": "Install the service"},
            {"content": "Install the service and run the seed script"},
            {"content": "Install the service, run the seed script, then log in", "status": "published"},
        ],
    },
    {
        "kind": "book",
        "owner": "bob",
        "edits": [
            {"title": "Support Handbook", "content": "Escalation paths"},
            {"content": "Escalation paths and on-call rota"},
        ],
    },
]


def mint_token(actor: dict) -> str:
    now = datetime.now(timezone.utc)
    payload = {**actor, "iat": now, "exp": now + timedelta(hours=1)}
    return jwt.encode(payload, JWT_SECRET, algorithm="HS256")


def seed_document(client: httpx.Client, token: str, sample: dict) -> None:
    headers = {"Authorization": f"Bearer {token}"}
    first, *rest = sample["edits"]

    resp = client.post(
        f"{BASE_URL}/api/documents/", json={"kind": sample["kind"], **first}, headers=headers
    )
    resp.raise_for_status()
    doc = resp.json()
    print(f"  Created {sample['kind']} '{doc['title']}' ({doc['id']})")

    client.post(
        f"{BASE_URL}/api/documents/{doc['id']}/versions",
        json={"change_description": "Initial version"},
        headers=headers,
    ).raise_for_status()

    for edit in rest:
        resp = client.patch(
            f"{BASE_URL}/api/documents/{doc['id']}",
            json={**edit, "expected_version": doc["version"]},
            headers=headers,
        )
        resp.raise_for_status()
        doc = resp.json()
        version = client.post(
            f"{BASE_URL}/api/documents/{doc['id']}/versions", json={}, headers=headers
        )
        version.raise_for_status()
        print(f"    Saved version {version.json()['version_number']}")

    if len(sample["edits"]) > 2:
        resp = client.post(
            f"{BASE_URL}/api/documents/{doc['id']}/revert/1",
            json={"expected_latest": len(sample["edits"])},
            headers=headers,
        )
        resp.raise_for_status()
        checkpoint = resp.json()["checkpoint"]["version_number"]
        print(f"    Reverted to version 1 (checkpoint v{checkpoint})")


def main() -> None:
    print(f"Seeding against {BASE_URL}\n")

    tokens = {actor["sub"]: mint_token(actor) for actor in ACTORS}

    with httpx.Client(timeout=10) as client:
        print("Documents:")
        for sample in DOCUMENTS:
            seed_document(client, tokens[sample["owner"]], sample)

    print("\nDone!")


if __name__ == "__main__":
    main()
