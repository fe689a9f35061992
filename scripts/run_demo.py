#!/usr/bin/env python3
from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Any
import argparse
import asyncio
import logging

from firestore_model.settings import load_settings
from firestore_model.storage.firestore_path import COLLECTION_POSTS, COLLECTION_USERS, CollectionPath
from firestore_model.storage.firestore_store import FirestorePathStore, create_async_client


LOGGER = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Walk through every path store operation on users/posts.")
    parser.add_argument(
        "--project-id",
        default=None,
        help="Firestore project id. If omitted, FIRESTORE_PROJECT_ID from settings is used.",
    )
    parser.add_argument("--keep", action="store_true", help="Do not delete the demo user at the end.")
    return parser.parse_args()


async def run_demo(store: FirestorePathStore, *, now: datetime, keep: bool = False) -> dict[str, Any]:
    users = CollectionPath(COLLECTION_USERS)

    user_id = await store.add_entry(
        users,
        {
            "name": "Alice",
            "email": "alice@example.com",
            "joined": now,
        },
    )
    user = users.document(user_id)
    LOGGER.info("created user: id=%s", user_id)
    LOGGER.info("user exists: %s", await store.exists(user))
    LOGGER.info("user data: %s", await store.read_entry(user))

    await store.update_entry(user, {"name": "Alice Smith"})
    LOGGER.info("updated user data: %s", await store.read_entry(user))

    posts = user.collection(COLLECTION_POSTS)
    first_post_id = await store.add_entry(posts, {"title": "My first post!", "content": "Hello, Firestore!"})
    second_post_id = await store.add_entry(
        posts,
        {"title": "Subcollections are cool", "content": "This is powerful."},
    )
    LOGGER.info("added posts: ids=%s,%s", first_post_id, second_post_id)
    LOGGER.info("post ids: %s", await store.get_keys(posts))
    LOGGER.info("first post: %s", await store.read_entry(posts.document(first_post_id)))

    await store.delete_entry(posts.document(second_post_id))
    remaining_post_ids = await store.get_keys(posts)
    LOGGER.info("remaining post ids: %s", remaining_post_ids)

    user_exists = True
    if not keep:
        # Posts stay behind as orphans; recursive delete needs server-side tooling.
        await store.delete_entry(user)
        user_exists = await store.exists(user)
        LOGGER.info("user exists after delete: %s", user_exists)

    return {
        "user_id": user_id,
        "post_ids": remaining_post_ids,
        "user_exists": user_exists,
    }


def main() -> int:
    args = parse_args()
    settings = load_settings()
    logging.basicConfig(level=settings.log_level_value, format="%(message)s")
    if args.project_id:
        settings = replace(settings, firestore_project_id=args.project_id.strip())

    store = FirestorePathStore(create_async_client(settings))
    LOGGER.info("demo start: project=%s", settings.firestore_project_id or "(default)")
    result = asyncio.run(run_demo(store, now=datetime.now(timezone.utc), keep=args.keep))
    LOGGER.info("demo finished: %s", result)
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except Exception as exc:
        LOGGER.exception("demo failed: %s", exc)
        raise SystemExit(1) from exc
