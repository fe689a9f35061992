from __future__ import annotations

from datetime import datetime, timezone
import unittest

from firestore_fakes import FakeFirestoreClient

import scripts.run_demo as target
from firestore_model.storage.firestore_store import FirestorePathStore


NOW = datetime(2026, 2, 1, tzinfo=timezone.utc)


class RunDemoTest(unittest.IsolatedAsyncioTestCase):
    async def test_demo_leaves_orphaned_post(self) -> None:
        client = FakeFirestoreClient()

        result = await target.run_demo(FirestorePathStore(client), now=NOW)

        user_id = result["user_id"]
        self.assertFalse(result["user_exists"])
        self.assertEqual(len(result["post_ids"]), 1)
        self.assertNotIn(f"users/{user_id}", client.db)
        post_path = f"users/{user_id}/posts/{result['post_ids'][0]}"
        self.assertEqual(client.db[post_path]["title"], "My first post!")

    async def test_keep_preserves_user(self) -> None:
        client = FakeFirestoreClient()

        result = await target.run_demo(FirestorePathStore(client), now=NOW, keep=True)

        self.assertTrue(result["user_exists"])
        self.assertEqual(
            client.db[f"users/{result['user_id']}"],
            {"name": "Alice Smith", "email": "alice@example.com", "joined": NOW},
        )


if __name__ == "__main__":
    unittest.main()
