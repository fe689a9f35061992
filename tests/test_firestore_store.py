from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock
import unittest

from firestore_fakes import FailingFirestoreClient, FakeFirestoreClient, NotFound

from firestore_model.storage.firestore_path import CollectionPath, DocumentPath, PathError
from firestore_model.storage.firestore_store import FirestorePathStore, resolve_reference


class ResolveReferenceTest(unittest.TestCase):
    def test_walk_alternates_collection_and_document(self) -> None:
        client = FakeFirestoreClient()

        collection_ref = resolve_reference(client, ["users", "u1", "posts"], as_collection=True)
        document_ref = resolve_reference(client, ["users", "u1", "posts", "p1"], as_collection=False)

        self.assertEqual(collection_ref.path, "users/u1/posts")
        self.assertEqual(document_ref.path, "users/u1/posts/p1")

    def test_mismatch_raises_before_touching_client(self) -> None:
        client = MagicMock()

        with self.assertRaises(PathError):
            resolve_reference(client, ["users", "u1"], as_collection=True)
        with self.assertRaises(PathError):
            resolve_reference(client, ["users"], as_collection=False)

        client.collection.assert_not_called()

    def test_resolve_builds_fresh_references(self) -> None:
        store = FirestorePathStore(FakeFirestoreClient())

        first = store.resolve(["users", "u1"], as_collection=False)
        second = store.resolve(["users", "u1"], as_collection=False)

        self.assertIsNot(first, second)
        self.assertEqual(first.path, second.path)


class FirestorePathStoreTest(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.client = FakeFirestoreClient()
        self.store = FirestorePathStore(self.client)

    async def test_add_then_read_returns_every_field(self) -> None:
        joined = datetime(2026, 1, 5, tzinfo=timezone.utc)
        entry = {"name": "Alice", "email": "alice@example.com", "joined": joined}

        user_id = await self.store.add_entry(["users"], entry)
        found = await self.store.read_entry(["users", user_id])

        self.assertEqual(found, entry)
        self.assertEqual(self.client.db[f"users/{user_id}"], entry)

    async def test_read_missing_returns_none(self) -> None:
        self.assertIsNone(await self.store.read_entry(["users", "missing"]))
        self.assertFalse(await self.store.exists(["users", "missing"]))

    async def test_read_empty_document_returns_empty_dict(self) -> None:
        self.client.db["users/u1"] = {}

        self.assertEqual(await self.store.read_entry(["users", "u1"]), {})

    async def test_update_merges_only_given_fields(self) -> None:
        self.client.db["users/u1"] = {"name": "Alice", "email": "alice@example.com"}

        await self.store.update_entry(["users", "u1"], {"name": "Alice Smith"})

        self.assertEqual(
            await self.store.read_entry(["users", "u1"]),
            {"name": "Alice Smith", "email": "alice@example.com"},
        )

    async def test_update_missing_document_propagates_store_error(self) -> None:
        with self.assertRaises(NotFound):
            await self.store.update_entry(["users", "missing"], {"name": "x"})
        self.assertNotIn("users/missing", self.client.db)

    async def test_delete_then_exists_is_false(self) -> None:
        self.client.db["users/u1"] = {"name": "Alice"}

        await self.store.delete_entry(["users", "u1"])

        self.assertFalse(await self.store.exists(["users", "u1"]))

    async def test_get_keys_lists_direct_children_in_store_order(self) -> None:
        self.client.db["users/b"] = {}
        self.client.db["users/a"] = {}
        self.client.db["users/a/posts/p1"] = {}
        self.client.db["groups/g1"] = {}

        self.assertEqual(await self.store.get_keys(["users"]), ["b", "a"])
        self.assertEqual(await self.store.get_keys(["users", "a", "posts"]), ["p1"])
        self.assertEqual(await self.store.get_keys(["empty"]), [])

    async def test_parity_mismatch_raises_for_every_operation(self) -> None:
        client = MagicMock()
        store = FirestorePathStore(client)

        with self.assertRaises(PathError):
            await store.add_entry(["users", "u1"], {"name": "x"})
        with self.assertRaises(PathError):
            await store.get_keys(["users", "u1"])
        with self.assertRaises(PathError):
            await store.read_entry(["users"])
        with self.assertRaises(PathError):
            await store.update_entry(["users"], {"name": "x"})
        with self.assertRaises(PathError):
            await store.delete_entry(["users", "u1", "posts"])
        with self.assertRaises(PathError):
            await store.exists(["users"])

        client.collection.assert_not_called()

    async def test_store_errors_propagate_unchanged(self) -> None:
        client = FailingFirestoreClient()
        store = FirestorePathStore(client)
        operations = {
            "add_entry": lambda: store.add_entry(["users"], {"name": "x"}),
            "read_entry": lambda: store.read_entry(["users", "u1"]),
            "update_entry": lambda: store.update_entry(["users", "u1"], {"name": "x"}),
            "delete_entry": lambda: store.delete_entry(["users", "u1"]),
            "exists": lambda: store.exists(["users", "u1"]),
            "get_keys": lambda: store.get_keys(["users", "u1", "posts"]),
        }

        for name, operation in operations.items():
            with self.subTest(operation=name):
                with self.assertRaises(type(client.error)) as raised:
                    await operation()
                self.assertIs(raised.exception, client.error)

    async def test_exists_logs_path(self) -> None:
        with self.assertLogs("firestore_model.storage.firestore_store", level="DEBUG") as captured:
            await self.store.exists(DocumentPath("users", "u1"))

        self.assertIn("exists: path=users/u1", captured.output[0])

    async def test_accepts_typed_and_string_paths(self) -> None:
        users = CollectionPath("users")
        user_id = await self.store.add_entry(users, {"name": "Alice"})

        self.assertTrue(await self.store.exists(users.document(user_id)))
        self.assertTrue(await self.store.exists(f"users/{user_id}"))
        self.assertEqual(await self.store.get_keys("users"), [user_id])
        self.assertEqual(await self.store.read_entry(DocumentPath("users", user_id)), {"name": "Alice"})

    async def test_users_and_posts_scenario(self) -> None:
        user_id = await self.store.add_entry(
            ["users"],
            {"name": "Alice", "email": "alice@example.com", "joined": "2026-01-05"},
        )
        self.assertTrue(await self.store.exists(["users", user_id]))

        await self.store.update_entry(["users", user_id], {"name": "Alice Smith"})
        self.assertEqual(
            await self.store.read_entry(["users", user_id]),
            {"name": "Alice Smith", "email": "alice@example.com", "joined": "2026-01-05"},
        )

        posts = ["users", user_id, "posts"]
        first_post_id = await self.store.add_entry(posts, {"title": "p1"})
        second_post_id = await self.store.add_entry(posts, {"title": "p2"})
        self.assertEqual(set(await self.store.get_keys(posts)), {first_post_id, second_post_id})

        await self.store.delete_entry([*posts, second_post_id])
        self.assertEqual(set(await self.store.get_keys(posts)), {first_post_id})

        await self.store.delete_entry(["users", user_id])
        self.assertFalse(await self.store.exists(["users", user_id]))
        # Nested documents are orphaned, not deleted with their parent.
        self.assertTrue(await self.store.exists([*posts, first_post_id]))
        self.assertEqual(await self.store.get_keys(posts), [first_post_id])
        self.assertEqual(await self.store.get_keys(["users"]), [])


if __name__ == "__main__":
    unittest.main()
