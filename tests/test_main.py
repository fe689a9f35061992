from __future__ import annotations

from unittest.mock import patch
import io
import unittest

from firestore_model.main import main
from firestore_model.settings import load_settings


class MainTest(unittest.TestCase):
    def test_prints_config(self) -> None:
        settings = load_settings(env={"FIRESTORE_PROJECT_ID": "demo-project"}, dotenv_path="does-not-exist.env")
        stdout = io.StringIO()

        with patch("firestore_model.main.load_settings", return_value=settings), patch("sys.stdout", stdout):
            code = main()

        self.assertEqual(code, 0)
        self.assertIn("firestore_project_id=demo-project", stdout.getvalue())
        self.assertIn("info_collection=infos", stdout.getvalue())


if __name__ == "__main__":
    unittest.main()
