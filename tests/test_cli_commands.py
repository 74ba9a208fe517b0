import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from lostboard.board import BoardApp
from lostboard.cli import main
from lostboard.commands.doctor import run as run_doctor
from lostboard.config import Settings, StoreSettings

RECORDS = [
    {
        "id": "lost-1",
        "type": "lost",
        "title": "black wallet",
        "description": "zipper wallet",
        "category": "Wallet",
        "location": "Central Park",
        "date": "2024-01-01",
        "contact": "owner@example.com",
    },
    {
        "id": "found-1",
        "type": "found",
        "title": "black leather wallet",
        "description": "has zipper",
        "category": "Wallet",
        "location": "Central Park",
        "date": "2024-01-03",
        "contact": "finder@example.com",
    },
    {
        "id": "found-2",
        "type": "found",
        "title": "red umbrella",
        "category": "Umbrella",
        "date": "2023-06-01",
    },
]


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.config = self.tmp / "config.yaml"
        self.config.write_text(f"store:\n  path: {self.tmp / 'board.sqlite3'}\n", encoding="utf-8")
        source = self.tmp / "items.json"
        source.write_text(json.dumps(RECORDS), encoding="utf-8")
        self.run_cli("import", str(source))

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def run_cli(self, *args: str) -> str:
        out = io.StringIO()
        with redirect_stdout(out), redirect_stderr(io.StringIO()):
            main(["--config", str(self.config), *args])
        return out.getvalue()


class TestCliCommands(CliTestCase):
    def test_matches_json(self) -> None:
        payload = json.loads(self.run_cli("matches", "lost-1", "--json"))
        self.assertEqual([entry["id"] for entry in payload], ["found-1"])
        self.assertGreater(payload[0]["score"], 0.40)

    def test_matches_text(self) -> None:
        output = self.run_cli("matches", "lost-1")
        self.assertIn("Possible matches for lost-1:", output)
        self.assertIn("found-1", output)
        self.assertNotIn("found-2", output)

    def test_search_hides_contact(self) -> None:
        payload = json.loads(self.run_cli("search", "wallet", "--json"))
        self.assertEqual(payload["total"], 2)
        self.assertNotIn("owner@example.com", json.dumps(payload))

    def test_search_no_results(self) -> None:
        self.assertIn("No listings found.", self.run_cli("search", "bicycle"))

    def test_show_masks_contact(self) -> None:
        output = self.run_cli("show", "lost-1")
        self.assertIn("Title: black wallet", output)
        self.assertIn("Posted by: user-", output)
        self.assertNotIn("owner@example.com", output)

    def test_post_reports_matches(self) -> None:
        output = self.run_cli(
            "post", "found", "wallet with zipper", "--category", "Wallet", "--date", "2024-01-02"
        )
        self.assertIn("Posted found item found_", output)
        self.assertIn("1 possible match found for your found item", output)

    def test_contact_and_messages(self) -> None:
        output = self.run_cli("contact", "found-1", "I think it is mine", "--from", "owner@example.com")
        self.assertIn("Message sent", output)
        listing = self.run_cli("messages", "found-1")
        self.assertIn("I think it is mine", listing)
        self.assertNotIn("owner@example.com", listing)

    def test_unknown_item_exits_with_error(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli("matches", "missing")
        self.assertEqual(ctx.exception.code, 1)

    def test_export_to_file(self) -> None:
        out = self.tmp / "export.json"
        self.run_cli("export", "--out", str(out))
        exported = json.loads(out.read_text(encoding="utf-8"))
        self.assertEqual([record["id"] for record in exported], ["lost-1", "found-1", "found-2"])


    def test_matches_limit_must_be_positive(self) -> None:
        for value in ("0", "-2", "two"):
            with self.subTest(limit=value):
                with self.assertRaises(SystemExit) as ctx:
                    self.run_cli("matches", "lost-1", "--limit", value)
                self.assertEqual(ctx.exception.code, 2)

    def test_search_page_must_be_positive(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli("search", "--page", "0")
        self.assertEqual(ctx.exception.code, 2)

    def test_delete_and_categories(self) -> None:
        self.assertEqual(self.run_cli("categories").split(), ["Umbrella", "Wallet"])
        self.assertIn("Removed listing found-2", self.run_cli("delete", "found-2"))
        self.assertEqual(self.run_cli("categories").split(), ["Wallet"])
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli("delete", "found-2")
        self.assertEqual(ctx.exception.code, 1)


class TestImportExportErrors(CliTestCase):
    def test_import_malformed_json(self) -> None:
        source = self.tmp / "broken.json"
        source.write_text("{not json", encoding="utf-8")
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli("import", str(source))
        self.assertIsInstance(ctx.exception.code, str)
        self.assertTrue(ctx.exception.code.startswith(str(source)))

    def test_import_missing_file(self) -> None:
        source = self.tmp / "absent.json"
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli("import", str(source))
        self.assertIn(str(source), ctx.exception.code)

    def test_import_wrong_shape(self) -> None:
        source = self.tmp / "scalar.json"
        source.write_text("42", encoding="utf-8")
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli("import", str(source))
        self.assertIn("expected a JSON list of items", ctx.exception.code)

    def test_export_into_missing_directory(self) -> None:
        out = self.tmp / "no-such-dir" / "export.json"
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli("export", "--out", str(out))
        self.assertIn(str(out), ctx.exception.code)
        self.assertFalse(out.exists())

class TestDoctorCommand(unittest.TestCase):
    def test_reports_counts_and_undated_items(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            settings = Settings(store=StoreSettings(path=Path(tmpdir) / "board.sqlite3"))
            app = BoardApp.create(settings)
            try:
                app.submit_item({"type": "lost", "title": "keys"})
            finally:
                app.close()

            report = run_doctor(settings)
            self.assertTrue(report.ok)
            joined = "\n".join(report.checks)
            self.assertIn("Listings: OK (1 lost, 0 found)", joined)
            self.assertIn("Matching: WARNING", joined)
            self.assertIn("Item dates: WARNING", joined)


if __name__ == "__main__":
    unittest.main()
