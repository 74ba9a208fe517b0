import datetime as dt
import unittest

from lostboard.core.matching import (
    DateParseError,
    InvalidItemError,
    Item,
    ItemType,
    coerce_item_date,
    parse_item_date,
)


class TestParseItemDate(unittest.TestCase):
    def test_iso_date(self) -> None:
        self.assertEqual(parse_item_date("2024-01-03"), dt.date(2024, 1, 3))

    def test_iso_datetime_drops_time(self) -> None:
        self.assertEqual(parse_item_date("2024-01-03T22:15:00Z"), dt.date(2024, 1, 3))
        self.assertEqual(parse_item_date("2024-01-03 08:00"), dt.date(2024, 1, 3))

    def test_date_and_datetime_objects(self) -> None:
        self.assertEqual(parse_item_date(dt.date(2024, 1, 3)), dt.date(2024, 1, 3))
        self.assertEqual(parse_item_date(dt.datetime(2024, 1, 3, 23, 59)), dt.date(2024, 1, 3))

    def test_rejects_garbage(self) -> None:
        for value in ("yesterday", "", "03/01/2024", "2024-1-3", 20240103, None):
            with self.subTest(value=value):
                with self.assertRaises(DateParseError):
                    parse_item_date(value)

    def test_rejects_impossible_calendar_date(self) -> None:
        with self.assertRaises(DateParseError):
            parse_item_date("2024-02-30")

    def test_date_parse_error_is_value_error(self) -> None:
        with self.assertRaises(ValueError):
            parse_item_date("not a date")


class TestCoerceItemDate(unittest.TestCase):
    def test_unparseable_becomes_none(self) -> None:
        self.assertIsNone(coerce_item_date("not a date"))
        self.assertIsNone(coerce_item_date("2024-13-01"))
        self.assertIsNone(coerce_item_date(None))
        self.assertIsNone(coerce_item_date(""))

    def test_valid_passes_through(self) -> None:
        self.assertEqual(coerce_item_date("2024-01-01"), dt.date(2024, 1, 1))


class TestItemFromRecord(unittest.TestCase):
    def test_full_record(self) -> None:
        item = Item.from_record(
            {
                "id": "abc",
                "type": "found",
                "title": "black wallet",
                "description": "zipper",
                "category": "Wallet",
                "location": "Central Park",
                "date": "2024-01-03",
                "contact": "  someone@example.com ",
            }
        )
        self.assertEqual(item.id, "abc")
        self.assertIs(item.type, ItemType.FOUND)
        self.assertEqual(item.date, dt.date(2024, 1, 3))
        self.assertEqual(item.contact, "someone@example.com")

    def test_missing_text_fields_default_to_empty(self) -> None:
        item = Item.from_record({"id": "1", "type": "lost", "title": None})
        self.assertEqual(item.title, "")
        self.assertEqual(item.description, "")
        self.assertEqual(item.category, "")
        self.assertEqual(item.location, "")
        self.assertIsNone(item.date)
        self.assertIsNone(item.contact)

    def test_numeric_id_and_type_case(self) -> None:
        item = Item.from_record({"id": 1700000000000, "type": " LOST "})
        self.assertEqual(item.id, "1700000000000")
        self.assertIs(item.type, ItemType.LOST)

    def test_unparseable_date_is_kept_as_unknown(self) -> None:
        item = Item.from_record({"id": "1", "type": "lost", "date": "last week"})
        self.assertIsNone(item.date)

    def test_direct_construction_normalizes_date(self) -> None:
        self.assertEqual(Item(id="1", type=ItemType.LOST, date="2024-01-05").date, dt.date(2024, 1, 5))
        self.assertEqual(
            Item(id="1", type=ItemType.LOST, date=dt.datetime(2024, 1, 5, 9, 30)).date,
            dt.date(2024, 1, 5),
        )
        self.assertIsNone(Item(id="1", type=ItemType.LOST, date="garbage").date)
        self.assertIsNone(Item(id="1", type=ItemType.LOST, date="").date)

    def test_missing_id_or_type(self) -> None:
        with self.assertRaises(InvalidItemError):
            Item.from_record({"type": "lost"})
        with self.assertRaises(InvalidItemError):
            Item.from_record({"id": "  ", "type": "lost"})
        with self.assertRaises(InvalidItemError):
            Item.from_record({"id": "1"})

    def test_unknown_type(self) -> None:
        with self.assertRaises(InvalidItemError):
            Item.from_record({"id": "1", "type": "stolen"})

    def test_non_mapping(self) -> None:
        with self.assertRaises(InvalidItemError):
            Item.from_record(["id", "type"])

    def test_to_record_round_trip(self) -> None:
        record = {
            "id": "1",
            "type": "lost",
            "title": "keys",
            "description": "",
            "category": "Keys",
            "location": "",
            "date": "2024-01-01",
            "contact": None,
            "created_at": "2024-01-02T10:00:00",
        }
        self.assertEqual(Item.from_record(record).to_record(), record)


class TestItemType(unittest.TestCase):
    def test_opposite(self) -> None:
        self.assertIs(ItemType.LOST.opposite(), ItemType.FOUND)
        self.assertIs(ItemType.FOUND.opposite(), ItemType.LOST)


if __name__ == "__main__":
    unittest.main()
