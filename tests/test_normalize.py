import unittest
from datetime import date

from atmolotto.lottery_types import LOTTERY_TYPES
from atmolotto.providers.normalize import build_draw, draw_date_time, parse_draw_date, parse_money, parse_numbers


class TestParsers(unittest.TestCase):
    def test_numbers(self):
        self.assertEqual(parse_numbers("06 08 19 21 29"), (6, 8, 19, 21, 29))
        self.assertEqual(parse_numbers("19,21,29"), (19, 21, 29))
        self.assertEqual(parse_numbers("01 02 03 04 05+06 07"), (1, 2, 3, 4, 5, 6, 7))
        self.assertEqual(parse_numbers([19, "21"]), (19, 21))
        self.assertEqual(parse_numbers(None), ())
        with self.assertRaises(ValueError):
            parse_numbers("1 x 3")

    def test_money(self):
        self.assertEqual(parse_money("2.85亿"), 28_500_000_000)
        self.assertEqual(parse_money("3500万"), 3_500_000_000)
        self.assertEqual(parse_money("1,234.50"), 123_450)
        self.assertEqual(parse_money("¥88元"), 8_800)
        self.assertEqual(parse_money(12), 1_200)
        self.assertIsNone(parse_money(""))
        self.assertIsNone(parse_money("n/a"))
        self.assertIsNone(parse_money(None))

    def test_dates(self):
        self.assertEqual(parse_draw_date("2026-01-18 星期六"), date(2026, 1, 18))
        self.assertEqual(parse_draw_date("2026/1/8"), date(2026, 1, 8))
        with self.assertRaises(ValueError):
            parse_draw_date("yesterday")

    def test_draw_date_time_only_when_a_clock_is_present(self):
        self.assertIsNone(draw_date_time(date(2025, 1, 1), None))
        self.assertIsNone(draw_date_time(date(2025, 1, 1), "2025-01-01 星期三"))
        self.assertEqual(draw_date_time(date(2025, 1, 1), "2025-01-01 21:25"), "2025-01-01 21:25:00")
        self.assertEqual(draw_date_time(date(2025, 1, 1), "9:05:30"), "2025-01-01 09:05:30")


class TestBuildDraw(unittest.TestCase):
    def test_valid_dlt(self):
        draw = build_draw(
            LOTTERY_TYPES["dlt"],
            issue=25001,
            raw_date="2025-01-01",
            main=(1, 2, 3, 4, 5),
            extra=(6, 7),
            prize_pool="8.5亿",
        )
        self.assertEqual(draw.issue, "25001")
        self.assertEqual(draw.prize_pool, 85_000_000_000)
        self.assertIsNone(draw.draw_date_time)

    def test_wrong_main_count(self):
        with self.assertRaises(ValueError):
            build_draw(LOTTERY_TYPES["dlt"], issue="1", raw_date="2025-01-01", main=(1, 2, 3), extra=(1, 2))

    def test_missing_issue(self):
        with self.assertRaises(ValueError):
            build_draw(LOTTERY_TYPES["dlt"], issue="", raw_date="2025-01-01", main=(1, 2, 3, 4, 5))

    def test_extra_dropped_for_formats_without_extra(self):
        draw = build_draw(LOTTERY_TYPES["pl3"], issue="1", raw_date="2025-01-01", main=(0, 5, 9), extra=(3,))
        self.assertEqual(draw.extra_numbers, ())


if __name__ == "__main__":
    unittest.main()
