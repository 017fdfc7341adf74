import unittest

from atmolotto.errors import ValidationError
from atmolotto.services.prize_tiers import (
    DLT_PRIZES,
    SSQ_PRIZES,
    Ticket,
    WinningDraw,
    evaluate_tier,
    get_prize_table,
    match_ticket,
    tier_for_counts,
)


EXPECTED_DLT = {
    (5, 2): 1,
    (5, 1): 2,
    (5, 0): 3,
    (4, 2): 4,
    (4, 1): 5,
    (3, 2): 6,
    (4, 0): 6,
    (3, 1): 7,
    (2, 2): 7,
    (3, 0): 8,
    (1, 2): 8,
    (2, 1): 8,
    (0, 2): 9,
    (1, 1): 9,
    (2, 0): 9,
}


def draw(front, back, issue="25001"):
    return WinningDraw(issue=issue, draw_date="2025-01-01 21:30:00", front=tuple(front), back=tuple(back))


class TestTierTable(unittest.TestCase):
    def test_every_count_pair_maps_to_one_fixed_tier(self):
        for front in range(0, 6):
            for back in range(0, 3):
                with self.subTest(front=front, back=back):
                    tier = tier_for_counts(front, back)
                    self.assertIn(tier, range(0, 10))
                    self.assertEqual(tier, EXPECTED_DLT.get((front, back), 0))

    def test_no_pair_appears_in_two_rules(self):
        seen = set()
        for _, pairs in DLT_PRIZES.rules:
            self.assertFalse(seen & pairs)
            seen |= pairs

    def test_out_of_domain_counts_are_no_prize(self):
        self.assertEqual(tier_for_counts(6, 3), 0)
        self.assertEqual(tier_for_counts(-1, 0), 0)

    def test_ssq_table(self):
        self.assertEqual(tier_for_counts(6, 1, SSQ_PRIZES), 1)
        self.assertEqual(tier_for_counts(6, 0, SSQ_PRIZES), 2)
        self.assertEqual(tier_for_counts(4, 1, SSQ_PRIZES), 4)
        self.assertEqual(tier_for_counts(0, 1, SSQ_PRIZES), 6)
        self.assertEqual(tier_for_counts(3, 0, SSQ_PRIZES), 0)

    def test_top_tier_amounts_are_fixed_estimates(self):
        self.assertEqual(DLT_PRIZES.amount(1), 5_000_000)
        self.assertEqual(DLT_PRIZES.amount(2), 100_000)
        self.assertEqual(DLT_PRIZES.amount(0), 0)
        self.assertEqual(DLT_PRIZES.name(9), "九等奖")

    def test_unknown_prize_table(self):
        self.assertIs(get_prize_table("DLT"), DLT_PRIZES)
        with self.assertRaises(ValidationError):
            get_prize_table("pl3")


class TestEvaluateTier(unittest.TestCase):
    def test_exact_jackpot(self):
        ticket = Ticket.of([1, 2, 3, 4, 5], [1, 2])
        self.assertEqual(evaluate_tier(ticket, draw([1, 2, 3, 4, 5], [1, 2])), 1)

    def test_all_main_no_extra(self):
        ticket = Ticket.of([1, 2, 3, 4, 5], [3, 4])
        self.assertEqual(evaluate_tier(ticket, draw([1, 2, 3, 4, 5], [1, 2])), 3)

    def test_order_does_not_matter(self):
        ticket = Ticket.of([5, 4, 3, 2, 1], [2, 1])
        self.assertEqual(evaluate_tier(ticket, draw([1, 2, 3, 4, 5], [1, 2])), 1)

    def test_match_reports_matched_numbers(self):
        ticket = Ticket.of([1, 7, 3, 20, 30], [2, 11])
        result = match_ticket(ticket, draw([1, 2, 3, 4, 5], [1, 2]))
        self.assertEqual(result.front_matched, [1, 3])
        self.assertEqual(result.back_matched, [2])
        self.assertEqual(result.tier, 8)

    def test_no_match(self):
        ticket = Ticket.of([10, 11, 12, 13, 14], [5, 6])
        self.assertEqual(evaluate_tier(ticket, draw([1, 2, 3, 4, 5], [1, 2])), 0)


class TestWinningDraw(unittest.TestCase):
    def test_from_result_uses_default_time_when_missing(self):
        class Row:
            issue = "25001"
            draw_date = "2025-01-01"
            draw_date_time = None
            main = [1, 2, 3, 4, 5]
            extra = [1, 2]

        built = WinningDraw.from_result(Row(), "21:30:00")
        self.assertEqual(built.draw_date, "2025-01-01 21:30:00")
        self.assertEqual(built.front, (1, 2, 3, 4, 5))
        self.assertEqual(built.back, (1, 2))


if __name__ == "__main__":
    unittest.main()
