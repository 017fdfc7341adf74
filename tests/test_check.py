import unittest

from atmolotto.services.check_service import check_ticket
from atmolotto.services.prize_tiers import Ticket, WinningDraw


def draw(front, back, issue):
    return WinningDraw(issue=issue, draw_date=f"2025-01-{int(issue) % 28 + 1:02d} 21:30:00", front=tuple(front), back=tuple(back))


class TestCheckTicket(unittest.TestCase):
    def test_no_win_still_reports_checked_count(self):
        ticket = Ticket.of([1, 2, 3, 4, 5], [1, 2])
        draws = [draw([20, 21, 22, 23, 24], [11, 12], str(i)) for i in range(1, 4)]
        result = check_ticket(ticket, draws)
        self.assertFalse(result.has_winning)
        self.assertEqual(result.total_checked, 3)
        self.assertEqual(result.highest_level, 0)
        self.assertEqual(result.winnings, [])

    def test_empty_corpus_is_no_win(self):
        result = check_ticket(Ticket.of([1, 2, 3, 4, 5], [1, 2]), [])
        self.assertFalse(result.has_winning)
        self.assertEqual(result.total_checked, 0)

    def test_single_tier_nine_win(self):
        ticket = Ticket.of([1, 2, 3, 4, 5], [1, 2])
        draws = [
            draw([20, 21, 22, 23, 24], [11, 12], "2"),
            draw([1, 2, 30, 31, 32], [9, 10], "1"),  # 2+0
        ]
        result = check_ticket(ticket, draws)
        self.assertTrue(result.has_winning)
        self.assertEqual(result.highest_level, 9)
        self.assertEqual(result.total_winnings_at_highest, 1)
        self.assertEqual(len(result.winnings), 1)
        record = result.winnings[0]
        self.assertEqual(record.issue, "1")
        self.assertEqual(record.front_matched, [1, 2])
        self.assertEqual(record.back_matched, [])
        self.assertEqual(record.prize_name, "九等奖")
        self.assertEqual(result.stats, {"九等奖": 1})

    def test_best_tier_capped_records_with_true_total(self):
        ticket = Ticket.of([1, 2, 3, 4, 5], [1, 2])
        draws = [draw([1, 2, 3, 4, 30], [1, 2], str(100 - i)) for i in range(12)]  # 4+2 -> tier 4
        draws.append(draw([1, 2, 30, 31, 32], [9, 10], "50"))  # tier 9
        result = check_ticket(ticket, draws, max_records=10)

        self.assertEqual(result.highest_level, 4)
        self.assertEqual(result.highest_prize_name, "四等奖")
        self.assertEqual(result.total_winnings_at_highest, 12)
        self.assertEqual(len(result.winnings), 10)
        self.assertEqual(result.winnings[0].issue, "100")
        self.assertEqual(result.stats, {"四等奖": 12, "九等奖": 1})
        self.assertEqual(result.total_checked, 13)


if __name__ == "__main__":
    unittest.main()
