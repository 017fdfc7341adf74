import math
import unittest
from datetime import date

from atmolotto.errors import RandomProviderError, ValidationError
from atmolotto.repositories.lottery_result_repository import DrawInput, LotteryResultRepository
from atmolotto.services.prize_tiers import Ticket, WinningDraw
from atmolotto.services.random_service import RandomOrgClient, RandomService
from atmolotto.services.simulation_service import SimulationService, simulate_batch
from tests.helpers import DummyResponse, DummySession, dlt_ticket_answers, memory_session


def draw(front, back, issue):
    return WinningDraw(issue=issue, draw_date="2025-01-01 21:30:00", front=tuple(front), back=tuple(back))


class TestSimulateBatch(unittest.TestCase):
    def test_no_tickets(self):
        sim = simulate_batch([], [draw([1, 2, 3, 4, 5], [1, 2], "1")])
        s = sim.summary
        self.assertEqual(s.total_tickets, 0)
        self.assertEqual(s.total_cost, 0)
        self.assertEqual(s.return_rate, 0)
        self.assertEqual(s.win_rate, 0)
        self.assertFalse(math.isnan(s.return_rate))
        self.assertEqual(sim.results, [])

    def test_hundred_tickets_against_empty_corpus(self):
        tickets = [Ticket.of([1, 2, 3, 4, 5], [1, 2])] * 100
        sim = simulate_batch(tickets, [])
        s = sim.summary
        self.assertEqual(s.total_issues_checked, 0)
        self.assertEqual(s.winning_tickets, 0)
        self.assertEqual(s.return_rate, 0)
        self.assertEqual(s.total_cost, 200)
        self.assertEqual(len(sim.results), 100)
        self.assertTrue(all(r.highest_level == 0 for r in sim.results))
        self.assertTrue(all(stat.count == 0 for stat in s.level_stats.values()))

    def test_counts_every_pair_and_tracks_best_tier(self):
        draws = [
            draw([1, 2, 3, 4, 5], [1, 2], "3"),  # ticket A: tier 1
            draw([1, 2, 30, 31, 32], [9, 10], "2"),  # ticket A: 2+0 -> tier 9
            draw([20, 21, 22, 23, 24], [11, 12], "1"),  # nothing
        ]
        tickets = [
            Ticket.of([1, 2, 3, 4, 5], [1, 2]),
            Ticket.of([6, 7, 8, 9, 10], [3, 4]),
        ]
        sim = simulate_batch(tickets, draws, unit_price=2)
        s = sim.summary

        self.assertEqual(sim.results[0].highest_level, 1)
        self.assertEqual(sim.results[0].level_counts, {1: 1, 9: 1})
        self.assertEqual(sim.results[1].highest_level, 0)
        self.assertEqual(s.winning_tickets, 1)
        self.assertEqual(s.level_stats[1].count, 1)
        self.assertEqual(s.level_stats[9].count, 1)
        self.assertEqual(s.total_prize, 5_000_000 + 5)
        self.assertEqual(s.total_cost, 4)
        self.assertAlmostEqual(s.return_rate, (5_000_005 / 4) * 100)
        self.assertAlmostEqual(s.win_rate, 50.0)
        self.assertEqual(s.total_issues_checked, 3)

    def test_best_tier_is_minimum_regardless_of_draw_order(self):
        ticket = Ticket.of([1, 2, 3, 4, 5], [1, 2])
        draws = [
            draw([1, 2, 30, 31, 32], [9, 10], "1"),  # tier 9
            draw([1, 2, 3, 4, 5], [1, 11], "2"),  # tier 2
            draw([1, 2, 3, 33, 34], [1, 2], "3"),  # tier 6
        ]
        sim = simulate_batch([ticket], draws)
        self.assertEqual(sim.results[0].highest_level, 2)

    def test_level_stats_cover_all_tiers(self):
        sim = simulate_batch([Ticket.of([1, 2, 3, 4, 5], [1, 2])], [])
        self.assertEqual(sorted(sim.summary.level_stats), list(range(1, 10)))
        self.assertEqual(sim.summary.level_stats[3].amount, 10_000)


class TestSimulateRandom(unittest.TestCase):
    def setUp(self):
        self.session = memory_session()
        self.service = SimulationService(LotteryResultRepository())

    def tearDown(self):
        self.session.close()

    def seed(self):
        LotteryResultRepository().upsert_many(
            self.session,
            [
                DrawInput(
                    lottery_code="dlt",
                    issue="25001",
                    draw_date=date(2025, 1, 1),
                    main_numbers=(1, 2, 3, 4, 5),
                    extra_numbers=(1, 2),
                )
            ],
        )

    def test_generated_tickets_are_checked(self):
        self.seed()
        http = DummySession(
            *dlt_ticket_answers([5, 4, 3, 2, 1], [2, 1]),
            *dlt_ticket_answers([10, 11, 12, 13, 14], [5, 6]),
        )
        result = self.service.simulate_random(self.session, "dlt", 2, RandomService(RandomOrgClient(http=http)))

        self.assertTrue(result.evaluable)
        self.assertEqual([g.numbers for g in result.generated], [[1, 2, 3, 4, 5], [10, 11, 12, 13, 14]])
        self.assertEqual(result.generated[0].special_numbers, [1, 2])
        self.assertEqual([r.highest_level for r in result.simulation.results], [1, 0])
        self.assertEqual(result.simulation.summary.total_tickets, 2)
        self.assertEqual(result.simulation.summary.total_cost, 4)
        self.assertEqual(len(http.calls), 4)

    def test_empty_corpus_requests_nothing(self):
        http = DummySession()
        result = self.service.simulate_random(self.session, "dlt", 100, RandomService(RandomOrgClient(http=http)))
        self.assertFalse(result.evaluable)
        self.assertEqual(result.generated, [])
        self.assertEqual(result.simulation.summary.total_tickets, 0)
        self.assertEqual(http.calls, [])

    def test_random_org_failure_propagates(self):
        self.seed()
        http = DummySession(DummyResponse(text="Error: You have used your quota of random bits for today."))
        with self.assertRaises(RandomProviderError):
            self.service.simulate_random(self.session, "dlt", 1, RandomService(RandomOrgClient(http=http)))

    def test_count_must_be_positive(self):
        with self.assertRaises(ValidationError):
            self.service.simulate_random(self.session, "dlt", 0, RandomService(RandomOrgClient(http=DummySession())))


if __name__ == "__main__":
    unittest.main()
