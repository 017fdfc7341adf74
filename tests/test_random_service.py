import unittest

import requests

from atmolotto.errors import RandomProviderError, ValidationError
from atmolotto.services.random_service import RandomOrgClient, RandomService
from tests.helpers import DummyResponse, DummySession


def plain(*values):
    return DummyResponse(text="\n".join(str(v) for v in values) + "\n")


class TestRandomOrgClient(unittest.TestCase):
    def test_parses_plain_lines(self):
        http = DummySession(plain(3, 1, 4))
        client = RandomOrgClient("https://random.test/integers/", http=http)
        self.assertEqual(client.fetch_integers(3, 1, 10), [3, 1, 4])
        params = http.calls[0]["params"]
        self.assertEqual((params["num"], params["min"], params["max"], params["format"]), (3, 1, 10, "plain"))

    def test_short_response_is_an_error(self):
        client = RandomOrgClient(http=DummySession(plain(3, 1)))
        with self.assertRaises(RandomProviderError) as ctx:
            client.fetch_integers(3, 1, 10)
        self.assertEqual(ctx.exception.details, {"expected": 3, "actual": 2})

    def test_error_body(self):
        client = RandomOrgClient(http=DummySession(DummyResponse(text="Error: quota exceeded")))
        with self.assertRaises(RandomProviderError):
            client.fetch_integers(1, 1, 10)

    def test_non_integer_line(self):
        client = RandomOrgClient(http=DummySession(DummyResponse(text="4\nabc\n")))
        with self.assertRaises(RandomProviderError):
            client.fetch_integers(2, 1, 10)

    def test_out_of_range_value(self):
        client = RandomOrgClient(http=DummySession(plain(11)))
        with self.assertRaises(RandomProviderError):
            client.fetch_integers(1, 1, 10)

    def test_http_and_network_failures(self):
        with self.assertRaises(RandomProviderError):
            RandomOrgClient(http=DummySession(DummyResponse(status_code=503))).fetch_integers(1, 1, 10)
        with self.assertRaises(RandomProviderError):
            RandomOrgClient(http=DummySession(requests.ConnectionError("down"))).fetch_integers(1, 1, 10)

    def test_invalid_bounds(self):
        client = RandomOrgClient(http=DummySession())
        with self.assertRaises(ValidationError):
            client.fetch_integers(1, 10, 1)
        with self.assertRaises(ValidationError):
            client.fetch_integers(0, 1, 10)


class FakeClient:
    def __init__(self, *batches):
        self.batches = list(batches)
        self.requests = []

    def fetch_integers(self, count, minimum, maximum):
        self.requests.append((count, minimum, maximum))
        return self.batches.pop(0)


class TestRandomService(unittest.TestCase):
    def test_unique_numbers_dedupes_and_sorts(self):
        client = FakeClient([7, 3, 7, 9, 3, 1], [])
        numbers = RandomService(client).unique_numbers(3, 1, 35)
        self.assertEqual(numbers, [3, 7, 9])
        self.assertEqual(client.requests, [(9, 1, 35)])

    def test_unique_numbers_tops_up_once(self):
        client = FakeClient([5, 5, 5, 5, 5, 5], [8, 2, 5, 9])
        numbers = RandomService(client).unique_numbers(3, 1, 35)
        self.assertEqual(numbers, [2, 5, 8])
        self.assertEqual(client.requests[1], (4, 1, 35))

    def test_unique_numbers_gives_up_after_top_up(self):
        client = FakeClient([5, 5, 5], [5, 5])
        with self.assertRaises(RandomProviderError):
            RandomService(client).unique_numbers(2, 1, 35)

    def test_impossible_request(self):
        with self.assertRaises(ValidationError):
            RandomService(FakeClient()).unique_numbers(5, 1, 3)

    def test_daletu(self):
        client = FakeClient([35, 1, 12, 20, 8, 1, 33], [12, 3, 12])
        result = RandomService(client).daletu()
        self.assertEqual(result.lottery_code, "dlt")
        self.assertEqual(result.numbers, [1, 8, 12, 20, 35])
        self.assertEqual(result.special_numbers, [3, 12])

    def test_shuangseqiu_single_blue(self):
        client = FakeClient([1, 2, 3, 4, 5, 6], [16])
        result = RandomService(client).shuangseqiu()
        self.assertEqual(len(result.numbers), 6)
        self.assertEqual(result.special_numbers, [16])
        self.assertEqual(client.requests[-1], (1, 1, 16))

    def test_coin_dice_integer(self):
        service = RandomService(FakeClient([0], [1], [2, 6, 5], [77]))
        self.assertEqual(service.coin().result, "heads")
        self.assertEqual(service.coin().result, "tails")
        self.assertEqual(service.dice(3).total, 13)
        self.assertEqual(service.integer(100), 77)

        with self.assertRaises(ValidationError):
            service.dice(7)
        with self.assertRaises(ValidationError):
            service.integer(4)


if __name__ == "__main__":
    unittest.main()
