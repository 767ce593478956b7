import asyncio
import unittest
from unittest.mock import AsyncMock, MagicMock

from vault_dashboard.dashboard import VaultDashboard, build_parser
from vault_dashboard.errors import APIError, NetworkError
from vault_dashboard.models import HistoryResult, VaultAPY, VaultInfo, VaultSnapshot

VAULT = "CVAULTADDRESS"


class DashboardTests(unittest.TestCase):
    def setUp(self):
        self.client = MagicMock()
        for method in ['get_vault_info', 'get_vault_apy', 'get_vault_history']:
            setattr(self.client, method, AsyncMock())
        self.info = VaultInfo(name="USDC Vault", symbol="dfUSDC", apy=6.1)
        self.apy = VaultAPY(apy=6.1)
        self.history = HistoryResult(data=[], interval="daily")
        self.client.get_vault_info.return_value = self.info
        self.client.get_vault_apy.return_value = self.apy
        self.client.get_vault_history.return_value = self.history
        self.dashboard = VaultDashboard(self.client)

    def test_defaults(self):
        self.assertEqual(self.dashboard.network, "mainnet")
        self.assertEqual(self.dashboard.period, "30d")
        self.assertEqual(self.dashboard.interval, "daily")
        self.assertFalse(self.dashboard.loading)

    def test_analyze_fetches_all_three(self):
        snapshot = asyncio.run(self.dashboard.analyze(f"  {VAULT} ", "testnet"))
        self.assertIsInstance(snapshot, VaultSnapshot)
        self.assertIs(snapshot.info.value, self.info)
        self.assertIs(snapshot.apy.value, self.apy)
        self.assertIs(snapshot.history.value, self.history)
        self.assertEqual(snapshot.errors, {"info": None, "apy": None, "history": None})
        self.client.get_vault_info.assert_awaited_once_with(VAULT, "testnet")
        self.client.get_vault_apy.assert_awaited_once_with(VAULT, "testnet")
        self.client.get_vault_history.assert_awaited_once_with(VAULT, "testnet", "30d", "daily")
        self.assertFalse(self.dashboard.loading)
        self.assertIsNone(self.dashboard.error)

    def test_one_failure_does_not_hide_the_others(self):
        self.client.get_vault_apy.side_effect = APIError("vault not found", status=404)
        snapshot = asyncio.run(self.dashboard.analyze(VAULT))
        self.assertIs(snapshot.info.value, self.info)
        self.assertIs(snapshot.history.value, self.history)
        self.assertIsNone(snapshot.apy.value)
        self.assertEqual(snapshot.errors, {"info": None, "apy": "vault not found", "history": None})

    def test_all_failures_are_collected(self):
        self.client.get_vault_info.side_effect = NetworkError()
        self.client.get_vault_apy.side_effect = APIError("boom")
        self.client.get_vault_history.side_effect = RuntimeError("unexpected")
        snapshot = asyncio.run(self.dashboard.analyze(VAULT))
        self.assertTrue(snapshot.errors["info"].startswith("Network error"))
        self.assertEqual(snapshot.errors["apy"], "boom")
        self.assertEqual(snapshot.errors["history"], "unexpected")

    def test_empty_address_makes_no_request(self):
        result = asyncio.run(self.dashboard.analyze("   "))
        self.assertIsNone(result)
        self.assertEqual(self.dashboard.error, "Please enter a vault address")
        self.client.get_vault_info.assert_not_called()
        self.client.get_vault_apy.assert_not_called()
        self.client.get_vault_history.assert_not_called()

    def test_change_interval_refetches_history_only(self):
        asyncio.run(self.dashboard.analyze(VAULT))
        weekly = HistoryResult(data=[], interval="weekly")
        self.client.get_vault_history.return_value = weekly
        outcome = asyncio.run(self.dashboard.change_interval("weekly"))
        self.assertIs(outcome.value, weekly)
        self.assertIs(self.dashboard.snapshot.history.value, weekly)
        self.client.get_vault_history.assert_awaited_with(VAULT, "mainnet", "30d", "weekly")
        self.assertEqual(self.client.get_vault_info.await_count, 1)
        self.assertEqual(self.client.get_vault_apy.await_count, 1)

    def test_change_period_refetches_history(self):
        asyncio.run(self.dashboard.analyze(VAULT))
        asyncio.run(self.dashboard.change_period("90d"))
        self.client.get_vault_history.assert_awaited_with(VAULT, "mainnet", "90d", "daily")

    def test_failed_refetch_keeps_previous_history(self):
        asyncio.run(self.dashboard.analyze(VAULT))
        self.client.get_vault_history.side_effect = APIError("rate limited", status=429)
        outcome = asyncio.run(self.dashboard.change_period("7d"))
        self.assertIs(outcome.value, self.history)
        self.assertEqual(outcome.error, "rate limited")
        self.assertIs(self.dashboard.snapshot.info.value, self.info)

        self.client.get_vault_history.side_effect = None
        asyncio.run(self.dashboard.change_period("1y"))
        self.assertIsNone(self.dashboard.snapshot.errors["history"])

    def test_selection_before_analyze_only_stores_it(self):
        result = asyncio.run(self.dashboard.change_interval("monthly"))
        self.assertIsNone(result)
        self.assertEqual(self.dashboard.interval, "monthly")
        self.client.get_vault_history.assert_not_called()

    def test_invalid_selection(self):
        with self.assertRaises(ValueError):
            asyncio.run(self.dashboard.change_period("2w"))

    def test_stale_history_response_is_dropped(self):
        weekly = HistoryResult(data=[], interval="weekly")
        monthly = HistoryResult(data=[], interval="monthly")

        async def scenario():
            release_weekly = asyncio.Event()

            async def fake_history(address, network, period, interval):
                if interval == "weekly":
                    await release_weekly.wait()
                    return weekly
                if interval == "monthly":
                    return monthly
                return self.history

            self.client.get_vault_history.side_effect = fake_history
            await self.dashboard.analyze(VAULT)

            slow = asyncio.create_task(self.dashboard.change_interval("weekly"))
            await asyncio.sleep(0)
            self.assertTrue(self.dashboard.loading)
            await self.dashboard.change_interval("monthly")
            release_weekly.set()
            await slow

        asyncio.run(scenario())
        self.assertIs(self.dashboard.snapshot.history.value, monthly)
        self.assertEqual(self.dashboard.interval, "monthly")
        self.assertFalse(self.dashboard.loading)

    def test_newer_search_wins(self):
        other_info = VaultInfo(name="Other Vault")

        async def scenario():
            release_first = asyncio.Event()

            async def fake_info(address, network):
                if address == VAULT:
                    await release_first.wait()
                    return self.info
                return other_info

            self.client.get_vault_info.side_effect = fake_info
            first = asyncio.create_task(self.dashboard.analyze(VAULT))
            await asyncio.sleep(0)
            latest = await self.dashboard.analyze("COTHER")
            release_first.set()
            return await first, latest

        superseded, latest = asyncio.run(scenario())
        self.assertIsNone(superseded)
        self.assertIs(latest, self.dashboard.snapshot)
        self.assertEqual(self.dashboard.vault_address, "COTHER")
        self.assertIs(self.dashboard.snapshot.info.value, other_info)


class ParserTests(unittest.TestCase):
    def test_defaults_and_choices(self):
        args = build_parser().parse_args([VAULT, "--network", "testnet"])
        self.assertEqual(args.vault_address, VAULT)
        self.assertEqual(args.network, "testnet")
        self.assertEqual(args.period, "30d")
        self.assertEqual(args.interval, "daily")


if __name__ == "__main__":
    unittest.main()
