import unittest

from vault_dashboard.models import (
    Asset,
    FetchOutcome,
    HistoryMetrics,
    HistoryRecord,
    HistoryResult,
    PeriodMetrics,
    Strategy,
    VaultBalance,
    VaultInfo,
    VaultRoles,
    VaultSnapshot,
)


def vault_info_payload():
    return {
        "name": "USDC Blend Vault",
        "symbol": "dfUSDC",
        "apy": 6.42,
        "roles": {
            "manager": "GMANAGER",
            "emergencyManager": "GEMERGENCY",
            "rebalanceManager": "GREBALANCE",
            "feeReceiver": "GFEES",
        },
        "feesBps": {"vaultFee": 1000, "defindexFee": 2000},
        "assets": [
            {
                "address": "CUSDC",
                "name": "USD Coin",
                "symbol": "USDC",
                "strategies": [
                    {"address": "CSTRAT1", "name": "Blend Fixed", "paused": False},
                    {"address": "CSTRAT2", "name": "Blend Autocompound", "paused": True},
                ],
            }
        ],
        "someNewField": "ignored",
    }


class TestVaultInfo(unittest.TestCase):
    def test_nested_models(self):
        info = VaultInfo.from_dict(vault_info_payload())
        self.assertEqual(info.name, "USDC Blend Vault")
        self.assertEqual(info.apy, 6.42)
        self.assertIsInstance(info.roles, VaultRoles)
        self.assertEqual(info.roles.emergency_manager, "GEMERGENCY")
        self.assertEqual(info.fees_bps.defindex_fee, 2000)
        self.assertIsInstance(info.assets[0], Asset)
        self.assertIsInstance(info.assets[0].strategies[1], Strategy)
        self.assertEqual([s.paused for s in info.assets[0].strategies], [False, True])

    def test_missing_fields_default_to_none(self):
        info = VaultInfo.from_dict({})
        self.assertIsNone(info.name)
        self.assertIsNone(info.roles)
        self.assertIsNone(info.assets)

    def test_input_is_not_mutated(self):
        payload = vault_info_payload()
        VaultInfo.from_dict(payload)
        self.assertIsInstance(payload["roles"], dict)
        self.assertIsInstance(payload["assets"][0]["strategies"][0], dict)

    def test_non_dict_is_returned_as_is(self):
        self.assertIsNone(VaultInfo.from_dict(None))
        self.assertEqual(VaultInfo.from_dict("oops"), "oops")

    def test_str_is_the_dataclass_repr(self):
        info = VaultInfo.from_dict(vault_info_payload())
        self.assertEqual(str(info), repr(info))
        self.assertIn("name='USDC Blend Vault'", str(info))


class TestHistoryResult(unittest.TestCase):
    def test_records_and_metrics(self):
        history = HistoryResult.from_dict({
            "data": [{"timestamp": "2024-01-01T00:00:00Z", "vaultPPS": "1.01", "ppsChangeFromPrevious": None}],
            "currentState": {"vaultPPS": "1.02", "totalSupply": "100", "totalManagedFunds": [{"total_amount": "5"}]},
            "metrics": {
                "period7d": {"apy": 5.1, "ppsChange": 0.001, "netDeposits": "10"},
                "fullPeriod": {"days": 40, "totalReturn": 0.02},
                "uniqueDepositors": 3,
            },
        })
        self.assertEqual(len(history.data), 1)
        self.assertIsInstance(history.data[0], HistoryRecord)
        self.assertEqual(history.data[0].vault_pps, "1.01")
        self.assertEqual(history.data[0].observed_at.year, 2024)
        self.assertEqual(history.current_state.total_managed_funds[0]["total_amount"], "5")
        self.assertIsInstance(history.metrics, HistoryMetrics)
        self.assertIsInstance(history.metrics.period7d, PeriodMetrics)
        self.assertEqual(history.metrics.full_period.days, 40)
        self.assertIsNone(history.metrics.period30d)

    def test_malformed_data_is_kept(self):
        history = HistoryResult.from_dict({"data": "unavailable"})
        self.assertEqual(history.data, "unavailable")


class TestVaultBalance(unittest.TestCase):
    def test_from_dict(self):
        balance = VaultBalance.from_dict({"dfTokens": "1000", "underlyingBalance": ["2000"]})
        self.assertEqual(balance.df_tokens, "1000")
        self.assertEqual(balance.underlying_balance, ["2000"])


class TestFetchOutcome(unittest.TestCase):
    def test_success_and_failure(self):
        ok = FetchOutcome.success(1)
        self.assertTrue(ok.ok)
        self.assertEqual(ok.value, 1)
        failed = FetchOutcome.failure(RuntimeError("boom"))
        self.assertFalse(failed.ok)
        self.assertEqual(failed.error, "boom")

    def test_failure_without_message_uses_type_name(self):
        self.assertEqual(FetchOutcome.failure(TimeoutError()).error, "TimeoutError")

    def test_snapshot_errors(self):
        snapshot = VaultSnapshot(apy=FetchOutcome.failure(RuntimeError("down")))
        self.assertEqual(snapshot.errors, {"info": None, "apy": "down", "history": None})


if __name__ == "__main__":
    unittest.main()
