import argparse
import asyncio
from typing import Any, List, Optional, Union

from config import APIConfig, DashboardConfig
from vault_dashboard.defindex_client import DefindexClient
from vault_dashboard.errors import EmptyInputError
from vault_dashboard.logger import logger, APIEvent, ErrorEvent, StaleResponseEvent
from vault_dashboard.models import (
    FetchOutcome,
    HistoryInterval,
    HistoryPeriod,
    Network,
    VaultSnapshot,
)
from vault_dashboard.presenter import render_text


class VaultDashboard:
    """State behind the vault view: the selected vault and what was fetched for it.

    History fetches are numbered. A response is applied only if no newer
    history request was issued after it, so a slow response can never
    overwrite the result of a more recent period or interval selection.
    """

    def __init__(
        self,
        client: Optional[DefindexClient] = None,
        network: Union[str, Network] = APIConfig.DEFAULT_NETWORK,
        period: Union[str, HistoryPeriod] = DashboardConfig.DEFAULT_PERIOD,
        interval: Union[str, HistoryInterval] = DashboardConfig.DEFAULT_INTERVAL,
    ):
        self.client = client or DefindexClient()
        self.network = Network(network)
        self.period = HistoryPeriod(period)
        self.interval = HistoryInterval(interval)
        self.vault_address: Optional[str] = None
        self.snapshot: Optional[VaultSnapshot] = None
        self.error: Optional[str] = None
        self._in_flight = 0
        self._analyze_id = 0
        self._history_request_id = 0

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    async def _track(self, awaitable):
        self._in_flight += 1
        try:
            return await awaitable
        finally:
            self._in_flight -= 1

    def _next_history_request(self) -> int:
        self._history_request_id += 1
        return self._history_request_id

    def _to_outcome(self, result: Any, key: str) -> FetchOutcome:
        if isinstance(result, BaseException):
            logger.log(ErrorEvent(
                error_type=type(result).__name__,
                message=str(result),
                source=self.__class__.__name__,
                context=f"{key} fetch for {self.vault_address} on {self.network.value}",
            ))
            return FetchOutcome.failure(result)
        return FetchOutcome.success(result)

    def _apply_history(self, request_id: int, result: Any, period: HistoryPeriod, interval: HistoryInterval) -> bool:
        """Store a history result unless a newer history request has been issued."""
        if request_id != self._history_request_id:
            logger.log(StaleResponseEvent(
                request_id=request_id,
                latest_request_id=self._history_request_id,
                period=period.value,
                interval=interval.value,
            ))
            return False

        outcome = self._to_outcome(result, "history")
        if not outcome.ok:
            # keep the history already on display, only attach the error
            outcome.value = self.snapshot.history.value
        self.snapshot.history = outcome
        return True

    async def analyze(self, vault_address: str, network: Union[str, Network, None] = None) -> Optional[VaultSnapshot]:
        """Fetch info, APY and history of a vault concurrently.

        Each fetch settles on its own; one failing never hides the others.
        Returns None (and sets ``error``) when the address is empty, and None
        when a newer search started before this one settled.
        """
        try:
            address = DefindexClient._require_address(vault_address)
        except EmptyInputError as e:
            self.error = str(e)
            logger.log(ErrorEvent(
                error_type=type(e).__name__,
                message=self.error,
                source=self.__class__.__name__,
            ))
            return None

        if network is not None:
            self.network = Network(network)
        self.vault_address = address
        self.error = None
        self.snapshot = VaultSnapshot()
        self._analyze_id += 1
        analyze_id = self._analyze_id
        history_id = self._next_history_request()
        period, interval = self.period, self.interval

        logger.log(APIEvent("analyze", f"Analyzing {address} on {self.network.value} ({period.value}, {interval.value})"))
        info, apy, history = await self._track(asyncio.gather(
            self.client.get_vault_info(address, self.network),
            self.client.get_vault_apy(address, self.network),
            self.client.get_vault_history(address, self.network, period, interval),
            return_exceptions=True,
        ))

        if analyze_id != self._analyze_id:
            logger.log(APIEvent("analyze_superseded", f"Dropped results for {address}, a newer search was started"))
            return None

        self.snapshot.info = self._to_outcome(info, "info")
        self.snapshot.apy = self._to_outcome(apy, "apy")
        self._apply_history(history_id, history, period, interval)
        return self.snapshot

    async def change_period(self, period: Union[str, HistoryPeriod]) -> Optional[FetchOutcome]:
        """Select a new history period and re-fetch history for the current vault."""
        self.period = HistoryPeriod(period)
        return await self._refresh_history()

    async def change_interval(self, interval: Union[str, HistoryInterval]) -> Optional[FetchOutcome]:
        """Select a new history interval and re-fetch history for the current vault."""
        self.interval = HistoryInterval(interval)
        return await self._refresh_history()

    async def _refresh_history(self) -> Optional[FetchOutcome]:
        if not self.vault_address or self.snapshot is None:
            return None

        request_id = self._next_history_request()
        period, interval = self.period, self.interval
        try:
            result = await self._track(self.client.get_vault_history(
                self.vault_address, self.network, period, interval,
            ))
        except Exception as e:
            result = e
        self._apply_history(request_id, result, period, interval)
        return self.snapshot.history


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Explore a DeFindex vault from the command line.")
    parser.add_argument("vault_address", help="Vault contract address")
    parser.add_argument("--network", default=APIConfig.DEFAULT_NETWORK, choices=[n.value for n in Network])
    parser.add_argument("--period", default=DashboardConfig.DEFAULT_PERIOD, choices=[p.value for p in HistoryPeriod])
    parser.add_argument("--interval", default=DashboardConfig.DEFAULT_INTERVAL, choices=[i.value for i in HistoryInterval])
    return parser


async def run(vault_address: str, network: str, period: str, interval: str) -> str:
    async with DefindexClient() as client:
        dashboard = VaultDashboard(client, network=network, period=period, interval=interval)
        snapshot = await dashboard.analyze(vault_address)
    if snapshot is None:
        return dashboard.error
    return render_text(snapshot)


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    print(asyncio.run(run(args.vault_address, args.network, args.period, args.interval)))


if __name__ == "__main__":
    main()
