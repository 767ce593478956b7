import json
import time
from urllib.parse import quote
from datetime import datetime
from typing import Optional, List, Dict, Any, Tuple, Union

import aiohttp
from aiohttp import ClientConnectionError, ClientPayloadError

from config import APIConfig
from vault_dashboard.errors import APIError, ConfigurationError, EmptyInputError, NetworkError
from vault_dashboard.models import (
    HistoryInterval,
    HistoryPeriod,
    HistoryResult,
    Network,
    VaultAPY,
    VaultBalance,
    VaultInfo,
)
from vault_dashboard.logger import logger, ErrorEvent, RequestEvent

QueryParams = List[Tuple[str, str]]
DateParam = Optional[Union[str, datetime]]


class DefindexClient:
    """Async client for the read endpoints of the DeFindex vault API.

    Every call is a fresh request: there is no retry, no timeout and no cache.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        # A missing key is reported on every call rather than here, so the
        # dashboard can still be constructed and show the error.
        self.api_key = api_key if api_key is not None else APIConfig.API_KEY
        self.base_url = (base_url or APIConfig.BASE_URL).rstrip('/')
        self.timeout = aiohttp.ClientTimeout(total=APIConfig.REQUEST_TIMEOUT)

        # Delay creating the aiohttp session until ``init`` is called. This
        # avoids requiring a running event loop when constructing the client.
        self.session = session
        self._owns_session = session is None

    @property
    def headers(self) -> Dict[str, str]:
        return {'Authorization': f'Bearer {self.api_key}'}

    async def init(self) -> None:
        """Create the underlying :class:`aiohttp.ClientSession` if needed."""
        if self.session is None:
            self.session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True

    async def close(self) -> None:
        if self._owns_session and self.session is not None and not self.session.closed:
            await self.session.close()

    async def __aenter__(self) -> "DefindexClient":
        await self.init()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _require_api_key(self) -> None:
        if not self.api_key:
            raise ConfigurationError()

    @staticmethod
    def _require_address(address: Any, label: str = "vault address") -> str:
        if not isinstance(address, str) or not address.strip():
            raise EmptyInputError(f"Please enter a {label}")
        return address.strip()

    @staticmethod
    def _encode_params(params: Optional[Dict[str, Any]]) -> QueryParams:
        """Drop unset values and sort by name so the query string is stable."""
        if not params:
            return []
        encoded = []
        for key, value in sorted(params.items()):
            if value is None:
                continue
            if isinstance(value, datetime):
                value = value.isoformat()
            elif hasattr(value, 'value'):
                value = value.value
            encoded.append((key, str(value)))
        return encoded

    @staticmethod
    def _error_message(description: str, status: int, reason: Optional[str], text: str) -> str:
        """Pick the most useful message out of an error response body."""
        message = f"Failed to fetch {description}: {status} {reason or ''}".rstrip()
        try:
            payload = json.loads(text)
        except ValueError:
            return f"{message} - {text}" if text else message
        if isinstance(payload, dict):
            return str(payload.get('message') or payload.get('error') or message)
        return message

    async def _make_request(
            self,
            path: str,
            description: str,
            params: Optional[Dict[str, Any]] = None,
            is_get: bool = True,
            body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Make a GET or POST request to the DeFindex API.

        Args:
            path: The API path relative to the base URL
            description: Human readable name of the resource, used in error messages
            params: Query parameters
            is_get: Whether to use GET (True) or POST (False)
            body: JSON body for POST requests

        Raises:
            ConfigurationError: if no API key is configured; nothing is sent
            APIError: if the API answers with a non-2xx status
            NetworkError: if the API could not be reached
        """
        self._require_api_key()
        await self.init()
        url = f"{self.base_url}/{path}"
        query = self._encode_params(params)
        network = (params or body or {}).get('network')
        method = 'GET' if is_get else 'POST'
        started = time.monotonic()

        try:
            if is_get:
                request = self.session.get(url, params=query, headers=self.headers)
            else:
                request = self.session.post(url, params=query, json=body or {}, headers=self.headers)
            async with request as response:
                logger.log(RequestEvent(
                    method=method,
                    endpoint=path,
                    network=str(getattr(network, 'value', network)),
                    status=response.status,
                    duration_ms=int((time.monotonic() - started) * 1000),
                ), "api")
                if not 200 <= response.status < 300:
                    text = await response.text()
                    raise APIError(
                        self._error_message(description, response.status, response.reason, text),
                        status=response.status,
                    )
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise APIError(
                        f"Failed to fetch {description}: invalid JSON in response",
                        status=response.status,
                    ) from e
        except (ClientConnectionError, ClientPayloadError) as e:
            logger.log(ErrorEvent(
                error_type=type(e).__name__,
                message=str(e),
                source=self.__class__.__name__,
                context=f"{method} {url}",
            ), "api")
            raise NetworkError() from e
        except APIError as e:
            logger.log(ErrorEvent(
                error_type=type(e).__name__,
                message=e.message,
                source=self.__class__.__name__,
                context=f"{method} {url} -> {e.status}",
            ), "api")
            raise

    async def get_vault_info(self, vault_address: str, network: Union[str, Network] = APIConfig.DEFAULT_NETWORK) -> VaultInfo:
        """Get name, symbol, APY, roles, fees and assets of a vault."""
        address = quote(self._require_address(vault_address), safe='')
        data = await self._make_request(f'vault/{address}', 'vault info', {'network': Network(network)})
        return VaultInfo.from_dict(data)

    async def get_vault_apy(self, vault_address: str, network: Union[str, Network] = APIConfig.DEFAULT_NETWORK) -> VaultAPY:
        """Get the current APY of a vault."""
        address = quote(self._require_address(vault_address), safe='')
        data = await self._make_request(f'vault/{address}/apy', 'apy', {'network': Network(network)})
        return VaultAPY.from_dict(data)

    async def get_vault_history(
        self,
        vault_address: str,
        network: Union[str, Network] = APIConfig.DEFAULT_NETWORK,
        period: Union[str, HistoryPeriod] = HistoryPeriod.ALL,
        interval: Union[str, HistoryInterval] = HistoryInterval.DAILY,
        start_date: DateParam = None,
        end_date: DateParam = None,
    ) -> HistoryResult:
        """Get historical performance data of a vault.

        Args:
            vault_address: The vault contract address
            network: 'mainnet' or 'testnet'
            period: One of 'all', '7d', '30d', '90d', '1y'
            interval: Aggregation step, one of 'hourly', 'daily', 'weekly', 'monthly'
            start_date: Optional. Start of the range, ISO 8601
            end_date: Optional. End of the range, ISO 8601
        """
        address = quote(self._require_address(vault_address), safe='')
        params = {
            'network': Network(network),
            'period': HistoryPeriod(period),
            'interval': HistoryInterval(interval),
            'startDate': start_date or None,
            'endDate': end_date or None,
        }
        data = await self._make_request(f'vault/{address}/history', 'history', params)
        return HistoryResult.from_dict(data)

    async def get_vault_report(self, vault_address: str, network: Union[str, Network] = APIConfig.DEFAULT_NETWORK) -> Dict[str, Any]:
        """Get the vault performance report, returned as the API sends it."""
        address = quote(self._require_address(vault_address), safe='')
        return await self._make_request(f'vault/{address}/report', 'report', {'network': Network(network)})

    async def generate_vault_report(
        self,
        vault_address: str,
        network: Union[str, Network] = APIConfig.DEFAULT_NETWORK,
        **params: Any,
    ) -> Dict[str, Any]:
        """Ask the API to generate a report; extra keyword arguments go in the JSON body."""
        address = quote(self._require_address(vault_address), safe='')
        body = {'network': Network(network).value, **params}
        return await self._make_request(f'vault/{address}/report', 'report', is_get=False, body=body)

    async def get_vault_balance(
        self,
        vault_address: str,
        user_address: str,
        network: Union[str, Network] = APIConfig.DEFAULT_NETWORK,
    ) -> VaultBalance:
        """Get a user's balance in a vault."""
        address = quote(self._require_address(vault_address), safe='')
        user = self._require_address(user_address, "user address")
        data = await self._make_request(
            f'vault/{address}/balance', 'balance', {'from': user, 'network': Network(network)}
        )
        return VaultBalance.from_dict(data)

    async def get_factory_address(self, network: Union[str, Network] = APIConfig.DEFAULT_NETWORK) -> Dict[str, Any]:
        """Get the factory contract address for a network."""
        return await self._make_request('factory/address', 'factory address', {'network': Network(network)})
