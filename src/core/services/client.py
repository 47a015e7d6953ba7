"""API client facade for the TON blockchain data API.

Each public coroutine maps one operation of the static catalog
(`core.domain.operations`) to a single dispatcher call. The facade owns its
`ClientConfiguration`; two instances never share state, so clients with
different credentials or servers can run side by side.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import ValidationError

from adapters.http_client import HttpDispatcher
from core.config import AppSettings
from core.domain import operations as ops
from core.domain.models import (
    ClientConfiguration,
    ClientOptions,
    Metadata,
    Operation,
    ParamValue,
    coerce_metadata,
)
from core.domain.servers import resolve_server_url
from core.errors import ConfigurationError
from core.interfaces.dispatcher import RequestDispatcher

logger = logging.getLogger(__name__)


class TonApiClient:
    """One coroutine per remote operation plus three configuration setters."""

    def __init__(self, dispatcher: RequestDispatcher | None = None) -> None:
        self._dispatcher: RequestDispatcher = dispatcher or HttpDispatcher()
        self._config = ClientConfiguration()

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings | None = None,
        *,
        dispatcher: RequestDispatcher | None = None,
    ) -> "TonApiClient":
        """Build a client whose timeout, credentials and server come from `AppSettings`."""

        settings = settings or AppSettings()
        client = cls(dispatcher or HttpDispatcher(user_agent=settings.user_agent))
        timeout_ms = None
        if settings.http_timeout_seconds is not None:
            timeout_ms = max(1, int(settings.http_timeout_seconds * 1000))
        client.configure(timeout=timeout_ms)
        if settings.api_key:
            client.auth(settings.api_key)
        if settings.server_url:
            client.server(settings.server_url, {"network": settings.network})
        else:
            client._config.server_variables = {"network": settings.network}
        return client

    @property
    def configuration(self) -> ClientConfiguration:
        """A copy of the current configuration (mutate only through the setters)."""

        return self._config.model_copy(deep=True)

    # -- configuration -----------------------------------------------------

    def configure(self, options: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        """Merge `timeout` (ms) / `parse_response` into the configuration.

        Unknown keys or invalid values raise `ConfigurationError`.
        """

        merged = self._config.options.model_dump()
        merged.update(options or {})
        merged.update(kwargs)
        try:
            new_options = ClientOptions.model_validate(merged)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid client options: {exc}") from exc
        self._config.options = new_options
        logger.debug("client options set: %s", new_options.model_dump())

    def auth(self, *values: str) -> "TonApiClient":
        """Store 1-2 credential values for the declared security scheme."""

        if not 1 <= len(values) <= 2:
            raise ConfigurationError(f"auth() takes 1 or 2 credential values, got {len(values)}.")
        self._config.credentials = tuple(str(v) for v in values)
        logger.debug("credentials set (%d value(s))", len(values))
        return self

    authenticate = auth

    def server(self, url: str, variables: Mapping[str, object] | None = None) -> None:
        """Set the base URL, resolving `{name}` placeholders.

        Placeholders take their value from `variables`, then from variables
        stored earlier (e.g. `network` from settings), then from the API's
        declared server defaults; anything left unresolved raises
        `ConfigurationError` here, before any request is sent.
        """

        servers = getattr(self._dispatcher, "servers", ops.SERVERS)
        merged = dict(self._config.server_variables)
        merged.update({k: str(v) for k, v in (variables or {}).items() if v is not None})
        resolved = resolve_server_url(url, merged, servers=servers)
        self._config.server_url = resolved
        self._config.server_variables = merged
        logger.debug("server set: %s", resolved)

    set_server = server

    # -- dispatch ----------------------------------------------------------

    @staticmethod
    def operations() -> tuple[Operation, ...]:
        return ops.OPERATIONS

    async def call(self, operation_id: str, metadata: Metadata | None = None, **params: ParamValue) -> Any:
        """Generic dispatch by operation id (e.g. ``"getAddressBalance"``)."""

        return await self._call(ops.get_operation(operation_id), metadata, params)

    async def _call(self, operation: Operation, metadata: Metadata | None, params: Mapping[str, ParamValue]) -> Any:
        return await self._dispatcher.fetch(operation, coerce_metadata(metadata, params), self._config)

    # -- accounts ----------------------------------------------------------

    async def get_address_information(self, metadata: Metadata | None = None, **params: ParamValue) -> Any:
        """Balance, code, data and last transaction id of an address."""
        return await self._call(ops.GET_ADDRESS_INFORMATION, metadata, params)

    async def get_extended_address_information(self, metadata: Metadata | None = None, **params: ParamValue) -> Any:
        return await self._call(ops.GET_EXTENDED_ADDRESS_INFORMATION, metadata, params)

    async def get_wallet_information(self, metadata: Metadata | None = None, **params: ParamValue) -> Any:
        return await self._call(ops.GET_WALLET_INFORMATION, metadata, params)

    async def get_transactions(self, metadata: Metadata | None = None, **params: ParamValue) -> Any:
        """Transaction history; paginate with `lt` + `hash`."""
        return await self._call(ops.GET_TRANSACTIONS, metadata, params)

    async def get_address_balance(self, metadata: Metadata | None = None, **params: ParamValue) -> Any:
        """Balance in nanotons."""
        return await self._call(ops.GET_ADDRESS_BALANCE, metadata, params)

    async def get_address_state(self, metadata: Metadata | None = None, **params: ParamValue) -> Any:
        return await self._call(ops.GET_ADDRESS_STATE, metadata, params)

    async def pack_address(self, metadata: Metadata | None = None, **params: ParamValue) -> Any:
        return await self._call(ops.PACK_ADDRESS, metadata, params)

    async def unpack_address(self, metadata: Metadata | None = None, **params: ParamValue) -> Any:
        return await self._call(ops.UNPACK_ADDRESS, metadata, params)

    async def get_token_data(self, metadata: Metadata | None = None, **params: ParamValue) -> Any:
        """NFT or Jetton data for a collection/item/master/wallet address."""
        return await self._call(ops.GET_TOKEN_DATA, metadata, params)

    async def detect_address(self, metadata: Metadata | None = None, **params: ParamValue) -> Any:
        return await self._call(ops.DETECT_ADDRESS, metadata, params)

    # -- blocks ------------------------------------------------------------

    async def get_masterchain_info(self, metadata: Metadata | None = None, **params: ParamValue) -> Any:
        return await self._call(ops.GET_MASTERCHAIN_INFO, metadata, params)

    async def get_masterchain_block_signatures(self, metadata: Metadata | None = None, **params: ParamValue) -> Any:
        return await self._call(ops.GET_MASTERCHAIN_BLOCK_SIGNATURES, metadata, params)

    async def get_shard_block_proof(self, metadata: Metadata | None = None, **params: ParamValue) -> Any:
        return await self._call(ops.GET_SHARD_BLOCK_PROOF, metadata, params)

    async def get_consensus_block(self, metadata: Metadata | None = None, **params: ParamValue) -> Any:
        return await self._call(ops.GET_CONSENSUS_BLOCK, metadata, params)

    async def lookup_block(self, metadata: Metadata | None = None, **params: ParamValue) -> Any:
        """Look up a block by `seqno`, `lt` or `unixtime`."""
        return await self._call(ops.LOOKUP_BLOCK, metadata, params)

    async def shards(self, metadata: Metadata | None = None, **params: ParamValue) -> Any:
        return await self._call(ops.SHARDS, metadata, params)

    async def get_block_transactions(self, metadata: Metadata | None = None, **params: ParamValue) -> Any:
        return await self._call(ops.GET_BLOCK_TRANSACTIONS, metadata, params)

    async def get_block_header(self, metadata: Metadata | None = None, **params: ParamValue) -> Any:
        return await self._call(ops.GET_BLOCK_HEADER, metadata, params)

    # -- transactions ------------------------------------------------------

    async def try_locate_tx(self, metadata: Metadata | None = None, **params: ParamValue) -> Any:
        return await self._call(ops.TRY_LOCATE_TX, metadata, params)

    async def try_locate_result_tx(self, metadata: Metadata | None = None, **params: ParamValue) -> Any:
        return await self._call(ops.TRY_LOCATE_RESULT_TX, metadata, params)

    async def try_locate_source_tx(self, metadata: Metadata | None = None, **params: ParamValue) -> Any:
        return await self._call(ops.TRY_LOCATE_SOURCE_TX, metadata, params)
