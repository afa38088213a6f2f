# mychain_core/service/query_service.py

import logging
from typing import Optional

from ..constants import NATIVE_DENOM
from ..core_client.connection import ConnectionManager
from ..errors import ChainConnectionError, ValidationError
from ..types import is_valid_denom
from .address import is_valid_address

logger = logging.getLogger(__name__)


class ChainReader:
    """Read-only queries through the connection's read handle."""

    def __init__(self, connection: ConnectionManager, default_denom: str = NATIVE_DENOM):
        self.connection = connection
        self.default_denom = default_denom

    async def height(self) -> int:
        """
        Retrieve the latest block height.

        Raises:
            ChainConnectionError: client is disconnected or node unreachable
        """
        handle = self.connection.require_read_handle()
        height = await self.connection.transport.get_height(handle)
        if not isinstance(height, int) or isinstance(height, bool) or height < 0:
            raise ChainConnectionError(f"Node returned an invalid height: {height!r}")
        return height

    async def balance(self, address: str, denom: Optional[str] = None) -> str:
        """
        Retrieve the balance of ``address`` in ``denom``.

        Args:
            address (str): A MyChain account address
            denom (str): Token denom, defaults to the native token

        Returns:
            str: Decimal integer amount, "0" when the account holds none
        """
        if not is_valid_address(address):
            raise ValidationError(f"Invalid address: {address!r}", field="address")
        denom = denom or self.default_denom
        if not is_valid_denom(denom):
            raise ValidationError(f"Invalid denom: {denom!r}", field="denom")

        handle = self.connection.require_read_handle()
        amount = await self.connection.transport.get_balance(handle, address, denom)
        if amount is None:
            return "0"
        logger.debug(f"Balance of {address}: {amount.value}{amount.denom}")
        return amount.value
