"""
Sign, broadcast and classify a single chain message.
"""

import logging
from typing import Optional

from ..core_client.connection import ConnectionManager
from ..errors import ChainConnectionError, TransactionError, ValidationError
from ..types import FeePolicy
from .messages import ChainMessageEnvelope

logger = logging.getLogger(__name__)


class TransactionExecutor:
    """
    Submits one envelope through the active signing connection.

    At most one broadcast per call and no local retry: the message types
    are not guaranteed idempotent, so retrying is left to the caller.
    """

    def __init__(self, connection: ConnectionManager, fee_policy: Optional[FeePolicy] = None):
        self.connection = connection
        self.fee_policy = fee_policy or FeePolicy()

    async def execute(
        self,
        envelope: ChainMessageEnvelope,
        signer_address: str,
        memo: Optional[str] = None,
        fee_policy: Optional[FeePolicy] = None,
    ) -> str:
        """
        Sign and broadcast ``envelope`` and wait for the sync acknowledgment.

        Args:
            envelope: Message built by TransactionBuilder
            signer_address: Must be the primary address of the connected identity
            memo: Free-text annotation, overrides the fee policy memo
            fee_policy: Fee handling, defaults to automatic estimation

        Returns:
            Transaction hash of the accepted transaction

        Raises:
            ChainConnectionError: not in the Signing state, or transport failure
            ValidationError: bad envelope or signer mismatch
            TransactionError: the chain returned a non-zero code
        """
        state = self.connection.require_signing()
        if not isinstance(envelope, ChainMessageEnvelope):
            raise ValidationError("execute() expects a ChainMessageEnvelope", field="envelope")
        if signer_address != state.address:
            raise ValidationError(
                f"Signer {signer_address} does not match connected account {state.address}",
                field="signer_address",
            )

        policy = fee_policy or self.fee_policy
        memo = policy.memo if memo is None else memo
        if not isinstance(memo, str):
            raise ValidationError("Memo must be a string", field="memo")

        logger.debug(
            f"Broadcasting {envelope.message_type} from {signer_address} "
            f"(fee={policy.fee_mode.value}, memo={memo!r})"
        )
        result = await self.connection.transport.sign_and_broadcast(
            state.signing_handle, signer_address, [envelope], policy, memo
        )

        if result.status_code != 0:
            logger.warning(
                f"{envelope.message_type} rejected with code {result.status_code}: {result.raw_log}"
            )
            raise TransactionError(result.status_code, result.raw_log, result.codespace)

        if not result.transaction_hash:
            raise ChainConnectionError("Broadcast acknowledged without a transaction hash")

        logger.info(f"{envelope.message_type} accepted: {result.transaction_hash}")
        return result.transaction_hash
