from ..constants import ADDRESS_LENGTH, ADDRESS_PREFIX, ADDRESS_SEPARATOR

ADDRESS_HRP = ADDRESS_PREFIX + ADDRESS_SEPARATOR


def is_valid_address(address) -> bool:
    """
    Validates that a value looks like a MyChain account address.

    True iff ``address`` is a string that starts with ``mychain1`` and has
    exactly the bech32 length of a 20-byte account. Never raises.

    Args:
        address: The value to check

    Returns:
        Boolean indicating if the address is well formed
    """
    if not isinstance(address, str):
        return False
    return address.startswith(ADDRESS_HRP) and len(address) == ADDRESS_LENGTH


class AddressValidator:
    """Stateless predicate over address strings."""

    prefix = ADDRESS_HRP
    length = ADDRESS_LENGTH

    @staticmethod
    def is_valid(address) -> bool:
        return is_valid_address(address)
