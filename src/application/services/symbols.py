"""
Symbol validation shared by the market data use cases.
"""

from src.domain.errors import InvalidInput

MAX_SYMBOL_LENGTH = 10


def normalize_symbol(symbol: object) -> str:
    """Strip and uppercase *symbol*.

    Raises:
        InvalidInput: if *symbol* is not a string, is blank, or is longer
                      than 10 characters.
    """
    if not isinstance(symbol, str) or not symbol.strip():
        raise InvalidInput("symbol must be a non-empty string")
    normalized = symbol.strip().upper()
    if len(normalized) > MAX_SYMBOL_LENGTH:
        raise InvalidInput(
            f"symbol {normalized!r} exceeds {MAX_SYMBOL_LENGTH} characters"
        )
    return normalized
