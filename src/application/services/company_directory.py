"""
Static company reference table.

Provides display names, sectors and industries for well-known symbols and the
substring search behind SearchSymbolsUseCase. Symbols missing from the table
get a generic "<SYMBOL> Stock" entry.
"""

from src.domain.entities.company import CompanyInfo, SymbolMatch

COMPANY_DIRECTORY: dict[str, CompanyInfo] = {
    "AAPL": CompanyInfo("Apple Inc.", "Technology", "Consumer Electronics"),
    "GOOGL": CompanyInfo("Alphabet Inc.", "Technology", "Internet Content & Information"),
    "MSFT": CompanyInfo("Microsoft Corporation", "Technology", "Software"),
    "TSLA": CompanyInfo("Tesla Inc.", "Consumer Cyclical", "Auto Manufacturers"),
    "AMZN": CompanyInfo("Amazon.com Inc.", "Consumer Cyclical", "Internet Retail"),
    "META": CompanyInfo("Meta Platforms Inc.", "Technology", "Internet Content & Information"),
    "NVDA": CompanyInfo("NVIDIA Corporation", "Technology", "Semiconductors"),
    "NFLX": CompanyInfo("Netflix Inc.", "Communication Services", "Entertainment"),
    "AMD": CompanyInfo("Advanced Micro Devices Inc.", "Technology", "Semiconductors"),
    "INTC": CompanyInfo("Intel Corporation", "Technology", "Semiconductors"),
}


def lookup_company(symbol: str) -> CompanyInfo:
    info = COMPANY_DIRECTORY.get(symbol.upper())
    if info is not None:
        return info
    return CompanyInfo(name=f"{symbol.upper()} Stock", sector="Unknown", industry="Unknown")


def search_companies(query: str) -> list[SymbolMatch]:
    """Case-insensitive substring match on symbol or company name, in table order."""
    needle = query.strip().lower()
    return [
        SymbolMatch(
            symbol=symbol,
            name=info.name,
            type="Equity",
            region="United States",
            sector=info.sector,
            industry=info.industry,
        )
        for symbol, info in COMPANY_DIRECTORY.items()
        if needle in symbol.lower() or needle in info.name.lower()
    ]
