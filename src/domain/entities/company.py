"""
Domain entities for company reference data and company detail views.
"""

from dataclasses import dataclass

from src.domain.entities.stock_price import Quote


@dataclass(frozen=True)
class CompanyInfo:
    name: str
    sector: str
    industry: str


@dataclass(frozen=True)
class SymbolMatch:
    symbol: str
    name: str
    type: str
    region: str
    sector: str
    industry: str


@dataclass(frozen=True)
class AnalystView:
    recommendation: str
    confidence: str
    price_target: float
    analyst_rating: int


@dataclass(frozen=True)
class CompanyProfile:
    quote: Quote
    analysis: AnalystView
