"""Static fallback tables used when live providers return nothing.

Adoption figures are a January 2025 snapshot. Comparison details cover the
fields the reference catalog does not carry (yield and regulatory status)
and coins that have no catalog entry of their own.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class FallbackAdoption:
    circulating_supply: float
    market_share_percent: float
    volume_24h: float
    growth_percentage: float
    growth_direction: str
    chain_percentages: Tuple[Tuple[str, float], ...]


@dataclass(frozen=True)
class ComparisonDetails:
    name: str
    backing: str
    issuer: str
    chains: Tuple[str, ...]
    yield_info: str
    regulation: str
    use_case: str
    risk_level: str
    market_cap: Optional[float] = None


def _adoption(supply, share, volume, growth, direction, *chains) -> FallbackAdoption:
    return FallbackAdoption(
        circulating_supply=float(supply),
        market_share_percent=float(share),
        volume_24h=float(volume),
        growth_percentage=float(growth),
        growth_direction=direction,
        chain_percentages=tuple(chains),
    )


ENHANCED_FALLBACK: Mapping[str, FallbackAdoption] = MappingProxyType({
    "USDT": _adoption(169e9, 68.2, 97.8e9, 2.1, "up",
                      ("Ethereum", 48.2), ("TRON", 41.6), ("BSC", 6.8), ("Polygon", 2.1), ("Avalanche", 1.3)),
    "USDC": _adoption(72.2e9, 29.1, 8.8e9, 1.8, "up",
                      ("Ethereum", 65.2), ("Solana", 15.8), ("Polygon", 8.1), ("Arbitrum", 4.9),
                      ("Base", 3.6), ("Avalanche", 2.4)),
    "DAI": _adoption(4.4e9, 1.8, 91e6, 0.5, "down",
                     ("Ethereum", 85.4), ("Polygon", 6.8), ("BSC", 3.2), ("Arbitrum", 2.1),
                     ("Optimism", 1.2), ("Base", 0.8), ("Avalanche", 0.5)),
    "USDE": _adoption(13.1e9, 5.3, 231e6, 15.2, "up", ("Ethereum", 100.0)),
    "USDS": _adoption(7.9e9, 3.2, 12.6e6, 8.3, "up", ("Ethereum", 100.0)),
    "USD1": _adoption(2.6e9, 1.1, 315e6, 12.4, "up", ("Ethereum", 100.0)),
    "USDTB": _adoption(1.75e9, 0.7, 445e3, 25.8, "up", ("Ethereum", 100.0)),
    "PYUSD": _adoption(1.24e9, 0.5, 69.9e6, 3.2, "up", ("Ethereum", 75.0), ("Solana", 25.0)),
    "FDUSD": _adoption(1.11e9, 0.4, 5.209e9, 1.8, "up", ("Ethereum", 60.0), ("BSC", 40.0)),
    "RLUSD": _adoption(729e6, 0.3, 89.5e6, 18.7, "up", ("XRP Ledger", 70.0), ("Ethereum", 30.0)),
    "USDY": _adoption(682e6, 0.3, 4.489e6, 22.1, "up", ("Ethereum", 100.0)),
    "USDD": _adoption(484e6, 0.2, 7.2e6, 5.2, "down", ("TRON", 85.0), ("Ethereum", 10.0), ("BSC", 5.0)),
    "SUSD": _adoption(47e6, 0.019, 109e3, 2.8, "down", ("Ethereum", 75.0), ("Optimism", 25.0)),
    "CUSD": _adoption(35.5e6, 0.014, 1.8e6, 1.2, "up", ("Celo", 100.0)),
    "USTC": _adoption(76.2e6, 0.031, 4.112e6, 45.2, "down", ("Terra Classic", 100.0)),
    "EURS": _adoption(144e6, 0.058, 15.4e3, 2.3, "up", ("Ethereum", 100.0)),
    "EURC": _adoption(49e6, 0.02, 34.19e6, 8.7, "up", ("Ethereum", 100.0)),
    "PAXG": _adoption(189e3, 0.076, 25e6, 3.2, "up", ("Ethereum", 100.0)),
    "XAUT": _adoption(113e3, 0.046, 15e6, 2.8, "up", ("Ethereum", 70.0), ("TRON", 30.0)),
    "KAU": _adoption(177e3, 0.007, 750e3, 1.5, "up", ("Ethereum", 100.0)),
    "KAG": _adoption(333e3, 0.004, 500e3, 2.1, "up", ("Ethereum", 100.0)),
})


# Only fields that differ from "None" / "Varies" need listing for catalog coins
_YIELD_AND_REGULATION: Mapping[str, Tuple[str, str]] = MappingProxyType({
    "USDT": ("None", "Limited oversight, quarterly attestations"),
    "USDC": ("None", "US state money transmitter licences, monthly attestations"),
    "DAI": ("Dai Savings Rate (variable)", "Decentralized governance"),
    "USDS": ("Sky Savings Rate (variable)", "Decentralized governance"),
    "USDE": ("sUSDe staking yield (variable)", "Unregulated synthetic dollar"),
    "PYUSD": ("None", "NYDFS regulated via Paxos"),
    "USDP": ("None", "NYDFS regulated via Paxos"),
    "PAXG": ("None", "NYDFS regulated via Paxos"),
    "FDUSD": ("None", "Hong Kong trust company oversight"),
    "RLUSD": ("None", "NYDFS limited purpose trust charter"),
    "USDY": ("Tokenized Treasury yield", "Reg S offering, non-US holders"),
    "EURC": ("None", "MiCA compliant e-money token"),
    "EURS": ("None", "EU e-money framework"),
    "USTC": ("None", "Unregulated, collapsed in 2022"),
})

COMPARISON_FALLBACK: Mapping[str, ComparisonDetails] = MappingProxyType({
    "GUSD": ComparisonDetails(
        name="Gemini Dollar",
        backing="US Dollar deposits and money market funds",
        issuer="Gemini Trust",
        chains=("Ethereum",),
        yield_info="None",
        regulation="NYDFS regulated",
        use_case="Exchange settlement, payments",
        risk_level="Low",
        market_cap=70e6,
    ),
})


def yield_and_regulation(symbol: str) -> Tuple[str, str]:
    return _YIELD_AND_REGULATION.get(symbol.upper(), ("None", "Varies by jurisdiction"))
