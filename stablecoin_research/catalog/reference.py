"""Static stablecoin reference catalog and alias table.

Everything in this module is built once at import time and never written
afterwards, so lookups need no locking.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass(frozen=True)
class StablecoinRef:
    """Canonical metadata for one stablecoin."""

    symbol: str
    name: str
    category: str
    backing_description: str
    issuer: str
    chains: Tuple[str, ...]
    risk_level: RiskLevel
    use_case: str = ""
    peg_currency: str = "USD"
    market_cap: Optional[float] = None
    volume_24h: Optional[float] = None
    rank: Optional[int] = None

    @property
    def is_usd_pegged(self) -> bool:
        return self.peg_currency == "USD"


def _ref(symbol, name, category, backing, issuer, chains, risk, use_case,
         market_cap, volume_24h, rank, peg="USD") -> StablecoinRef:
    return StablecoinRef(
        symbol=symbol,
        name=name,
        category=category,
        backing_description=backing,
        issuer=issuer,
        chains=tuple(chains),
        risk_level=RiskLevel(risk),
        use_case=use_case,
        peg_currency=peg,
        market_cap=float(market_cap),
        volume_24h=float(volume_24h),
        rank=rank,
    )


# Market figures are a January 2025 snapshot of CoinGecko's stablecoin listings
_REFERENCE_ROWS: List[StablecoinRef] = [
    _ref("USDT", "Tether", "Fiat-backed", "US Dollar reserves, commercial paper, treasury bills",
         "Tether Limited", ["Ethereum", "TRON", "BSC", "Avalanche", "Polygon", "Solana", "Arbitrum", "Optimism"],
         "Medium", "Trading, remittances, store of value, DeFi", 169143561731, 97844164126, 4),
    _ref("USDC", "USD Coin", "Fiat-backed", "US Dollar cash and short-term US Treasury securities",
         "Circle", ["Ethereum", "Polygon", "Avalanche", "Arbitrum", "Optimism", "Base", "Solana"],
         "Low", "DeFi, payments, trading, institutional treasury management", 72237585391, 8833410537, 7),
    _ref("USDE", "Ethena USDe", "Synthetic", "Ethereum derivatives and delta hedging",
         "Ethena Labs", ["Ethereum"], "High", "DeFi yield generation, trading", 13138098991, 231355900, 17),
    _ref("USDS", "USDS", "Fiat-backed", "US Dollar reserves",
         "Sky Protocol", ["Ethereum"], "Low", "DeFi, lending, borrowing", 7938163947, 12664939, 30),
    _ref("DAI", "Dai", "Crypto-backed", "Over-collateralized with crypto assets",
         "MakerDAO/Sky Protocol", ["Ethereum", "Polygon", "BSC", "Arbitrum", "Optimism", "Base"],
         "Medium", "DeFi, lending, decentralized finance", 4444770363, 91359304, 45),
    _ref("USD1", "USD1", "Fiat-backed", "US Dollar reserves and short-term US Treasury securities",
         "World Liberty Financial", ["Ethereum"], "Low", "Institutional treasury, DeFi, payments",
         2636494254, 315884449, 63),
    _ref("USDTB", "USDtb", "Fiat-backed", "US Treasury bills",
         "Ethena Labs", ["Ethereum"], "Low", "Institutional treasury management, DeFi", 1753933767, 445423, 84),
    _ref("USDF", "Falcon USD", "Fiat-backed", "US Dollar reserves",
         "Falcon Finance", ["Ethereum"], "Low", "Institutional payments, DeFi", 1683923034, 41702159, 90),
    _ref("PYUSD", "PayPal USD", "Fiat-backed", "US Dollar deposits and short-term US Treasury securities",
         "PayPal", ["Ethereum", "Solana"], "Low", "Payments, remittances, e-commerce", 1239037717, 69951597, 108),
    _ref("FDUSD", "First Digital USD", "Fiat-backed", "US Dollar cash and cash equivalents",
         "First Digital Trust", ["Ethereum", "BSC"], "Low", "Trading, payments, Asian market access",
         1113133652, 5209761290, 115),
    _ref("RLUSD", "Ripple USD", "Fiat-backed", "US Dollar deposits and short-term US Treasury securities",
         "Ripple", ["XRP Ledger", "Ethereum"], "Low", "Cross-border payments, remittances, institutional transfers",
         728756943, 89580555, 148),
    _ref("USDY", "Ondo US Dollar Yield", "Yield-bearing", "US Treasury securities",
         "Ondo Finance", ["Ethereum"], "Low", "Yield generation, institutional treasury management",
         682163373, 4489454, 153),
    _ref("TUSD", "TrueUSD", "Fiat-backed", "US Dollar reserves with real-time attestations",
         "Archblock", ["Ethereum", "TRON", "BSC", "Avalanche"], "Medium", "Trading, payments",
         493000000, 43330000, 290),
    _ref("USDD", "USDD", "Algorithmic", "Over-collateralized reserve managed by the TRON DAO",
         "TRON DAO Reserve", ["TRON", "Ethereum", "BSC"], "High", "TRON ecosystem DeFi, trading",
         484000000, 7200000, 300),
    _ref("GHO", "GHO", "Crypto-backed", "Over-collateralized with assets supplied to Aave",
         "Aave DAO", ["Ethereum", "Arbitrum"], "Medium", "DeFi borrowing, Aave ecosystem liquidity",
         352000000, 4100000, 330),
    _ref("BUSD", "Binance USD", "Fiat-backed", "US Dollar reserves held by Paxos (minting halted)",
         "Paxos", ["Ethereum", "BSC"], "High", "Legacy exchange trading pairs", 312000000, 2500000, 340),
    _ref("USDO", "OpenEden OpenDollar", "Fiat-backed", "US Treasury bills",
         "OpenEden", ["Ethereum"], "Low", "Institutional treasury management, yield", 276451435, 4667, 271),
    _ref("SATUSD", "Satoshi Stablecoin", "Fiat-backed", "US Dollar reserves",
         "Satoshi Protocol", ["Bitcoin", "Ethereum"], "Medium", "Bitcoin ecosystem, DeFi bridging",
         272531388, 84350, 274),
    _ref("EURS", "STASIS EURO", "Fiat-backed", "Euro deposits in European banks",
         "STASIS", ["Ethereum"], "Low", "European payments, EUR exposure in DeFi", 144095354, 15454, 414, peg="EUR"),
    _ref("DEUSD", "Elixir deUSD", "Synthetic", "Multi-asset collateral with delta-neutral strategies",
         "Elixir Protocol", ["Ethereum"], "High", "DeFi yield generation, synthetic assets", 133338968, 7710391, 433),
    _ref("CRVUSD", "Curve USD", "Crypto-backed", "Over-collateralized with crypto assets via soft liquidations",
         "Curve Finance", ["Ethereum"], "Medium", "DeFi borrowing, Curve liquidity", 120000000, 9000000, 470),
    _ref("USTC", "TerraClassicUSD", "Algorithmic", "Algorithmic mechanism (collapsed)",
         "Terra Classic", ["Terra Classic"], "High", "Legacy token, speculative trading", 76237299, 4112157, 635),
    _ref("USDP", "Pax Dollar", "Fiat-backed", "US Dollar deposits in FDIC-insured banks",
         "Paxos", ["Ethereum"], "Low", "Institutional payments, compliance-focused use cases", 67944750, 4512444, 686),
    _ref("FRXUSD", "Frax USD", "Hybrid", "Hybrid algorithmic and collateral-backed",
         "Frax Finance", ["Ethereum", "Arbitrum", "Polygon"], "Medium",
         "DeFi, yield generation, cross-chain applications", 60829463, 7133601, 731),
    _ref("MIM", "Magic Internet Money", "Crypto-backed", "Over-collateralized with various crypto assets",
         "Abracadabra Money", ["Ethereum", "Arbitrum", "Avalanche", "Fantom"], "High",
         "DeFi leverage, cross-chain liquidity", 55417808, 1199, 772),
    _ref("USDL", "Lift Dollar", "Fiat-backed", "US Dollar reserves",
         "Lift Protocol", ["Ethereum"], "Low", "Institutional payments, compliance", 50953851, 51690, 810),
    _ref("EURC", "Euro Coin", "Fiat-backed", "Euro cash and cash equivalents",
         "Circle", ["Ethereum"], "Low", "European DeFi, EUR payments", 49097322, 34190402, 825, peg="EUR"),
    _ref("SUSD", "sUSD", "Crypto-backed", "Over-collateralized with SNX staked in Synthetix",
         "Synthetix", ["Ethereum", "Optimism"], "High", "Synthetix trading, DeFi", 47000000, 109000, 900),
    _ref("LUSD", "Liquity USD", "Crypto-backed", "Over-collateralized with Ethereum",
         "Liquity Protocol", ["Ethereum"], "Medium", "Decentralized borrowing, ETH leverage", 38220375, 287444, 961),
    _ref("CUSD", "Celo Dollar", "Algorithmic", "Celo reserve of crypto assets",
         "Celo Foundation", ["Celo"], "Medium", "Mobile payments, Celo ecosystem", 35500000, 1800000, 980),
    _ref("MIMATIC", "MAI", "Crypto-backed", "Over-collateralized with various crypto assets",
         "QiDAO", ["Polygon", "Arbitrum", "Fantom", "Avalanche"], "Medium",
         "Multi-chain DeFi, collateralized borrowing", 27363470, 6690, 1150),
    _ref("PAXG", "PAX Gold", "Commodity-backed", "Physical gold stored in London vaults",
         "Paxos", ["Ethereum"], "Medium", "Gold investment, hedge against inflation, store of value",
         500000000, 25000000, 150, peg="XAU"),
    _ref("XAUT", "Tether Gold", "Commodity-backed", "Physical gold stored in Swiss vaults",
         "Tether", ["Ethereum", "TRON"], "Medium", "Gold exposure, store of value, inflation hedge",
         300000000, 15000000, 250, peg="XAU"),
    _ref("KAU", "Kinesis Gold", "Commodity-backed", "Physical gold (per gram)",
         "Kinesis", ["Ethereum"], "Medium", "Gold investment, fractional gold ownership",
         15000000, 750000, 750, peg="XAU"),
    _ref("KAG", "Kinesis Silver", "Commodity-backed", "Physical silver stored in vaults",
         "Kinesis", ["Ethereum"], "Medium", "Silver investment, precious metals exposure",
         10000000, 500000, 800, peg="XAG"),
    _ref("XSGD", "XSGD", "Fiat-backed", "Singapore Dollar deposits",
         "Xfers", ["Ethereum", "Zilliqa"], "Low", "Southeast Asian payments, SGD exposure",
         20000000, 1000000, 900, peg="SGD"),
    _ref("GYEN", "GYEN", "Fiat-backed", "Japanese Yen deposits",
         "GMO Trust", ["Ethereum"], "Low", "Japanese market access, JPY exposure", 15000000, 500000, 950, peg="JPY"),
    _ref("IDRT", "Rupiah Token", "Fiat-backed", "Indonesian Rupiah deposits",
         "Rupiah Token", ["Ethereum", "BSC"], "Medium", "Indonesian payments, IDR exposure",
         5000000, 100000, 1200, peg="IDR"),
    _ref("VCHF", "VNX Swiss Franc", "Fiat-backed", "Swiss Franc deposits",
         "VNX", ["Ethereum"], "Low", "Swiss market access, CHF exposure", 2000000, 25000, 1400, peg="CHF"),
]

STABLECOIN_REFERENCE: Mapping[str, StablecoinRef] = MappingProxyType(
    {ref.symbol: ref for ref in _REFERENCE_ROWS}
)


# Alternative names that resolve to a canonical symbol. Symbols and catalog
# names are added below; this table holds the extra spellings people use.
_EXTRA_ALIASES: Dict[str, str] = {
    "tether usd": "USDT",
    "circle usd": "USDC",
    "usd coin": "USDC",
    "makerdao": "DAI",
    "maker dao": "DAI",
    "maker": "DAI",
    "paypal usd": "PYUSD",
    "paypal": "PYUSD",
    "pax gold": "PAXG",
    "paxos gold": "PAXG",
    "tether gold": "XAUT",
    "ripple usd": "RLUSD",
    "ethena usde": "USDE",
    "ethena": "USDE",
    "frax usd": "FRXUSD",
    "frax": "FRXUSD",
    "magic internet money": "MIM",
    "terraclassic": "USTC",
    "terra classic usd": "USTC",
    "terra usd": "USTC",
    "first digital usd": "FDUSD",
    "first digital": "FDUSD",
    "binance usd": "BUSD",
    "trueusd": "TUSD",
    "true usd": "TUSD",
    "liquity usd": "LUSD",
    "pax dollar": "USDP",
    "paxos dollar": "USDP",
    "euro coin": "EURC",
    "stasis euro": "EURS",
    "kinesis gold": "KAU",
    "kinesis silver": "KAG",
    "curve usd": "CRVUSD",
    "aave gho": "GHO",
    "ondo usd yield": "USDY",
    "sky dollar": "USDS",
    "falcon usd": "USDF",
    "celo dollar": "CUSD",
    "tether": "USDT",
    "gusd": "GUSD",
    "gemini dollar": "GUSD",
}

# Catalog names too generic to be safe aliases on their own
_NAME_ALIAS_BLOCKLIST = {"usd1", "usds", "usdd", "usdtb", "gho", "xsgd", "gyen", "susd", "mai"}


def _build_alias_table() -> Dict[str, str]:
    table: Dict[str, str] = {}
    for ref in _REFERENCE_ROWS:
        table[ref.symbol.lower()] = ref.symbol
        name = ref.name.lower()
        if name not in _NAME_ALIAS_BLOCKLIST and name != ref.symbol.lower():
            table.setdefault(name, ref.symbol)
    table.update(_EXTRA_ALIASES)
    return table


ALIAS_TO_SYMBOL: Mapping[str, str] = MappingProxyType(_build_alias_table())

# Longest aliases first so "paypal usd" wins over any shorter overlapping alias
ALIASES_BY_LENGTH: Tuple[str, ...] = tuple(
    sorted(ALIAS_TO_SYMBOL, key=lambda alias: (-len(alias), alias))
)

POPULAR_SYMBOLS: Tuple[str, ...] = ("USDT", "USDC", "DAI", "USDE", "PYUSD", "FDUSD", "PAXG", "EURS")


def get_stablecoin(symbol: str) -> Optional[StablecoinRef]:
    """Look up a stablecoin by canonical symbol (case-insensitive)."""
    if not symbol:
        return None
    return STABLECOIN_REFERENCE.get(symbol.strip().upper())


def resolve(text: str) -> Optional[StablecoinRef]:
    """Resolve an exact symbol, catalog name or alias to its reference entry."""
    if not text:
        return None
    key = text.strip().lower()
    symbol = ALIAS_TO_SYMBOL.get(key)
    if symbol is None:
        return None
    return STABLECOIN_REFERENCE.get(symbol)


def get_popular_stablecoins() -> List[StablecoinRef]:
    return [STABLECOIN_REFERENCE[s] for s in POPULAR_SYMBOLS if s in STABLECOIN_REFERENCE]


def get_available_stablecoins() -> List[StablecoinRef]:
    return sorted(STABLECOIN_REFERENCE.values(), key=lambda ref: ref.symbol)


def get_stablecoins_by_risk_level(risk_level: RiskLevel) -> List[StablecoinRef]:
    return [ref for ref in _REFERENCE_ROWS if ref.risk_level == risk_level]
