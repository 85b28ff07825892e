"""Pre-written stablecoin explanations served without calling the LLM."""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class HistoricalDepeg:
    date: str
    severity: str
    duration: str
    cause: str
    low_price: float


@dataclass(frozen=True)
class CachedExplanation:
    symbol: str
    name: str
    text: str
    sources: Tuple[str, ...] = ()


TRANSPARENCY_REPORTS: Mapping[str, str] = MappingProxyType({
    "USDC": "https://www.circle.com/transparency",
    "USDT": "https://tether.to/transparency/",
    "USDP": "https://www.paxos.com/usdp-transparency",
    "TUSD": "https://tusd.io/transparency",
    "PYUSD": "https://www.paypal.com/us/digital-wallet/manage-money/crypto/pyusd",
    "GUSD": "https://www.gemini.com/dollar",
    "LUSD": "https://www.liquity.org/",
    "FRXUSD": "https://frax.com/transparency",
    "PAXG": "https://www.paxos.com/paxg-transparency",
    "USDE": "https://app.ethena.fi/transparency",
    "DAI": "https://makerburn.com/#/transparency",
})

HISTORICAL_DEPEGS: Mapping[str, Tuple[HistoricalDepeg, ...]] = MappingProxyType({
    "USDT": (
        HistoricalDepeg("2022-05-12", "Minor", "4 hours",
                        "Market volatility during the Terra collapse", 0.9485),
    ),
    "USDC": (
        HistoricalDepeg("2023-03-11", "Moderate", "48 hours",
                        "Reserve exposure to Silicon Valley Bank", 0.8774),
    ),
    "DAI": (
        HistoricalDepeg("2020-03-12", "Major", "72 hours",
                        "Black Thursday ETH crash and liquidation cascade", 1.11),
        HistoricalDepeg("2023-03-11", "Moderate", "48 hours",
                        "USDC collateral exposure to Silicon Valley Bank", 0.8973),
    ),
    "USTC": (
        HistoricalDepeg("2022-05-09", "Critical", "Permanent",
                        "Algorithmic peg collapse of TerraUSD", 0.35),
    ),
    "FRXUSD": (
        HistoricalDepeg("2023-03-11", "Minor", "24 hours",
                        "USDC collateral exposure to Silicon Valley Bank", 0.885),
    ),
})


_EXPLANATIONS = (
    CachedExplanation(
        symbol="USDT",
        name="Tether",
        text="""Tether (USDT) is the largest stablecoin by market capitalization and trading volume, designed to hold a 1:1 peg with the US Dollar.

Overview
- Launched in 2014 and issued by Tether Limited
- Available on Ethereum, TRON, BSC, Solana and several other networks
- The default quote asset on most centralized exchanges

Backing Mechanism
- Reserves of cash, US Treasury bills, money market funds and other assets
- Quarterly attestations of reserves are published by the issuer

Use Cases
- Trading pairs and exchange settlement
- Remittances and cross-border payments, especially on TRON
- Liquidity in DeFi protocols

Risks
- Historical transparency concerns around reserve composition
- Regulatory uncertainty across jurisdictions
- Centralized issuer able to freeze addresses

Transparency Report: https://tether.to/transparency/""",
        sources=("Tether Transparency", "CoinGecko", "DefiLlama"),
    ),
    CachedExplanation(
        symbol="USDC",
        name="USD Coin",
        text="""USD Coin (USDC) is a regulated, dollar-backed stablecoin issued by Circle and known for frequent reserve disclosures.

Overview
- Issued by Circle and redeemable 1:1 for US Dollars
- Native on Ethereum, Solana, Base, Arbitrum, Polygon and other chains

Backing Mechanism
- Fully backed by cash and short-dated US Treasury securities
- Reserves held in the Circle Reserve Fund with monthly attestations

Use Cases
- DeFi lending, borrowing and liquidity provision
- Institutional treasury management and settlement
- Payments and cross-border transfers

Risks
- Banking counterparty exposure, as seen during the March 2023 SVB event
- Issuer can blacklist addresses under regulatory orders

Transparency Report: https://www.circle.com/transparency""",
        sources=("Circle Transparency", "CoinGecko", "DefiLlama"),
    ),
    CachedExplanation(
        symbol="DAI",
        name="Dai",
        text="""Dai (DAI) is a decentralized stablecoin created by MakerDAO, now part of the Sky Protocol, and backed by over-collateralized crypto assets.

Overview
- No single company controls issuance
- Governed by MKR holders through on-chain voting

Backing Mechanism
- Users lock collateral such as ETH, WBTC or USDC in vaults to mint DAI
- Positions below the collateralization ratio are liquidated automatically
- The Dai Savings Rate and stability fees steer supply and demand

Use Cases
- DeFi lending and borrowing
- Yield strategies through the Dai Savings Rate
- Censorship-resistant dollar exposure

Risks
- Collateral volatility and liquidation cascades
- Dependence on centralized collateral such as USDC
- Governance and smart contract risk

Transparency Report: https://makerburn.com/#/transparency""",
        sources=("MakerDAO", "DaiStats", "CoinGecko"),
    ),
    CachedExplanation(
        symbol="USDE",
        name="Ethena USDe",
        text="""Ethena USDe (USDe) is a synthetic dollar that holds its peg through delta-neutral positions in ETH and short perpetual futures.

Overview
- Issued by Ethena Labs on Ethereum
- Staked USDe (sUSDe) earns protocol yield

Backing Mechanism
- Collateral of ETH, staked ETH and BTC
- Matching short perpetual futures positions hedge the price exposure
- Yield comes from staking rewards and funding rates

Use Cases
- Yield-bearing dollar exposure in DeFi
- Collateral for leveraged trading strategies

Risks
- Negative funding rates can erode the backing
- Counterparty risk with derivatives exchanges and custodians
- Relatively new mechanism with limited stress history

Transparency Report: https://app.ethena.fi/transparency""",
        sources=("Ethena Protocol", "DefiLlama", "CoinGecko"),
    ),
    CachedExplanation(
        symbol="PYUSD",
        name="PayPal USD",
        text="""PayPal USD (PYUSD) is a dollar stablecoin issued by Paxos for PayPal and integrated into PayPal and Venmo wallets.

Overview
- Launched in August 2023 on Ethereum, later expanded to Solana
- Redeemable 1:1 for US Dollars through PayPal

Backing Mechanism
- Backed by US Dollar deposits, short-term Treasuries and cash equivalents
- Issued by Paxos Trust Company under NYDFS supervision
- Monthly reserve reports

Use Cases
- Peer-to-peer payments and checkout within PayPal
- Remittances and e-commerce settlement

Risks
- Concentrated distribution through a single payments company
- Smaller on-chain liquidity than USDT or USDC

Transparency Report: https://www.paypal.com/us/digital-wallet/manage-money/crypto/pyusd""",
        sources=("Paxos Attestations", "PayPal", "CoinGecko"),
    ),
    CachedExplanation(
        symbol="PAXG",
        name="PAX Gold",
        text="""PAX Gold (PAXG) is a gold-backed token where each unit represents one fine troy ounce of a London Good Delivery gold bar.

Overview
- Issued by Paxos Trust Company on Ethereum
- Tracks the spot price of gold rather than the US Dollar

Backing Mechanism
- Allocated physical gold held in LBMA-approved London vaults
- Holders can look up the serial number of the bar backing their tokens

Use Cases
- Gold exposure without physical custody
- Inflation hedge and portfolio diversification
- Collateral in DeFi protocols

Risks
- Gold price volatility
- Custodial and issuer risk

Transparency Report: https://www.paxos.com/paxg-transparency""",
        sources=("Paxos", "LBMA", "CoinGecko"),
    ),
)

EXPLANATION_CACHE: Mapping[str, CachedExplanation] = MappingProxyType(
    {entry.symbol: entry for entry in _EXPLANATIONS}
)


def get_cached_explanation(symbol: str) -> Optional[CachedExplanation]:
    return EXPLANATION_CACHE.get(symbol.upper()) if symbol else None


def get_transparency_report(symbol: str) -> Optional[str]:
    return TRANSPARENCY_REPORTS.get(symbol.upper()) if symbol else None
