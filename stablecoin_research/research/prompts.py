"""Prompt helpers for the chat-completion adapter."""
from __future__ import annotations

from typing import Optional

from stablecoin_research.catalog.reference import StablecoinRef


def get_system_prompt() -> str:
    return (
        "You are a research assistant specialised in stablecoins. "
        "Answer questions about stablecoin protocols, backing mechanisms, market dynamics, "
        "regulation and adoption. Use any market data provided as context, mention risks "
        "alongside opportunities, and keep answers informative but conversational. "
        "Do not give personalised investment advice."
    )


def get_explanation_prompt(symbol: str, ref: Optional[StablecoinRef] = None) -> str:
    """Four-section explanation request: Overview / Backing Mechanism / Use Cases / Risks."""
    subject = f"{ref.name} ({symbol})" if ref else symbol
    facts = ""
    if ref:
        facts = (
            f"\n\nKnown facts: category {ref.category}; backing {ref.backing_description}; "
            f"issuer {ref.issuer}; chains {', '.join(ref.chains)}; risk level {ref.risk_level.value}."
        )
    return (
        f"Explain the stablecoin {subject}. Structure the answer in exactly four sections "
        "with these headings:\n"
        "Overview\n"
        "Backing Mechanism\n"
        "Use Cases\n"
        "Risks\n"
        "Use short bullet points under each heading."
        f"{facts}"
    )


def expand_single_word(query: str) -> str:
    """Turn a bare one-word query like "USDC" into a full question."""
    words = query.split()
    if len(words) != 1:
        return query
    word = words[0].strip("?!.")
    return f"What is {word}? Give an overview in the context of stablecoins."
