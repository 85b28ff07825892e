from stablecoin_research.research.formatting import chain_shares, format_market_data, format_usd, strip_urls
from stablecoin_research.research.models import PricePoint
from stablecoin_research.research.prompts import expand_single_word, get_explanation_prompt
from stablecoin_research.catalog.reference import get_stablecoin


def test_strip_urls_moves_links_out_of_text():
    text = (
        "Overview\n"
        "- Reserves audited monthly, see https://a.test/report.\n"
        "\n"
        "Transparency Report: https://b.test/r"
    )
    cleaned, urls = strip_urls(text)
    assert "http" not in cleaned
    assert "Transparency Report" not in cleaned
    assert cleaned.startswith("Overview\n- Reserves audited monthly")
    assert urls == ["https://a.test/report", "https://b.test/r"]


def test_strip_urls_deduplicates():
    _, urls = strip_urls("https://a.test/x\nagain https://a.test/x")
    assert urls == ["https://a.test/x"]


def test_format_usd():
    assert format_usd(1.24e9) == "$1.24B"
    assert format_usd(69.9e6) == "$69.90M"
    assert format_usd(15_400) == "$15.40K"
    assert format_usd(0.9985) == "$0.9985"
    assert format_usd(12.5) == "$12.50"
    assert format_usd(-2e6) == "-$2.00M"
    assert format_usd(None) == "n/a"


def test_chain_shares():
    shares = chain_shares(1000.0, [("Ethereum", 60.0), ("Solana", 40.0)])
    assert [(s.chain, s.amount_usd) for s in shares] == [("Ethereum", 600.0), ("Solana", 400.0)]


def test_format_market_data():
    points = [
        PricePoint(date="2025-01-01", price=0.999, volume=None),
        PricePoint(date="2025-01-02", price=1.001, volume=2.5e9),
    ]
    summary = format_market_data("USDC", points)
    assert summary.splitlines()[0] == "USDC market data for the last 2 days (CoinGecko):"
    assert "Latest price on 2025-01-02: $1.0010" in summary
    assert "Latest 24h volume: $2.50B" in summary
    assert format_market_data("USDC", []) == ""


def test_expand_single_word():
    assert expand_single_word("USDC?").startswith("What is USDC?")
    assert expand_single_word("What is USDC") == "What is USDC"


def test_explanation_prompt_has_sections_and_facts():
    prompt = get_explanation_prompt("TUSD", get_stablecoin("TUSD"))
    assert "TrueUSD (TUSD)" in prompt
    for heading in ("Overview", "Backing Mechanism", "Use Cases", "Risks"):
        assert heading in prompt
    assert "issuer Archblock" in prompt
