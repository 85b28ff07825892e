import pytest

from stablecoin_research.research.classifier import classify, is_pure_news_query
from stablecoin_research.research.models import Intent


@pytest.mark.parametrize("text, intent", [
    ("Latest news on USDC", Intent.NEWS),
    ("Today’s news about USDT", Intent.NEWS),
    ("  Breaking news: stablecoin bill passes", Intent.NEWS),
    ("Show me the adoption tracker for USDT", Intent.ADOPTION_TRACKING),
    ("USDC adoption metrics", Intent.ADOPTION_TRACKING),
    ("Explain how DAI works", Intent.EXPLANATION),
    ("Can you explain stablecoins?", Intent.EXPLANATION),
    ("Compare USDT and USDC", Intent.COMPARISON),
    ("USDT vs USDC", Intent.COMPARISON),
    ("USDT vs. DAI", Intent.COMPARISON),
    ("What is the difference between DAI and USDS?", Intent.COMPARISON),
    ("What is USDC?", Intent.GENERIC),
    ("What's the latest news?", Intent.GENERIC),
    ("what do devs think of USDC", Intent.GENERIC),
    ("", Intent.GENERIC),
])
def test_classify(text, intent):
    assert classify(text) is intent


def test_first_matching_rule_wins():
    assert classify("Latest news: compare USDT vs USDC") is Intent.NEWS
    assert classify("Explain the adoption metrics of USDC") is Intent.ADOPTION_TRACKING
    assert classify("Explain the difference between USDT and USDC") is Intent.EXPLANATION


def test_explain_without_stablecoin_is_not_explanation():
    assert classify("Explain the weather") is Intent.GENERIC


def test_precomputed_symbols_skip_extraction():
    def fail(_text):
        raise AssertionError("extractor should not run")

    assert classify("explain it", symbols=["USDC"], extractor=fail) is Intent.EXPLANATION


def test_is_pure_news_query():
    assert is_pure_news_query("Headlines for stablecoins")
    assert not is_pure_news_query("Any headlines?")
