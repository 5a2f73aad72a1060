"""Product vs. article classification.

A remote model is asked first when an API key is available. Its answer is
used only when it is exactly one of the two labels; anything else falls
back to the deterministic heuristic below.
"""

import logging
import re
from typing import Callable, Optional

from .config import Config
from .credentials import ApiKeyResolver
from .llm import get_llm_provider
from .llm.base import LLMProvider
from .models import CATEGORIES, Category, LinkMetadata
from .utils import extract_host

logger = logging.getLogger(__name__)

PROMPT_EXCERPT_LENGTH = 400

SYSTEM_PROMPT = (
    "Classify the provided webpage as product or article. "
    "Respond with just the lowercase label."
)

PRODUCT_HOST_TOKENS = (
    "amazon",
    "etsy",
    "ebay",
    "aliexpress",
    "ikea",
    "nike",
    "walmart",
    "bestbuy",
    "target",
    "shopify",
    "store",
    "shop",
)

PRODUCT_KEYWORDS = (
    # purchase intent
    "buy", "buying", "purchase", "order now", "shop", "shopping", "store",
    "cart", "add to cart", "checkout", "price", "pricing", "sale", "discount",
    "deal", "deals", "coupon", "free shipping", "in stock", "product",
    "products", "wishlist",
    # buying guides
    "buying guide", "gift guide", "gift ideas", "best deals",
    # product categories
    "headphones", "earbuds", "laptop", "sneakers", "shoes", "jacket",
    "backpack", "mattress", "camera", "keyboard",
)

_KEYWORD_PATTERN = re.compile(
    r"\b(?:" + "|".join(re.escape(k) for k in PRODUCT_KEYWORDS) + r")\b"
)
_CURRENCY_PATTERN = re.compile(r"[$€£¥₹]")
_RANKING_PATTERN = re.compile(r"\b(?:\d+\s+(?:best|top)|(?:best|top)\s+\d+)\b")


def compose_prompt(metadata: LinkMetadata) -> str:
    """Build the user prompt for the remote classification call."""
    lines = [f"URL: {metadata.url}"]
    if metadata.title:
        lines.append(f"Title: {metadata.title}")
    if metadata.description:
        lines.append(f"Description: {metadata.description}")
    if metadata.excerpt:
        lines.append(f"Excerpt: {metadata.excerpt[:PROMPT_EXCERPT_LENGTH]}")
    summary = "\n".join(lines)
    return f'{summary}\n\nRespond with either "product" or "article".'


def heuristic_classification(metadata: LinkMetadata, fallback: str = "article") -> Category:
    """Classify without any network access."""
    host = extract_host(metadata.url)
    if host and any(token in host for token in PRODUCT_HOST_TOKENS):
        return "product"

    text = f"{metadata.title} {metadata.description}".lower()
    if (
        _KEYWORD_PATTERN.search(text)
        or _CURRENCY_PATTERN.search(text)
        or _RANKING_PATTERN.search(text)
    ):
        return "product"

    return "product" if fallback == "product" else "article"


class LinkClassifier:
    """Two-tier classifier: optional remote model, then heuristics."""

    def __init__(
        self,
        config: Config,
        key_resolver: Optional[ApiKeyResolver] = None,
        provider_factory: Callable[[Config, str], LLMProvider] = get_llm_provider,
    ):
        self._config = config
        self._key_resolver = key_resolver or ApiKeyResolver(config)
        self._provider_factory = provider_factory

    async def classify(self, metadata: LinkMetadata) -> Category:
        api_key = self._key_resolver.resolve()
        if api_key:
            label = await self._classify_remote(metadata, api_key)
            if label:
                return label
        return self.heuristic(metadata)

    def heuristic(self, metadata: LinkMetadata) -> Category:
        return heuristic_classification(metadata, self._config.classification_fallback)

    async def _classify_remote(self, metadata: LinkMetadata, api_key: str) -> Optional[Category]:
        try:
            provider = self._provider_factory(self._config, api_key)
            reply = await provider.generate(SYSTEM_PROMPT, compose_prompt(metadata))
        except Exception:
            logger.exception("Remote classification failed for %s", metadata.url)
            return None

        label = (reply or "").strip().lower()
        if label in CATEGORIES:
            return label
        logger.info("Ignoring unexpected classification %r for %s", reply, metadata.url)
        return None
