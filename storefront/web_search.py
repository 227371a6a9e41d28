import asyncio
import re
from typing import List, Optional
from urllib.parse import quote

from loguru import logger

from storefront.clients import SerperClient
from storefront.extraction.contacts import ADDRESS_RE, PHONE_RE
from storefront.models import WebRecord, WebSearchResult
from storefront.rules import contains_any, first_match

QUERY_TEMPLATE = '"{name}" business information contact details location'

# Markers written into generic fallback results so they can be recognised later
NOT_CONFIGURED_MARKER = "Web search APIs are not configured"
NOT_AVAILABLE_MARKER = "real-time web search is not available"

DIRECTORY_HOSTS = ("facebook", "yelp", "google", "yellowpages")
QUERY_FILLER = {"business", "information", "contact", "details", "location", "the", "and"}

BUSINESS_TYPE_RULES = [
    (contains_any("pizza", "italian", "calzone", "pasta"), "Pizza Restaurant"),
    (contains_any("coffee", "cafe", "espresso", "latte"), "Coffee Shop"),
    (contains_any("restaurant", "dining", "food", "cuisine", "bistro", "eatery"), "Restaurant"),
    (contains_any("shop", "store", "retail", "boutique"), "Retail Store"),
    (contains_any("service", "repair", "maintenance", "cleaning"), "Service Business"),
    (contains_any("hotel", "motel", "accommodation", "inn"), "Accommodation"),
    (contains_any("gym", "fitness", "workout", "training"), "Fitness Center"),
    (contains_any("bar", "pub", "brewery", "tavern"), "Bar & Grill"),
]
DEFAULT_BUSINESS_TYPE = "Business"


def calculate_relevance(text: str, query: str) -> float:
    """Score how well a search hit matches the query, in [0, 1]."""
    if not text or not query:
        return 0.0

    text_lower = text.lower()
    score = 0.0

    quoted = re.search(r'"([^"]+)"', query)
    if quoted and quoted.group(1).lower() in text_lower:
        score += 0.5

    keywords = [w for w in query.lower().split(" ") if len(w) > 2 and w not in ("and", "the")]
    for keyword in keywords:
        if keyword in text_lower:
            score += 0.1

    if "official" in text_lower or "homepage" in text_lower:
        score += 0.2

    if ".com" in text_lower and "facebook" not in text_lower and "twitter" not in text_lower:
        score += 0.1

    return min(score, 1.0)


def extract_business_name_from_query(query: str) -> str:
    quoted = re.search(r'"([^"]+)"', query)
    if quoted:
        return quoted.group(1)

    words = [w for w in query.split(" ") if len(w) > 2 and w.lower() not in QUERY_FILLER]
    return " ".join(words[:3]) or query.split(" ")[0] or query


def generic_fallback_results(query: str) -> List[WebSearchResult]:
    """Placeholder results used when no real web search is available."""
    name = extract_business_name_from_query(query)
    slug = re.sub(r"[^a-z0-9]", "-", name.lower())
    return [
        WebSearchResult(
            title=f"{name} - Business Search",
            url=f"https://www.google.com/search?q={quote(name)}",
            description=(
                f"Search results for {name}. {NOT_CONFIGURED_MARKER}, so we cannot provide detailed "
                "business information at this time. Consider adding business details manually."
            ),
            relevance=0.5,
        ),
        WebSearchResult(
            title=f"{name} - Business Directory Listings",
            url=f"https://www.yelp.com/biz/{slug}",
            description=(
                f"Potential business directory listings for {name}. This is a generic search result as "
                f"{NOT_AVAILABLE_MARKER}. Business information may need manual verification."
            ),
            relevance=0.4,
        ),
    ]


async def search_with_serper(query: str, log=logger) -> List[WebSearchResult]:
    """
    Organic results for a query, or an empty list when Serper is unavailable.
    """
    try:
        data = await SerperClient().search(query, log=log)
    except ValueError as e:
        log.debug(f"Web search not configured: {e}")
        return []
    except asyncio.TimeoutError:
        log.debug(f"⏱️ TIMEOUT Serper search for '{query}'")
        return []
    except Exception as e:
        log.debug(f"⚠️ Serper search failed for '{query}': {e}")
        return []

    return [
        WebSearchResult(
            title=hit.get("title") or "",
            url=hit.get("link") or "",
            description=hit.get("snippet") or "",
            relevance=calculate_relevance(f"{hit.get('title') or ''} {hit.get('snippet') or ''}", query),
        )
        for hit in data.get("organic") or []
    ]


async def perform_web_search(query: str, log=logger) -> List[WebSearchResult]:
    results = await search_with_serper(query, log=log)
    if results:
        log.debug(f"✅ Serper returned {len(results)} results")
        return results

    log.debug("🔄 Using generic fallback web search, no real web data available")
    return generic_fallback_results(query)


def _is_generic_fallback(results: List[WebSearchResult]) -> bool:
    return any(
        NOT_CONFIGURED_MARKER in r.description or NOT_AVAILABLE_MARKER in r.description
        for r in results
    )


def _looks_official(result: WebSearchResult, business_name: str) -> bool:
    clean_name = re.sub(r"[^a-z0-9]", "", business_name.lower())
    url = result.url
    return (
        (bool(clean_name) and clean_name in url)
        or "official" in result.title.lower()
        or (".com" in url and not any(host in url for host in DIRECTORY_HOSTS))
    )


def extract_business_data(business_name: str, results: List[WebSearchResult], log=logger) -> WebRecord:
    """
    Mine search results for a business's website, phone, address, type and description.

    Args:
        business_name (str): Name that was searched for.
        results (List[WebSearchResult]): Search hits.

    Returns:
        WebRecord: Extracted data. Generic fallback results give a placeholder
                   record flagged with `is_generic_fallback`.
    """
    if _is_generic_fallback(results):
        log.debug("⚠️ Using generic fallback data, no real web search available")
        return WebRecord(
            name=business_name,
            business_type=DEFAULT_BUSINESS_TYPE,
            description=(
                f"Limited information available for {business_name}. Web search services are not "
                "configured, so detailed business data cannot be retrieved at this time."
            ),
            is_generic_fallback=True,
        )

    record = WebRecord(name=business_name)
    for result in sorted(results, key=lambda r: r.relevance, reverse=True):
        text = f"{result.title} {result.description}"

        if not record.website and _looks_official(result, business_name):
            record.website = result.url

        if not record.phone:
            phone = PHONE_RE.search(text)
            if phone:
                record.phone = phone.group(0)

        if not record.address:
            address = ADDRESS_RE.search(text)
            if address:
                record.address = address.group(0)

        if not record.business_type:
            record.business_type = first_match(BUSINESS_TYPE_RULES, text.lower())

        # Keep the most detailed description
        if len(result.description) > 50 and len(result.description) > len(record.description or ""):
            record.description = result.description

    if not record.business_type:
        record.business_type = DEFAULT_BUSINESS_TYPE

    log.debug(
        f"📊 Web data for '{business_name}': website={bool(record.website)}, phone={bool(record.phone)}, "
        f"address={bool(record.address)}, type={record.business_type}"
    )
    return record


async def search_business_on_web(business_name: str, log=logger) -> Optional[WebRecord]:
    """
    Search the web for a business and condense the hits into a WebRecord.

    Args:
        business_name (str): Name to search for.
        log: loguru logger; callers may pass a bound logger.

    Returns:
        Optional[WebRecord]: Extracted data, or None if the search produced nothing.
    """
    query = QUERY_TEMPLATE.format(name=business_name)
    log.debug(f"🔍 Searching web for '{business_name}'")

    try:
        results = await perform_web_search(query, log=log)
        if not results:
            log.debug("❌ No web search results found")
            return None
        return extract_business_data(business_name, results, log=log)
    except Exception as e:
        log.debug(f"⚠️ Web search error for '{business_name}': {e}")
        return None
