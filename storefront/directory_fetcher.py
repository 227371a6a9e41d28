import asyncio
import time
from typing import Any, Dict, List, Optional

from loguru import logger
from rapidfuzz import fuzz

from storefront.clients import PlacesClient
from storefront.models import DirectoryRecord


def _best_match(name: str, results: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Pick the search result whose name is closest to the sign's name.

    Ties keep the directory's own ranking.
    """
    best, best_score = results[0], -1.0
    for result in results:
        score = fuzz.token_set_ratio(name.lower(), str(result.get("name") or "").lower())
        if score > best_score:
            best, best_score = result, score
    return best


async def _fetch_details(client: PlacesClient, best: Dict[str, Any], log=logger) -> DirectoryRecord:
    """Fetch full listing details, falling back to the search result's own fields."""
    place_id = best.get("place_id")
    if not place_id:
        return DirectoryRecord.from_place(best)

    try:
        data = await client.place_details(place_id, log=log)
    except Exception as e:
        log.debug(f"⚠️ Details request failed for {place_id}: {e}")
        return DirectoryRecord.from_place(best)

    if data.get("status") != "OK":
        log.debug(f"Place details returned status {data.get('status')}: {data.get('error_message', '')}")
        return DirectoryRecord.from_place(best)

    return DirectoryRecord.from_place({"place_id": place_id, **data.get("result", {})})


async def search_business(name: str, address: Optional[str] = None, log=logger) -> Optional[DirectoryRecord]:
    """
    Look a business up in the directory.

    Args:
        name (str): Business name read from the sign.
        address (Optional[str]): Address read from the sign, narrows the search.
        log: loguru logger; callers may pass a bound logger.

    Returns:
        Optional[DirectoryRecord]: Best matching listing, or None when the lookup
                                   is unavailable, fails, or finds nothing.
    """
    query = f"{name} {address}" if address else name
    start = time.perf_counter()
    log.debug(f"▶️ START directory search for '{query}'")

    try:
        client = PlacesClient()
        data = await client.text_search(query, log=log)

        if data.get("status") != "OK":
            log.debug(f"Places search returned status {data.get('status')}: {data.get('error_message', '')}")
            return None

        results = data.get("results") or []
        if not results:
            log.debug(f"No directory results for '{query}'")
            return None

        best = _best_match(name, results)
        record = await _fetch_details(client, best, log=log)
        duration = time.perf_counter() - start
        log.debug(f"✅ Found '{record.name}' for '{query}' in {duration:.2f}s")
        return record
    except ValueError as e:
        log.debug(f"Directory lookup not configured: {e}")
        return None
    except asyncio.TimeoutError:
        log.debug(f"⏱️ TIMEOUT directory search for '{query}'")
        return None
    except Exception as e:
        log.debug(f"⚠️ ERROR directory search for '{query}': {e}")
        return None
