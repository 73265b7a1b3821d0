"""
Catalog Source implementations.

Supplies raw boat records to the feed engine (boat_feed.stages.retrieval.CatalogSource).
Implementations: in-memory records, JSON file, HTTP catalog API. Swap via config for
local testing vs production.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import requests

from boat_feed.stages.retrieval import CatalogUnavailableError

logger = logging.getLogger(__name__)


def _as_float(value: Any) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _matches(record: Dict[str, Any], filters: Mapping[str, str]) -> bool:
    """Apply the filter keys the engine emits; other keys are ignored."""
    bounds = (
        ("priceFrom", "SellPrice", lambda v, b: v >= b),
        ("priceTo", "SellPrice", lambda v, b: v <= b),
        ("lengthFrom", "Length", lambda v, b: v >= b),
        ("lengthTo", "Length", lambda v, b: v <= b),
        ("yearFrom", "YearBuilt", lambda v, b: v >= b),
    )
    for key, field_name, check in bounds:
        if key not in filters:
            continue
        bound = _as_float(filters[key])
        value = _as_float(record.get(field_name))
        if bound is None:
            continue
        if value is None or not check(value, bound):
            return False
    boat_type = filters.get("boatType")
    if boat_type and record.get("BoatType") != boat_type:
        return False
    return True


class InMemoryCatalogSource:
    """
    Catalog backed by a list of raw records.
    Used for local testing; understands priceFrom/priceTo/lengthFrom/lengthTo/yearFrom/boatType.
    """

    def __init__(self, records: List[Dict[str, Any]]):
        self._records = list(records)
        self._by_id = {str(r.get("BoatID")): r for r in self._records if r.get("BoatID") is not None}

    def fetch_page(
        self,
        page: int,
        page_size: int,
        filters: Mapping[str, str],
    ) -> List[Dict[str, Any]]:
        matching = [r for r in self._records if _matches(r, filters)]
        start = (max(page, 1) - 1) * page_size
        return matching[start:start + page_size]

    def fetch_detail(self, boat_id: str) -> Optional[Dict[str, Any]]:
        return self._by_id.get(str(boat_id))

    def __len__(self) -> int:
        return len(self._records)


class JsonCatalogSource(InMemoryCatalogSource):
    """
    Catalog backed by a JSON file: either a list of records or {"Results": [...]}.
    Used when CATALOG_SOURCE=json; path comes from CATALOG_JSON_PATH.
    """

    def __init__(self, path: Union[Path, str]):
        self._path = Path(path)
        if not self._path.exists():
            raise FileNotFoundError(f"Catalog JSON not found: {self._path}")
        with open(self._path) as f:
            data = json.load(f)
        records = data.get("Results", []) if isinstance(data, dict) else data
        super().__init__(records)


class HttpCatalogSource:
    """
    Catalog backed by the remote boats API.

    Pages are 1-based and converted to start/limit. Filter keys are forwarded untouched;
    orderByDesc=true is added unless the caller already chose an ordering.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {"accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def fetch_page(
        self,
        page: int,
        page_size: int,
        filters: Mapping[str, str],
    ) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = dict(filters)
        params["start"] = (max(page, 1) - 1) * page_size
        params["limit"] = page_size
        if not any(k.startswith("orderBy") for k in params):
            params["orderByDesc"] = "true"
        try:
            resp = self._session.get(
                self._base_url, params=params, headers=self._headers(), timeout=self._timeout
            )
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise CatalogUnavailableError(f"{type(e).__name__}: {e}") from e
        if isinstance(data, list):
            results = data
        elif isinstance(data, dict):
            results = data.get("Results") or []
        else:
            logger.warning("[catalog] MALFORMED_BODY page=%d type=%s", page, type(data).__name__)
            results = []
        logger.info(
            "[catalog] PAGE page=%d start=%d limit=%d received=%d",
            page, params["start"], page_size, len(results),
        )
        return list(results)

    def fetch_detail(self, boat_id: str) -> Optional[Dict[str, Any]]:
        """Full record for one boat; None when the catalog cannot provide it."""
        try:
            resp = self._session.get(
                f"{self._base_url}/{boat_id}", headers=self._headers(), timeout=self._timeout
            )
            if resp.status_code == 404:
                return None
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("[catalog] DETAIL_UNAVAILABLE boat_id=%s error=%s", boat_id, e)
            return None
        return data if isinstance(data, dict) else None
