from __future__ import annotations
"""HTTP client for the remote vehicles API."""

import os
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Dict, Any, List
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter, Retry

from .logger import Logger


log = Logger.bind(__name__)

DEFAULT_LIST_URL = "https://p42429x0l5.execute-api.eu-north-1.amazonaws.com/vehicles"
DEFAULT_API_BASE = "https://p42429x0l5.execute-api.eu-north-1.amazonaws.com/prod"

_CONFIG_JSON_PATH = Path(__file__).resolve().parent.parent / 'config.json'
_resolved_list_url = DEFAULT_LIST_URL
_resolved_api_base = DEFAULT_API_BASE
_resolved_api_key = ''
if _CONFIG_JSON_PATH.exists():
    try:
        with _CONFIG_JSON_PATH.open('r', encoding='utf-8') as f:
            _cfg = json.load(f) or {}
        if isinstance(_cfg, dict):
            if isinstance(_cfg.get('list_url'), str) and _cfg['list_url'].strip():
                _resolved_list_url = _cfg['list_url'].strip()
            if isinstance(_cfg.get('api_base'), str) and _cfg['api_base'].strip():
                _resolved_api_base = _cfg['api_base'].strip().rstrip('/')
            if isinstance(_cfg.get('api_key'), str):
                _resolved_api_key = _cfg['api_key'].strip()
    except Exception as e:  # noqa: BLE001
        log.debug(f"config.json load fail error={e}")
# environment wins over config.json
_resolved_list_url = os.environ.get('VEHICLES_API_URL', _resolved_list_url)
_resolved_api_base = os.environ.get('VEHICLES_API_BASE', _resolved_api_base).rstrip('/')
_resolved_api_key = os.environ.get('VEHICLES_API_KEY', _resolved_api_key)


class VehicleApiError(RuntimeError):
    """The API answered, but not with the expected JSON list."""


@dataclass
class ApiClientConfig:
    list_url: str = _resolved_list_url
    api_base: str = _resolved_api_base
    api_key: str = _resolved_api_key
    timeout: float = 15.0
    max_retries: int = 3
    backoff_factor: float = 0.5
    user_agent: str = "truevin-web/0.1 (+https://truevin.com)"


class VehicleApiClient:

    def __init__(self, config: Optional[ApiClientConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or ApiClientConfig()
        self.session = session or requests.Session()
        retries = Retry(
            total=self.config.max_retries,
            backoff_factor=self.config.backoff_factor,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=("GET", ),
        )
        adapter = HTTPAdapter(max_retries=retries)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)
        self.session.headers.update({
            "User-Agent": self.config.user_agent,
            "Accept": "application/json",
        })

    def _get_json(self, url: str, headers: Optional[Dict[str, str]] = None, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        resp = log.measure(f"http get url={url}", self.session.get, url, params=params, headers=headers, timeout=self.config.timeout)
        log.debug(f"http get done url={url} status={resp.status_code}")
        resp.raise_for_status()
        try:
            data = resp.json()
        except ValueError as e:
            raise VehicleApiError(f"invalid json from {url}: {e}") from e
        if not isinstance(data, list):
            raise VehicleApiError(f"expected list from {url}, got {type(data).__name__}")
        return [d for d in data if isinstance(d, dict)]

    def list_vehicles(self) -> List[Dict[str, Any]]:
        """Full vehicle feed."""
        records = self._get_json(self.config.list_url)
        log.info(f"vehicle feed fetched records={len(records)}")
        return records

    def get_stock(self, stock_number: str) -> Optional[Dict[str, Any]]:
        """Single vehicle by stock number, or None when the API has no match."""
        url = f"{self.config.api_base}/stocks/{quote(stock_number, safe='')}"
        headers = {'x-api-key': self.config.api_key} if self.config.api_key else None
        items = self._get_json(url, headers=headers)
        return items[0] if items else None

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
