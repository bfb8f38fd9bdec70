# quran_tracker/quran_data_client.py
import os
import json
import logging
import concurrent.futures
from typing import Any, Dict, Iterable

import requests
import tqdm
from colorama import Fore

from . import config
from .errors import DataSourceFetchFailed

logger = logging.getLogger(__name__)


class QuranDataClient:
    """Fetches the static JSON data files, from a web server or a local folder."""
    TIMEOUT = config.REQUEST_TIMEOUT

    def __init__(self, source: str = config.DATA_SOURCE):
        self.source = source
        self.is_remote = source.startswith(("http://", "https://"))
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": "QuranTracker/1.0"})

    def _url_for(self, resource: str) -> str:
        return f"{self.source.rstrip('/')}/{resource}"

    def _handle_response(self, resource: str, response: requests.Response) -> Any:
        """Handle HTTP response and return JSON data"""
        try:
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            raise DataSourceFetchFailed(resource, f"HTTP error: {e}") from e
        except ValueError as e:
            raise DataSourceFetchFailed(resource, f"invalid JSON: {e}") from e

    def _read_local(self, resource: str) -> Any:
        path = os.path.join(self.source, resource)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except FileNotFoundError as e:
            raise DataSourceFetchFailed(resource, f"{path} not found") from e
        except json.JSONDecodeError as e:
            raise DataSourceFetchFailed(resource, f"invalid JSON: {e}") from e
        except OSError as e:
            raise DataSourceFetchFailed(resource, str(e)) from e

    def fetch_json(self, resource: str) -> Any:
        """Fetch one resource by file name.

        Raises:
            DataSourceFetchFailed: network error, missing file or bad JSON.
        """
        logger.debug("Fetching %s from %s", resource, self.source)
        if not self.is_remote:
            return self._read_local(resource)
        try:
            response = self.session.get(self._url_for(resource), timeout=self.TIMEOUT)
        except requests.exceptions.RequestException as e:
            raise DataSourceFetchFailed(resource, str(e)) from e
        return self._handle_response(resource, response)

    def fetch_many(self, resources: Iterable[str], show_progress: bool = True) -> Dict[str, Any]:
        """Fetch several resources in parallel.

        Failed resources are logged and left out of the result.
        """
        resources = list(resources)
        results: Dict[str, Any] = {}
        with concurrent.futures.ThreadPoolExecutor(max_workers=config.PREFETCH_WORKERS) as executor:
            futures = {executor.submit(self.fetch_json, name): name for name in resources}
            with tqdm.tqdm(total=len(resources), desc=Fore.RED + "Progress" + Fore.RESET,
                           unit="file", colour='red', disable=not show_progress) as pbar:
                for future in concurrent.futures.as_completed(futures):
                    name = futures[future]
                    try:
                        results[name] = future.result()
                    except DataSourceFetchFailed as e:
                        logger.warning("%s", e)
                    pbar.update(1)
        return results
