"""
Product API Client

Client for the serverless product API (products and product categories).
Handles authentication, rate limiting, retries and the response envelope.
"""

import logging
import time
from typing import Any, Dict, List, Optional

import requests

from ..common.config_loader import load_settings

logger = logging.getLogger(__name__)


class ProductAPIClient:
    """
    Client for the product API.

    Handles:
    - Bearer authentication
    - Rate limiting (minimum interval between requests)
    - Retries on 429/5xx with Retry-After
    - The {"success", "data", "error"} response envelope

    Usage:
        client = ProductAPIClient(base_url="https://xyz.supabase.co/functions/v1/server", access_token="...")
        products = client.list_products()
        created = client.create_product(record)
    """

    MAX_RETRIES = 5
    RETRYABLE_STATUS_CODES = {429, 502, 503, 504}

    def __init__(self, base_url: str, access_token: str, timeout: int = 30):
        """
        Initialize the API client.

        Args:
            base_url: API root, e.g. https://<project>.supabase.co/functions/v1/<function>
            access_token: Bearer token
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        })

        # Rate limiting
        self.requests_made = 0
        self.last_request_time = 0.0
        self.min_request_interval = 0.2

    @classmethod
    def from_settings(cls, access_token: str, settings: Optional[Dict[str, Any]] = None) -> "ProductAPIClient":
        if settings is None:
            settings = load_settings()
        section = settings.get('api') or {}
        return cls(
            base_url=section.get('base_url', ''),
            access_token=access_token,
            timeout=int(section.get('timeout', 30)),
        )

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def _rate_limit(self):
        """Keep at least min_request_interval between requests."""
        now = time.time()
        elapsed = now - self.last_request_time

        if elapsed < self.min_request_interval:
            time.sleep(self.min_request_interval - elapsed)

        self.last_request_time = time.time()
        self.requests_made += 1

    def request(self, method: str, endpoint: str, data: Optional[Dict] = None) -> Optional[Any]:
        """
        Make an API request with rate limiting and error handling.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: Path below base_url (e.g., "/products")
            data: Request body for POST/PUT

        Returns:
            The envelope's `data` (or the whole body when there is no
            envelope), or None on error
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"

        for attempt in range(self.MAX_RETRIES):
            self._rate_limit()

            try:
                if method == "GET":
                    response = self.session.get(url, timeout=self.timeout)
                elif method == "POST":
                    response = self.session.post(url, json=data, timeout=self.timeout)
                elif method == "PUT":
                    response = self.session.put(url, json=data, timeout=self.timeout)
                elif method == "DELETE":
                    response = self.session.delete(url, timeout=self.timeout)
                else:
                    raise ValueError(f"Unsupported method: {method}")

                # Retry on rate limiting or server errors
                if response.status_code in self.RETRYABLE_STATUS_CODES:
                    retry_after = int(response.headers.get("Retry-After", 2 ** attempt))
                    logger.warning("HTTP %d on %s, retry %d/%d in %ds...",
                                   response.status_code, endpoint, attempt + 1,
                                   self.MAX_RETRIES, retry_after)
                    time.sleep(retry_after)
                    continue

                if response.status_code >= 400:
                    logger.error("API Error %d [%s]: %s", response.status_code, endpoint, response.text[:200])
                    return None

                body = response.json()

                if isinstance(body, dict) and "success" in body:
                    if not body["success"]:
                        logger.error("API Error [%s]: %s", endpoint, body.get("error") or body.get("message"))
                        return None
                    return body.get("data", {})

                return body

            except requests.exceptions.Timeout:
                logger.error("Request timeout: %s", endpoint)
                return None
            except requests.exceptions.RequestException as e:
                logger.error("Request failed: %s", e)
                return None

        logger.error("Max retries (%d) exceeded for %s %s", self.MAX_RETRIES, method, endpoint)
        return None

    # ── Products ─────────────────────────────────────────────────────────

    def list_products(self) -> Optional[List[Dict]]:
        return self.request("GET", "/products")

    def get_product(self, product_id: str) -> Optional[Dict]:
        return self.request("GET", f"/products/{product_id}")

    def create_product(self, record: Dict) -> Optional[Dict]:
        return self.request("POST", "/products", record)

    def update_product(self, product_id: str, record: Dict) -> Optional[Dict]:
        return self.request("PUT", f"/products/{product_id}", record)

    def delete_product(self, product_id: str) -> bool:
        return self.request("DELETE", f"/products/{product_id}") is not None

    # ── Product categories ───────────────────────────────────────────────

    def list_categories(self) -> Optional[List[Dict]]:
        return self.request("GET", "/product-categories")

    def create_category(self, record: Dict) -> Optional[Dict]:
        return self.request("POST", "/product-categories", record)

    def update_category(self, category_id: str, record: Dict) -> Optional[Dict]:
        return self.request("PUT", f"/product-categories/{category_id}", record)

    def delete_category(self, category_id: str) -> bool:
        return self.request("DELETE", f"/product-categories/{category_id}") is not None

    def test_connection(self) -> bool:
        """
        Test API connection by listing product categories.

        Returns:
            True if connection successful
        """
        result = self.list_categories()
        if result is not None:
            logger.info("Connected to: %s", self.base_url)
            return True
        return False
