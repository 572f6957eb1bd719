import json
import logging
from typing import Any, Dict, Iterable, List, Optional

import httpx

from app.core.config import AppSettings

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class StoreError(Exception):
    """Fallo de transporte o respuesta inesperada del almacén de contenido."""


class StoreNotFoundError(StoreError):
    pass


class StoreClient:
    """
    Cliente del almacén de contenido headless (API REST por bucket).

    Lecturas con read_key como parámetro de consulta; escrituras con
    write_key como Bearer. Un 404 en consultas de listado significa
    "sin resultados", no un error.
    """

    def __init__(
        self,
        base_url: str,
        bucket_slug: str,
        read_key: Optional[str] = None,
        write_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.bucket_slug = bucket_slug
        self.read_key = read_key
        self.write_key = write_key
        self.timeout = timeout
        self._client = client or httpx.Client(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "StoreClient":
        return cls(
            base_url=settings.store_api_url,
            bucket_slug=settings.store_bucket_slug or "",
            read_key=settings.store_read_key,
            write_key=settings.store_write_key,
            timeout=settings.store_timeout,
        )

    def close(self) -> None:
        if not self._client.is_closed:
            self._client.close()

    @property
    def objects_url(self) -> str:
        return f"{self.base_url}/buckets/{self.bucket_slug}/objects"

    def _write_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.write_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _read_params(
        self,
        props: Optional[Iterable[str]] = None,
        depth: Optional[int] = None,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if self.read_key:
            params["read_key"] = self.read_key
        if props:
            params["props"] = ",".join(props)
        if depth is not None:
            params["depth"] = depth
        return params

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("[STORE] %s %s failed: %s", method, url, exc)
            raise StoreError(f"Store request failed: {exc}") from exc

        if response.status_code == 404:
            raise StoreNotFoundError(f"{method} {url} returned 404")
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "[STORE] %s %s returned %s: %s",
                method,
                url,
                response.status_code,
                response.text[:200],
            )
            raise StoreError(f"Store returned {response.status_code}") from exc
        return response

    def find(
        self,
        type: str,
        filters: Optional[Dict[str, Any]] = None,
        props: Optional[Iterable[str]] = None,
        depth: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        query = {"type": type, **(filters or {})}
        params = self._read_params(props=props, depth=depth)
        params["query"] = json.dumps(query)
        if limit is not None:
            params["limit"] = limit

        try:
            response = self._request("GET", self.objects_url, params=params)
        except StoreNotFoundError:
            return []
        return response.json().get("objects") or []

    def find_one(
        self,
        type: str,
        filters: Dict[str, Any],
        props: Optional[Iterable[str]] = None,
        depth: Optional[int] = None,
    ) -> Optional[Dict[str, Any]]:
        objects = self.find(type, filters, props=props, depth=depth, limit=1)
        return objects[0] if objects else None

    def get_one(
        self,
        object_id: str,
        props: Optional[Iterable[str]] = None,
        depth: Optional[int] = None,
    ) -> Optional[Dict[str, Any]]:
        params = self._read_params(props=props, depth=depth)
        try:
            response = self._request("GET", f"{self.objects_url}/{object_id}", params=params)
        except StoreNotFoundError:
            return None
        return response.json().get("object")

    def insert_one(
        self,
        type: str,
        title: str,
        slug: str,
        metadata: Dict[str, Any],
    ) -> Dict[str, Any]:
        payload = {"type": type, "title": title, "slug": slug, "metadata": metadata}
        response = self._request(
            "POST",
            self.objects_url,
            headers=self._write_headers(),
            json=payload,
        )
        return response.json()["object"]

    def update_one(self, object_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """`data` admite `title` y un dict parcial en `metadata`."""
        response = self._request(
            "PATCH",
            f"{self.objects_url}/{object_id}",
            headers=self._write_headers(),
            json=data,
        )
        return response.json()["object"]

    def delete_one(self, object_id: str) -> None:
        self._request(
            "DELETE",
            f"{self.objects_url}/{object_id}",
            headers=self._write_headers(),
        )
